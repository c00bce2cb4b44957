import argparse
import sys
from datetime import timedelta
from pathlib import Path

from wg_report.config import load_config
from wg_report.errors import ReportError
from wg_report.logging_setup import setup_logging
from wg_report.models import DEFAULT_CONFIG_PATH, DEFAULT_REPORT_PATH, ReportSettings, Status
from wg_report.report import count_statuses, generate_report
from wg_report.store import load_report, save_report
from wg_report.wireguard import parse_dump, read_snapshot


# ---------------------------------------------------
# Commande : report (génère et sauvegarde le rapport)
# ---------------------------------------------------

def settings_from_args(args) -> ReportSettings:
    return ReportSettings(
        online_window=timedelta(seconds=args.online_window),
        expiry_window=timedelta(days=args.expiry_window),
        report_path=Path(args.report),
    )


def cmd_report(args):
    settings = settings_from_args(args)
    config = load_config(Path(args.config))

    if args.dump_file:
        snapshot = parse_dump(Path(args.dump_file).read_text(encoding="utf-8"))
    else:
        snapshot = read_snapshot(config.interface_name)

    previous = load_report(settings.report_path)
    report = generate_report(snapshot, config, previous, settings=settings)
    path = save_report(report, settings.report_path)

    print(f"[+] Rapport écrit : {path}")
    print(f"[+] Peers en ligne : {report.peers_online}/{report.peers_total}")


# ---------------------------------------------------
# Commande : show (affiche le dernier rapport)
# ---------------------------------------------------

def cmd_show(args):
    report = load_report(Path(args.report))
    if report is None:
        print("Aucun rapport pour l'instant.")
        return

    print("=== Serveur ===")
    print(f"Interface : {report.interface_name}")
    print(f"Adresse   : {report.ip} ({report.network})")
    print(f"Port      : {report.listen_port}")
    print(f"Externe   : {report.external_ip}\n")

    counts = count_statuses(report)
    print(f"=== Peers ({report.peers_online}/{report.peers_total} en ligne) ===")
    if not report.peers:
        print("Aucun peer.")
        return

    for p in report.peers:
        name = f"{p.hostname}.{report.domain}" if report.domain else p.hostname
        print(
            f"- {name} ({p.ip}) {p.status}"
            f"  rx {p.receive_bytes_si} / tx {p.transmit_bytes_si}"
        )

    dormant = counts[Status.DORMANT]
    if dormant:
        print(f"\n[!] {dormant} peer(s) dormant(s), à retirer de la config ?")


# ---------------------------------------------------
# CLl / Parser
# ---------------------------------------------------

def build_parser():
    parser = argparse.ArgumentParser(prog="wg-report")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    sub = parser.add_subparsers(dest="cmd")

    # report
    p_report = sub.add_parser("report")
    p_report.add_argument("--config", default=str(DEFAULT_CONFIG_PATH))
    p_report.add_argument("--report", default=str(DEFAULT_REPORT_PATH))
    p_report.add_argument("--online-window", type=int, default=180, help="secondes")
    p_report.add_argument("--expiry-window", type=int, default=28, help="jours")
    p_report.add_argument("--dump-file", default=None, help="sortie de 'wg show <iface> dump'")
    p_report.set_defaults(func=cmd_report)

    # show
    p_show = sub.add_parser("show")
    p_show.add_argument("--report", default=str(DEFAULT_REPORT_PATH))
    p_show.set_defaults(func=cmd_show)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        setup_logging(args.log_level, Path(args.log_file) if args.log_file else None)
        args.func(args)
    except (ReportError, OSError, UnicodeDecodeError) as exc:
        print(f"[ERREUR] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
