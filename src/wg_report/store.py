# src/wg_report/store.py
from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .errors import ReportPermissionError, ReportStoreError, ReportValidationError
from .models import DEFAULT_REPORT_PATH, DsnetReport, PeerReport, Status
from .schema import DsnetReportSchema
from .units import bytes_to_si


log = logging.getLogger(__name__)


def _str_or_none(value) -> Optional[str]:
    return str(value) if value is not None else None


def _iso_or_none(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def report_to_dict(report: DsnetReport) -> dict:
    return {
        "external_ip": str(report.external_ip),
        "interface_name": report.interface_name,
        "listen_port": report.listen_port,
        "domain": report.domain,
        "ip": str(report.ip),
        "network": str(report.network),
        "dns": _str_or_none(report.dns),
        "peers_online": report.peers_online,
        "peers_total": report.peers_total,
        "peers": [
            {
                "hostname": p.hostname,
                "owner": p.owner,
                "description": p.description,
                "added": p.added.isoformat(),
                "ip": str(p.ip),
                "external_ip": _str_or_none(p.external_ip),
                "status": str(p.status),
                "networks": [str(n) for n in p.networks],
                "last_handshake_time": _iso_or_none(p.last_handshake_time),
                "receive_bytes": p.receive_bytes,
                "transmit_bytes": p.transmit_bytes,
                "receive_bytes_si": p.receive_bytes_si,
                "transmit_bytes_si": p.transmit_bytes_si,
            }
            for p in report.peers
        ],
    }


def _peer_from_schema(p) -> PeerReport:
    # les chaînes SI sont toujours recalculées depuis les compteurs bruts
    receive_si = bytes_to_si(p.receive_bytes)
    transmit_si = bytes_to_si(p.transmit_bytes)
    if (p.receive_bytes_si, p.transmit_bytes_si) != (receive_si, transmit_si):
        log.warning(
            "Persisted SI strings for %s (%s / %s) differ from counters, using %s / %s",
            p.hostname,
            p.receive_bytes_si,
            p.transmit_bytes_si,
            receive_si,
            transmit_si,
        )

    return PeerReport(
        hostname=p.hostname,
        owner=p.owner,
        description=p.description,
        added=p.added,
        ip=p.ip,
        external_ip=p.external_ip,
        status=p.status,
        networks=tuple(p.networks),
        last_handshake_time=p.last_handshake_time,
        receive_bytes=p.receive_bytes,
        transmit_bytes=p.transmit_bytes,
        receive_bytes_si=receive_si,
        transmit_bytes_si=transmit_si,
    )


def dict_to_report(data: dict) -> DsnetReport:
    """
    Valide le dict via le schéma pydantic puis reconstruit le rapport.
    Lève pydantic.ValidationError si le dict ne respecte pas le schéma.
    """
    parsed = DsnetReportSchema.model_validate(data)

    peers = tuple(_peer_from_schema(p) for p in parsed.peers)

    # les compteurs sont recalculés depuis la liste des peers
    peers_online = sum(1 for p in peers if p.status is Status.ONLINE)
    peers_total = len(peers)
    if (parsed.peers_online, parsed.peers_total) != (peers_online, peers_total):
        log.warning(
            "Persisted counters %d/%d differ from peers list, using %d/%d",
            parsed.peers_online,
            parsed.peers_total,
            peers_online,
            peers_total,
        )

    return DsnetReport(
        external_ip=parsed.external_ip,
        interface_name=parsed.interface_name,
        listen_port=parsed.listen_port,
        domain=parsed.domain,
        ip=parsed.ip,
        network=parsed.network,
        dns=parsed.dns,
        peers_online=peers_online,
        peers_total=peers_total,
        peers=peers,
    )


def load_report(path: Optional[Path] = None) -> Optional[DsnetReport]:
    """
    Retourne None si le fichier n'existe pas encore (premier lancement).
    """
    path = Path(path or DEFAULT_REPORT_PATH)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError:
        log.debug("No report at %s", path)
        return None
    except PermissionError as exc:
        raise ReportPermissionError(path) from exc
    except OSError as exc:
        raise ReportStoreError(path, f"Cannot read report file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ReportValidationError(path, f"not valid UTF-8 ({exc})") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ReportValidationError(path, f"not valid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise ReportValidationError(path, "top-level value must be an object")

    try:
        report = dict_to_report(data)
    except ValidationError as exc:
        raise ReportValidationError(path, str(exc)) from exc

    log.debug("Loaded report from %s (%d peers)", path, report.peers_total)
    return report


def save_report(report: DsnetReport, path: Optional[Path] = None) -> Path:
    """
    Remplace le fichier en entier : écriture dans un fichier temporaire du
    même dossier puis os.replace, un lecteur ne voit jamais de fichier partiel.
    """
    path = Path(path or DEFAULT_REPORT_PATH)
    data = report_to_dict(report)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportStoreError(path, f"Cannot write report file {path}: {exc}") from exc

    log.info("Report saved to %s", path)
    return path
