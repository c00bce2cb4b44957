# src/wg_report/wireguard.py
from __future__ import annotations
import ipaddress
import logging
import shutil
import subprocess
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from .errors import SnapshotError
from .models import IPAddress, PeerTelemetry


log = logging.getLogger(__name__)


# ---------- Appels à wg(8) ----------

def _run(cmd: List[str]) -> str:
    if shutil.which(cmd[0]) is None:
        raise SnapshotError(f"'{cmd[0]}' not found in PATH")
    try:
        out = subprocess.check_output(cmd, text=True, stderr=subprocess.PIPE)
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
        raise SnapshotError(f"{' '.join(cmd)} failed: {detail}") from exc
    return out


def read_snapshot(interface: str) -> Dict[str, PeerTelemetry]:
    """
    Snapshot des peers vus par le noyau pour <interface>.
    Nécessite 'wg' installé (et en général les droits root).
    """
    return parse_dump(_run(["wg", "show", interface, "dump"]))


# ---------- Parsing de `wg show <iface> dump` ----------

def parse_endpoint(value: str) -> Optional[Tuple[IPAddress, int]]:
    """
    "1.2.3.4:51820" ou "[fd00::1]:51820" -> (ip, port). "(none)" -> None.
    """
    if not value or value == "(none)":
        return None
    host, sep, port = value.rpartition(":")
    if not sep:
        raise ValueError(f"Invalid endpoint '{value}'")
    host = host.strip("[]")
    return ipaddress.ip_address(host), int(port)


def parse_handshake(value: str) -> Optional[datetime]:
    seconds = int(value)
    if seconds == 0:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def parse_dump(text: str) -> Dict[str, PeerTelemetry]:
    """
    Première ligne = l'interface (private-key, public-key, listen-port, fwmark).
    Lignes suivantes = un peer : public-key, preshared-key, endpoint,
    allowed-ips, latest-handshake, transfer-rx, transfer-tx, keepalive.
    """
    peers: Dict[str, PeerTelemetry] = {}
    lines = [l for l in text.splitlines() if l.strip()]

    for line in lines[1:]:
        fields = line.split("\t")
        if len(fields) < 8:
            raise SnapshotError(f"Cannot parse wg dump line: {line!r}")
        public_key, _psk, endpoint, _allowed, handshake, rx, tx = fields[:7]
        try:
            telemetry = PeerTelemetry(
                public_key=public_key,
                last_handshake=parse_handshake(handshake),
                receive_bytes=int(rx),
                transmit_bytes=int(tx),
                endpoint=parse_endpoint(endpoint),
            )
        except ValueError as exc:
            raise SnapshotError(f"Cannot parse wg dump line: {line!r} ({exc})") from exc
        peers[public_key] = telemetry

    log.debug("wg dump: %d peers", len(peers))
    return peers
