# src/wg_report/report.py
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from .models import (
    ConfigPeer,
    DsnetReport,
    MeshConfig,
    PeerReport,
    PeerTelemetry,
    ReportSettings,
    Status,
)
from .status import classify_status
from .units import bytes_to_si


log = logging.getLogger(__name__)


def _peer_report(
    peer: ConfigPeer,
    telemetry: Optional[PeerTelemetry],
    settings: ReportSettings,
    now: datetime,
) -> PeerReport:
    known = telemetry is not None
    if telemetry is None:
        telemetry = PeerTelemetry(public_key=peer.public_key)

    status = classify_status(
        known,
        telemetry.last_handshake,
        now=now,
        online_window=settings.online_window,
        expiry_window=settings.expiry_window,
    )

    external_ip = telemetry.endpoint[0] if telemetry.endpoint else None

    return PeerReport(
        hostname=peer.hostname,
        owner=peer.owner,
        description=peer.description,
        added=peer.added,
        ip=peer.ip,
        external_ip=external_ip,
        status=status,
        networks=tuple(peer.networks),
        last_handshake_time=telemetry.last_handshake,
        receive_bytes=telemetry.receive_bytes,
        transmit_bytes=telemetry.transmit_bytes,
        receive_bytes_si=bytes_to_si(telemetry.receive_bytes),
        transmit_bytes_si=bytes_to_si(telemetry.transmit_bytes),
    )


def generate_report(
    snapshot: Mapping[str, PeerTelemetry],
    config: MeshConfig,
    previous: Optional[DsnetReport] = None,
    *,
    settings: Optional[ReportSettings] = None,
    now: Optional[datetime] = None,
) -> DsnetReport:
    """
    Construit le rapport à partir du snapshot wireguard (clé publique ->
    télémétrie) et de la config. L'ordre des peers est celui de la config ;
    les peers présents uniquement dans le snapshot sont ignorés.
    Un `now` naïf est interprété en UTC.
    """
    settings = settings or ReportSettings()
    now = now or datetime.now(timezone.utc)

    if previous is not None:
        # accepté pour compatibilité, aucune donnée n'en est reprise
        log.debug("Previous report has %d peers", len(previous.peers))

    configured = {p.public_key for p in config.peers}
    orphans = [key for key in snapshot if key not in configured]
    if orphans:
        log.debug("Ignoring %d peer(s) absent from config", len(orphans))

    peers: List[PeerReport] = [
        _peer_report(peer, snapshot.get(peer.public_key), settings, now)
        for peer in config.peers
    ]
    peers_online = sum(1 for p in peers if p.status is Status.ONLINE)

    log.info("Report generated: %d/%d peers online", peers_online, len(peers))

    return DsnetReport(
        external_ip=config.external_ip,
        interface_name=config.interface_name,
        listen_port=config.listen_port,
        domain=config.domain,
        ip=config.ip,
        network=config.network,
        dns=config.dns,
        peers_online=peers_online,
        peers_total=len(peers),
        peers=tuple(peers),
    )


def count_statuses(report: DsnetReport) -> Dict[Status, int]:
    counts = {status: 0 for status in Status}
    for p in report.peers:
        counts[p.status] += 1
    return counts
