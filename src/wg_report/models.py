# src/wg_report/models.py
from __future__ import annotations
import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

DEFAULT_REPORT_PATH = Path("data/report.json")
DEFAULT_CONFIG_PATH = Path("data/config.json")


class Status(Enum):
    UNKNOWN = "unknown"   # pas encore chargé dans wireguard
    OFFLINE = "offline"   # pas de handshake dans la fenêtre "online"
    ONLINE = "online"     # handshake récent
    DORMANT = "dormant"   # aucune connexion depuis longtemps, peut être retiré

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PeerTelemetry:
    public_key: str
    last_handshake: Optional[datetime] = None   # None = jamais
    receive_bytes: int = 0
    transmit_bytes: int = 0
    endpoint: Optional[Tuple[IPAddress, int]] = None


@dataclass(frozen=True)
class ConfigPeer:
    public_key: str
    hostname: str
    owner: str
    description: str
    added: datetime
    ip: IPAddress                          # adresse dans le mesh
    networks: Tuple[IPNetwork, ...] = ()   # sous-réseaux routés en plus


@dataclass(frozen=True)
class MeshConfig:
    external_ip: IPAddress
    interface_name: str         # ex: "wg0"
    listen_port: int            # ex: 51820
    domain: str                 # suffixe DNS, informatif
    ip: IPAddress               # IP de ce noeud dans le mesh
    network: IPNetwork          # ex: 10.164.0.0/16
    dns: Optional[IPAddress] = None
    peers: Tuple[ConfigPeer, ...] = ()


@dataclass(frozen=True)
class PeerReport:
    hostname: str
    owner: str
    description: str
    added: datetime
    ip: IPAddress
    external_ip: Optional[IPAddress]
    status: Status
    networks: Tuple[IPNetwork, ...]
    last_handshake_time: Optional[datetime]
    receive_bytes: int
    transmit_bytes: int
    receive_bytes_si: str
    transmit_bytes_si: str


@dataclass(frozen=True)
class DsnetReport:
    external_ip: IPAddress
    interface_name: str
    listen_port: int
    domain: str
    ip: IPAddress
    network: IPNetwork
    dns: Optional[IPAddress]
    peers_online: int
    peers_total: int
    peers: Tuple[PeerReport, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReportSettings:
    online_window: timedelta = timedelta(minutes=3)
    expiry_window: timedelta = timedelta(days=28)
    report_path: Path = DEFAULT_REPORT_PATH
