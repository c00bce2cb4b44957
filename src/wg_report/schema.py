# src/wg_report/schema.py
"""Schémas pydantic utilisés pour valider les fichiers JSON au chargement."""
from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, IPvAnyAddress, IPvAnyNetwork, StrictInt

from .models import Status


class PeerReportSchema(BaseModel):
    hostname: str = Field(..., min_length=1)
    owner: str
    description: str
    added: datetime
    ip: IPvAnyAddress
    external_ip: Optional[IPvAnyAddress]   # clé requise, valeur null si inconnue
    status: Status
    networks: List[IPvAnyNetwork]
    last_handshake_time: Optional[datetime]
    receive_bytes: StrictInt   # "1536" ou true refusés, comme en JSON strict
    transmit_bytes: StrictInt
    receive_bytes_si: str
    transmit_bytes_si: str


class DsnetReportSchema(BaseModel):
    external_ip: IPvAnyAddress
    interface_name: str = Field(..., min_length=1)
    listen_port: StrictInt = Field(..., ge=0, le=65535)
    domain: str
    ip: IPvAnyAddress
    network: IPvAnyNetwork
    dns: Optional[IPvAnyAddress]
    peers_online: StrictInt = Field(..., ge=0)
    peers_total: StrictInt = Field(..., ge=0)
    peers: List[PeerReportSchema]


class ConfigPeerSchema(BaseModel):
    public_key: str = Field(..., min_length=1)
    hostname: str = Field(..., min_length=1)
    owner: str = ""
    description: str = ""
    added: datetime
    ip: IPvAnyAddress
    networks: List[IPvAnyNetwork] = []


class MeshConfigSchema(BaseModel):
    external_ip: IPvAnyAddress
    interface_name: str = Field("wg0", min_length=1)
    listen_port: StrictInt = Field(51820, ge=0, le=65535)
    domain: str = ""
    ip: IPvAnyAddress
    network: IPvAnyNetwork
    dns: Optional[IPvAnyAddress] = None
    peers: List[ConfigPeerSchema] = []
