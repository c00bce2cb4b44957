"""
Pytest configuration and fixtures for wg_report tests.
"""

import ipaddress
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add src/ to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from wg_report.models import ConfigPeer, MeshConfig, PeerTelemetry, ReportSettings


NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings(tmp_path):
    """3 minutes online, 28 days expiry, report under tmp_path."""
    return ReportSettings(
        online_window=timedelta(minutes=3),
        expiry_window=timedelta(days=28),
        report_path=tmp_path / "report.json",
    )


def make_peer(name, key, last_octet, networks=()):
    return ConfigPeer(
        public_key=key,
        hostname=name,
        owner="alice",
        description=f"{name} laptop",
        added=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        ip=ipaddress.ip_address(f"10.164.0.{last_octet}"),
        networks=tuple(ipaddress.ip_network(n) for n in networks),
    )


@pytest.fixture
def mesh_config():
    """Config with peers A, B, C in that order."""
    return MeshConfig(
        external_ip=ipaddress.ip_address("203.0.113.10"),
        interface_name="wg0",
        listen_port=51820,
        domain="mesh.example",
        ip=ipaddress.ip_address("10.164.0.1"),
        network=ipaddress.ip_network("10.164.0.0/16"),
        dns=ipaddress.ip_address("10.164.0.1"),
        peers=(
            make_peer("a", "KEY_A=", 2),
            make_peer("b", "KEY_B=", 3, networks=["192.168.10.0/24"]),
            make_peer("c", "KEY_C=", 4),
        ),
    )


@pytest.fixture
def snapshot():
    """Live view: B shook hands 1 minute ago, C 40 days ago, A absent."""
    return {
        "KEY_B=": PeerTelemetry(
            public_key="KEY_B=",
            last_handshake=NOW - timedelta(minutes=1),
            receive_bytes=1536,
            transmit_bytes=5 * 1024 * 1024,
            endpoint=(ipaddress.ip_address("198.51.100.7"), 40000),
        ),
        "KEY_C=": PeerTelemetry(
            public_key="KEY_C=",
            last_handshake=NOW - timedelta(days=40),
            receive_bytes=0,
            transmit_bytes=100,
        ),
    }
