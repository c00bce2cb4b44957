# src/wg_report/config.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .errors import ConfigError
from .models import DEFAULT_CONFIG_PATH, ConfigPeer, MeshConfig
from .schema import MeshConfigSchema


log = logging.getLogger(__name__)


def dict_to_config(data: dict) -> MeshConfig:
    parsed = MeshConfigSchema.model_validate(data)

    peers = tuple(
        ConfigPeer(
            public_key=p.public_key,
            hostname=p.hostname,
            owner=p.owner,
            description=p.description,
            added=p.added,
            ip=p.ip,
            networks=tuple(p.networks),
        )
        for p in parsed.peers
    )

    return MeshConfig(
        external_ip=parsed.external_ip,
        interface_name=parsed.interface_name,
        listen_port=parsed.listen_port,
        domain=parsed.domain,
        ip=parsed.ip,
        network=parsed.network,
        dns=parsed.dns,
        peers=peers,
    )


def load_config(path: Optional[Path] = None) -> MeshConfig:
    path = Path(path or DEFAULT_CONFIG_PATH)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except PermissionError as exc:
        raise ConfigError(f"{path} cannot be accessed. Check read permissions.") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")

    try:
        config = dict_to_config(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    log.debug("Loaded config from %s (%d peers)", path, len(config.peers))
    return config
