"""
Backend configuration loading.

Turns the security section of the configuration into an ordered list of
BackendEntry values. The mapping is always passed in explicitly; nothing
here reads global state.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from constants import SECURITY_CONFIG_SECTION
from core.exceptions import ConfigurationException
from core.models import BackendEntry

logger = logging.getLogger(__name__)


def parse_backend_config(config: Optional[Mapping[str, Any]]) -> list[BackendEntry]:
    """
    Build backend entries from a configuration mapping.

    Args:
        config: Mapping of backend id to its settings, e.g.
            {"clair": {"server": "http://my.clair:6060"}}

    Returns:
        One BackendEntry per key, in declaration order. Entries with a
        missing, null or blank server are kept but disabled.

    Raises:
        ConfigurationException: If the mapping or an entry has the wrong shape
    """
    if not config:
        return []

    if not isinstance(config, Mapping):
        raise ConfigurationException(
            f"Security configuration must be a mapping, got {type(config).__name__}"
        )

    entries = []
    for backend_id, settings in config.items():
        if settings is None:
            settings = {}
        if not isinstance(settings, Mapping):
            raise ConfigurationException(
                f"Settings for backend '{backend_id}' must be a mapping"
            )

        server = settings.get("server") or ""
        options = {k: v for k, v in settings.items() if k != "server"}
        entries.append(
            BackendEntry(id=str(backend_id), server=str(server).strip(), options=options)
        )

    return entries


def load_security_config(path: Path) -> dict[str, Any]:
    """
    Load backend settings from a YAML file.

    The file may either hold the backends under a top-level "security" key
    or be the backend mapping itself.

    Args:
        path: YAML file to read

    Returns:
        Mapping of backend id to settings

    Raises:
        ConfigurationException: If the file is missing or not valid YAML
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationException(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationException(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationException(f"Configuration in {path} must be a mapping")

    section = data.get(SECURITY_CONFIG_SECTION, data)
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigurationException(
            f"'{SECURITY_CONFIG_SECTION}' section in {path} must be a mapping"
        )

    logger.debug(f"Loaded {len(section)} backend entries from {path}")
    return section
