"""YAML loading for service configuration and region tables.

Wraps ``yaml.safe_load`` so that configuration and data files can never
instantiate arbitrary Python objects. Used by
[BaseService.from_yaml()][vpnservers.core.base_service.BaseService.from_yaml]
and [load_region_table()][vpnservers.services.updater.utils.load_region_table].
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML file into a dictionary.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed content. An existing but empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the YAML is invalid or its top level is not
            a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"expected a mapping at the top level of {config_path}, got {type(data).__name__}"
        )
    return data
