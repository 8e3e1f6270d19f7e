"""Updater service utility functions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from vpnservers.core.exceptions import ConfigurationError
from vpnservers.core.yaml import load_yaml
from vpnservers.models.region_table import RegionTable


if TYPE_CHECKING:
    from vpnservers.engine.reconciler import ProviderSettings


DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def region_table_path(provider: ProviderSettings) -> Path:
    """Return the configured table file, or the packaged one for the provider."""
    if provider.regions_file:
        return Path(provider.regions_file)
    return DATA_DIR / f"{provider.name}.yaml"


def load_region_table(provider: ProviderSettings) -> RegionTable:
    """Load the region table of ``provider`` from its YAML data file.

    Raises:
        ConfigurationError: If the file is missing, has no ``regions``
            mapping, or holds blank codes or names.
    """
    path = region_table_path(provider)
    try:
        data = load_yaml(path)
    except FileNotFoundError as e:
        raise ConfigurationError(f"region table not found for {provider.name}: {path}") from e

    regions = data.get("regions")
    if not isinstance(regions, dict):
        raise ConfigurationError(f"{path}: expected a 'regions' mapping")
    try:
        return RegionTable(regions)
    except ValueError as e:
        raise ConfigurationError(f"{path}: {e}") from e
