"""Updater service configuration models.

See Also:
    [Updater][vpnservers.services.updater.Updater]: The service class
        that consumes these configurations.
    [BaseServiceConfig][vpnservers.core.base_service.BaseServiceConfig]:
        Base class providing ``interval``, ``max_consecutive_failures``
        and ``metrics`` fields.

Examples:
    ```yaml
    interval: 21600
    provider:
      name: surfshark
      resolve:
        repetition: 20
        time_between: 1.0
    output:
      stdout: false
      servers_file: data/servers.json
    ```
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vpnservers.core.base_service import BaseServiceConfig
from vpnservers.engine.reconciler import ProviderSettings


class OutputConfig(BaseModel):
    """Where a finished server list goes besides the in-memory store."""

    stdout: bool = Field(default=False, description="Print the list as Python source")
    servers_file: str | None = Field(
        default=None, description="Persist the store to this JSON file after each run"
    )


class UpdaterConfig(BaseServiceConfig):
    """Updater service configuration."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
