"""Updater service for vpnservers.

Rebuilds a provider's server list: downloads the configuration archive,
resolves every server host, reconciles the result with the static region
table and stores the sorted list with the time it was produced.

Every anomaly found along the way (unparseable file, unresolvable table
host, unmapped subdomain code) is logged as a ``warning_reported`` event;
only an archive failure or an unresolvable archive host fails the cycle.

See Also:
    [UpdaterConfig][vpnservers.services.updater.UpdaterConfig]: Provider,
        retry and output settings.
    [find_servers][vpnservers.engine.reconciler.find_servers]: The
        fetch-and-reconcile pipeline this service drives.

Examples:
    ```python
    from vpnservers.services.updater import Updater

    updater = Updater.from_yaml("config/updater.yaml")
    async with updater:
        await updater.run()
    updater.store.get("surfshark")
    ```
"""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING, ClassVar

from vpnservers.core.base_service import BaseService
from vpnservers.core.exceptions import ResolutionExhaustedError
from vpnservers.engine.reconciler import find_servers
from vpnservers.engine.render import render_servers
from vpnservers.models.constants import ServiceName
from vpnservers.utils.dns import lookup_ip
from vpnservers.utils.http import fetch_and_extract_files

from .configs import UpdaterConfig
from .utils import load_region_table


if TYPE_CHECKING:
    from collections.abc import Callable

    from vpnservers.core.store import ServerStore
    from vpnservers.engine.reconciler import FetchFunc
    from vpnservers.models.region_table import RegionTable
    from vpnservers.models.server import Server
    from vpnservers.utils.dns import LookupFunc


class Updater(BaseService[UpdaterConfig]):
    """Server list update service.

    The region table is loaded lazily on the first cycle and reused after
    that; the reconciler only ever works on private copies of it.
    """

    SERVICE_NAME: ClassVar[ServiceName] = ServiceName.UPDATER
    CONFIG_CLASS: ClassVar[type[UpdaterConfig]] = UpdaterConfig

    def __init__(
        self,
        store: ServerStore | None = None,
        config: UpdaterConfig | None = None,
        *,
        lookup: LookupFunc = lookup_ip,
        fetch: FetchFunc = fetch_and_extract_files,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(store=store, config=config)
        self._lookup = lookup
        self._fetch = fetch
        self._clock = clock
        self._table: RegionTable | None = None

    async def run(self) -> None:
        """Execute one update of the configured provider's server list."""
        provider = self._config.provider
        self._logger.info("cycle_started", provider=provider.name, url=provider.archive_url)
        start_time = time.monotonic()

        servers = await self.update()

        self._logger.info(
            "cycle_completed",
            provider=provider.name,
            servers=len(servers),
            duration_s=round(time.monotonic() - start_time, 2),
        )

    async def update(self) -> list[Server]:
        """Fetch, resolve and reconcile, then store and publish the list.

        Raises:
            ConfigurationError: If the region table cannot be loaded.
            ArchiveError: If the archive cannot be fetched or decoded.
            ResolutionExhaustedError: If an archive host does not resolve.
        """
        provider = self._config.provider
        if self._table is None:
            self._table = load_region_table(provider)
            self._logger.debug("region_table_loaded", provider=provider.name, codes=len(self._table))

        try:
            servers, warnings = await find_servers(
                self._table, provider, lookup=self._lookup, fetch=self._fetch
            )
        except ResolutionExhaustedError as e:
            self._report_warnings(e.warnings)
            raise

        self._report_warnings(warnings)
        entry = self._store.update(provider.name, servers, timestamp=int(self._clock()))

        self.set_gauge("servers_found", len(servers))
        self.set_gauge("last_update_timestamp", entry.timestamp)
        self._logger.info(
            "servers_updated",
            provider=provider.name,
            servers=len(servers),
            warnings=len(warnings),
            timestamp=entry.timestamp,
        )

        output = self._config.output
        if output.stdout:
            sys.stdout.write(render_servers(servers, provider=provider.name) + "\n")
        if output.servers_file:
            self._store.save(output.servers_file)
            self._logger.info("servers_saved", path=output.servers_file)

        return servers

    def _report_warnings(self, warnings: list[str]) -> None:
        provider = self._config.provider.name
        for warning in warnings:
            self._logger.warning("warning_reported", provider=provider, message=warning)
        self.set_gauge("warnings", len(warnings))
        self.inc_counter("total_warnings", len(warnings))
