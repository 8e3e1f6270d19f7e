"""Reconciliation of archive hosts with a provider's static region table.

The archive tells which hosts exist right now; the region table tells
what each subdomain code is called. A run merges both in two passes:

1. Hosts extracted from the archive are resolved in **strict** mode. Each
   resolved host is named through a working copy of the table, and its
   code is removed from that copy. Codes missing from the table keep the
   bare code as region name and produce a warning.
2. Codes still left in the working copy were not in the archive. Their
   hostnames are synthesized and resolved in **best-effort** mode; those
   that answer are added, the others only leave a warning.

The merged list holds at most one server per region and is sorted by
region name.

Examples:
    ```python
    table = load_region_table(provider)
    servers, warnings = await find_servers(table, provider)
    ```
"""

from __future__ import annotations

import logging
import zipfile
from typing import TYPE_CHECKING

import aiohttp
from pydantic import BaseModel, Field, field_validator

from vpnservers.core.exceptions import ArchiveError, ResolutionExhaustedError
from vpnservers.models.constants import quote
from vpnservers.models.server import Server, unique_sorted_ips
from vpnservers.utils.dns import lookup_ip
from vpnservers.utils.http import DEFAULT_MAX_ARCHIVE_SIZE, fetch_and_extract_files

from .extractor import extract_hosts
from .resolver import ResolveSettings, parallel_resolve


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from vpnservers.models.region_table import RegionTable
    from vpnservers.utils.dns import LookupFunc

    FetchFunc = Callable[..., Awaitable[dict[str, str]]]


logger = logging.getLogger(__name__)


class ArchiveSettings(BaseModel):
    """Limits applied while downloading the configuration archive."""

    max_size: int = Field(default=DEFAULT_MAX_ARCHIVE_SIZE, ge=1024)
    timeout: float = Field(default=60.0, ge=1.0, le=600.0)


class ProviderSettings(BaseModel):
    """Provider-specific constants consumed by the reconciler.

    Attributes:
        name: Provider identifier, used in warnings, logs and the store.
        archive_url: URL of the zip bundle of per-server configuration files.
        host_suffix: Fixed domain suffix; stripping it from a host yields
            its subdomain code.
        skip_suffix: File name suffix of the redundant protocol variant.
        regions_file: YAML region table; ``None`` selects the table shipped
            with the package for ``name``.
        archive: Download limits.
        resolve: Retry budget shared by both passes. The failure policy is
            set by the pass itself.
    """

    name: str = Field(default="surfshark", min_length=1)
    archive_url: str = "https://my.surfshark.com/vpn/api/v1/server/configurations"
    host_suffix: str = ".prod.surfshark.com"
    skip_suffix: str = "_tcp.ovpn"
    regions_file: str | None = None
    archive: ArchiveSettings = Field(default_factory=ArchiveSettings)
    resolve: ResolveSettings = Field(default_factory=ResolveSettings)

    @field_validator("host_suffix")
    @classmethod
    def _dotted_suffix(cls, v: str) -> str:
        v = v.strip().lower()
        if not v.strip("."):
            raise ValueError("host_suffix must not be empty")
        return v if v.startswith(".") else "." + v

    def subdomain(self, host: str) -> str:
        """Strip the provider suffix from ``host``; foreign hosts are returned unchanged."""
        return host.removesuffix(self.host_suffix)

    def hostname(self, subdomain: str) -> str:
        return subdomain + self.host_suffix


def _merge(servers: list[Server], warnings: list[str]) -> list[Server]:
    """Collapse servers sharing a region and sort by region name."""
    by_region: dict[str, Server] = {}
    for server in servers:
        existing = by_region.get(server.region)
        if existing is None:
            by_region[server.region] = server
            continue
        warnings.append(
            f"region {quote(server.region)} found more than once, merging its addresses"
        )
        by_region[server.region] = Server(
            server.region, unique_sorted_ips((*existing.ips, *server.ips))
        )
    return sorted(by_region.values(), key=lambda s: s.region)


async def resolve_remaining(
    mapping: Mapping[str, str],
    provider: ProviderSettings,
    *,
    lookup: LookupFunc = lookup_ip,
) -> tuple[list[Server], list[str]]:
    """Resolve, best-effort, table codes the archive did not mention.

    Args:
        mapping: Working copy of the region table after the archive pass.
        provider: Provider constants and retry budget.
        lookup: Single-shot resolution primitive.

    Returns:
        ``(servers, warnings)``; one warning per code that did not resolve.
    """
    host_to_code = {provider.hostname(code): code for code in mapping}
    settings = provider.resolve.model_copy(update={"fail_on_error": False})
    host_to_ips, warnings = await parallel_resolve(host_to_code, settings, lookup=lookup)

    servers = [
        Server(mapping[host_to_code[host]], ips)
        for host, ips in host_to_ips.items()
        if ips
    ]
    logger.debug(
        "remaining_resolved provider=%s codes=%d servers=%d",
        provider.name,
        len(mapping),
        len(servers),
    )
    return servers, warnings


async def reconcile(
    contents: Mapping[str, str],
    table: RegionTable,
    provider: ProviderSettings,
    *,
    lookup: LookupFunc = lookup_ip,
) -> tuple[list[Server], list[str]]:
    """Build the sorted server list from archive contents and the region table.

    Args:
        contents: Archive member file name to content.
        table: Static region table; never modified.
        provider: Provider constants and retry budget.
        lookup: Single-shot resolution primitive.

    Returns:
        ``(servers, warnings)``: servers sorted by region, one per region.

    Raises:
        ResolutionExhaustedError: If an archive host does not resolve. The
            warnings collected so far are attached as ``warnings``.
        asyncio.CancelledError: If the caller is cancelled.
    """
    hosts, warnings = extract_hosts(contents, skip_suffix=provider.skip_suffix)

    strict = provider.resolve.model_copy(update={"fail_on_error": True})
    try:
        host_to_ips, _ = await parallel_resolve(hosts, strict, lookup=lookup)
    except ResolutionExhaustedError as e:
        error = ResolutionExhaustedError(e.host, f"cannot resolve archive hosts: {e}")
        error.warnings = warnings
        raise error from e

    mapping = table.working_copy()
    servers: list[Server] = []
    for host in sorted(host_to_ips):
        subdomain = provider.subdomain(host)
        region = mapping.pop(subdomain, None)
        if region is None:
            region = subdomain
            warnings.append(f"subdomain {quote(subdomain)} not found in {provider.name} mapping")
        servers.append(Server(region, host_to_ips[host]))

    remaining_servers, remaining_warnings = await resolve_remaining(
        mapping, provider, lookup=lookup
    )
    warnings.extend(remaining_warnings)

    merged = _merge(servers + remaining_servers, warnings)
    logger.debug(
        "reconciled provider=%s archive_servers=%d table_servers=%d total=%d warnings=%d",
        provider.name,
        len(servers),
        len(remaining_servers),
        len(merged),
        len(warnings),
    )
    return merged, warnings


async def find_servers(
    table: RegionTable,
    provider: ProviderSettings,
    *,
    lookup: LookupFunc = lookup_ip,
    fetch: FetchFunc = fetch_and_extract_files,
) -> tuple[list[Server], list[str]]:
    """Download the provider archive and reconcile it against ``table``.

    Raises:
        ArchiveError: If the archive cannot be downloaded or decoded.
        ResolutionExhaustedError: If an archive host does not resolve.
    """
    try:
        contents = await fetch(
            provider.archive_url,
            max_size=provider.archive.max_size,
            timeout=provider.archive.timeout,
        )
    except (aiohttp.ClientError, TimeoutError, ValueError, zipfile.BadZipFile) as e:
        raise ArchiveError(f"cannot fetch {provider.archive_url}: {e}") from e

    return await reconcile(contents, table, provider, lookup=lookup)
