"""Pure data models: servers, server lists and region tables.

Attributes:
    Server: One region with its sorted, distinct IP addresses.
        See [Server][vpnservers.models.server.Server].
    ProviderServers: Timestamped server list for one provider.
    RegionTable: Immutable subdomain code to region name mapping.
        See [RegionTable][vpnservers.models.region_table.RegionTable].
"""

from .constants import NO_IP_WARNING, ServiceName, quote
from .region_table import RegionTable
from .server import ProviderServers, Server, unique_sorted_ips


__all__ = [
    "NO_IP_WARNING",
    "ProviderServers",
    "RegionTable",
    "Server",
    "ServiceName",
    "quote",
    "unique_sorted_ips",
]
