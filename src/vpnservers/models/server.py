"""VPN server entries and timestamped server lists.

Pure frozen dataclasses with zero I/O. All normalization happens in
``__post_init__`` so an invalid or un-normalized instance never escapes
the constructor.

See Also:
    [reconcile][vpnservers.engine.reconciler.reconcile]: Builds
        [Server][vpnservers.models.server.Server] instances from resolved hosts.
    [ServerStore][vpnservers.core.store.ServerStore]: Keeps one
        [ProviderServers][vpnservers.models.server.ProviderServers] per provider.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


def unique_sorted_ips(ips: Iterable[str]) -> tuple[str, ...]:
    """Validate, deduplicate and sort IP addresses.

    IPv4 addresses sort before IPv6 ones, each family in numeric order.
    Addresses are returned in their canonical textual form, so
    ``"010.0.0.1"``-style variants cannot survive as duplicates.

    Raises:
        ValueError: If any entry is not a valid IP address.
    """
    parsed = {ipaddress.ip_address(ip.strip()) for ip in ips}
    return tuple(str(ip) for ip in sorted(parsed, key=lambda ip: (ip.version, ip)))


@dataclass(frozen=True, slots=True)
class Server:
    """One VPN region with its current IP addresses.

    Attributes:
        region: Human-readable region name; the identity of the server in
            a list.
        ips: Distinct addresses, sorted ascending. Never empty.

    Examples:
        ```python
        Server("Albania", ["10.0.0.2", "10.0.0.1", "10.0.0.2"]).ips
        # ('10.0.0.1', '10.0.0.2')
        ```
    """

    region: str
    ips: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.region, str) or not self.region.strip():
            raise ValueError("region must be a non-empty string")
        ips = unique_sorted_ips(self.ips)
        if not ips:
            raise ValueError(f"server {self.region!r} has no IP address")
        object.__setattr__(self, "ips", ips)

    def to_dict(self) -> dict[str, Any]:
        return {"region": self.region, "ips": list(self.ips)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Server:
        return cls(region=data["region"], ips=tuple(data["ips"]))


@dataclass(frozen=True, slots=True)
class ProviderServers:
    """A provider's server list and the Unix time it was produced."""

    timestamp: int
    servers: tuple[Server, ...] = ()

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {self.timestamp}")
        object.__setattr__(self, "servers", tuple(self.servers))

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "servers": [server.to_dict() for server in self.servers],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProviderServers:
        return cls(
            timestamp=int(data["timestamp"]),
            servers=tuple(Server.from_dict(s) for s in data.get("servers", [])),
        )
