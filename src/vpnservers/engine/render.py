"""Rendering of a server list as Python source for embedding.

The output is a self-contained function definition that rebuilds the list,
meant to be pasted into a module of built-in server data::

    def surfshark_servers() -> list[Server]:
        return [
            Server(region='Albania', ips=('31.171.152.35',)),
        ]
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable

    from vpnservers.models.server import Server


def server_literal(server: Server) -> str:
    """Return the constructor call recreating ``server``."""
    ips = ", ".join(repr(ip) for ip in server.ips)
    if len(server.ips) == 1:
        ips += ","
    return f"Server(region={server.region!r}, ips=({ips}))"


def render_servers(servers: Iterable[Server], *, provider: str) -> str:
    """Render ``servers`` as a ``<provider>_servers()`` function definition.

    Non-identifier characters in ``provider`` become underscores.
    """
    name = re.sub(r"\W", "_", provider.lower()).strip("_") or "provider"
    lines = [f"def {name}_servers() -> list[Server]:", "    return ["]
    lines.extend(f"        {server_literal(server)}," for server in servers)
    lines.append("    ]")
    return "\n".join(lines)
