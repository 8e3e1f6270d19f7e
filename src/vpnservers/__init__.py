r"""vpnservers -- canonical VPN server lists from provider configuration archives.

A provider publishes its servers as a zip of per-server OpenVPN files that
name hosts but not addresses. vpnservers resolves those hosts under
unreliable DNS, names them through a curated region table and produces a
deduplicated, sorted list of servers with their IP addresses.

Imports flow strictly downward:

```text
              services         Orchestration (Updater service, CLI)
                 |
               engine          Resolver, extractor, reconciler, rendering
             /       \
          core       utils     Lifecycle/logging/metrics | DNS, HTTP, ovpn
             \       /
              models           Pure frozen dataclasses (zero I/O)
```

Note:
    Top-level imports (``from vpnservers import Updater``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version


try:
    __version__ = _get_version("vpnservers")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ProviderSettings",
    "RegionTable",
    "ResolveSettings",
    "Server",
    "ServerStore",
    "Updater",
    "UpdaterConfig",
    "find_servers",
    "parallel_resolve",
    "reconcile",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ProviderSettings": ("vpnservers.engine", "ProviderSettings"),
    "RegionTable": ("vpnservers.models", "RegionTable"),
    "ResolveSettings": ("vpnservers.engine", "ResolveSettings"),
    "Server": ("vpnservers.models", "Server"),
    "ServerStore": ("vpnservers.core", "ServerStore"),
    "Updater": ("vpnservers.services", "Updater"),
    "UpdaterConfig": ("vpnservers.services", "UpdaterConfig"),
    "find_servers": ("vpnservers.engine", "find_servers"),
    "parallel_resolve": ("vpnservers.engine", "parallel_resolve"),
    "reconcile": ("vpnservers.engine", "reconcile"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'vpnservers' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
