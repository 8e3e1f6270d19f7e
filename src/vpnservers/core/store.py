"""In-memory store of the latest server list per provider.

The updater writes a [ProviderServers][vpnservers.models.server.ProviderServers]
after every successful run; nothing in the resolution engine reads it back.
The store can be persisted to and restored from a JSON file.

Examples:
    ```python
    store = ServerStore()
    store.update("surfshark", servers, timestamp=1700000000)
    store.save("servers.json")
    ```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vpnservers.models.server import ProviderServers

from .exceptions import ConfigurationError


if TYPE_CHECKING:
    from collections.abc import Iterable

    from vpnservers.models.server import Server


logger = logging.getLogger(__name__)


class ServerStore:
    """Latest [ProviderServers][vpnservers.models.server.ProviderServers] keyed by provider."""

    def __init__(self) -> None:
        self._providers: dict[str, ProviderServers] = {}

    def update(self, provider: str, servers: Iterable[Server], timestamp: int) -> ProviderServers:
        """Replace the server list of ``provider`` and record when it was produced."""
        entry = ProviderServers(timestamp=timestamp, servers=tuple(servers))
        self._providers[provider] = entry
        return entry

    def get(self, provider: str) -> ProviderServers | None:
        return self._providers.get(provider)

    def providers(self) -> list[str]:
        return sorted(self._providers)

    def to_dict(self) -> dict[str, Any]:
        return {name: self._providers[name].to_dict() for name in self.providers()}

    def save(self, path: str | Path) -> None:
        """Write the store as indented JSON, creating parent directories."""
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.debug("store_saved path=%s providers=%d", dest, len(self._providers))

    @classmethod
    def load(cls, path: str | Path) -> ServerStore:
        """Restore a store saved with [save()][vpnservers.core.store.ServerStore.save].

        A missing file yields an empty store.

        Raises:
            ConfigurationError: If the file is not valid JSON or has the
                wrong shape.
        """
        store = cls()
        src = Path(path)
        if not src.exists():
            return store
        try:
            data = json.loads(src.read_text(encoding="utf-8"))
            for name, entry in data.items():
                store._providers[name] = ProviderServers.from_dict(entry)
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid servers file {src}: {e}") from e
        return store
