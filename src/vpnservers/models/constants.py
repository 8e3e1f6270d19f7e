"""Shared constants for the models layer."""

from __future__ import annotations

import json
from enum import StrEnum


class ServiceName(StrEnum):
    """Canonical service identifiers used in logging and metrics labels.

    Attributes:
        UPDATER: Server list updater
            ([Updater][vpnservers.services.updater.Updater]).
    """

    UPDATER = "updater"


def quote(value: str) -> str:
    """Double-quote ``value`` for warning text, escaping quotes and control characters."""
    return json.dumps(value, ensure_ascii=False)


# Warning emitted for a host that resolved to nothing; fill ``host`` with
# quote(host). Shared by the resolver (best-effort mode) and the
# strict-mode exhaustion error.
NO_IP_WARNING = "no IP address found for host {host}"
