"""vpnservers exception hierarchy.

Separates the two failure classes that abort a server list update from the
anomalies that are only reported as warnings. ``asyncio.CancelledError`` is
never wrapped and always propagates untouched.

Exception hierarchy:

```text
VpnServersError (base -- never raised directly)
├── ConfigurationError          -- bad YAML, invalid region table
├── ArchiveError                -- fatal: archive download or decode failure
└── ResolutionError             -- DNS resolution failures
    └── ResolutionExhaustedError -- fatal: strict pass left a host unresolved
```

Only [ArchiveError][vpnservers.core.exceptions.ArchiveError] and
[ResolutionExhaustedError][vpnservers.core.exceptions.ResolutionExhaustedError]
escape a run. Anomalies in single configuration files are caught per file by the
extractor and downgraded to warning strings.
"""

from __future__ import annotations

from vpnservers.models.constants import NO_IP_WARNING, quote


class VpnServersError(Exception):
    """Base exception for all vpnservers errors.

    Never raised directly -- always use a specific subclass.
    """


class ConfigurationError(VpnServersError):
    """Invalid or missing configuration (YAML, region table, CLI flags)."""


class ArchiveError(VpnServersError):
    """The provider archive could not be downloaded or decoded.

    Raised for non-2xx responses, transport failures, oversized bodies and
    invalid zip payloads. Always fatal for the run.
    """


class ResolutionError(VpnServersError):
    """Base for DNS resolution failures."""


class ResolutionExhaustedError(ResolutionError):
    """A host stayed unresolved after its whole retry budget in strict mode.

    Attributes:
        host: The first host found without any address.
        warnings: Warnings collected before the failure, so callers can
            still report them.
    """

    def __init__(self, host: str, message: str | None = None) -> None:
        super().__init__(message or NO_IP_WARNING.format(host=quote(host)))
        self.host = host
        self.warnings: list[str] = []
