"""Services layer: business logic built on ``core`` and ``engine``.

Attributes:
    Updater: Rebuilds a provider's server list on an interval.
        See [Updater][vpnservers.services.updater.Updater].
"""

from .updater import OutputConfig, Updater, UpdaterConfig


__all__ = [
    "OutputConfig",
    "Updater",
    "UpdaterConfig",
]
