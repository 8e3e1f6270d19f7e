"""Updater service package.

Re-exports the public symbols::

    from vpnservers.services.updater import Updater, UpdaterConfig, OutputConfig
"""

from .configs import OutputConfig, UpdaterConfig
from .service import Updater


__all__ = [
    "OutputConfig",
    "Updater",
    "UpdaterConfig",
]
