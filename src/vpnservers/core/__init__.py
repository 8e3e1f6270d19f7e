"""Core layer: service lifecycle, logging, metrics, configuration and storage.

Depends only on ``vpnservers.models`` and is depended upon by
``vpnservers.services``.

Attributes:
    BaseService: Abstract generic service with
        [run()][vpnservers.core.base_service.BaseService.run] /
        [run_forever()][vpnservers.core.base_service.BaseService.run_forever],
        graceful shutdown and Prometheus metrics.
    Logger: Structured logger with key=value and JSON output modes.
    MetricsServer: Prometheus ``/metrics`` HTTP endpoint.
    ServerStore: Latest server list per provider, JSON persistable.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
"""

from .base_service import BaseService, BaseServiceConfig, ConfigT
from .exceptions import (
    ArchiveError,
    ConfigurationError,
    ResolutionError,
    ResolutionExhaustedError,
    VpnServersError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .metrics import (
    CYCLE_DURATION_SECONDS,
    SERVICE_COUNTER,
    SERVICE_GAUGE,
    SERVICE_INFO,
    MetricsConfig,
    MetricsServer,
    start_metrics_server,
)
from .store import ServerStore
from .yaml import load_yaml


__all__ = [
    "CYCLE_DURATION_SECONDS",
    "SERVICE_COUNTER",
    "SERVICE_GAUGE",
    "SERVICE_INFO",
    "ArchiveError",
    "BaseService",
    "BaseServiceConfig",
    "ConfigT",
    "ConfigurationError",
    "Logger",
    "MetricsConfig",
    "MetricsServer",
    "ResolutionError",
    "ResolutionExhaustedError",
    "ServerStore",
    "StructuredFormatter",
    "VpnServersError",
    "format_kv_pairs",
    "load_yaml",
    "start_metrics_server",
]
