"""Resolution and reconciliation engine.

Attributes:
    resolver: Concurrent, retrying hostname resolution with strict and
        best-effort failure policies.
        See [parallel_resolve][vpnservers.engine.resolver.parallel_resolve].
    extractor: Hostname extraction from archive members.
        See [extract_hosts][vpnservers.engine.extractor.extract_hosts].
    reconciler: Two-pass merge of archive hosts and the region table.
        See [reconcile][vpnservers.engine.reconciler.reconcile].
    render: Python source rendering of a server list.
"""

from .extractor import extract_hosts
from .reconciler import (
    ArchiveSettings,
    ProviderSettings,
    find_servers,
    reconcile,
    resolve_remaining,
)
from .render import render_servers
from .resolver import ResolveSettings, parallel_resolve, resolve_repeat


__all__ = [
    "ArchiveSettings",
    "ProviderSettings",
    "ResolveSettings",
    "extract_hosts",
    "find_servers",
    "parallel_resolve",
    "reconcile",
    "render_servers",
    "resolve_remaining",
    "resolve_repeat",
]
