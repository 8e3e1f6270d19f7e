"""Concurrent, retrying resolution of a batch of hostnames.

[parallel_resolve][vpnservers.engine.resolver.parallel_resolve] knows
nothing about regions or tables: it turns hostnames into IP lists. Each
hostname gets its own task in an ``asyncio.TaskGroup`` and owns its result
slot; results are read only after the group has joined.

Two failure policies are supported:

- **strict** (``fail_on_error=True``): the first host that ends its retry
  budget without an address raises
  [ResolutionExhaustedError][vpnservers.core.exceptions.ResolutionExhaustedError]
  and cancels every other in-flight lookup.
- **best-effort** (``fail_on_error=False``): such a host maps to an empty
  list and contributes one ``no IP address found for host`` warning.

Cancelling the caller cancels every worker; no partial mapping is returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from vpnservers.core.exceptions import ResolutionExhaustedError
from vpnservers.models.constants import NO_IP_WARNING, quote
from vpnservers.utils.dns import DEFAULT_LOOKUP_TIMEOUT, LOOKUP_ERRORS, lookup_ip


if TYPE_CHECKING:
    from collections.abc import Iterable

    from vpnservers.utils.dns import LookupFunc


logger = logging.getLogger(__name__)


class ResolveSettings(BaseModel):
    """Retry budget and failure policy for one resolution pass.

    Attributes:
        repetition: Maximum lookup attempts per host.
        time_between: Fixed delay in seconds between two attempts.
        fail_on_error: Strict mode when True, best-effort otherwise.
        lookup_timeout: Timeout in seconds handed to each lookup.
    """

    repetition: int = Field(default=20, ge=1, le=100)
    time_between: float = Field(default=1.0, ge=0.0, le=60.0)
    fail_on_error: bool = True
    lookup_timeout: float = Field(default=DEFAULT_LOOKUP_TIMEOUT, gt=0.0, le=60.0)


async def resolve_repeat(
    host: str,
    settings: ResolveSettings,
    *,
    lookup: LookupFunc = lookup_ip,
) -> list[str]:
    """Look ``host`` up until it yields addresses or the retry budget is spent.

    A lookup error and an empty answer both count as a failed attempt.

    Returns:
        The first non-empty answer, or an empty list after
        ``settings.repetition`` failed attempts.
    """
    for attempt in range(1, settings.repetition + 1):
        try:
            ips = await lookup(host, timeout=settings.lookup_timeout)
        except LOOKUP_ERRORS as e:
            logger.debug("lookup_failed host=%s attempt=%d error=%s", host, attempt, e)
            ips = []
        if ips:
            return list(ips)
        if attempt < settings.repetition:
            await asyncio.sleep(settings.time_between)
    return []


async def parallel_resolve(
    hosts: Iterable[str],
    settings: ResolveSettings,
    *,
    lookup: LookupFunc = lookup_ip,
) -> tuple[dict[str, list[str]], list[str]]:
    """Resolve every host concurrently.

    Args:
        hosts: Hostnames to resolve. Duplicates are resolved once.
        settings: Retry budget and failure policy.
        lookup: Single-shot resolution primitive, called as
            ``await lookup(host, timeout=...)``.

    Returns:
        ``(host_to_ips, warnings)``. Every input host is a key; in
        best-effort mode unresolved hosts map to an empty list and get one
        warning each. Iteration order of the mapping carries no meaning.

    Raises:
        ResolutionExhaustedError: In strict mode, for the first host left
            without any address. Other lookups are cancelled.
        asyncio.CancelledError: If the caller is cancelled.
    """
    unique_hosts = list(dict.fromkeys(hosts))
    if not unique_hosts:
        return {}, []

    logger.debug(
        "resolve_started hosts=%d repetition=%d strict=%s",
        len(unique_hosts),
        settings.repetition,
        settings.fail_on_error,
    )

    async def _worker(host: str) -> list[str]:
        ips = await resolve_repeat(host, settings, lookup=lookup)
        if not ips and settings.fail_on_error:
            raise ResolutionExhaustedError(host)
        return ips

    tasks: dict[str, asyncio.Task[list[str]]] = {}
    try:
        async with asyncio.TaskGroup() as tg:
            for host in unique_hosts:
                tasks[host] = tg.create_task(_worker(host))
    except ExceptionGroup as eg:
        exhausted = [e for e in eg.exceptions if isinstance(e, ResolutionExhaustedError)]
        if exhausted:
            logger.debug("resolve_aborted host=%s", exhausted[0].host)
            raise exhausted[0] from None
        raise

    host_to_ips: dict[str, list[str]] = {}
    warnings: list[str] = []
    for host, task in tasks.items():
        ips = task.result()
        host_to_ips[host] = ips
        if not ips:
            warnings.append(NO_IP_WARNING.format(host=quote(host)))

    logger.debug(
        "resolve_completed hosts=%d unresolved=%d", len(host_to_ips), len(warnings)
    )
    return host_to_ips, warnings
