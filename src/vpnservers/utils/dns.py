"""Single-shot DNS resolution of a hostname to its IP addresses.

Provides [lookup_ip][vpnservers.utils.dns.lookup_ip], the primitive the
[parallel resolver][vpnservers.engine.resolver.parallel_resolve] layers its
retries and concurrency on. One call performs one A query and one AAAA
query and nothing more: no retries, no caching.

Note:
    Queries use ``dnspython``'s synchronous ``dns.resolver`` delegated to a
    worker thread with ``asyncio.to_thread`` so the event loop is never
    blocked. Cancelling the awaiting task abandons the thread's result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, cast

import dns.exception
import dns.resolver


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from dns.rdtypes.IN.A import A
    from dns.rdtypes.IN.AAAA import AAAA

    LookupFunc = Callable[..., Awaitable[list[str]]]


logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 5.0

# Errors meaning "this attempt found nothing", retried by the resolver
LOOKUP_ERRORS: tuple[type[Exception], ...] = (OSError, dns.exception.DNSException)


def _lookup(host: str, timeout: float) -> list[str]:
    resolver = dns.resolver.Resolver()
    resolver.timeout = timeout
    resolver.lifetime = timeout

    ips: list[str] = []
    last_error: Exception | None = None
    for rdtype in ("A", "AAAA"):
        try:
            answers = resolver.resolve(host, rdtype)
        except dns.resolver.NXDOMAIN:
            # The name does not exist for any family
            raise
        except LOOKUP_ERRORS as e:
            # The other family may still answer
            last_error = e
            continue
        if rdtype == "A":
            ips.extend(cast("A", rdata).address for rdata in answers)
        else:
            ips.extend(cast("AAAA", rdata).address for rdata in answers)

    if not ips:
        raise last_error or dns.resolver.NoAnswer()
    return ips


async def lookup_ip(host: str, *, timeout: float = DEFAULT_LOOKUP_TIMEOUT) -> list[str]:  # noqa: ASYNC109
    """Resolve ``host`` to its IPv4 and IPv6 addresses with a single query each.

    Args:
        host: Fully qualified hostname (e.g. ``"al-tia.prod.surfshark.com"``).
        timeout: Resolver timeout in seconds for each query.

    Returns:
        Addresses as strings, A records first. May contain duplicates.

    Raises:
        dns.resolver.NXDOMAIN: If the name does not exist.
        dns.exception.DNSException: If neither family yields an address;
            the error of the last failed query is raised. A failure of one
            family (timeout, no nameservers) is ignored when the other
            answers.
        OSError: On local network failures affecting both families.
    """
    logger.debug("dns_lookup host=%s timeout_s=%s", host, timeout)
    return await asyncio.to_thread(_lookup, host, timeout)

