"""Candidate hostname extraction from a provider's configuration archive."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vpnservers.utils.ovpn import extract_host_from_ovpn


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    ParseFunc = Callable[[str], tuple[str, str]]


logger = logging.getLogger(__name__)


def normalize_host(host: str) -> str:
    """Lower-case a hostname and drop any trailing root dot."""
    return host.strip().rstrip(".").lower()


def extract_hosts(
    contents: Mapping[str, str],
    *,
    skip_suffix: str = "_tcp.ovpn",
    parse: ParseFunc = extract_host_from_ovpn,
) -> tuple[list[str], list[str]]:
    """Turn archive members into a deduplicated list of server hostnames.

    Files whose name ends with ``skip_suffix`` are ignored without a
    warning: a provider shipping TCP and UDP variants of every server would
    otherwise list each host twice. Files are visited in name order so the
    output does not depend on archive layout.

    A parser warning is kept next to its host. A parser failure
    (``ValueError``) becomes a warning naming the file, and only that file
    is skipped.

    Args:
        contents: Member file name to file content.
        skip_suffix: File name suffix of the redundant protocol variant.
            An empty string disables skipping.
        parse: Single-file parser returning ``(host, warning)``.

    Returns:
        ``(hosts, warnings)`` with hosts in first-seen order.
    """
    hosts: dict[str, None] = {}
    warnings: list[str] = []
    skipped = 0

    for file_name in sorted(contents):
        if skip_suffix and file_name.endswith(skip_suffix):
            skipped += 1
            continue
        try:
            host, warning = parse(contents[file_name])
        except ValueError as e:
            warnings.append(f"{e} in {file_name}")
            continue
        if warning:
            warnings.append(f"{warning} in {file_name}")
        hosts.setdefault(normalize_host(host), None)

    logger.debug(
        "hosts_extracted files=%d skipped=%d hosts=%d warnings=%d",
        len(contents),
        skipped,
        len(hosts),
        len(warnings),
    )
    return list(hosts), warnings
