"""OpenVPN configuration file parsing.

Recovers the server hostname from the ``remote`` directives of one
``.ovpn`` file.
"""

from __future__ import annotations


def extract_host_from_ovpn(content: str) -> tuple[str, str]:
    """Return the first ``remote`` host of an OpenVPN file and an advisory warning.

    Lines look like ``remote <host> [port] [proto]``; comment lines
    (``#`` or ``;``) are ignored. The first host wins. The warning is an
    empty string unless something looked unusual: extra distinct hosts or
    a ``remote`` line without a host.

    Raises:
        ValueError: If no ``remote`` host is found.

    Examples:
        ```python
        extract_host_from_ovpn("client\\nremote al-tia.prod.surfshark.com 1194\\n")
        # ('al-tia.prod.surfshark.com', '')
        ```
    """
    hosts: list[str] = []
    warnings: list[str] = []

    for raw_line in content.splitlines():
        line = raw_line.strip()
        fields = line.split()
        if not fields or fields[0] != "remote":
            continue
        if len(fields) < 2:  # noqa: PLR2004
            warnings.append(f"remote line has no host: {line!r}")
            continue
        host = fields[1]
        if host not in hosts:
            hosts.append(host)

    if not hosts:
        raise ValueError("remote host not found")

    if len(hosts) > 1:
        warnings.append(
            f"only using the first host {hosts[0]!r} and discarding {len(hosts) - 1} other hosts"
        )
    return hosts[0], "; ".join(warnings)
