"""
Pytest configuration and shared fixtures for vpnservers tests.

Provides:
- A scripted DNS lookup stub standing in for ``lookup_ip``
- Provider settings with a zero-delay retry budget
- Sample archive contents and region tables
"""

import logging
from collections.abc import Mapping, Sequence

import pytest

from vpnservers.engine.reconciler import ProviderSettings
from vpnservers.engine.resolver import ResolveSettings
from vpnservers.models.region_table import RegionTable


SUFFIX = ".prod.example.com"


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


class FakeLookup:
    """Scripted replacement for ``lookup_ip``.

    ``answers`` maps a host to the sequence of results returned by
    successive calls; an ``Exception`` instance is raised instead of
    returned. The last entry repeats once the sequence is exhausted.
    Hosts without an entry raise ``OSError``.
    """

    def __init__(self, answers: Mapping[str, Sequence[object]] | None = None) -> None:
        self.answers = {host: list(seq) for host, seq in (answers or {}).items()}
        self.calls: list[str] = []

    async def __call__(self, host: str, *, timeout: float = 5.0) -> list[str]:
        self.calls.append(host)
        script = self.answers.get(host)
        if not script:
            raise OSError(f"unknown host {host}")
        index = min(self.calls.count(host) - 1, len(script) - 1)
        result = script[index]
        if isinstance(result, Exception):
            raise result
        return list(result)  # type: ignore[call-overload]

    def count(self, host: str) -> int:
        return self.calls.count(host)


def ovpn(host: str) -> str:
    """Minimal OpenVPN client file naming ``host``."""
    return f"client\ndev tun\nproto udp\nremote {host} 1194\nremote-random\n"


@pytest.fixture
def fast_resolve() -> ResolveSettings:
    return ResolveSettings(repetition=3, time_between=0.0)


@pytest.fixture
def provider(fast_resolve: ResolveSettings) -> ProviderSettings:
    return ProviderSettings(
        name="example",
        archive_url="https://example.com/configurations.zip",
        host_suffix=SUFFIX,
        resolve=fast_resolve,
    )


@pytest.fixture
def region_table() -> RegionTable:
    return RegionTable({"aa-one": "Alpha", "bb-two": "Bravo", "cc-three": "Charlie"})


@pytest.fixture
def make_lookup() -> type[FakeLookup]:
    """Factory for scripted lookups: ``make_lookup({"host": [["10.0.0.1"]]})``."""
    return FakeLookup


@pytest.fixture
def make_ovpn():
    return ovpn
