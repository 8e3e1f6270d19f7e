"""
Unit tests for engine.reconciler module.

Tests:
- ProviderSettings suffix handling
- reconcile() archive pass: region naming, unmapped codes, strict failure
- reconcile() fallback pass over table codes missing from the archive
- reconcile() invariants: one server per region, sorted, deduplicated IPs
- find_servers() archive error wrapping
"""

import zipfile
from unittest.mock import AsyncMock

import aiohttp
import pytest
from pydantic import ValidationError

from vpnservers.core.exceptions import ArchiveError, ResolutionExhaustedError
from vpnservers.engine.reconciler import ProviderSettings, find_servers, reconcile, resolve_remaining
from vpnservers.models.region_table import RegionTable
from vpnservers.models.server import Server


def host(code: str) -> str:
    return f"{code}.prod.example.com"


# =============================================================================
# ProviderSettings Tests
# =============================================================================


class TestProviderSettings:
    """Tests for ProviderSettings."""

    def test_surfshark_defaults(self) -> None:
        settings = ProviderSettings()
        assert settings.name == "surfshark"
        assert settings.host_suffix == ".prod.surfshark.com"
        assert settings.skip_suffix == "_tcp.ovpn"

    def test_suffix_gets_leading_dot(self) -> None:
        assert ProviderSettings(host_suffix="Prod.Example.com").host_suffix == ".prod.example.com"

    def test_empty_suffix_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProviderSettings(host_suffix=".")

    def test_subdomain_and_hostname(self, provider) -> None:
        assert provider.subdomain("aa-one.prod.example.com") == "aa-one"
        assert provider.subdomain("other.host.net") == "other.host.net"
        assert provider.hostname("aa-one") == "aa-one.prod.example.com"


# =============================================================================
# reconcile() Tests - Archive Pass
# =============================================================================


class TestReconcileArchivePass:
    """Tests for servers discovered in the archive."""

    async def test_archive_host_named_from_table(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        table = RegionTable({"aa-one": "Alpha"})
        lookup = make_lookup({host("aa-one"): [["10.0.0.2", "10.0.0.1", "10.0.0.2"]]})

        servers, warnings = await reconcile(
            {"aa_udp.ovpn": make_ovpn(host("aa-one"))}, table, provider, lookup=lookup
        )

        assert servers == [Server("Alpha", ("10.0.0.1", "10.0.0.2"))]
        assert warnings == []

    async def test_unmapped_code_falls_back_to_bare_code(
        self, provider, make_lookup, make_ovpn
    ) -> None:
        table = RegionTable({"aa-one": "Alpha"})
        lookup = make_lookup(
            {host("aa-one"): [["10.0.0.1"]], host("zz-new"): [["10.0.0.9"]]}
        )
        contents = {
            "aa_udp.ovpn": make_ovpn(host("aa-one")),
            "zz_udp.ovpn": make_ovpn(host("zz-new")),
        }

        servers, warnings = await reconcile(contents, table, provider, lookup=lookup)

        assert [s.region for s in servers] == ["Alpha", "zz-new"]
        assert warnings == ['subdomain "zz-new" not found in example mapping']

    async def test_strict_failure_aborts_with_extraction_warnings(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        lookup = make_lookup({host("aa-one"): [["10.0.0.1"]]})
        contents = {
            "aa_udp.ovpn": make_ovpn(host("aa-one")),
            "bb_udp.ovpn": make_ovpn(host("bb-two")),
            "bad_udp.ovpn": "client\n",
        }

        with pytest.raises(ResolutionExhaustedError) as exc_info:
            await reconcile(contents, region_table, provider, lookup=lookup)

        assert exc_info.value.host == host("bb-two")
        assert "archive hosts" in str(exc_info.value)
        assert exc_info.value.warnings == ["remote host not found in bad_udp.ovpn"]

    async def test_strict_failure_skips_fallback_pass(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        lookup = make_lookup({host("cc-three"): [["10.0.0.3"]]})

        with pytest.raises(ResolutionExhaustedError):
            await reconcile(
                {"bb_udp.ovpn": make_ovpn(host("bb-two"))}, region_table, provider, lookup=lookup
            )

        assert lookup.count(host("cc-three")) == 0


# =============================================================================
# reconcile() Tests - Fallback Pass
# =============================================================================


class TestReconcileFallbackPass:
    """Tests for table codes that the archive did not mention."""

    async def test_table_complement_resolved(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        lookup = make_lookup(
            {
                host("aa-one"): [["10.0.0.1"]],
                host("bb-two"): [["10.0.0.2"]],
                host("cc-three"): [["10.0.0.3"]],
            }
        )

        servers, warnings = await reconcile(
            {"aa_udp.ovpn": make_ovpn(host("aa-one"))}, region_table, provider, lookup=lookup
        )

        assert servers == [
            Server("Alpha", ("10.0.0.1",)),
            Server("Bravo", ("10.0.0.2",)),
            Server("Charlie", ("10.0.0.3",)),
        ]
        assert warnings == []
        # Matched code is not resolved a second time
        assert lookup.count(host("aa-one")) == 1

    async def test_retired_table_code_only_warns(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        lookup = make_lookup({host("aa-one"): [["10.0.0.1"]], host("bb-two"): [["10.0.0.2"]]})

        servers, warnings = await reconcile(
            {"aa_udp.ovpn": make_ovpn(host("aa-one"))}, region_table, provider, lookup=lookup
        )

        assert [s.region for s in servers] == ["Alpha", "Bravo"]
        assert warnings == [f'no IP address found for host "{host("cc-three")}"']

    async def test_empty_archive_uses_table_only(self, provider, region_table, make_lookup) -> None:
        lookup = make_lookup({host("bb-two"): [["10.0.0.2"]]})

        servers, warnings = await reconcile({}, region_table, provider, lookup=lookup)

        assert servers == [Server("Bravo", ("10.0.0.2",))]
        assert len(warnings) == 2

    async def test_resolve_remaining_is_best_effort(self, provider, make_lookup) -> None:
        lookup = make_lookup({host("bb-two"): [["10.0.0.2"]]})

        servers, warnings = await resolve_remaining(
            {"bb-two": "Bravo", "cc-three": "Charlie"}, provider, lookup=lookup
        )

        assert servers == [Server("Bravo", ("10.0.0.2",))]
        assert warnings == [f'no IP address found for host "{host("cc-three")}"']


# =============================================================================
# reconcile() Tests - Invariants
# =============================================================================


class TestReconcileInvariants:
    """Tests for ordering, uniqueness and table immutability."""

    async def test_sorted_by_region(self, provider, make_lookup, make_ovpn) -> None:
        table = RegionTable({"zz": "Zulu", "mm": "Mike", "aa": "Alpha"})
        lookup = make_lookup({host(code): [["10.0.0.1"]] for code in table})

        servers, _ = await reconcile(
            {"zz_udp.ovpn": make_ovpn(host("zz"))}, table, provider, lookup=lookup
        )

        assert [s.region for s in servers] == ["Alpha", "Mike", "Zulu"]

    async def test_one_server_per_region(self, provider, make_lookup, make_ovpn) -> None:
        # Two codes share one region name
        table = RegionTable({"aa-one": "Alpha", "aa-two": "Alpha", "bb": "Bravo"})
        lookup = make_lookup(
            {
                host("aa-one"): [["10.0.0.1"]],
                host("aa-two"): [["10.0.0.2"]],
                host("bb"): [["10.0.0.3"]],
            }
        )
        contents = {
            "a1_udp.ovpn": make_ovpn(host("aa-one")),
            "a2_udp.ovpn": make_ovpn(host("aa-two")),
        }

        servers, warnings = await reconcile(contents, table, provider, lookup=lookup)

        regions = [s.region for s in servers]
        assert len(regions) == len(set(regions))
        assert servers[0] == Server("Alpha", ("10.0.0.1", "10.0.0.2"))
        assert 'region "Alpha" found more than once, merging its addresses' in warnings

    async def test_upper_case_code_matches_archive_host(
        self, provider, make_lookup, make_ovpn
    ) -> None:
        table = RegionTable({"AA-One": "Alpha"})
        lookup = make_lookup({host("aa-one"): [["10.0.0.1"]]})

        servers, warnings = await reconcile(
            {"aa_udp.ovpn": make_ovpn("AA-ONE.prod.example.com")}, table, provider, lookup=lookup
        )

        assert servers == [Server("Alpha", ("10.0.0.1",))]
        assert warnings == []
        assert lookup.count(host("aa-one")) == 1

    async def test_table_not_mutated(self, provider, region_table, make_lookup, make_ovpn) -> None:
        lookup = make_lookup({host(code): [["10.0.0.1"]] for code in region_table})

        await reconcile(
            {"aa_udp.ovpn": make_ovpn(host("aa-one"))}, region_table, provider, lookup=lookup
        )

        assert len(region_table) == 3
        assert region_table["aa-one"] == "Alpha"

    async def test_ips_deduplicated_and_sorted(self, provider, make_lookup, make_ovpn) -> None:
        table = RegionTable({"aa": "Alpha"})
        lookup = make_lookup({host("aa"): [["10.0.0.10", "10.0.0.9", "10.0.0.10", "2001:db8::1"]]})

        servers, _ = await reconcile(
            {"aa_udp.ovpn": make_ovpn(host("aa"))}, table, provider, lookup=lookup
        )

        assert servers[0].ips == ("10.0.0.9", "10.0.0.10", "2001:db8::1")


# =============================================================================
# find_servers() Tests
# =============================================================================


class TestFindServers:
    """Tests for the fetch-and-reconcile entry point."""

    async def test_fetches_configured_archive(
        self, provider, region_table, make_lookup, make_ovpn
    ) -> None:
        fetch = AsyncMock(return_value={"aa_udp.ovpn": make_ovpn(host("aa-one"))})
        lookup = make_lookup({host(code): [["10.0.0.1"]] for code in region_table})

        servers, _ = await find_servers(region_table, provider, lookup=lookup, fetch=fetch)

        fetch.assert_awaited_once_with(
            provider.archive_url,
            max_size=provider.archive.max_size,
            timeout=provider.archive.timeout,
        )
        assert len(servers) == 3

    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("refused"),
            TimeoutError(),
            ValueError("Response body too large"),
            zipfile.BadZipFile("not a zip"),
        ],
    )
    async def test_fetch_failures_become_archive_error(
        self, provider, region_table, make_lookup, error
    ) -> None:
        fetch = AsyncMock(side_effect=error)

        with pytest.raises(ArchiveError, match="cannot fetch"):
            await find_servers(region_table, provider, lookup=make_lookup(), fetch=fetch)
