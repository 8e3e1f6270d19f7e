"""
Unit tests for engine.extractor module.

Tests:
- TCP variant skipping
- Deduplication and ordering of hosts
- Parser warnings and parser failures downgraded to warnings
"""

from vpnservers.engine.extractor import extract_hosts, normalize_host


class TestNormalizeHost:
    """Tests for normalize_host()."""

    def test_lowercases_and_strips_root_dot(self) -> None:
        assert normalize_host(" AA-One.Prod.Example.com. ") == "aa-one.prod.example.com"


class TestExtractHostsSkipping:
    """Tests for protocol variant skipping."""

    def test_tcp_variant_skipped(self, make_ovpn) -> None:
        contents = {
            "x_tcp.ovpn": make_ovpn("x.prod.example.com"),
            "x_udp.ovpn": make_ovpn("x.prod.example.com"),
        }

        hosts, warnings = extract_hosts(contents)

        assert hosts == ["x.prod.example.com"]
        assert warnings == []

    def test_tcp_only_file_produces_nothing(self, make_ovpn) -> None:
        hosts, warnings = extract_hosts({"y_tcp.ovpn": make_ovpn("y.prod.example.com")})

        assert hosts == []
        assert warnings == []

    def test_custom_skip_suffix(self, make_ovpn) -> None:
        contents = {
            "x.tcp.conf": make_ovpn("x.prod.example.com"),
            "z.udp.conf": make_ovpn("z.prod.example.com"),
        }

        hosts, _ = extract_hosts(contents, skip_suffix=".tcp.conf")

        assert hosts == ["z.prod.example.com"]

    def test_empty_skip_suffix_disables_skipping(self, make_ovpn) -> None:
        hosts, _ = extract_hosts({"x_tcp.ovpn": make_ovpn("x.prod.example.com")}, skip_suffix="")

        assert hosts == ["x.prod.example.com"]


class TestExtractHostsDedup:
    """Tests for host deduplication and ordering."""

    def test_same_host_in_two_files_listed_once(self, make_ovpn) -> None:
        contents = {
            "a_udp.ovpn": make_ovpn("a.prod.example.com"),
            "b_udp.ovpn": make_ovpn("A.prod.example.com"),
        }

        hosts, _ = extract_hosts(contents)

        assert hosts == ["a.prod.example.com"]

    def test_order_follows_file_names(self, make_ovpn) -> None:
        contents = {
            "c_udp.ovpn": make_ovpn("c.prod.example.com"),
            "a_udp.ovpn": make_ovpn("a.prod.example.com"),
        }

        hosts, _ = extract_hosts(contents)

        assert hosts == ["a.prod.example.com", "c.prod.example.com"]


class TestExtractHostsWarnings:
    """Tests for parser warnings and failures."""

    def test_parse_failure_becomes_warning_with_file_name(self, make_ovpn) -> None:
        contents = {
            "broken_udp.ovpn": "client\ndev tun\n",
            "good_udp.ovpn": make_ovpn("good.prod.example.com"),
        }

        hosts, warnings = extract_hosts(contents)

        assert hosts == ["good.prod.example.com"]
        assert warnings == ["remote host not found in broken_udp.ovpn"]

    def test_parser_warning_kept_with_host(self) -> None:
        contents = {
            "multi_udp.ovpn": "remote a.prod.example.com 1194\nremote b.prod.example.com 1194\n",
        }

        hosts, warnings = extract_hosts(contents)

        assert hosts == ["a.prod.example.com"]
        assert len(warnings) == 1
        assert "discarding 1 other hosts" in warnings[0]
        assert warnings[0].endswith("in multi_udp.ovpn")

    def test_custom_parser(self) -> None:
        def parse(content: str) -> tuple[str, str]:
            return content.strip(), "odd"

        hosts, warnings = extract_hosts({"s_udp.ovpn": "s.prod.example.com\n"}, parse=parse)

        assert hosts == ["s.prod.example.com"]
        assert warnings == ["odd in s_udp.ovpn"]
