"""Unit tests for core.exceptions module."""

import pytest

from vpnservers.core.exceptions import (
    ArchiveError,
    ConfigurationError,
    ResolutionError,
    ResolutionExhaustedError,
    VpnServersError,
)


class TestHierarchy:
    """Exception class hierarchy."""

    @pytest.mark.parametrize(
        "exc_class", [ConfigurationError, ArchiveError, ResolutionError, ResolutionExhaustedError]
    )
    def test_subclass_of_base(self, exc_class):
        assert issubclass(exc_class, VpnServersError)

    def test_exhausted_is_resolution_error(self):
        assert issubclass(ResolutionExhaustedError, ResolutionError)

    def test_archive_error_not_resolution_error(self):
        assert not issubclass(ArchiveError, ResolutionError)


class TestResolutionExhaustedError:
    """ResolutionExhaustedError attributes and message."""

    def test_default_message(self):
        e = ResolutionExhaustedError("a.example.com")
        assert str(e) == 'no IP address found for host "a.example.com"'
        assert e.host == "a.example.com"

    def test_custom_message(self):
        e = ResolutionExhaustedError("a.example.com", "cannot resolve archive hosts")
        assert str(e) == "cannot resolve archive hosts"
        assert e.host == "a.example.com"

    def test_warnings_start_empty_and_independent(self):
        first = ResolutionExhaustedError("a")
        second = ResolutionExhaustedError("b")
        first.warnings.append("w")
        assert second.warnings == []

    def test_catchable_as_base(self):
        with pytest.raises(VpnServersError):
            raise ResolutionExhaustedError("a")
