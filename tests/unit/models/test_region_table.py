"""Unit tests for models.region_table module."""

import pytest

from vpnservers.models.region_table import RegionTable


class TestRegionTable:
    """Tests for RegionTable."""

    def test_mapping_interface(self) -> None:
        table = RegionTable({"aa": "Alpha", "bb": "Bravo"})
        assert table["aa"] == "Alpha"
        assert len(table) == 2
        assert set(table) == {"aa", "bb"}
        assert "cc" not in table

    def test_values_stripped(self) -> None:
        assert RegionTable({" aa ": " Alpha "})["aa"] == "Alpha"

    def test_immutable(self) -> None:
        table = RegionTable({"aa": "Alpha"})
        with pytest.raises(TypeError):
            table["bb"] = "Bravo"  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak(self) -> None:
        source = {"aa": "Alpha"}
        table = RegionTable(source)
        source["bb"] = "Bravo"
        assert "bb" not in table

    def test_working_copy_is_independent(self) -> None:
        table = RegionTable({"aa": "Alpha", "bb": "Bravo"})
        copy = table.working_copy()
        del copy["aa"]
        assert "aa" in table
        assert table.working_copy() == {"aa": "Alpha", "bb": "Bravo"}

    @pytest.mark.parametrize("regions", [{"": "Alpha"}, {"aa": ""}, {"aa": None}, {1: "Alpha"}])
    def test_invalid_entries_rejected(self, regions) -> None:
        with pytest.raises(ValueError):
            RegionTable(regions)

    def test_codes_lower_cased(self) -> None:
        table = RegionTable({" AA-One ": "Alpha"})
        assert table["aa-one"] == "Alpha"
        assert list(table) == ["aa-one"]

    def test_codes_differing_only_by_case_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            RegionTable({"aa-one": "Alpha", "AA-ONE": "Alpha"})
