"""Static subdomain code to region name table.

The table is curated data shipped as a YAML file per provider and loaded
by [load_region_table][vpnservers.services.updater.utils.load_region_table].
It is never mutated: the reconciler works on the private ``dict`` returned
by [working_copy()][vpnservers.models.region_table.RegionTable.working_copy],
removing codes as they are matched.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType


class RegionTable(Mapping[str, str]):
    """Immutable mapping from provider subdomain code to region name.

    Codes are stored lower-cased, the form hostnames take once extracted
    from the archive.

    Raises:
        ValueError: On construction, if a code or region name is blank or
            not a string, or if two codes differ only by case.
    """

    __slots__ = ("_regions",)

    def __init__(self, regions: Mapping[str, str]) -> None:
        cleaned: dict[str, str] = {}
        for code, region in regions.items():
            if not isinstance(code, str) or not code.strip():
                raise ValueError(f"invalid subdomain code {code!r}")
            if not isinstance(region, str) or not region.strip():
                raise ValueError(f"invalid region name {region!r} for code {code!r}")
            key = code.strip().lower()
            if key in cleaned:
                raise ValueError(f"duplicate subdomain code {code!r}")
            cleaned[key] = region.strip()
        self._regions = MappingProxyType(cleaned)

    def __getitem__(self, code: str) -> str:
        return self._regions[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def __repr__(self) -> str:
        return f"RegionTable({len(self)} regions)"

    def working_copy(self) -> dict[str, str]:
        """Return a fresh mutable copy for one reconciliation run."""
        return dict(self._regions)
