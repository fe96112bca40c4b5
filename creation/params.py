"""Preselection parameters parsed from the entry URL."""

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse

# First key wins when both are present
_RESOURCE_TYPE_KEYS = ("resourceType", "resource_type")
_SKU_KEYS = ("tier", "sku")
_PROJECT_KEYS = ("projectId",)


def _first(values: Mapping[str, str | list[str]], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        raw = values.get(key)
        if isinstance(raw, list):
            raw = raw[0] if raw else None
        if raw and raw.strip():
            return raw.strip()
    return None


@dataclass(frozen=True)
class EntryParams:
    resource_type: str | None = None
    sku: str | None = None
    project_id: str | None = None

    @classmethod
    def from_query(cls, query: str | Mapping[str, str | list[str]] | None) -> "EntryParams":
        """Parse a query string, a full URL, or an already-parsed mapping."""
        if not query:
            return cls()
        if isinstance(query, str):
            if "?" in query or "://" in query:
                query = urlparse(query).query
            values: Mapping[str, str | list[str]] = parse_qs(query.lstrip("?"))
        else:
            values = query
        return cls(
            resource_type=_first(values, _RESOURCE_TYPE_KEYS),
            sku=_first(values, _SKU_KEYS),
            project_id=_first(values, _PROJECT_KEYS),
        )
