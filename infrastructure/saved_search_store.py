"""JSON-file persistence for saved searches.

The document is versioned: `{"version": 1, "searches": [...]}`. Unknown
versions and unreadable files are logged and read as an empty list; writes
always use the current version.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import SavedSearch, SearchFilters

SCHEMA_VERSION = 1


def _filters_from_json(data: dict[str, Any]) -> SearchFilters:
    defaults = SearchFilters()
    return SearchFilters(
        query=str(data.get("query", defaults.query)),
        media_type=str(data.get("mediaType", defaults.media_type)),
        tag_ids=[int(t) for t in data.get("tagIds") or []],
        start_date=str(data.get("startDate", defaults.start_date)),
        end_date=str(data.get("endDate", defaults.end_date)),
        is_favorite=data.get("isFavorite"),
        sort_by=str(data.get("sortBy", defaults.sort_by)),
        sort_direction=str(data.get("sortDirection", defaults.sort_direction)),
    )


def _filters_to_json(filters: SearchFilters) -> dict[str, Any]:
    return {
        "query": filters.query,
        "mediaType": filters.media_type,
        "tagIds": list(filters.tag_ids),
        "startDate": filters.start_date,
        "endDate": filters.end_date,
        "isFavorite": filters.is_favorite,
        "sortBy": filters.sort_by,
        "sortDirection": filters.sort_direction,
    }


class JsonSavedSearchStore:
    """Load and save `SavedSearch` entries in a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> list[SavedSearch]:
        """Return stored searches in saved order."""
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as ex:
            logger.error("Read saved searches failed: {} ({})", self._path, ex)
            return []

        if not isinstance(document, dict) or document.get("version") != SCHEMA_VERSION:
            logger.warning("Unsupported saved searches document in {}", self._path)
            return []

        entries = document.get("searches") or []
        if not isinstance(entries, list):
            logger.warning("Saved searches in {} are not a list", self._path)
            return []

        searches: list[SavedSearch] = []
        for entry in entries:
            try:
                if not isinstance(entry, dict):
                    raise TypeError(f"entry must be an object, got {type(entry).__name__}")
                filters = entry.get("filters") or {}
                if not isinstance(filters, dict):
                    raise TypeError("filters must be an object")
                searches.append(
                    SavedSearch(
                        id=str(entry["id"]),
                        name=str(entry["name"]),
                        filters=_filters_from_json(filters),
                        created_at=str(entry.get("createdAt", "")),
                    )
                )
            except (KeyError, TypeError, ValueError) as ex:
                logger.error("Saved search entry error: {} | entry={}", ex, entry)
        return searches

    def save(self, searches: list[SavedSearch]) -> None:
        """Overwrite the file with `searches`."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "version": SCHEMA_VERSION,
            "searches": [
                {
                    "id": s.id,
                    "name": s.name,
                    "filters": _filters_to_json(s.filters),
                    "createdAt": s.created_at,
                }
                for s in searches
            ],
        }
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)

