"""Offline media source backed by an exported JSON page or media array."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from core.models import MediaPage, MediaRecord, SearchFilters
from infrastructure.api_mapping import media_list_from_json


class JsonFileMediaSource:
    """`MediaQueryService` over a JSON file.

    The file holds either a media array or a page object with `content`.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        items = data.get("content", []) if isinstance(data, dict) else data
        self._records: list[MediaRecord] = media_list_from_json(items)
        logger.info("Loaded {} media from {}", len(self._records), self._path)

    def _page(self, records: list[MediaRecord], page: int, page_size: int) -> MediaPage:
        total_pages = max(1, -(-len(records) // page_size))
        start = page * page_size
        return MediaPage(
            content=records[start : start + page_size],
            total_pages=total_pages,
            total_elements=len(records),
            number=page,
            size=page_size,
            first=page == 0,
            last=page >= total_pages - 1,
        )

    async def list_media(self, page: int, page_size: int) -> MediaPage:
        return self._page(self._records, page, page_size)

    async def search_media(self, filters: SearchFilters, page: int, page_size: int) -> MediaPage:
        """Match on file name substring and media type only."""
        needle = filters.query.strip().lower()
        matched = [
            r
            for r in self._records
            if (not needle or needle in r.file_name.lower())
            and (filters.media_type == "ALL" or r.media_type == filters.media_type)
        ]
        return self._page(matched, page, page_size)
