"""Shared fixtures and fakes for the gallery tests."""

from __future__ import annotations

from typing import Any

import pytest

from core.models import DuplicateStats, MediaPage, MediaRecord, SavedSearch, SearchFilters


def make_record(
    media_id: int,
    created_at: str = "2024-06-01T10:00:00",
    captured_at: str | None = None,
    file_size: int = 100,
    file_name: str | None = None,
    media_type: str = "IMAGE",
) -> MediaRecord:
    return MediaRecord(
        id=media_id,
        created_at=created_at,
        captured_at=captured_at,
        file_size=file_size,
        file_name=file_name if file_name is not None else f"IMG_{media_id:04d}.jpg",
        media_type=media_type,
    )


def media_json(media_id: int, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": media_id,
        "fileName": f"IMG_{media_id:04d}.jpg",
        "fileSize": 500,
        "mediaType": "IMAGE",
        "createdAt": "2024-06-01T10:00:00",
    }
    data.update(overrides)
    return data


class RecordingReporter:
    """StatusReporter collecting (level, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def show_status(self, message: str, level: str = "info") -> None:
        self.messages.append((level, message))

    @property
    def last(self) -> tuple[str, str] | None:
        return self.messages[-1] if self.messages else None


class FakeMutationService:
    def __init__(self, failing: set[int] | None = None) -> None:
        self.failing = failing or set()
        self.deleted: list[int] = []

    async def delete_media(self, media_id: int) -> None:
        if media_id in self.failing:
            raise RuntimeError(f"cannot delete {media_id}")
        self.deleted.append(media_id)


class FakeDetector:
    """Detection endpoints answering canned JSON bodies."""

    def __init__(self, bodies: dict[str, dict[str, Any]] | None = None) -> None:
        self.bodies = bodies or {}
        self.calls: list[tuple[str, Any]] = []
        self.error: Exception | None = None

    async def _answer(self, method: str, arg: Any = None) -> dict[str, Any]:
        self.calls.append((method, arg))
        if self.error is not None:
            raise self.error
        return self.bodies.get(method, {})

    async def find_by_hash(self) -> dict[str, Any]:
        return await self._answer("hash")

    async def find_by_size(self) -> dict[str, Any]:
        return await self._answer("size")

    async def find_by_name(self, threshold: float) -> dict[str, Any]:
        return await self._answer("name", threshold)

    async def find_by_dimensions(self) -> dict[str, Any]:
        return await self._answer("dimensions")


class FakeStats:
    def __init__(self) -> None:
        self.calls = 0
        self.stats = DuplicateStats(
            duplicate_groups=1,
            total_duplicate_files=2,
            total_wasted_space=500,
            total_wasted_space_mb=0,
        )

    async def get_duplicate_stats(self) -> DuplicateStats:
        self.calls += 1
        return self.stats


class FakeQuery:
    def __init__(self, records: list[MediaRecord] | None = None) -> None:
        self.records = records or []
        self.list_calls: list[tuple[int, int]] = []
        self.search_calls: list[tuple[SearchFilters, int, int]] = []
        self.error: Exception | None = None

    def _page(self) -> MediaPage:
        return MediaPage(
            content=list(self.records), total_pages=1, total_elements=len(self.records)
        )

    async def list_media(self, page: int, page_size: int) -> MediaPage:
        self.list_calls.append((page, page_size))
        if self.error is not None:
            raise self.error
        return self._page()

    async def search_media(self, filters: SearchFilters, page: int, page_size: int) -> MediaPage:
        self.search_calls.append((filters, page, page_size))
        if self.error is not None:
            raise self.error
        return self._page()


class InMemorySearchStore:
    def __init__(self, searches: list[SavedSearch] | None = None) -> None:
        self.searches = list(searches or [])
        self.saves = 0

    def load(self) -> list[SavedSearch]:
        return list(self.searches)

    def save(self, searches: list[SavedSearch]) -> None:
        self.saves += 1
        self.searches = list(searches)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
