"""Core domain models for media records, date buckets and duplicate groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True)
class MediaRecord:
    """A single photo/video's metadata as returned by the media backend.

    Timestamps are kept as received (ISO strings or datetimes); they are only
    resolved to calendar days by the date aggregation service.
    """

    id: int
    created_at: str | datetime
    captured_at: str | datetime | None = None
    file_size: int = 0
    file_name: str = ""
    content_hash: str | None = None
    width: int | None = None
    height: int | None = None
    media_type: str | None = None
    thumbnail_path: str | None = None


@dataclass
class DayCell:
    """One calendar-grid day and the media assigned to it."""

    date: date
    members: list[MediaRecord] = field(default_factory=list)
    is_current_month: bool = False
    is_today: bool = False

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def intensity(self) -> int:
        """Heat level 0..5 used to shade the cell."""
        count = self.count
        if count == 0:
            return 0
        if count <= 5:
            return 1
        if count <= 10:
            return 2
        if count <= 20:
            return 3
        if count <= 50:
            return 4
        return 5


@dataclass
class MonthGrid:
    """A padded calendar grid of complete weeks plus current-month stats."""

    reference_month: date
    cells: list[DayCell]
    total_count: int = 0
    days_with_media: int = 0

    def weeks(self) -> list[list[DayCell]]:
        """Return the cells as rows of seven days."""
        return [self.cells[i : i + 7] for i in range(0, len(self.cells), 7)]

    def cell_for(self, day: date) -> DayCell | None:
        for cell in self.cells:
            if cell.date == day:
                return cell
        return None


@dataclass
class TimelineGroup:
    """All media of one calendar day, most recent day first in a timeline."""

    date: date
    label: str
    members: list[MediaRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.members)


class DetectionMethod(str, Enum):
    """Backend duplicate detection strategies."""

    HASH = "hash"
    SIZE = "size"
    NAME = "name"
    DIMENSIONS = "dimensions"


@dataclass
class DuplicateGroup:
    """Media believed to be duplicates under one detection method."""

    key: str
    members: list[MediaRecord] = field(default_factory=list)

    @property
    def member_ids(self) -> list[int]:
        return [m.id for m in self.members]


@dataclass(frozen=True)
class DuplicateStats:
    """Library-wide duplicate statistics, displayed as received."""

    duplicate_groups: int
    total_duplicate_files: int
    total_wasted_space: int
    total_wasted_space_mb: float


@dataclass(frozen=True)
class MediaPage:
    """One page of media from the query service."""

    content: list[MediaRecord]
    total_pages: int = 1
    total_elements: int = 0
    number: int = 0
    size: int = 0
    first: bool = True
    last: bool = True


@dataclass
class SearchFilters:
    """Search-page filter state; dates are ISO day strings or empty."""

    query: str = ""
    media_type: str = "ALL"
    tag_ids: list[int] = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    is_favorite: bool | None = None
    sort_by: str = "createdAt"
    sort_direction: str = "DESC"


@dataclass
class SavedSearch:
    """A named snapshot of search filters."""

    id: str
    name: str
    filters: SearchFilters
    created_at: str
