"""ViewModel for the gallery calendar and timeline views."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from loguru import logger

from core.models import DayCell, MediaRecord, MonthGrid, SearchFilters, TimelineGroup
from core.services.date_buckets import (
    DateBucketAggregator,
    next_month,
    previous_month,
    start_of_month,
)
from core.services.interfaces import MediaQueryService, StatusReporter
from infrastructure.settings import DEFAULT_PAGE_SIZE
from infrastructure.utils import format_month_title


class GalleryVM:
    """Holds the fetched media collection and the displayed month.

    Calendar grids and timelines are recomputed from the full in-memory
    collection on every call.
    """

    def __init__(
        self,
        query_service: MediaQueryService,
        reporter: StatusReporter,
        aggregator: DateBucketAggregator | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._query = query_service
        self._reporter = reporter
        self._aggregator = aggregator or DateBucketAggregator()
        self._page_size = page_size
        self._clock = clock
        self.media: list[MediaRecord] = []
        self.current_month: date = start_of_month(clock())
        self.selected_date: date | None = None
        self.total_pages = 0

    async def load(self, page: int = 0) -> bool:
        """Fetch one page of media, replacing the held collection."""
        try:
            result = await self._query.list_media(page, self._page_size)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Load media page {} failed: {}", page, ex)
            self._reporter.show_status(str(ex) or "Failed to load media", "error")
            return False
        self.media = list(result.content)
        self.total_pages = result.total_pages
        logger.info("Loaded media page {} | items={}", page, len(self.media))
        return True

    async def search(self, filters: SearchFilters, page: int = 0) -> bool:
        """Fetch media matching `filters`, replacing the held collection."""
        try:
            result = await self._query.search_media(filters, page, self._page_size)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Search media failed: {}", ex)
            self._reporter.show_status(str(ex) or "Search failed", "error")
            return False
        self.media = list(result.content)
        self.total_pages = result.total_pages
        return True

    @property
    def month_title(self) -> str:
        return format_month_title(self.current_month)

    def calendar(self) -> MonthGrid:
        return self._aggregator.build_month_grid(self.media, self.current_month, self._clock())

    def timeline(self) -> list[TimelineGroup]:
        return self._aggregator.build_timeline_groups(self.media, self._clock())

    def previous_month(self) -> None:
        self.current_month = previous_month(self.current_month)

    def next_month(self) -> None:
        self.current_month = next_month(self.current_month)

    def go_to_today(self) -> None:
        self.current_month = start_of_month(self._clock())

    def select_day(self, cell: DayCell) -> list[MediaRecord] | None:
        """Select `cell` if it has media and return its members."""
        if cell.count == 0:
            return None
        self.selected_date = cell.date
        return list(cell.members)
