"""ViewModel for the search page and its saved searches."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
import uuid

from loguru import logger

from core.models import MediaRecord, SavedSearch, SearchFilters
from core.services.interfaces import MediaQueryService, SavedSearchStore, StatusReporter
from infrastructure.settings import DEFAULT_PAGE_SIZE


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SearchVM:
    """Search page view-model.

    The saved-search store is only reached through `SavedSearchStore`.
    """

    def __init__(
        self,
        query_service: MediaQueryService,
        store: SavedSearchStore,
        reporter: StatusReporter,
        page_size: int = DEFAULT_PAGE_SIZE,
        now: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self._query = query_service
        self._store = store
        self._reporter = reporter
        self._page_size = page_size
        self._now = now
        self.filters = SearchFilters()
        self.results: list[MediaRecord] = []
        self.current_page = 0
        self.total_pages = 0
        self.saved_searches: list[SavedSearch] = store.load()

    async def run_search(self, page: int = 0) -> bool:
        try:
            result = await self._query.search_media(self.filters, page, self._page_size)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Search failed: {}", ex)
            self._reporter.show_status(str(ex) or "Search failed", "error")
            return False
        self.results = list(result.content)
        self.current_page = page
        self.total_pages = result.total_pages
        return True

    def reset_filters(self) -> None:
        self.filters = SearchFilters()

    def save_search(self, name: str) -> SavedSearch:
        """Save the current filters under `name`.

        Raises:
            ValueError: If `name` is blank.
        """
        if not name.strip():
            raise ValueError("Please enter a name for this search")
        search = SavedSearch(
            id=uuid.uuid4().hex,
            name=name.strip(),
            filters=replace(self.filters, tag_ids=list(self.filters.tag_ids)),
            created_at=self._now(),
        )
        self.saved_searches = [*self.saved_searches, search]
        self._store.save(self.saved_searches)
        self._reporter.show_status("Search saved successfully", "success")
        return search

    async def load_saved_search(self, search_id: str) -> bool:
        """Restore the filters of a saved search and run it from page 0."""
        for search in self.saved_searches:
            if search.id == search_id:
                self.filters = replace(search.filters, tag_ids=list(search.filters.tag_ids))
                return await self.run_search(0)
        logger.warning("Saved search {} not found", search_id)
        return False

    def delete_saved_search(self, search_id: str) -> None:
        self.saved_searches = [s for s in self.saved_searches if s.id != search_id]
        self._store.save(self.saved_searches)
        self._reporter.show_status("Search deleted", "success")
