"""Core service interfaces and shared data structures.

This module defines the delete planning/result dataclasses used across the
infrastructure and view-model layers, and the protocols of the external
collaborators (media query, duplicate detection, media mutation, stats and
saved-search storage). Implementations live outside `core`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from core.models import DuplicateStats, MediaPage, SavedSearch, SearchFilters


@dataclass
class DeleteResult:
    """Outcome of a delete operation.

    Attributes:
        success_ids: Media ids successfully deleted.
        failed: Tuples of (media id, reason) for failures.
    """

    success_ids: list[int] = field(default_factory=list)
    failed: list[tuple[int, str]] = field(default_factory=list)


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a confirmed batch delete."""

    deleted_count: int


@dataclass
class DeletePlanGroupSummary:
    """Summary of delete intent for a single duplicate group.

    Attributes:
        group_key: Identifier of the group.
        selected_count: Number of selected items in the group.
        total_count: Total items in the group.
        is_full_delete: Whether all items in the group are selected.
    """

    group_key: str
    selected_count: int
    total_count: int
    is_full_delete: bool


@dataclass
class DeletePlan:
    """Planned delete operation with per-group summaries.

    Attributes:
        delete_ids: Ids chosen for deletion, in ascending order.
        group_summaries: Group-level summaries for the confirmation prompt.
    """

    delete_ids: list[int]
    group_summaries: list[DeletePlanGroupSummary]

    @property
    def full_delete_groups(self) -> list[str]:
        """Keys of groups where every copy is selected."""
        return [s.group_key for s in self.group_summaries if s.is_full_delete]


class MediaQueryService(Protocol):
    """Backend listing/searching of media records."""

    async def list_media(self, page: int, page_size: int) -> MediaPage:
        """Return one page of the user's media."""
        ...

    async def search_media(self, filters: SearchFilters, page: int, page_size: int) -> MediaPage:
        """Return one page of media matching `filters`."""
        ...


class DuplicateDetectionService(Protocol):
    """Backend duplicate detection endpoints.

    Each call returns the decoded JSON body; shapes differ per method and are
    normalized by `infrastructure.api_mapping.detection_result_from_json`.
    """

    async def find_by_hash(self) -> dict[str, Any]:
        ...

    async def find_by_size(self) -> dict[str, Any]:
        ...

    async def find_by_name(self, threshold: float) -> dict[str, Any]:
        ...

    async def find_by_dimensions(self) -> dict[str, Any]:
        ...


class StatsService(Protocol):
    async def get_duplicate_stats(self) -> DuplicateStats:
        """Return library-wide duplicate statistics."""
        ...


class MediaMutationService(Protocol):
    async def delete_media(self, media_id: int) -> None:
        """Delete a single media record."""
        ...


class SavedSearchStore(Protocol):
    """Key-value storage for saved searches."""

    def load(self) -> list[SavedSearch]:
        ...

    def save(self, searches: list[SavedSearch]) -> None:
        ...


class StatusReporter(Protocol):
    """Protocol for user-visible notifications (toast/snackbar)."""

    def show_status(self, message: str, level: str = "info") -> None:
        """Show `message`; level is one of info, success, warning, error."""
        ...
