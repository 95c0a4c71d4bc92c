"""Error taxonomy shared by the services and view-models."""

from __future__ import annotations

from typing import Any

from core.services.interfaces import DeleteResult


class GalleryError(Exception):
    """Base class for gallery domain errors."""


class UnparseableDate(ValueError, GalleryError):
    """A media record's date field could not be parsed."""

    def __init__(self, value: Any, media_id: int | None = None) -> None:
        self.value = value
        self.media_id = media_id
        super().__init__(f"Unparseable date {value!r} (media id={media_id})")


class EmptySelection(GalleryError):
    """Delete confirmation attempted with nothing selected."""

    def __init__(self) -> None:
        super().__init__("No files selected for deletion")


class DeleteFailed(GalleryError):
    """One or more delete calls were rejected by the mutation service.

    Attributes:
        result: Per-id outcome of the attempted delete.
    """

    def __init__(self, result: DeleteResult) -> None:
        self.result = result
        super().__init__(
            f"Failed to delete {len(result.failed)} of "
            f"{len(result.failed) + len(result.success_ids)} files"
        )


class StaleDetectionResult(GalleryError):
    """A detection run resolved after a newer run had already been applied."""

    def __init__(self, token: int, applied: int) -> None:
        self.token = token
        self.applied = applied
        super().__init__(f"Detection run #{token} is stale (applied #{applied})")
