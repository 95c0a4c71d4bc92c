"""Batch delete through the media mutation service.

Provides the `delete_fn` handed to `DuplicateSelectionModel.confirm_delete`:
one `delete_media` call per id, issued concurrently with no ordering and no
atomicity across calls. Any rejected call turns the whole batch into a
`DeleteFailed` carrying the per-id outcome.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from loguru import logger

from core.errors import DeleteFailed
from core.services.interfaces import DeleteResult, MediaMutationService


class MediaDeleteService:
    """Fans out deletes of selected media to the mutation service."""

    def __init__(self, mutation_service: MediaMutationService) -> None:
        self._mutation = mutation_service

    async def delete_many(self, media_ids: Iterable[int]) -> DeleteResult:
        """Delete every id and report per-id results without raising."""
        ids = sorted(set(media_ids))
        outcomes = await asyncio.gather(
            *(self._mutation.delete_media(media_id) for media_id in ids),
            return_exceptions=True,
        )

        result = DeleteResult()
        for media_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.error("Delete media {} failed: {}", media_id, outcome)
                result.failed.append((media_id, str(outcome) or type(outcome).__name__))
            else:
                result.success_ids.append(media_id)
        return result

    async def __call__(self, media_ids: Iterable[int]) -> DeleteResult:
        """Delete every id; raise `DeleteFailed` if any call was rejected."""
        result = await self.delete_many(media_ids)
        logger.info(
            "Batch delete finished ({} success, {} failed)",
            len(result.success_ids),
            len(result.failed),
        )
        if result.failed:
            raise DeleteFailed(result)
        return result
