"""Duplicate groups of one detection run and the cross-group delete selection.

The model is decoupled from any UI toolkit and performs no I/O of its own:
detection results are fetched by the caller and deletes go through a
caller-supplied `delete_fn`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from loguru import logger

from core.errors import EmptySelection, StaleDetectionResult
from core.models import DetectionMethod, DuplicateGroup, MediaRecord
from core.services.detection import ByGroup, ByKey, DetectionResult, normalize_detection_result
from core.services.interfaces import DeleteOutcome, DeletePlan, DeletePlanGroupSummary

RawGroups = Mapping[Any, Sequence[MediaRecord]] | DetectionResult
DeleteFn = Callable[[frozenset[int]], Awaitable[Any]]


class DuplicateSelectionModel:
    """Holds the groups of the latest detection run and the delete selection.

    Detection runs are tagged with increasing sequence numbers when they
    start. A result is applied only if its number is higher than that of the
    last applied result, so an older run resolving late never overwrites a
    newer one. Applying a result always clears the selection.

    Within one result a record belongs to at most one group: later repeats
    of an id are dropped, and a group left with fewer than two members is
    dropped with it.
    """

    def __init__(self) -> None:
        self._groups: dict[str, DuplicateGroup] = {}
        self._method: DetectionMethod | None = None
        self._selected: set[int] = set()
        self._issued_seq = 0
        self._applied_seq = 0

    @property
    def method(self) -> DetectionMethod | None:
        """Detection method of the currently held groups."""
        return self._method

    @property
    def groups(self) -> list[DuplicateGroup]:
        return list(self._groups.values())

    def group(self, group_key: str) -> DuplicateGroup:
        """Return the held group with `group_key`; raises KeyError if absent."""
        return self._groups[group_key]

    # Detection -----------------------------------------------------------

    def begin_detection(self) -> int:
        """Reserve the sequence number of a detection run about to start."""
        self._issued_seq += 1
        return self._issued_seq

    def apply_detection(
        self, token: int, method: DetectionMethod | str, raw_groups: RawGroups
    ) -> None:
        """Replace held groups with the result of run `token`.

        Raises:
            StaleDetectionResult: If a run started later was already applied.
        """
        if token <= self._applied_seq:
            raise StaleDetectionResult(token, self._applied_seq)
        self._applied_seq = token
        self._replace_groups(DetectionMethod(method), raw_groups)

    def load_groups(self, method: DetectionMethod | str, raw_groups: RawGroups) -> None:
        """Replace all held groups and clear the selection."""
        self.apply_detection(self.begin_detection(), method, raw_groups)

    async def run_detection(
        self,
        method: DetectionMethod | str,
        fetch: Callable[[], Awaitable[RawGroups]],
    ) -> bool:
        """Fetch and apply a detection result, discarding it if stale.

        Errors raised by `fetch` propagate and leave the model untouched.

        Returns:
            True if the result was applied, False if it was stale.
        """
        token = self.begin_detection()
        raw_groups = await fetch()
        try:
            self.apply_detection(token, method, raw_groups)
        except StaleDetectionResult as ex:
            logger.debug("Discarding detection result: {}", ex)
            return False
        return True

    def _replace_groups(self, method: DetectionMethod, raw_groups: RawGroups) -> None:
        if isinstance(raw_groups, (ByKey, ByGroup)):
            normalized = normalize_detection_result(raw_groups)
        else:
            normalized = {str(key): list(members) for key, members in raw_groups.items()}

        groups: dict[str, DuplicateGroup] = {}
        seen: set[int] = set()
        dropped = 0
        for key, members in normalized.items():
            unique: list[MediaRecord] = []
            repeated: list[int] = []
            ids: set[int] = set()
            for member in members:
                if member.id in seen or member.id in ids:
                    repeated.append(member.id)
                    continue
                ids.add(member.id)
                unique.append(member)
            if repeated:
                logger.warning(
                    "Media {} already grouped by {}, dropped from group {}",
                    repeated,
                    method.value,
                    key,
                )
            if len(unique) < 2:
                dropped += 1
                continue
            seen.update(ids)
            groups[key] = DuplicateGroup(key=key, members=unique)

        self._groups = groups
        self._method = method
        self._selected.clear()
        logger.info(
            "Loaded {} duplicate groups by {} (dropped {} singletons)",
            len(groups),
            method.value,
            dropped,
        )

    # Selection -----------------------------------------------------------

    def toggle_selection(self, media_id: int) -> None:
        if media_id in self._selected:
            self._selected.remove(media_id)
        else:
            self._selected.add(media_id)

    def is_selected(self, media_id: int) -> bool:
        return media_id in self._selected

    def selected_ids(self) -> frozenset[int]:
        """Read-only snapshot of the selection."""
        return frozenset(self._selected)

    def clear_selection(self) -> None:
        self._selected.clear()

    # Space estimates -----------------------------------------------------

    def estimate_wasted_space(self, group_key: str) -> int:
        """Bytes reclaimable by keeping a single copy of the group.

        Assumes every member has the size of the first one, which is only a
        heuristic for groups found by name or dimensions.
        """
        members = self.group(group_key).members
        return members[0].file_size * (len(members) - 1)

    def total_wasted_space(self) -> int:
        return sum(self.estimate_wasted_space(key) for key in self._groups)

    # Deletion ------------------------------------------------------------

    def plan_delete(self) -> DeletePlan:
        """Summarize the selection per held group for confirmation."""
        summaries: list[DeletePlanGroupSummary] = []
        for key, group in self._groups.items():
            selected = sum(1 for m in group.members if m.id in self._selected)
            total = len(group.members)
            summaries.append(
                DeletePlanGroupSummary(
                    group_key=key,
                    selected_count=selected,
                    total_count=total,
                    is_full_delete=(total > 0 and selected == total),
                )
            )
        return DeletePlan(delete_ids=sorted(self._selected), group_summaries=summaries)

    async def confirm_delete(self, delete_fn: DeleteFn) -> DeleteOutcome:
        """Delete every selected id through `delete_fn`.

        `delete_fn` is awaited once with the full id set. Any error it raises
        propagates unchanged and leaves the selection intact for a retry.

        Raises:
            EmptySelection: If nothing is selected.
        """
        ids = self.selected_ids()
        if not ids:
            raise EmptySelection()

        await delete_fn(ids)

        self._selected.clear()
        self._remove_deleted_and_prune(ids)
        logger.info("Deleted {} selected media", len(ids))
        return DeleteOutcome(deleted_count=len(ids))

    def _remove_deleted_and_prune(self, deleted_ids: frozenset[int]) -> None:
        """Remove deleted items and drop groups with <= 1 item remaining."""
        kept_groups: dict[str, DuplicateGroup] = {}
        for key, group in self._groups.items():
            kept = [m for m in group.members if m.id not in deleted_ids]
            if len(kept) < 2:
                continue
            kept_groups[key] = DuplicateGroup(key=key, members=kept)
        self._groups = kept_groups
