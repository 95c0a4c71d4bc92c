"""ViewModel for the duplicate finder: detection runs, selection and deletes."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from core.errors import DeleteFailed, EmptySelection
from core.models import DetectionMethod, DuplicateGroup, DuplicateStats
from core.services.detection import DetectionResult
from core.services.duplicate_selection import DeleteFn, DuplicateSelectionModel
from core.services.interfaces import (
    DeletePlan,
    DuplicateDetectionService,
    StatsService,
    StatusReporter,
)
from infrastructure.api_mapping import detection_result_from_json
from infrastructure.settings import DEFAULT_NAME_THRESHOLD
from infrastructure.utils import format_file_size


class DuplicateFinderVM:
    """Duplicate finder view-model.

    Mediates between the detection/stats services, the selection model and a
    status reporter. Service errors are logged and reported, never retried.
    """

    def __init__(
        self,
        detector: DuplicateDetectionService,
        stats_service: StatsService,
        delete_fn: DeleteFn,
        reporter: StatusReporter,
        model: DuplicateSelectionModel | None = None,
        name_threshold: float = DEFAULT_NAME_THRESHOLD,
    ) -> None:
        """Create a DuplicateFinderVM.

        Args:
            detector: Backend detection endpoints.
            stats_service: Source of library-wide duplicate stats.
            delete_fn: Batch delete callable, e.g. `MediaDeleteService`.
            reporter: Receives user-visible status messages.
            model: Selection model (defaults to a fresh one).
            name_threshold: Similarity threshold for name detection.
        """
        self._detector = detector
        self._stats_service = stats_service
        self._delete_fn = delete_fn
        self._reporter = reporter
        self.model = model or DuplicateSelectionModel()
        self._name_threshold = name_threshold
        self.stats: DuplicateStats | None = None
        self._pending = 0

    @property
    def is_loading(self) -> bool:
        """True while at least one detection run is in flight."""
        return self._pending > 0

    @property
    def groups(self) -> list[DuplicateGroup]:
        return self.model.groups

    @property
    def selected_count(self) -> int:
        return len(self.model.selected_ids())

    def wasted_label(self, group_key: str) -> str:
        return f"Wasted: {format_file_size(self.model.estimate_wasted_space(group_key))}"

    async def load_stats(self) -> None:
        try:
            self.stats = await self._stats_service.get_duplicate_stats()
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Load duplicate stats failed: {}", ex)
            self._reporter.show_status(str(ex) or "Failed to load duplicate stats", "error")

    async def _fetch(self, method: DetectionMethod) -> DetectionResult:
        if method is DetectionMethod.HASH:
            body = await self._detector.find_by_hash()
        elif method is DetectionMethod.SIZE:
            body = await self._detector.find_by_size()
        elif method is DetectionMethod.NAME:
            body = await self._detector.find_by_name(self._name_threshold)
        else:
            body = await self._detector.find_by_dimensions()
        return detection_result_from_json(method, body)

    async def find_duplicates(self, method: DetectionMethod | str) -> bool:
        """Run a detection and show its groups.

        The selection is cleared as soon as a run starts. Runs resolving out of
        order are discarded silently.

        Returns:
            True if this run's groups are now displayed.
        """
        method = DetectionMethod(method)
        self.model.clear_selection()
        self._pending += 1
        try:
            applied = await self.model.run_detection(method, lambda: self._fetch(method))
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Find duplicates by {} failed: {}", method.value, ex)
            self._reporter.show_status(str(ex) or "Failed to find duplicates", "error")
            return False
        finally:
            self._pending -= 1

        if applied:
            self._reporter.show_status(
                f"Found {len(self.model.groups)} duplicate groups", "success"
            )
            await self.load_stats()
        return applied

    def toggle(self, media_id: int) -> None:
        self.model.toggle_selection(media_id)

    async def delete_selected(self, confirm: Callable[[DeletePlan], bool]) -> int:
        """Delete the selection after `confirm` accepts the plan.

        Returns:
            Number of deleted files, 0 if nothing was deleted.
        """
        if not self.model.selected_ids():
            self._reporter.show_status(str(EmptySelection()), "warning")
            return 0

        plan = self.model.plan_delete()
        if not confirm(plan):
            return 0

        try:
            outcome = await self.model.confirm_delete(self._delete_fn)
        except EmptySelection as ex:
            self._reporter.show_status(str(ex), "warning")
            return 0
        except DeleteFailed as ex:
            logger.error("Delete selected failed: {}", ex)
            self._reporter.show_status(str(ex), "error")
            return 0
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Delete selected failed: {}", ex)
            self._reporter.show_status(str(ex) or "Failed to delete files", "error")
            return 0

        self._reporter.show_status(f"Deleted {outcome.deleted_count} files", "success")
        if self.model.method is not None:
            await self.find_duplicates(self.model.method)
        else:
            await self.load_stats()
        return outcome.deleted_count
