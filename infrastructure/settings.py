"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

DEFAULT_PAGE_SIZE = 20
DEFAULT_NAME_THRESHOLD = 0.8
DEFAULT_SAVED_SEARCHES_FILE = "saved_searches.json"


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass(frozen=True)
class GalleryConfig:
    """Validated settings used to wire the view-models.

    Attributes:
        week_starts_on: First weekday of calendar rows (0 = Sunday).
        page_size: Media page size requested from the query service.
        name_threshold: Similarity threshold for name-based detection.
        log_dir: Log directory; None selects the platform default.
        saved_searches_path: JSON file backing the saved-search store.
    """

    week_starts_on: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    name_threshold: float = DEFAULT_NAME_THRESHOLD
    log_dir: str | None = None
    saved_searches_path: str = DEFAULT_SAVED_SEARCHES_FILE


def load_gallery_config(settings: JsonSettings) -> GalleryConfig:
    """Read and validate `GalleryConfig` values from `settings`.

    Relative saved-search paths resolve against the settings file directory.

    Raises:
        ValueError: If a value is out of range or of the wrong type.
    """
    week_starts_on = settings.get("calendar.week_starts_on", 0)
    if isinstance(week_starts_on, bool) or not isinstance(week_starts_on, int):
        raise ValueError("calendar.week_starts_on must be an integer")
    if not 0 <= week_starts_on <= 6:
        raise ValueError("calendar.week_starts_on must be within 0..6")

    page_size = settings.get("media.page_size", DEFAULT_PAGE_SIZE)
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError("media.page_size must be a positive integer")

    name_threshold = settings.get("duplicates.name_threshold", DEFAULT_NAME_THRESHOLD)
    if isinstance(name_threshold, bool) or not isinstance(name_threshold, (int, float)):
        raise ValueError("duplicates.name_threshold must be a number")
    if not 0.0 < float(name_threshold) <= 1.0:
        raise ValueError("duplicates.name_threshold must be within (0, 1]")

    log_dir = settings.get("logging.dir")
    if log_dir is not None and not isinstance(log_dir, str):
        raise ValueError("logging.dir must be a string")

    saved_path = Path(settings.get("saved_searches.path", DEFAULT_SAVED_SEARCHES_FILE))
    if not saved_path.is_absolute():
        saved_path = settings.path.parent / saved_path

    return GalleryConfig(
        week_starts_on=week_starts_on,
        page_size=page_size,
        name_threshold=float(name_threshold),
        log_dir=log_dir or None,
        saved_searches_path=str(saved_path),
    )
