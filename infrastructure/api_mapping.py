"""Mapping of backend JSON payloads onto core models.

The backend speaks camelCase JSON. Timestamps are passed through unparsed so
that the date aggregation service decides how to treat malformed values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from core.models import DetectionMethod, DuplicateStats, MediaPage, MediaRecord
from core.services.detection import ByGroup, ByKey, DetectionResult


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def media_record_from_json(data: Mapping[str, Any]) -> MediaRecord:
    """Build a `MediaRecord` from one media JSON object.

    Raises:
        ValueError: If `data` is not an object, or `id` or `createdAt` is
            missing or malformed.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Media payload must be an object, got {type(data).__name__}")
    if "id" not in data or data.get("createdAt") in (None, ""):
        raise ValueError(f"Media payload requires id and createdAt: {dict(data)!r}")
    try:
        return MediaRecord(
            id=int(data["id"]),
            created_at=data["createdAt"],
            captured_at=data.get("dateTaken") or None,
            file_size=int(data.get("fileSize") or 0),
            file_name=str(data.get("fileName") or ""),
            content_hash=data.get("fileHash") or None,
            width=_optional_int(data.get("width")),
            height=_optional_int(data.get("height")),
            media_type=data.get("mediaType"),
            thumbnail_path=data.get("thumbnailPath"),
        )
    except (TypeError, ValueError) as ex:
        raise ValueError(f"Invalid media payload: {ex}") from ex


def media_list_from_json(items: Any) -> list[MediaRecord]:
    """Map a JSON array of media, skipping malformed entries."""
    records: list[MediaRecord] = []
    for item in items or []:
        try:
            records.append(media_record_from_json(item))
        except ValueError as ex:
            logger.error("Media payload error: {}", ex)
    return records


def page_from_json(data: Mapping[str, Any]) -> MediaPage:
    """Map a paged media response; only `content` is required."""
    content = media_list_from_json(data.get("content"))
    return MediaPage(
        content=content,
        total_pages=int(data.get("totalPages", 1) or 0),
        total_elements=int(data.get("totalElements", len(content)) or 0),
        number=int(data.get("number", 0) or 0),
        size=int(data.get("size", len(content)) or 0),
        first=bool(data.get("first", True)),
        last=bool(data.get("last", True)),
    )


def duplicate_stats_from_json(data: Mapping[str, Any]) -> DuplicateStats:
    return DuplicateStats(
        duplicate_groups=int(data.get("duplicateGroups", 0) or 0),
        total_duplicate_files=int(data.get("totalDuplicateFiles", 0) or 0),
        total_wasted_space=int(data.get("totalWastedSpace", 0) or 0),
        total_wasted_space_mb=float(data.get("totalWastedSpaceMB", 0) or 0),
    )


def detection_result_from_json(
    method: DetectionMethod | str, data: Mapping[str, Any]
) -> DetectionResult:
    """Map a detection response body to the tagged result union.

    Name similarity answers `{"similarGroups": [[...], ...]}`; every other
    method answers `{"duplicateGroups": {key: [...], ...}}`.
    """
    method = DetectionMethod(method)
    if method is DetectionMethod.NAME:
        groups = data.get("similarGroups") or []
        return ByGroup(groups=[media_list_from_json(group) for group in groups])

    keyed = data.get("duplicateGroups") or {}
    if not isinstance(keyed, Mapping):
        raise ValueError(f"duplicateGroups must be an object for method {method.value}")
    return ByKey(groups={key: media_list_from_json(group) for key, group in keyed.items()})
