"""Normalization of duplicate detection results.

Detection endpoints answer either with a keyed mapping (hash, size,
dimensions) or with a plain list of groups (name similarity). Both are
represented as a tagged union and flattened once into a `key -> members`
mapping before reaching the selection model.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from core.models import MediaRecord


@dataclass(frozen=True)
class ByKey:
    """Groups keyed by hash string, byte size or dimensions."""

    groups: Mapping[Any, Sequence[MediaRecord]] = field(default_factory=dict)


@dataclass(frozen=True)
class ByGroup:
    """Anonymous groups, e.g. name-similarity clusters."""

    groups: Sequence[Sequence[MediaRecord]] = field(default_factory=list)


DetectionResult = Union[ByKey, ByGroup]


def synthetic_group_key(index: int) -> str:
    return f"group_{index}"


def normalize_detection_result(result: DetectionResult) -> dict[str, list[MediaRecord]]:
    """Flatten `result` into an ordered `str key -> members` mapping.

    Keys of `ByKey` results are stringified; `ByGroup` results get synthetic
    keys `group_0`, `group_1`, ... in input order. Group sizes are not
    filtered here.
    """
    if isinstance(result, ByKey):
        return {str(key): list(members) for key, members in result.groups.items()}
    if isinstance(result, ByGroup):
        return {
            synthetic_group_key(index): list(members) for index, members in enumerate(result.groups)
        }
    raise TypeError(f"Unsupported detection result: {type(result).__name__}")
