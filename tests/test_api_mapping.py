"""Tests for backend JSON mapping and detection result normalization."""

from __future__ import annotations

import pytest

from conftest import media_json
from core.services.detection import ByGroup, ByKey, normalize_detection_result
from infrastructure.api_mapping import (
    detection_result_from_json,
    duplicate_stats_from_json,
    media_list_from_json,
    media_record_from_json,
    page_from_json,
)


def test_media_record_from_camel_case():
    record = media_record_from_json(
        media_json(
            7,
            dateTaken="2024-05-01T09:30:00",
            width=4032,
            height=3024,
            fileHash="ffee",
            thumbnailPath="thumbs/7.jpg",
        )
    )

    assert record.id == 7
    assert record.file_name == "IMG_0007.jpg"
    assert record.file_size == 500
    assert record.captured_at == "2024-05-01T09:30:00"
    assert record.created_at == "2024-06-01T10:00:00"
    assert (record.width, record.height) == (4032, 3024)
    assert record.content_hash == "ffee"
    assert record.thumbnail_path == "thumbs/7.jpg"


def test_missing_optional_fields():
    record = media_record_from_json({"id": "3", "createdAt": "2024-06-01T10:00:00"})

    assert record.id == 3
    assert record.captured_at is None
    assert record.width is None
    assert record.file_size == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"createdAt": "2024-06-01T10:00:00"},
        {"id": 1},
        {"id": 1, "createdAt": ""},
        {"id": "x", "createdAt": "2024-06-01T10:00:00"},
        5,
        None,
        "IMG_0001.jpg",
    ],
)
def test_invalid_media_payload(payload):
    with pytest.raises(ValueError):
        media_record_from_json(payload)


def test_media_list_skips_malformed_entries():
    records = media_list_from_json(
        [media_json(1), {"id": 2}, 5, None, "IMG_0002.jpg", [media_json(4)], media_json(3)]
    )

    assert [r.id for r in records] == [1, 3]


def test_page_from_json():
    page = page_from_json(
        {
            "content": [media_json(1), media_json(2)],
            "totalPages": 4,
            "totalElements": 70,
            "size": 20,
            "number": 1,
            "first": False,
            "last": False,
        }
    )

    assert [r.id for r in page.content] == [1, 2]
    assert page.total_pages == 4
    assert page.total_elements == 70
    assert page.number == 1
    assert not page.first


def test_duplicate_stats_from_json():
    stats = duplicate_stats_from_json(
        {
            "duplicateGroups": 3,
            "totalDuplicateFiles": 8,
            "totalWastedSpace": 5 * 1024 * 1024,
            "totalWastedSpaceMB": 5,
        }
    )

    assert stats.duplicate_groups == 3
    assert stats.total_duplicate_files == 8
    assert stats.total_wasted_space_mb == 5.0


def test_hash_detection_is_keyed():
    result = detection_result_from_json(
        "hash",
        {
            "message": "ok",
            "duplicateGroups": {
                "abc123": [media_json(10), media_json(11)],
                "def456": [media_json(12, fileSize=100)],
            },
            "totalGroups": 2,
        },
    )

    assert isinstance(result, ByKey)
    normalized = normalize_detection_result(result)
    assert list(normalized) == ["abc123", "def456"]
    assert [m.id for m in normalized["abc123"]] == [10, 11]


def test_name_detection_gets_synthetic_keys():
    result = detection_result_from_json(
        "name", {"similarGroups": [[media_json(1), media_json(2)], [media_json(3), media_json(4)]]}
    )

    assert isinstance(result, ByGroup)
    assert list(normalize_detection_result(result)) == ["group_0", "group_1"]


def test_size_detection_keys_are_strings():
    result = detection_result_from_json(
        "size", {"duplicateGroups": {"2048": [media_json(1), media_json(2)]}}
    )

    assert list(normalize_detection_result(result)) == ["2048"]


def test_missing_groups_mean_no_duplicates():
    assert normalize_detection_result(detection_result_from_json("dimensions", {})) == {}


def test_keyed_groups_must_be_an_object():
    with pytest.raises(ValueError):
        detection_result_from_json("hash", {"duplicateGroups": [[media_json(1)]]})


def test_normalize_rejects_other_types():
    with pytest.raises(TypeError):
        normalize_detection_result({"a": []})


def test_non_object_members_do_not_break_a_response():
    page = page_from_json({"content": [None, media_json(1)], "totalPages": 1})
    result = detection_result_from_json(
        "hash", {"duplicateGroups": {"abc": [5, media_json(10), media_json(11)]}}
    )

    assert [r.id for r in page.content] == [1]
    assert [m.id for m in normalize_detection_result(result)["abc"]] == [10, 11]
