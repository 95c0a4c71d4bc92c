"""Tests for the fan-out delete service."""

from __future__ import annotations

import asyncio

import pytest

from conftest import FakeMutationService, make_record
from core.errors import DeleteFailed
from core.services.duplicate_selection import DuplicateSelectionModel
from infrastructure.delete_service import MediaDeleteService


def test_deletes_every_id():
    mutation = FakeMutationService()
    result = asyncio.run(MediaDeleteService(mutation)(frozenset({3, 1, 2})))

    assert sorted(mutation.deleted) == [1, 2, 3]
    assert result.success_ids == [1, 2, 3]
    assert result.failed == []


def test_partial_failure_raises_with_outcome():
    mutation = FakeMutationService(failing={2})

    with pytest.raises(DeleteFailed) as info:
        asyncio.run(MediaDeleteService(mutation)([1, 2, 3]))

    assert info.value.result.success_ids == [1, 3]
    assert info.value.result.failed == [(2, "cannot delete 2")]
    assert "1 of 3" in str(info.value)


def test_delete_many_does_not_raise():
    mutation = FakeMutationService(failing={1, 2})
    result = asyncio.run(MediaDeleteService(mutation).delete_many([1, 2]))

    assert result.success_ids == []
    assert [media_id for media_id, _ in result.failed] == [1, 2]


def test_model_keeps_selection_when_fan_out_fails():
    model = DuplicateSelectionModel()
    model.load_groups("hash", {"h": [make_record(1), make_record(2), make_record(3)]})
    model.toggle_selection(2)
    model.toggle_selection(3)
    deleter = MediaDeleteService(FakeMutationService(failing={3}))

    with pytest.raises(DeleteFailed):
        asyncio.run(model.confirm_delete(deleter))

    assert model.selected_ids() == frozenset({2, 3})
