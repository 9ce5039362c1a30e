"""
Tests for competitor_dashboard/services/storage.py — directory resolution,
whole-file JSON persistence and the listing window helpers.
"""
import json

import pytest

from competitor_dashboard.services.storage import (
    MAX_LIMIT,
    JsonCollection,
    StorageLocation,
    clamp_window,
    next_int_id,
    paginate,
)
from competitor_dashboard.utils.errors import StorageError


def _blocked_dir(tmp_path, name="blocked"):
    """A directory path that can never be created: its parent is a regular file."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    return blocker / name


# ---------------------------------------------------------------------------
# StorageLocation
# ---------------------------------------------------------------------------


class TestStorageLocation:
    def test_resolves_lazily(self, data_dir, fallback_dir):
        loc = StorageLocation("things.json", data_dir, fallback_dir)
        assert loc.resolved is None
        assert not data_dir.exists()

    def test_prefers_primary_directory(self, data_dir, fallback_dir):
        loc = StorageLocation("things.json", data_dir, fallback_dir)
        assert loc.resolve() == data_dir / "things.json"
        assert data_dir.is_dir()
        assert not fallback_dir.exists()

    def test_falls_back_when_primary_cannot_be_created(self, tmp_path, fallback_dir):
        loc = StorageLocation("things.json", _blocked_dir(tmp_path), fallback_dir)
        assert loc.resolve() == fallback_dir / "things.json"
        assert fallback_dir.is_dir()

    def test_choice_is_cached(self, tmp_path, data_dir, fallback_dir):
        primary = _blocked_dir(tmp_path)
        loc = StorageLocation("things.json", primary, fallback_dir)
        first = loc.resolve()

        # Even if the primary becomes usable later, the fallback sticks.
        loc.primary_dir = data_dir
        assert loc.resolve() == first
        assert not data_dir.exists()

    def test_raises_storage_error_when_fallback_also_fails(self, tmp_path):
        loc = StorageLocation(
            "things.json",
            _blocked_dir(tmp_path, "primary"),
            _blocked_dir(tmp_path, "fallback"),
        )
        with pytest.raises(StorageError):
            loc.resolve()


# ---------------------------------------------------------------------------
# JsonCollection
# ---------------------------------------------------------------------------


@pytest.fixture
def collection(data_dir, fallback_dir):
    return JsonCollection(StorageLocation("things.json", data_dir, fallback_dir))


class TestJsonCollectionReads:
    async def test_missing_file_is_empty(self, collection):
        assert await collection.all() == []

    async def test_malformed_json_is_empty(self, collection, data_dir):
        data_dir.mkdir()
        (data_dir / "things.json").write_text("{not json")
        assert await collection.all() == []

    async def test_non_array_json_is_empty(self, collection, data_dir):
        data_dir.mkdir()
        (data_dir / "things.json").write_text('{"id": 1}')
        assert await collection.all() == []

    async def test_find_returns_none_on_no_match(self, collection):
        await collection.append(lambda items: {"id": "a"})
        assert await collection.find(lambda it: it["id"] == "b") is None
        assert await collection.find(lambda it: it["id"] == "a") == {"id": "a"}


class TestJsonCollectionWrites:
    async def test_append_persists_pretty_printed_array(self, collection, data_dir):
        await collection.append(lambda items: {"id": 1, "name": "Acme"})
        raw = (data_dir / "things.json").read_text(encoding="utf-8")
        assert json.loads(raw) == [{"id": 1, "name": "Acme"}]
        assert raw.startswith("[\n  {")

    async def test_append_preserves_insertion_order(self, collection):
        for i in (3, 1, 2):
            await collection.append(lambda items, i=i: {"id": i})
        assert [it["id"] for it in await collection.all()] == [3, 1, 2]

    async def test_builder_sees_current_items(self, collection):
        seen = []
        await collection.append(lambda items: {"id": 1})
        await collection.append(lambda items: seen.append(len(items)) or {"id": 2})
        assert seen == [1]

    async def test_no_temp_files_left_behind(self, collection, data_dir):
        await collection.append(lambda items: {"id": 1})
        await collection.append(lambda items: {"id": 2})
        assert [p.name for p in data_dir.iterdir()] == ["things.json"]

    async def test_malformed_file_is_replaced_on_next_write(self, collection, data_dir):
        data_dir.mkdir()
        (data_dir / "things.json").write_text("garbage")
        await collection.append(lambda items: {"id": 1})
        assert json.loads((data_dir / "things.json").read_text()) == [{"id": 1}]

    async def test_write_failure_raises_storage_error(self, collection, data_dir):
        collection.location.resolve()
        data_dir.rmdir()
        data_dir.write_text("now a file")
        with pytest.raises(StorageError):
            await collection.append(lambda items: {"id": 1})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestWindowHelpers:
    @pytest.mark.parametrize(
        "skip, limit, expected",
        [
            (None, None, (0, 100)),
            (0, 100, (0, 100)),
            (-5, 10, (0, 10)),
            (3, 0, (3, 1)),
            (3, -2, (3, 1)),
            (0, 5000, (0, MAX_LIMIT)),
        ],
    )
    def test_clamp_window(self, skip, limit, expected):
        assert clamp_window(skip, limit) == expected

    def test_paginate_slices_by_position(self):
        items = [{"id": i} for i in range(10)]
        assert paginate(items, 8, 5) == [{"id": 8}, {"id": 9}]
        assert paginate(items, 20, 5) == []


class TestNextIntId:
    def test_empty_collection_starts_at_one(self):
        assert next_int_id([]) == 1

    def test_uses_max_not_count(self):
        assert next_int_id([{"id": 7}, {"id": 2}]) == 8

    def test_ignores_records_without_integer_ids(self):
        assert next_int_id([{"id": "x"}, {"name": "no id"}, {"id": 4}]) == 5
