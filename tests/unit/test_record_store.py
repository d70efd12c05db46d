"""Unit tests for RecordStore over the memory backend."""

import threading

import pytest

from errors import StoreCorruptError, StoreUnavailableError
from models import AccessLevel
from repositories import MemoryBackend, RecordStore


class BrokenBackend(MemoryBackend):
    """Loads fine, refuses every save after the first."""

    def save(self, state):
        if self.save_count >= 1:
            raise StoreUnavailableError("disk full")
        super().save(state)


class TestLifecycle:

    def test_empty_backend_is_initialised_and_flushed(self, backend):
        RecordStore(backend)
        assert backend.save_count == 1
        assert backend.load()["projects"] == []

    def test_seed_used_when_backend_empty(self, backend, make_record):
        seed = [make_record(id=2), make_record(id=1)]
        store = RecordStore(backend, seed=seed)
        assert [r.id for r in store.list_all()] == [2, 1]
        assert [p["id"] for p in backend.load()["projects"]] == [2, 1]

    def test_seed_ignored_when_backend_has_state(self, backend, make_record):
        RecordStore(backend).insert(make_record(id=5))
        store = RecordStore(backend, seed=[make_record(id=1)])
        assert [r.id for r in store.list_all()] == [5]

    def test_corrupt_record_raises(self, make_record):
        bad = make_record().model_dump(mode="json")
        bad["authors"] = []
        backend = MemoryBackend({"version": 1, "high_water": 1, "projects": [bad]})
        with pytest.raises(StoreCorruptError):
            RecordStore(backend)

    def test_corrupt_high_water_raises(self):
        backend = MemoryBackend({"version": 1, "high_water": "lots", "projects": []})
        with pytest.raises(StoreCorruptError):
            RecordStore(backend)


class TestInsertAndList:

    def test_newest_first(self, store, make_record):
        store.insert(make_record(id=1))
        store.insert(make_record(id=2))
        store.insert(make_record(id=3))
        assert [r.id for r in store.list_all()] == [3, 2, 1]

    def test_insert_persists(self, store, backend, make_record):
        store.insert(make_record(id=1, title="Saved"))
        assert backend.load()["projects"][0]["title"] == "Saved"

    def test_list_all_returns_copy(self, store, make_record):
        store.insert(make_record(id=1))
        listing = store.list_all()
        listing.clear()
        assert len(store) == 1

    def test_get(self, store, make_record):
        store.insert(make_record(id=4))
        assert store.get(4).id == 4
        assert store.get(99) is None

    def test_failed_write_leaves_memory_unchanged(self, make_record):
        store = RecordStore(BrokenBackend())
        with pytest.raises(StoreUnavailableError):
            store.insert(make_record(id=1))
        assert store.list_all() == []


class TestReplace:

    def test_replace_in_place(self, store, make_record):
        store.insert(make_record(id=1))
        store.insert(make_record(id=2))
        assert store.replace(make_record(id=1, title="Renamed")) is True
        records = store.list_all()
        assert [r.id for r in records] == [2, 1]
        assert records[1].title == "Renamed"

    def test_replace_miss_is_noop(self, store, backend, make_record):
        store.insert(make_record(id=1))
        before = backend.load()
        saves = backend.save_count

        assert store.replace(make_record(id=42, title="Ghost")) is False

        assert backend.load() == before
        assert backend.save_count == saves
        assert [r.id for r in store.list_all()] == [1]


class TestModify:

    def test_modify_replaces(self, store, make_record):
        store.insert(make_record(id=1))
        updated = store.modify(1, lambda r: r.with_access_level(AccessLevel.PRIVATE))
        assert updated.access_level == AccessLevel.PRIVATE
        assert store.get(1).access_level == AccessLevel.PRIVATE

    def test_modify_miss_returns_none(self, store, backend):
        saves = backend.save_count
        assert store.modify(42, lambda r: r) is None
        assert backend.save_count == saves

    def test_failed_change_writes_nothing(self, store, backend, make_record):
        store.insert(make_record(id=1))
        saves = backend.save_count

        def change(record):
            raise ValueError("no")

        with pytest.raises(ValueError):
            store.modify(1, change)
        assert backend.save_count == saves
        assert store.get(1).access_level == AccessLevel.PUBLIC

    def test_change_cannot_move_record(self, store, make_record):
        store.insert(make_record(id=1))
        with pytest.raises(ValueError):
            store.modify(1, lambda r: r.model_copy(update={"id": 2}))
        assert [r.id for r in store.list_all()] == [1]

    def test_concurrent_replace_waits_for_modify(self, store, make_record):
        store.insert(make_record(id=1))
        writer = threading.Thread(
            target=lambda: store.replace(store.get(1).model_copy(update={"title": "Concurrent edit"}))
        )

        def change(record):
            writer.start()
            writer.join(timeout=0.2)
            assert writer.is_alive()
            return record.with_access_level(AccessLevel.PRIVATE)

        store.modify(1, change)
        writer.join(timeout=5)

        record = store.get(1)
        assert record.title == "Concurrent edit"
        assert record.access_level == AccessLevel.PRIVATE


class TestIds:

    def test_next_id_empty(self, store):
        assert store.next_id() == 1

    def test_next_id_after_inserts(self, store, make_record):
        store.insert(make_record(id=1))
        store.insert(make_record(id=7))
        assert store.next_id() == 8

    def test_next_id_does_not_reserve(self, store):
        assert store.next_id() == store.next_id() == 1

    def test_reserve_id_advances(self, store):
        assert store.reserve_id() == 1
        assert store.reserve_id() == 2
        assert store.next_id() == 3

    def test_reserved_id_survives_reload(self, backend):
        RecordStore(backend).reserve_id()
        assert RecordStore(backend).next_id() == 2

    def test_ids_never_reused_when_reservation_unused(self, store, make_record):
        reserved = store.reserve_id()
        store.insert(make_record(id=store.reserve_id()))
        assert store.next_id() > reserved + 1

    def test_concurrent_reservations_are_distinct(self, store):
        n = 50
        ids = []
        lock = threading.Lock()
        barrier = threading.Barrier(n)

        def worker():
            barrier.wait()
            project_id = store.reserve_id()
            with lock:
                ids.append(project_id)

        threads = [threading.Thread(target=worker) for _ in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(ids) == list(range(1, n + 1))
