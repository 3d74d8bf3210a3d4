"""Tests for saving, loading and reconciling progress snapshots."""

import json
import logging

import pytest

from questionbank.classroom import (
    MemoryStorage,
    QuizController,
    ProgressStore,
    SQLiteStorage,
    StorageUnavailable,
    advance,
    start_session,
)
from questionbank.config import STORAGE_KEY
from questionbank.schemas import SELECTION_FIELDS, QuizPhase, Selection

from conftest import EGYPT, MIXED


class FailingStorage:
    """Storage whose every operation fails."""

    def get_item(self, key):
        raise StorageUnavailable("disk on fire")

    def set_item(self, key, value):
        raise StorageUnavailable("disk on fire")

    def remove_item(self, key):
        raise StorageUnavailable("disk on fire")


@pytest.fixture
def session(catalog, rng, clock):
    session = start_session(catalog, MIXED, rng, clock())
    advance(session)
    advance(session)
    session.score = 1
    return session


class TestSave:
    def test_writes_single_key(self, store, storage, session):
        snapshot = store.save(session)
        assert list(storage.items) == [STORAGE_KEY]
        data = json.loads(storage.items[STORAGE_KEY])
        assert data["question_index"] == 2
        assert data["score"] == 1
        assert data["start_time"] == snapshot.start_time
        assert [q["id"] for q in data["questions"]] == [q.id for q in session.working_questions]

    def test_write_failure_is_absorbed(self, session, caplog):
        store = ProgressStore(FailingStorage())
        with caplog.at_level(logging.WARNING):
            snapshot = store.save(session)
        assert snapshot.question_index == 2
        assert session.position == 2
        assert "Progress not saved" in caplog.text


class TestLoad:
    def test_absent(self, store):
        assert store.load() is None

    def test_round_trip(self, store, session, catalog):
        store.save(session)
        snapshot = store.load(catalog)
        assert snapshot is not None
        assert snapshot.selection == MIXED

    @pytest.mark.parametrize("raw", [
        "not json",
        "{}",
        '{"subject": "english"}',
        "[1, 2, 3]",
    ])
    def test_malformed_is_none(self, storage, store, raw):
        storage.set_item(STORAGE_KEY, raw)
        assert store.load() is None

    def test_inconsistent_counters_is_none(self, storage, store, session):
        data = json.loads(store.save(session).model_dump_json())
        data["score"] = 99
        storage.set_item(STORAGE_KEY, json.dumps(data))
        assert store.load() is None

    def test_offset_start_time_is_none(self, storage, store, session):
        data = json.loads(store.save(session).model_dump_json())
        data["start_time"] = "2024-03-01T09:00:00+00:00"
        storage.set_item(STORAGE_KEY, json.dumps(data))
        assert store.load() is None

    def test_offset_start_time_on_results_screen_resumes_empty(self, catalog, storage, store, session, clock):
        data = json.loads(store.save(session).model_dump_json())
        data["question_index"] = len(data["questions"])
        data["start_time"] = "2024-03-01T09:00:00+00:00"
        storage.set_item(STORAGE_KEY, json.dumps(data))

        view = QuizController(catalog, store, clock=clock).resume()
        assert view.phase == QuizPhase.NO_SELECTION

    def test_read_failure_is_none(self):
        assert ProgressStore(FailingStorage()).load() is None

    def test_unknown_lesson_with_catalog(self, store, session, catalog):
        data = json.loads(store.save(session).model_dump_json())
        data["lesson"] = "Retired lesson"
        store.storage.set_item(STORAGE_KEY, json.dumps(data))

        assert store.load() is not None
        assert store.load(catalog) is None


class TestReconcile:
    def test_matching_selection_round_trips(self, store, session):
        store.save(session)
        restored = store.reconcile(store.load(), session.selection)
        assert restored is not None
        assert restored.model_dump() == session.model_dump()

    @pytest.mark.parametrize("field", SELECTION_FIELDS)
    def test_any_field_mismatch(self, store, session, field):
        store.save(session)
        other = session.selection.model_copy(update={field: "different"})
        assert store.reconcile(store.load(), other) is None

    def test_other_lesson(self, store, session):
        store.save(session)
        assert store.reconcile(store.load(), EGYPT) is None

    def test_none_snapshot(self, store):
        assert store.reconcile(None, MIXED) is None


class TestClear:
    def test_removes_entry(self, store, storage, session):
        store.save(session)
        store.clear()
        assert STORAGE_KEY not in storage.items
        assert store.load() is None

    def test_clear_when_empty(self, store):
        store.clear()
        assert store.load() is None

    def test_failure_is_absorbed(self):
        ProgressStore(FailingStorage()).clear()


class TestMemoryStorage:
    def test_basic_operations(self):
        storage = MemoryStorage()
        assert storage.get_item("k") is None
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.get_item("k") is None


class TestSQLiteStorage:
    def test_creates_database(self, tmp_path):
        db_path = tmp_path / "nested" / "progress.db"
        SQLiteStorage(db_path)
        assert db_path.exists()

    def test_set_get_overwrite_remove(self, tmp_path):
        storage = SQLiteStorage(tmp_path / "progress.db")
        storage.set_item("k", "one")
        storage.set_item("k", "two")
        assert storage.get_item("k") == "two"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_survives_new_instance(self, tmp_path, session):
        db_path = tmp_path / "progress.db"
        ProgressStore(SQLiteStorage(db_path)).save(session)

        store = ProgressStore(SQLiteStorage(db_path))
        restored = store.reconcile(store.load(), session.selection)
        assert restored.model_dump() == session.model_dump()

    def test_unopenable_path(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(StorageUnavailable):
            SQLiteStorage(blocker / "progress.db")

    def test_missing_table_raises_storage_unavailable(self, tmp_path):
        storage = SQLiteStorage(tmp_path / "progress.db")
        conn = storage._get_connection()
        conn.execute("DROP TABLE storage")
        conn.commit()
        conn.close()
        with pytest.raises(StorageUnavailable):
            storage.get_item("k")
