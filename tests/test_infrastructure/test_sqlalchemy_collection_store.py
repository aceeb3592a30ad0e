"""Tests for the SQLAlchemy collection store (the Store Adapter).

Uses an in-memory SQLite database, plus mocked sessions to simulate
failures the real database will not produce on demand.
"""

import logging
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from execution_os.domain.errors import QuotaExceeded, StorageError, WriteDenied
from execution_os.infrastructure.repositories import SqlAlchemyCollectionStore
from execution_os.models import CollectionName, CollectionRecord


def _write_raw(session_factory, name, payload):
    with session_factory() as session:
        session.add(CollectionRecord(name=name, payload=payload))
        session.commit()


def _failing_session_factory(message):
    session = MagicMock()
    session.__enter__.return_value = session
    session.get.side_effect = OperationalError("SELECT", {}, Exception(message))
    return MagicMock(return_value=session)


class TestLoad:
    def test_absent_collection_is_empty(self, store):
        assert store.load(CollectionName.TASKS) == []
        assert store.exists(CollectionName.TASKS) is False

    def test_save_then_load_preserves_order(self, store):
        records = [{"TaskID": "b"}, {"TaskID": "a"}, {"TaskID": "c"}]
        store.save(CollectionName.TASKS, records)
        assert store.load(CollectionName.TASKS) == records
        assert store.exists(CollectionName.TASKS) is True

    def test_accepts_plain_collection_name(self, store):
        store.save("eos_notes", [{"NoteID": "n1"}])
        assert store.load(CollectionName.NOTES) == [{"NoteID": "n1"}]

    def test_unknown_collection_rejected(self, store):
        with pytest.raises(ValueError):
            store.load("eos_widgets")

    def test_corrupt_json_is_logged_and_empty(self, store, session_factory, caplog):
        _write_raw(session_factory, CollectionName.PROJECTS.value, "{not json")
        with caplog.at_level(logging.ERROR):
            assert store.load(CollectionName.PROJECTS) == []
        assert "corrupt payload" in caplog.text

    def test_non_list_payload_is_empty(self, store, session_factory):
        _write_raw(session_factory, CollectionName.PROJECTS.value, '{"ProjectID": "p1"}')
        assert store.load(CollectionName.PROJECTS) == []

    def test_list_of_non_records_is_empty(self, store, session_factory):
        _write_raw(session_factory, CollectionName.TASKS.value, "[1, 2, 3]")
        assert store.load(CollectionName.TASKS) == []

    def test_read_failure_never_raises(self):
        store = SqlAlchemyCollectionStore(_failing_session_factory("disk I/O error"))
        assert store.load(CollectionName.TASKS) == []
        assert store.exists(CollectionName.TASKS) is False

    def test_unicode_survives(self, store):
        store.save(CollectionName.NOTES, [{"Title": "Café ☕"}])
        assert store.load(CollectionName.NOTES) == [{"Title": "Café ☕"}]


class TestSave:
    def test_save_replaces_whole_collection(self, store):
        store.save(CollectionName.TASKS, [{"TaskID": "a"}, {"TaskID": "b"}])
        store.save(CollectionName.TASKS, [{"TaskID": "c"}])
        assert store.load(CollectionName.TASKS) == [{"TaskID": "c"}]

    def test_collections_are_independent(self, store):
        store.save(CollectionName.TASKS, [{"TaskID": "a"}])
        store.save(CollectionName.NOTES, [{"NoteID": "n"}])
        assert store.load(CollectionName.TASKS) == [{"TaskID": "a"}]

    def test_quota_exceeded_leaves_previous_payload(self, session_factory):
        store = SqlAlchemyCollectionStore(session_factory, quota_chars=60)
        store.save(CollectionName.NOTES, [{"NoteID": "n1"}])

        with pytest.raises(QuotaExceeded) as exc_info:
            store.save(CollectionName.NOTES, [{"NoteID": "n1", "Content": "x" * 100}])

        assert isinstance(exc_info.value, StorageError)
        assert store.load(CollectionName.NOTES) == [{"NoteID": "n1"}]

    def test_quota_counts_other_collections(self, session_factory):
        store = SqlAlchemyCollectionStore(session_factory, quota_chars=80)
        store.save(CollectionName.TASKS, [{"Notes": "y" * 50}])
        with pytest.raises(QuotaExceeded):
            store.save(CollectionName.NOTES, [{"Content": "z" * 30}])

    def test_replacing_a_collection_does_not_count_its_old_payload(self, session_factory):
        store = SqlAlchemyCollectionStore(session_factory, quota_chars=60)
        store.save(CollectionName.TASKS, [{"Notes": "y" * 40}])
        store.save(CollectionName.TASKS, [{"Notes": "w" * 40}])
        assert store.load(CollectionName.TASKS) == [{"Notes": "w" * 40}]

    def test_zero_quota_disables_check(self, store):
        store.save(CollectionName.NOTES, [{"Content": "x" * 100_000}])
        assert len(store.load(CollectionName.NOTES)) == 1

    def test_disk_full_maps_to_quota_exceeded(self):
        store = SqlAlchemyCollectionStore(_failing_session_factory("database or disk is full"))
        with pytest.raises(QuotaExceeded):
            store.save(CollectionName.TASKS, [{"TaskID": "a"}])

    def test_other_operational_error_maps_to_write_denied(self):
        store = SqlAlchemyCollectionStore(
            _failing_session_factory("attempt to write a readonly database")
        )
        with pytest.raises(WriteDenied) as exc_info:
            store.save(CollectionName.TASKS, [{"TaskID": "a"}])
        assert "readonly" in str(exc_info.value)

    def test_unserializable_records_map_to_write_denied(self, store):
        with pytest.raises(WriteDenied):
            store.save(CollectionName.TASKS, [{"TaskID": object()}])
        assert store.exists(CollectionName.TASKS) is False
