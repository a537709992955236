"""
Unit tests for RecordStore.
"""

import uuid
from datetime import date

import pytest

from forecast.models.housing_models import Name
from forecast.store.record_store import PersistenceError, RecordStore


class TestRecordStore:

    def test_find_by_key(self, store):
        nid = uuid.uuid4()
        store.add(Name(name_id=nid, first="Ada"))
        store.commit()

        assert store.find_by_key(Name, nid).first == "Ada"
        assert store.find_by_key(Name, uuid.uuid4()) is None

    def test_all_includes_deleted_but_all_active_does_not(self, store):
        active, gone = uuid.uuid4(), uuid.uuid4()
        store.add_all(
            [Name(name_id=active), Name(name_id=gone, deleted=date(2026, 1, 1))]
        )
        store.commit()

        assert {n.name_id for n in store.all(Name)} == {active, gone}
        assert [n.name_id for n in store.all_active(Name)] == [active]

    def test_failed_commit_rolls_back_and_raises(self, store):
        nid = uuid.uuid4()
        store.add(Name(name_id=nid, first="Ada"))
        store.commit()

        # Detached duplicate primary key forces an IntegrityError on flush
        store.session.expunge_all()
        store.add(Name(name_id=uuid.uuid4(), first="Grace"))
        store.add(Name(name_id=nid, first="Dup"))

        with pytest.raises(PersistenceError):
            store.commit()

        fresh = RecordStore(store.session)
        assert [n.first for n in fresh.all(Name)] == ["Ada"]
