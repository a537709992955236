"""
Unit tests for hub → table row transformation.
"""

import uuid
from datetime import datetime, timedelta, timezone

from forecast.connectors.service_hub.client import FetchResult
from forecast.connectors.service_hub.transformer import to_batch, transform_collections
from forecast.models.hub_models import HubAddress, HubBatch, HubName, HubRoom, HubUser


def _address(address_id=None, city="Reston"):
    return HubAddress(address_id=address_id or uuid.uuid4(), city=city)


class TestTransformCollections:

    def test_flattens_references_and_collects_nested_entities(self):
        shared = _address()
        name = HubName(name_id=uuid.uuid4(), first="Ada", last="Lovelace")
        room = HubRoom(room_id=uuid.uuid4(), location="Reston", address=shared)
        batch = HubBatch(batch_id=uuid.uuid4(), batch_name="1807-java", address=_address())
        user = HubUser(
            user_id=uuid.uuid4(),
            location="Reston",
            name=name,
            address=shared,
            room=room,
            batch=batch,
        )

        records = transform_collections(
            FetchResult.success([user]),
            FetchResult.success([room]),
            FetchResult.success([batch]),
        )

        row = records.users.records[0]
        assert row.room_id == room.room_id
        assert row.batch_id == batch.batch_id
        assert row.name_id == name.name_id
        assert row.address_id == shared.address_id
        assert [n.first for n in records.names.records] == ["Ada"]
        assert {a.address_id for a in records.addresses.records} == {
            shared.address_id,
            batch.address.address_id,
        }
        assert records.addresses.ok and records.names.ok

    def test_failed_source_marks_derived_collections_failed(self):
        room = HubRoom(room_id=uuid.uuid4(), address=_address())

        records = transform_collections(
            FetchResult.success([]),
            FetchResult.success([room]),
            FetchResult.failure("HTTP 500"),
        )

        assert records.names.ok
        assert not records.addresses.ok
        assert "HTTP 500" in records.addresses.reason
        assert len(records.addresses.records) == 1
        assert not records.batches.ok

    def test_aware_datetimes_are_normalised_to_naive_utc(self):
        batch = HubBatch(
            batch_id=uuid.uuid4(),
            start_date=datetime(2026, 1, 5, 9, 0, tzinfo=timezone(timedelta(hours=-5))),
        )
        assert to_batch(batch).start_date == datetime(2026, 1, 5, 14, 0)
