"""Housing Forecast — Service Hub → Table Row Transformer.

Converts fetched hub collections into transient table rows. Nested objects are
flattened into reference ids; nested names and addresses are collected into
their own collections so they can be reconciled as entity kinds of their own.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from forecast.connectors.service_hub.client import FetchResult
from forecast.models.housing_models import Address, Batch, Name, Room, User
from forecast.models.hub_models import HubAddress, HubBatch, HubName, HubRoom, HubUser


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Drop tz info (after converting to UTC) so values compare equal after a DB round-trip."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_address(hub: HubAddress) -> Address:
    return Address(
        address_id=hub.address_id,
        address1=hub.address1,
        address2=hub.address2,
        city=hub.city,
        country=hub.country,
        postal_code=hub.postal_code,
        state=hub.state,
    )


def to_name(hub: HubName) -> Name:
    return Name(name_id=hub.name_id, first=hub.first, middle=hub.middle, last=hub.last)


def to_room(hub: HubRoom) -> Room:
    return Room(
        room_id=hub.room_id,
        address_id=hub.address.address_id if hub.address else None,
        location=hub.location,
        occupancy=hub.occupancy,
        gender=hub.gender,
        vacancy=hub.vacancy,
    )


def to_batch(hub: HubBatch) -> Batch:
    return Batch(
        batch_id=hub.batch_id,
        address_id=hub.address.address_id if hub.address else None,
        batch_name=hub.batch_name,
        batch_occupancy=hub.batch_occupancy,
        batch_skill=hub.batch_skill,
        start_date=_naive_utc(hub.start_date),
        end_date=_naive_utc(hub.end_date),
    )


def to_user(hub: HubUser) -> User:
    return User(
        user_id=hub.user_id,
        address_id=hub.address.address_id if hub.address else None,
        batch_id=hub.batch.batch_id if hub.batch else None,
        name_id=hub.name.name_id if hub.name else None,
        room_id=hub.room.room_id if hub.room else None,
        email=hub.email,
        gender=hub.gender,
        location=hub.location,
        type=hub.type,
    )


def _combine(*sources: FetchResult) -> Optional[str]:
    """Failure reason for a derived collection, or None if every source succeeded."""
    reasons = [s.reason or "unknown" for s in sources if not s.ok]
    return "; ".join(reasons) if reasons else None


def _derived(records: Iterable, reason: Optional[str]) -> FetchResult:
    # Partial data is kept for inserts/updates; the failed flag still blocks deletes.
    result = FetchResult.success(list(records))
    if reason is not None:
        result.ok = False
        result.reason = f"derived from failed fetch: {reason}"
    return result


@dataclass
class HubRecords:
    """One cycle's remote state, as transient table rows per entity kind."""

    addresses: FetchResult[Address]
    names: FetchResult[Name]
    users: FetchResult[User]
    rooms: FetchResult[Room]
    batches: FetchResult[Batch]


def transform_collections(
    users: FetchResult[HubUser],
    rooms: FetchResult[HubRoom],
    batches: FetchResult[HubBatch],
) -> HubRecords:
    """Flatten fetched hub collections into per-kind row collections."""
    addresses: Dict = {}
    names: Dict = {}

    for user in users.records:
        if user.name is not None:
            names.setdefault(user.name.name_id, to_name(user.name))
        if user.address is not None:
            addresses.setdefault(user.address.address_id, to_address(user.address))
    for holder in [*rooms.records, *batches.records]:
        if holder.address is not None:
            addresses.setdefault(holder.address.address_id, to_address(holder.address))

    def _mapped(source: FetchResult, convert) -> FetchResult:
        return FetchResult(
            records=[convert(r) for r in source.records],
            ok=source.ok,
            reason=source.reason,
        )

    return HubRecords(
        addresses=_derived(addresses.values(), _combine(users, rooms, batches)),
        names=_derived(names.values(), _combine(users)),
        users=_mapped(users, to_user),
        rooms=_mapped(rooms, to_room),
        batches=_mapped(batches, to_batch),
    )
