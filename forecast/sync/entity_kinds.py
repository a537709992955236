"""Housing Forecast — Entity Kind Registry.

Declares, per reconciled table, its key column and the fields whose change
triggers an update. Nested references are tracked by their id column, so a
changed address body updates the Address row, not the users pointing at it.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Type

from sqlmodel import SQLModel

from forecast.models.housing_models import Address, Batch, Name, Room, User


@dataclass(frozen=True)
class EntityKind:
    """A reconcilable table and its change-detection rules."""

    name: str
    model: Type[SQLModel]
    key: str
    tracked_fields: Tuple[str, ...]

    def key_of(self, record: Any) -> Any:
        return getattr(record, self.key)

    def differs(self, remote: Any, local: Any) -> bool:
        return any(getattr(remote, f) != getattr(local, f) for f in self.tracked_fields)

    def copy_tracked(self, source: Any, target: Any) -> None:
        """Overwrite target's tracked fields; key, created and deleted stay put."""
        for f in self.tracked_fields:
            setattr(target, f, getattr(source, f))


ADDRESS = EntityKind(
    name="address",
    model=Address,
    key="address_id",
    tracked_fields=("address1", "address2", "city", "country", "postal_code", "state"),
)

NAME = EntityKind(
    name="name",
    model=Name,
    key="name_id",
    tracked_fields=("first", "middle", "last"),
)

USER = EntityKind(
    name="user",
    model=User,
    key="user_id",
    tracked_fields=(
        "address_id",
        "batch_id",
        "email",
        "gender",
        "location",
        "name_id",
        "room_id",
        "type",
    ),
)

ROOM = EntityKind(
    name="room",
    model=Room,
    key="room_id",
    tracked_fields=("address_id", "location", "occupancy", "gender", "vacancy"),
)

BATCH = EntityKind(
    name="batch",
    model=Batch,
    key="batch_id",
    tracked_fields=(
        "address_id",
        "batch_name",
        "batch_occupancy",
        "batch_skill",
        "start_date",
        "end_date",
    ),
)

# Referenced kinds first, then Users, Rooms, Batches.
RECONCILE_ORDER: Tuple[EntityKind, ...] = (ADDRESS, NAME, USER, ROOM, BATCH)
