"""Housing Forecast — Snapshot Models (Append-Only)."""

import datetime as dt
import uuid
from typing import Optional
from sqlmodel import SQLModel, Field


class Snapshot(SQLModel, table=True):
    """Occupancy and user counts for one location on one day.

    Never modify a stored snapshot — it's the historical record.
    """

    __tablename__ = "snapshots"

    id: Optional[uuid.UUID] = Field(default_factory=uuid.uuid4, primary_key=True)
    date: Optional[dt.date] = Field(default=None, index=True)
    created: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )
    location: Optional[str] = Field(default=None, index=True)
    room_occupancy_count: int = 0
    user_count: int = 0

    def is_valid(self) -> bool:
        """A snapshot needs an id, a real date, a location and non-negative counts."""
        if self.id is None or self.id.int == 0:
            return False
        if self.date is None or self.date == dt.date.min:
            return False
        if not self.location:
            return False
        return self.room_occupancy_count >= 0 and self.user_count >= 0
