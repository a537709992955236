"""Housing Forecast — Reconciled Housing Tables.

Each table mirrors one entity kind served by the service hub. Rows are never
physically removed: ``deleted`` marks a soft delete, ``created`` is stamped
once on first insert.

References to other entities are plain indexed UUID columns. The hub owns
referential integrity; kinds are reconciled independently.
"""

import uuid
from datetime import date, datetime
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class TrackedRecord(SQLModel):
    """Columns shared by every reconciled table."""

    created: Optional[date] = Field(default=None, description="Set on first insert")
    deleted: Optional[date] = Field(
        default=None, index=True, description="Soft-delete marker"
    )


class Address(TrackedRecord, table=True):
    __tablename__ = "addresses"

    address_id: uuid.UUID = Field(primary_key=True)
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None


class Name(TrackedRecord, table=True):
    __tablename__ = "names"

    name_id: uuid.UUID = Field(primary_key=True)
    first: Optional[str] = None
    middle: Optional[str] = None
    last: Optional[str] = None


class Room(TrackedRecord, table=True):
    __tablename__ = "rooms"

    room_id: uuid.UUID = Field(primary_key=True)
    address_id: Optional[uuid.UUID] = Field(default=None, index=True)
    location: Optional[str] = Field(default=None, index=True)
    occupancy: int = 0
    gender: Optional[str] = None
    vacancy: int = 0


class Batch(TrackedRecord, table=True):
    __tablename__ = "batches"

    batch_id: uuid.UUID = Field(primary_key=True)
    address_id: Optional[uuid.UUID] = Field(default=None, index=True)
    batch_name: Optional[str] = None
    batch_occupancy: int = 0
    batch_skill: Optional[str] = None
    # Naive UTC; the transformer normalises aware hub timestamps
    start_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    end_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))


class User(TrackedRecord, table=True):
    __tablename__ = "users"

    user_id: uuid.UUID = Field(primary_key=True)
    address_id: Optional[uuid.UUID] = Field(default=None, index=True)
    batch_id: Optional[uuid.UUID] = Field(default=None, index=True)
    name_id: Optional[uuid.UUID] = Field(default=None, index=True)
    room_id: Optional[uuid.UUID] = Field(default=None, index=True)
    email: Optional[str] = None
    gender: Optional[str] = None
    location: Optional[str] = Field(default=None, index=True)
    type: Optional[str] = None
