"""Housing Forecast — Service Hub Wire Models.

Shapes of the JSON collections served at ``{base}/api/{model}``. The hub
emits camelCase keys and nests related objects (a user carries its name,
address, room and batch). Unknown keys are ignored.
"""

import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HubModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class HubAddress(HubModel):
    address_id: uuid.UUID
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    state: Optional[str] = None


class HubName(HubModel):
    name_id: uuid.UUID
    first: Optional[str] = None
    middle: Optional[str] = None
    last: Optional[str] = None


class HubRoom(HubModel):
    room_id: uuid.UUID
    location: Optional[str] = None
    occupancy: int = 0
    vacancy: int = 0
    gender: Optional[str] = None
    address: Optional[HubAddress] = None


class HubBatch(HubModel):
    batch_id: uuid.UUID
    batch_name: Optional[str] = None
    batch_occupancy: int = 0
    batch_skill: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    address: Optional[HubAddress] = None


class HubUser(HubModel):
    user_id: uuid.UUID
    location: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    type: Optional[str] = None
    name: Optional[HubName] = None
    address: Optional[HubAddress] = None
    room: Optional[HubRoom] = None
    batch: Optional[HubBatch] = None
