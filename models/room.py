# models/room.py

from typing import List, Optional
from pydantic import BaseModel, Field

from models.common import RecordRead
from models.enums import RoomType, RoomStatus


class RoomBase(BaseModel):
    number: str
    floor: Optional[str] = None
    type: RoomType = RoomType.single
    price: float = Field(0, ge=0)
    status: RoomStatus = RoomStatus.vacant
    facilities: List[str] = []
    tenant_id: Optional[str] = None
    property_id: str


class RoomCreate(RoomBase):
    pass


class RoomRead(RecordRead, RoomBase):
    pass


class RoomUpdate(BaseModel):
    number: Optional[str] = None
    floor: Optional[str] = None
    type: Optional[RoomType] = None
    price: Optional[float] = Field(None, ge=0)
    status: Optional[RoomStatus] = None
    facilities: Optional[List[str]] = None
    tenant_id: Optional[str] = None
