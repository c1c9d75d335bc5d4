# models/maintenance.py

import datetime as dt
from typing import Optional
from pydantic import BaseModel

from models.common import RecordRead
from models.enums import MaintenanceStatus, MaintenancePriority


class MaintenanceRequestBase(BaseModel):
    room_id: str
    tenant_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    date: Optional[dt.date] = None          # reported on
    status: MaintenanceStatus = MaintenanceStatus.pending
    priority: MaintenancePriority = MaintenancePriority.medium
    property_id: str


class MaintenanceRequestCreate(MaintenanceRequestBase):
    pass


class MaintenanceRequestRead(RecordRead, MaintenanceRequestBase):
    pass


class MaintenanceRequestUpdate(BaseModel):
    tenant_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    status: Optional[MaintenanceStatus] = None
    priority: Optional[MaintenancePriority] = None
