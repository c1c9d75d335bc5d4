# models/tenant.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, model_validator

from models.common import RecordRead
from models.enums import TenantStatus, PaymentStatus


class TenantBase(BaseModel):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    room_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TenantStatus = TenantStatus.active
    payment_status: PaymentStatus = PaymentStatus.pending
    last_payment_date: Optional[date] = None
    property_id: str


class TenantCreate(TenantBase):

    @model_validator(mode="after")
    def check_lease_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Lease end date cannot be before start date")
        return self


class TenantRead(RecordRead, TenantBase):
    pass


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    room_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[TenantStatus] = None
    payment_status: Optional[PaymentStatus] = None
    last_payment_date: Optional[date] = None

    @model_validator(mode="after")
    def check_lease_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Lease end date cannot be before start date")
        return self
