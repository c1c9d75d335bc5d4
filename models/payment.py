# models/payment.py

import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

from models.common import RecordRead
from models.enums import PaymentStatus


class PaymentBase(BaseModel):
    tenant_id: str
    room_id: str
    amount: float = Field(..., ge=0)
    date: dt.date
    due_date: Optional[dt.date] = None
    status: PaymentStatus = PaymentStatus.pending
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    property_id: str


class PaymentCreate(PaymentBase):
    pass


class PaymentRead(RecordRead, PaymentBase):
    pass


class PaymentUpdate(BaseModel):
    amount: Optional[float] = Field(None, ge=0)
    date: Optional[dt.date] = None
    due_date: Optional[dt.date] = None
    status: Optional[PaymentStatus] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
