# models/property.py

from typing import Optional
from pydantic import BaseModel, EmailStr

from models.common import RecordRead


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class PropertyBase(BaseModel):
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


# -------------------------------------------------
# Create
# -------------------------------------------------
class PropertyCreate(PropertyBase):
    """
    Used when creating a property in Supabase.
    No ID supplied — Supabase generates UUID; owner_id is the caller.
    """
    email: Optional[EmailStr] = None


# -------------------------------------------------
# Read (Supabase → API response)
# -------------------------------------------------
class PropertyRead(RecordRead, PropertyBase):
    owner_id: Optional[str] = None


# -------------------------------------------------
# Update (PATCH)
# -------------------------------------------------
class PropertyUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
