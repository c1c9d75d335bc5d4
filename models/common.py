# models/common.py

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, field_validator


# -------------------------------------------------
# Fields every Supabase row carries
# -------------------------------------------------
class RecordRead(BaseModel):
    id: str                                  # UUID STRING from Supabase
    created_at: Optional[datetime] = None    # Supabase timestamp
    updated_at: Optional[datetime] = None

    # Normalize UUID → str always
    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        if isinstance(v, UUID):
            return str(v)
        return str(v)

    # Parse trailing Z timestamps
    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def normalize_timestamp(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v


class MessageResponse(BaseModel):
    message: str
