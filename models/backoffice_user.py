# models/backoffice_user.py

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from core.config import settings
from models.common import RecordRead
from models.enums import BackofficeRole, AccountStatus


SPECIAL_CHARACTERS = "!@#$%^&*"


def password_problem(password: str) -> Optional[str]:
    """Return the first password-policy violation, or None."""
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        return f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
    if not re.search(r"[A-Z]", password):
        return "Password must contain an uppercase letter"
    if not re.search(r"[a-z]", password):
        return "Password must contain a lowercase letter"
    if not re.search(r"[0-9]", password):
        return "Password must contain a digit"
    if not any(c in SPECIAL_CHARACTERS for c in password):
        return f"Password must contain a special character ({SPECIAL_CHARACTERS})"
    return None


class BackofficeUserRead(RecordRead):
    email: str
    name: Optional[str] = None
    role: BackofficeRole
    status: AccountStatus
    last_login: Optional[datetime] = None


class CreateBackofficeUserRequest(BaseModel):
    """
    Body of POST /create-backoffice-user.

    The password goes straight to Supabase Auth and is never stored
    or echoed back by this API.
    """

    email: EmailStr
    password: str
    name: str = Field(..., min_length=1)
    role: BackofficeRole = BackofficeRole.admin
    status: AccountStatus = AccountStatus.active

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        problem = password_problem(v)
        if problem:
            raise ValueError(problem)
        return v


class DeleteBackofficeUserRequest(BaseModel):
    id: str = Field(..., min_length=1)


class BackofficeStatusUpdate(BaseModel):
    status: AccountStatus
