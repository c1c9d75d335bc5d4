from typing import Optional, Dict, Any
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.errors import Unauthorized
from core.supabase_client import get_user_client
from repositories.backoffice_user_repo import BackofficeUserRepository
from core.permission_helpers import authorize_backoffice, authorize_superadmin


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (explicit caller context)
# ============================================================
class CurrentUser(BaseModel):
    id: str                         # Supabase Auth UID
    email: str
    full_name: Optional[str] = None


# ============================================================
# Token → identity
# ============================================================
def parse_bearer(header_value: Optional[str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not header_value:
        raise Unauthorized("No authorization header")

    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Unauthorized")
    return token.strip()


def resolve_identity(client: Client, token: str) -> CurrentUser:
    """Validate the JWT via Supabase GoTrue; Unauthorized if rejected."""
    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise Unauthorized("Unauthorized")

    auth_user = getattr(auth_resp, "user", None)
    if not auth_user or not auth_user.email:
        raise Unauthorized("Unauthorized")

    metadata = auth_user.user_metadata or {}

    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        full_name=metadata.get("name") or metadata.get("full_name"),
    )


# ============================================================
# REQUEST DEPENDENCIES
# ============================================================
def get_user_store(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Client:
    """Anon-key client carrying the caller's JWT (row-level security applies)."""
    client = get_user_client(credentials.credentials)
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    client: Client = Depends(get_user_store),
) -> CurrentUser:
    return resolve_identity(client, credentials.credentials)


# ============================================================
# BACKOFFICE GUARDS
# ============================================================
def get_backoffice_user(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
) -> Dict[str, Any]:
    """Caller must have an active backoffice_users row (any role)."""
    row = BackofficeUserRepository(client).find(current_user.id)
    return authorize_backoffice(row)


def require_active_superadmin(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
) -> Dict[str, Any]:
    row = BackofficeUserRepository(client).find(current_user.id)
    return authorize_superadmin(row, "manage backoffice users")
