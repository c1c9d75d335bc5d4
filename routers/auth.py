from fastapi import APIRouter, HTTPException, Depends

from core.change_feed import SIGNED_IN, SIGNED_OUT
from core.errors import StoreError
from core.logging_config import logger
from core.supabase_client import get_anon_client, get_user_client
from dependencies.auth import get_current_user, CurrentUser
from models.auth import LoginRequest, TokenResponse
from repositories.backoffice_user_repo import BackofficeUserRepository
from services.notification_pipeline import publish_auth_state


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(payload: LoginRequest):

    email = payload.email.strip().lower()

    client = get_anon_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Don't expose details to the caller
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    session = getattr(response, "session", None)
    if not session or not session.access_token:
        raise HTTPException(401, "Invalid email or password")

    user_id = response.user.id

    # Backoffice operators get last_login stamped; others have no profile row
    try:
        BackofficeUserRepository(get_user_client(session.access_token)).record_login(user_id)
    except StoreError as e:
        logger.warning(f"Could not record login for {user_id}: {e.message}")

    publish_auth_state(SIGNED_IN, user_id)

    return TokenResponse(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_in=getattr(session, "expires_in", None),
    )


# ============================================================
# LOGOUT
# Live notification feeds for the caller are cleared; the
# Supabase session itself is revoked by the client SDK.
# ============================================================
@router.post("/logout", summary="Sign out (clears live feeds)")
def logout(current_user: CurrentUser = Depends(get_current_user)):
    cleared = publish_auth_state(SIGNED_OUT, current_user.id)
    logger.info(f"User {current_user.id} signed out ({cleared} live feeds cleared)")
    return {"success": True}


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=CurrentUser, summary="Current authenticated user")
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user
