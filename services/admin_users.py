# services/admin_users.py

"""
Privileged backoffice account lifecycle.

Runs with the service-role client: it writes to Supabase Auth
(identities) and to `backoffice_users` (profiles). The two stores share
no transaction, so account creation is a two-step saga whose first
step (identity) is undone if the second (profile) fails.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from supabase import Client

from core.change_feed import ChangeFeed, change_feed
from core.errors import (
    CreateFailed,
    DeleteFailed,
    Forbidden,
    NotFound,
    ValidationFailed,
    extract_supabase_error,
)
from core.logging_config import logger
from core.permission_helpers import (
    authorize_superadmin,
    ensure_deletable,
    ensure_status_change_allowed,
)
from core.saga import Saga, SagaFailed, SagaStep
from dependencies.auth import CurrentUser, parse_bearer, resolve_identity
from models.backoffice_user import (
    CreateBackofficeUserRequest,
    DeleteBackofficeUserRequest,
)
from repositories.backoffice_user_repo import BackofficeUserRepository


USER_CREATED = "User created successfully"
USER_DELETED = "User deleted successfully"


def first_validation_message(error: ValidationError) -> str:
    """Readable message for the first failing field."""
    errors = error.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{field}: {message}" if field else message


class BackofficeUserService:
    def __init__(self, client: Client, feed: ChangeFeed = change_feed):
        self.client = client
        self.feed = feed
        self.users = BackofficeUserRepository(client, feed)

    # -----------------------------------------------------
    # Caller resolution (bearer header → identity)
    # -----------------------------------------------------
    def authenticate(self, authorization: Optional[str]) -> CurrentUser:
        token = parse_bearer(authorization)
        return resolve_identity(self.client, token)

    def _authorize(self, caller: CurrentUser, action: str) -> Dict[str, Any]:
        return authorize_superadmin(self.users.find(caller.id), action)

    # -----------------------------------------------------
    # CREATE
    # -----------------------------------------------------
    def create_admin_user(self, caller: CurrentUser, payload: Dict[str, Any]) -> str:
        self._authorize(caller, "create backoffice users")

        try:
            request = CreateBackofficeUserRequest.model_validate(payload or {})
        except ValidationError as e:
            raise ValidationFailed(first_validation_message(e))

        if self.users.find_by_email(request.email):
            raise CreateFailed("Email already registered")

        saga = Saga(
            "create-backoffice-user",
            [
                SagaStep(
                    "identity",
                    action=lambda ctx: self._create_identity(request),
                    compensate=lambda ctx, identity: self._delete_identity(identity.id),
                ),
                SagaStep(
                    "profile",
                    action=lambda ctx: self.users.insert_profile(
                        ctx["identity"].id,
                        request.email,
                        request.name,
                        request.role.value,
                        request.status.value,
                    ),
                ),
            ],
        )

        try:
            result = saga.run()
        except SagaFailed as e:
            if e.step == "identity":
                raise CreateFailed(extract_supabase_error(e.cause) or "Failed to create user")
            raise CreateFailed("Failed to create backoffice user")

        logger.info(
            f"Backoffice user {result['identity'].id} ({request.role.value}) created by {caller.id}"
        )
        return USER_CREATED

    def _create_identity(self, request: CreateBackofficeUserRequest):
        resp = self.client.auth.admin.create_user(
            {
                "email": request.email,
                "password": request.password,
                "email_confirm": True,
                "user_metadata": {"name": request.name},
            }
        )
        user = getattr(resp, "user", None)
        if user is None:
            raise CreateFailed("Failed to create user")
        return user

    def _delete_identity(self, user_id: str):
        self.client.auth.admin.delete_user(user_id)
        logger.warning(f"Rolled back auth identity {user_id} after profile insert failure")

    # -----------------------------------------------------
    # DELETE
    # -----------------------------------------------------
    def delete_admin_user(self, caller: CurrentUser, payload: Dict[str, Any]) -> str:
        self._authorize(caller, "delete backoffice users")

        try:
            request = DeleteBackofficeUserRequest.model_validate(payload or {})
        except ValidationError as e:
            raise ValidationFailed(first_validation_message(e))

        if request.id == caller.id:
            raise Forbidden("You cannot delete your own account")

        target = self.users.find(request.id)
        if not target:
            raise NotFound("User not found")

        ensure_deletable(caller.id, target)

        try:
            self.client.auth.admin.delete_user(request.id)
        except Exception as e:
            logger.error(f"Failed to delete auth identity {request.id}: {extract_supabase_error(e)}")
            raise DeleteFailed("Failed to delete user")

        # Profile row goes with the identity (ON DELETE CASCADE)
        self.feed.publish_row(self.users.table, "DELETE", {}, target)

        logger.info(f"Backoffice user {request.id} deleted by {caller.id}")
        return USER_DELETED

    # -----------------------------------------------------
    # LIST / STATUS
    # -----------------------------------------------------
    def list_users(self) -> List[Dict[str, Any]]:
        return self.users.list()

    def update_status(self, caller_id: str, user_id: str, status: str) -> Dict[str, Any]:
        target = self.users.get(user_id)
        ensure_status_change_allowed(caller_id, target, status)

        return self.users.update(user_id, {"status": status})
