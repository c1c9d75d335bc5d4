# core/permission_helpers.py

from typing import Any, Dict, Optional

from core.errors import Forbidden
from core.logging_config import logger
from models.enums import AccountStatus, BackofficeRole


# -----------------------------------------------------
# Pure checks over backoffice_users rows
# -----------------------------------------------------
# Each takes the caller's (and target's) row explicitly, so the
# decision is a function of (caller, operation, target) only.
# -----------------------------------------------------

def is_active(row: Optional[Dict[str, Any]]) -> bool:
    return bool(row) and row.get("status") == AccountStatus.active.value


def is_superadmin(row: Optional[Dict[str, Any]]) -> bool:
    return bool(row) and row.get("role") == BackofficeRole.superadmin.value


def authorize_backoffice(caller_row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Any active backoffice account may use the console."""
    if not is_active(caller_row):
        raise Forbidden("Backoffice access required")
    return caller_row


def authorize_superadmin(caller_row: Optional[Dict[str, Any]], action: str) -> Dict[str, Any]:
    """Only an active superadmin may manage backoffice accounts."""
    if not (is_superadmin(caller_row) and is_active(caller_row)):
        logger.warning(
            f"Denied '{action}' for backoffice user {caller_row.get('id') if caller_row else 'unknown'}"
        )
        raise Forbidden(f"Only active superadmin users can {action}")
    return caller_row


def ensure_deletable(caller_id: str, target_row: Dict[str, Any]):
    """Superadmins and the caller's own account are never deletable."""
    if target_row.get("id") == caller_id:
        raise Forbidden("You cannot delete your own account")
    if is_superadmin(target_row):
        raise Forbidden("Cannot delete superadmin users")


def ensure_status_change_allowed(caller_id: str, target_row: Dict[str, Any], new_status: str):
    if new_status == AccountStatus.active.value:
        return
    if target_row.get("id") == caller_id:
        raise Forbidden("You cannot deactivate your own account")
    if is_superadmin(target_row):
        raise Forbidden("Cannot deactivate superadmin users")
