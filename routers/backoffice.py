# routers/backoffice.py

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import get_backoffice_user, get_user_store, require_active_superadmin
from core.logging_config import logger
from models.backoffice_user import BackofficeStatusUpdate, BackofficeUserRead
from models.notification import NotificationCreate, NotificationList, NotificationRead
from models.stats import BackofficeOverview, PropertyStatsReport
from repositories.notification_repo import NotificationRepository, NotificationScope
from routers.notifications import build_list
from services.admin_users import BackofficeUserService
from services.property_stats import PropertyStatsService


router = APIRouter(
    prefix="/backoffice",
    tags=["Backoffice"],
)


# ============================================================
# ACCOUNTS (superadmin)
# ============================================================
@router.get("/users", response_model=List[BackofficeUserRead], summary="List backoffice users")
def list_backoffice_users(
    caller: Dict[str, Any] = Depends(require_active_superadmin),
    client: Client = Depends(get_user_store),
):
    return BackofficeUserService(client).list_users()


@router.patch("/users/{user_id}/status", response_model=BackofficeUserRead, summary="Activate / deactivate a backoffice user")
def update_backoffice_user_status(
    user_id: str,
    payload: BackofficeStatusUpdate,
    caller: Dict[str, Any] = Depends(require_active_superadmin),
    client: Client = Depends(get_user_store),
):
    row = BackofficeUserService(client).update_status(caller["id"], user_id, payload.status.value)
    logger.info(f"Backoffice user {user_id} set to {payload.status.value} by {caller['id']}")
    return row


# ============================================================
# DASHBOARD
# ============================================================
@router.get("/overview", response_model=BackofficeOverview, summary="Platform totals")
def overview(
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).backoffice_overview()


@router.get("/properties/stats", response_model=PropertyStatsReport, summary="Stats for every property")
def properties_stats(
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).all_property_stats()


# ============================================================
# NOTIFICATIONS (all rows)
# ============================================================
@router.get("/notifications", response_model=NotificationList, summary="All notifications")
def list_all_notifications(
    property_id: Optional[str] = None,
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    scope = NotificationScope.backoffice(property_id)
    return build_list(NotificationRepository(client).list(scope))


@router.post("/notifications", response_model=NotificationRead, summary="Send a notification")
def send_notification(
    payload: NotificationCreate,
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    row = NotificationRepository(client).create(payload.model_dump(mode="json"))
    logger.info(f"Notification {row.get('id')} sent by {caller['id']}")
    return row


@router.post("/notifications/read-all", summary="Mark every notification as read")
def mark_all_read(
    property_id: Optional[str] = None,
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    updated = NotificationRepository(client).mark_all_read(NotificationScope.backoffice(property_id))
    return {"success": True, "updated": updated}


@router.delete("/notifications/{notification_id}", summary="Delete a notification")
def delete_notification(
    notification_id: str,
    caller: Dict[str, Any] = Depends(get_backoffice_user),
    client: Client = Depends(get_user_store),
):
    NotificationRepository(client).delete(notification_id)
    return {"success": True, "data": {"id": notification_id}}
