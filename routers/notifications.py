# routers/notifications.py

import asyncio
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from supabase import Client

from core.change_feed import SIGNED_IN, SIGNED_OUT
from core.errors import AppError, Unauthorized
from core.logging_config import logger
from core.supabase_client import get_user_client
from dependencies.auth import CurrentUser, get_current_user, get_user_store, resolve_identity
from models.enums import NotificationStatus
from models.notification import NotificationCreate, NotificationList, NotificationRead
from repositories.notification_repo import NotificationRepository, NotificationScope
from services.notification_pipeline import NotificationFeed, publish_auth_state


router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


def build_list(items: List[Dict[str, Any]]) -> NotificationList:
    unread = sum(1 for n in items if n.get("status") == NotificationStatus.unread.value)
    return NotificationList(unread_count=unread, data=items)


# -----------------------------------------------------
# LIST (targeted at me, or broadcast)
# -----------------------------------------------------
@router.get("", response_model=NotificationList, summary="List my notifications")
def list_notifications(
    property_id: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    scope = NotificationScope.for_user(current_user.id, property_id)
    return build_list(NotificationRepository(client).list(scope))


# -----------------------------------------------------
# CREATE
# -----------------------------------------------------
@router.post("", response_model=NotificationRead, summary="Create notification")
def create_notification(
    payload: NotificationCreate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return NotificationRepository(client).create(payload.model_dump(mode="json"))


# -----------------------------------------------------
# MARK ALL READ (same scope as the list)
# -----------------------------------------------------
@router.post("/read-all", summary="Mark all my notifications as read")
def mark_all_read(
    property_id: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    scope = NotificationScope.for_user(current_user.id, property_id)
    updated = NotificationRepository(client).mark_all_read(scope)
    return {"success": True, "updated": updated}


# -----------------------------------------------------
# MARK ONE READ
# -----------------------------------------------------
@router.patch("/{notification_id}/read", response_model=NotificationRead, summary="Mark notification as read")
def mark_read(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return NotificationRepository(client).mark_read(notification_id)


# -----------------------------------------------------
# DELETE
# -----------------------------------------------------
@router.delete("/{notification_id}", summary="Delete notification")
def delete_notification(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    NotificationRepository(client).delete(notification_id)
    return {"success": True, "data": {"id": notification_id}}


# -----------------------------------------------------
# LIVE FEED
#
#   ws://.../notifications/ws?token=<jwt>[&property_id=<id>]
#
# Server → client: {"unread_count": n, "data": [...]} on every reload.
# Client → server: {"event": "SIGNED_OUT"} clears the list,
#                  {"event": "SIGNED_IN"} reloads it.
# -----------------------------------------------------
@router.websocket("/ws")
async def notifications_ws(
    websocket: WebSocket,
    token: str = Query(...),
    property_id: Optional[str] = None,
):
    client = get_user_client(token)
    if client is None:
        await websocket.close(code=1011)
        return

    try:
        user = await run_in_threadpool(resolve_identity, client, token)
    except Unauthorized:
        await websocket.close(code=4401)
        return

    await websocket.accept()

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    feed = NotificationFeed(
        NotificationRepository(client),
        NotificationScope.for_user(user.id, property_id),
        on_update=lambda items: loop.call_soon_threadsafe(queue.put_nowait, items),
    )

    try:
        await run_in_threadpool(feed.start)
    except AppError as e:
        logger.error(f"Notification feed for {user.id} failed to start: {e.message}")
        feed.stop()
        await websocket.close(code=1011)
        return

    async def pump():
        while True:
            items = await queue.get()
            await websocket.send_json(build_list(items).model_dump(mode="json"))

    sender = asyncio.create_task(pump())

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.warning(f"Ignoring non-JSON frame on notification feed for {user.id}")
                continue
            event = message.get("event") if isinstance(message, dict) else None
            if event in (SIGNED_IN, SIGNED_OUT):
                await run_in_threadpool(publish_auth_state, event, user.id)
    except WebSocketDisconnect:
        logger.info(f"Notification feed closed for {user.id}")
    finally:
        feed.stop()
        feed.clear()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.warning(f"Notification sender for {user.id} stopped: {e}")
