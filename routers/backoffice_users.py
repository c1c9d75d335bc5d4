# routers/backoffice_users.py

"""
Privileged account endpoints for the backoffice console.

Both run with the service-role client and answer in one shape:

    200 {"message": "..."}   on success
    400 {"message": "..."}   on any failure (auth, validation, store)
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from core.errors import AppError, StoreError, ValidationFailed
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from services.admin_users import BackofficeUserService


router = APIRouter(
    tags=["Backoffice Users"],
)


def message_response(message: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def service_or_fail() -> BackofficeUserService:
    client = get_supabase_client()
    if client is None:
        raise StoreError("Supabase client not configured")
    return BackofficeUserService(client)


async def read_json_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationFailed("Invalid JSON body")
    if not isinstance(body, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return body


# -----------------------------------------------------
# POST /create-backoffice-user
# -----------------------------------------------------
@router.post("/create-backoffice-user", summary="Create a backoffice user (superadmin only)")
async def create_backoffice_user(
    request: Request,
    authorization: Optional[str] = Header(None),
):
    try:
        service = service_or_fail()
        caller = await run_in_threadpool(service.authenticate, authorization)
        payload = await read_json_body(request)
        message = await run_in_threadpool(service.create_admin_user, caller, payload)
    except AppError as e:
        logger.warning(f"create-backoffice-user rejected: {e.message}")
        return message_response(e.message, 400)

    return message_response(message)


# -----------------------------------------------------
# POST /delete-backoffice-user
# -----------------------------------------------------
@router.post("/delete-backoffice-user", summary="Delete a backoffice user (superadmin only)")
async def delete_backoffice_user(
    request: Request,
    authorization: Optional[str] = Header(None),
):
    try:
        service = service_or_fail()
        caller = await run_in_threadpool(service.authenticate, authorization)
        payload = await read_json_body(request)
        message = await run_in_threadpool(service.delete_admin_user, caller, payload)
    except AppError as e:
        logger.warning(f"delete-backoffice-user rejected: {e.message}")
        return message_response(e.message, 400)

    return message_response(message)
