# routers/crud.py

from typing import Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from supabase import Client

from dependencies.auth import CurrentUser, get_current_user, get_user_store
from core.logging_config import logger
from repositories.base import SupabaseRepository


def property_scoped_router(
    prefix: str,
    tag: str,
    repo_cls: Type[SupabaseRepository],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    read_model: Type[BaseModel],
) -> APIRouter:
    """
    Standard routes for an entity that belongs to a property:

        GET    {prefix}/property/{property_id}
        POST   {prefix}
        GET    {prefix}/{id}
        PATCH  {prefix}/{id}
        DELETE {prefix}/{id}

    All run with the caller's RLS-scoped client.
    """

    router = APIRouter(prefix=prefix, tags=[tag])
    label = repo_cls.label.lower()

    # -------------------------------------------------------------
    # LIST for a Property
    # -------------------------------------------------------------
    @router.get("/property/{property_id}", summary=f"List {tag} for a property")
    def list_for_property(
        property_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        client: Client = Depends(get_user_store),
    ):
        rows = repo_cls(client).get_by_property(property_id)
        return {"success": True, "data": rows}

    # -------------------------------------------------------------
    # CREATE
    # -------------------------------------------------------------
    @router.post("", response_model=read_model, summary=f"Create {label}")
    def create(
        payload: create_model,
        current_user: CurrentUser = Depends(get_current_user),
        client: Client = Depends(get_user_store),
    ):
        row = repo_cls(client).create(payload.model_dump(mode="json"))
        logger.info(f"{repo_cls.label} {row.get('id')} created by {current_user.id}")
        return row

    # -------------------------------------------------------------
    # GET one
    # -------------------------------------------------------------
    @router.get("/{record_id}", response_model=read_model, summary=f"Get {label}")
    def get_one(
        record_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        client: Client = Depends(get_user_store),
    ):
        return repo_cls(client).get(record_id)

    # -------------------------------------------------------------
    # UPDATE
    # -------------------------------------------------------------
    @router.patch("/{record_id}", response_model=read_model, summary=f"Update {label}")
    def update(
        record_id: str,
        payload: update_model,
        current_user: CurrentUser = Depends(get_current_user),
        client: Client = Depends(get_user_store),
    ):
        data = payload.model_dump(mode="json", exclude_unset=True)
        return repo_cls(client).update(record_id, data)

    # -------------------------------------------------------------
    # DELETE
    # -------------------------------------------------------------
    @router.delete("/{record_id}", summary=f"Delete {label}")
    def delete(
        record_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        client: Client = Depends(get_user_store),
    ):
        repo_cls(client).delete(record_id)
        logger.info(f"{repo_cls.label} {record_id} deleted by {current_user.id}")
        return {"success": True, "data": {"id": record_id}}

    return router
