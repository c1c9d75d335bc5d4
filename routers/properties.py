# routers/properties.py

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import CurrentUser, get_current_user, get_user_store
from core.logging_config import logger
from models.property import PropertyCreate, PropertyRead, PropertyUpdate
from repositories.property_repo import PropertyRepository


router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
)


# -------------------------------------------------------------
# LIST (row-level security decides visibility)
# -------------------------------------------------------------
@router.get("", summary="List properties")
def list_properties(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return {"success": True, "data": PropertyRepository(client).list()}


# -------------------------------------------------------------
# CREATE (caller becomes the owner)
# -------------------------------------------------------------
@router.post("", response_model=PropertyRead, summary="Create property")
def create_property(
    payload: PropertyCreate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    row = PropertyRepository(client).create_owned(payload.model_dump(mode="json"), current_user.id)
    logger.info(f"Property {row.get('id')} created by {current_user.id}")
    return row


# -------------------------------------------------------------
# GET
# -------------------------------------------------------------
@router.get("/{property_id}", response_model=PropertyRead, summary="Get property")
def get_property(
    property_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return PropertyRepository(client).get(property_id)


# -------------------------------------------------------------
# UPDATE
# -------------------------------------------------------------
@router.patch("/{property_id}", response_model=PropertyRead, summary="Update property")
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    data = payload.model_dump(mode="json", exclude_unset=True)
    return PropertyRepository(client).update(property_id, data)


# -------------------------------------------------------------
# DELETE
# -------------------------------------------------------------
@router.delete("/{property_id}", summary="Delete property")
def delete_property(
    property_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    PropertyRepository(client).delete(property_id)
    logger.info(f"Property {property_id} deleted by {current_user.id}")
    return {"success": True, "data": {"id": property_id}}
