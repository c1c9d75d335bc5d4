# routers/stats.py

from fastapi import APIRouter, Depends
from supabase import Client

from dependencies.auth import CurrentUser, get_current_user, get_user_store
from models.stats import (
    FinancialSummary,
    OccupancySummary,
    PropertyStats,
    PropertyStatsReport,
)
from services.property_stats import PropertyStatsService


router = APIRouter(
    prefix="/stats",
    tags=["Statistics"],
)


# -----------------------------------------------------
# Every property the caller can see
# -----------------------------------------------------
@router.get("/properties", response_model=PropertyStatsReport, summary="Stats for all visible properties")
def all_property_stats(
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).all_property_stats()


@router.get("/properties/{property_id}", response_model=PropertyStats, summary="Stats for one property")
def property_stats(
    property_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).property_stats(property_id)


@router.get("/properties/{property_id}/occupancy", response_model=OccupancySummary)
def occupancy(
    property_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).occupancy_summary(property_id)


@router.get("/properties/{property_id}/financial", response_model=FinancialSummary)
def financial(
    property_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_store),
):
    return PropertyStatsService(client).financial_summary(property_id)
