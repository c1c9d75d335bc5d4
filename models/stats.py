# models/stats.py

from typing import Dict
from pydantic import BaseModel


class PropertyStats(BaseModel):
    property_id: str
    total_rooms: int = 0
    occupied_rooms: int = 0
    occupancy_rate: float = 0.0
    total_tenants: int = 0               # active tenants only
    total_revenue: float = 0.0           # sum of paid payments
    pending_payments: float = 0.0        # sum of pending + overdue payments


class PropertyStatsReport(BaseModel):
    """Per-property results; one failed property never hides the others."""
    stats: Dict[str, PropertyStats] = {}
    errors: Dict[str, str] = {}


class OccupancySummary(BaseModel):
    total: int = 0
    occupied: int = 0
    vacant: int = 0
    maintenance: int = 0
    occupancy_rate: float = 0.0


class FinancialSummary(BaseModel):
    total_revenue: float = 0.0
    pending_payments: float = 0.0
    overdue_payments: float = 0.0


class BackofficeOverview(BaseModel):
    total_users: int = 0
    total_properties: int = 0
    total_revenue: float = 0.0
    active_tenants: int = 0
