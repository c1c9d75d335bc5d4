# services/property_stats.py

from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from core.errors import StoreError
from core.logging_config import logger
from core.utils import to_amount
from models.enums import (
    OUTSTANDING_PAYMENT_STATUSES,
    PaymentStatus,
    RoomStatus,
    TenantStatus,
)
from models.stats import (
    BackofficeOverview,
    FinancialSummary,
    OccupancySummary,
    PropertyStats,
    PropertyStatsReport,
)
from repositories.backoffice_user_repo import BackofficeUserRepository
from repositories.payment_repo import PaymentRepository
from repositories.property_repo import PropertyRepository
from repositories.room_repo import RoomRepository
from repositories.tenant_repo import TenantRepository


# -----------------------------------------------------
# Pure folds
# -----------------------------------------------------
def occupancy_rate(total: int, occupied: int) -> float:
    """occupied/total × 100, 0 for an empty property, clamped to [0, 100]."""
    if total <= 0:
        return 0.0
    rate = occupied * 100 / total
    return max(0.0, min(100.0, rate))


def sum_amounts(rows: Iterable[Dict[str, Any]]) -> float:
    return sum(to_amount(r.get("amount")) for r in rows)


def count_status(rows: Iterable[Dict[str, Any]], status: str) -> int:
    return sum(1 for r in rows if r.get("status") == status)


# -----------------------------------------------------
# Aggregator
# -----------------------------------------------------
class PropertyStatsService:
    def __init__(self, client: Client):
        self.properties = PropertyRepository(client)
        self.rooms = RoomRepository(client)
        self.tenants = TenantRepository(client)
        self.payments = PaymentRepository(client)
        self.backoffice_users = BackofficeUserRepository(client)

    def property_stats(self, property_id: str) -> PropertyStats:
        rooms = self.rooms.get_by_property(property_id)
        active_tenants = self.tenants.count(property_id=property_id, status=TenantStatus.active.value)
        paid = self.payments.amounts_by_status(property_id, [PaymentStatus.paid.value])
        outstanding = self.payments.amounts_by_status(property_id, OUTSTANDING_PAYMENT_STATUSES)

        total_rooms = len(rooms)
        occupied = count_status(rooms, RoomStatus.occupied.value)

        return PropertyStats(
            property_id=property_id,
            total_rooms=total_rooms,
            occupied_rooms=occupied,
            occupancy_rate=occupancy_rate(total_rooms, occupied),
            total_tenants=active_tenants,
            total_revenue=sum_amounts(paid),
            pending_payments=sum_amounts(outstanding),
        )

    def all_property_stats(self, property_ids: Optional[List[str]] = None) -> PropertyStatsReport:
        """
        Stats for each property, computed independently: a store failure
        for one property is reported under `errors` and the rest still
        come back.
        """
        if property_ids is None:
            property_ids = [p["id"] for p in self.properties.list()]

        report = PropertyStatsReport()
        for property_id in property_ids:
            try:
                report.stats[property_id] = self.property_stats(property_id)
            except StoreError as e:
                logger.warning(f"Stats unavailable for property {property_id}: {e.message}")
                report.errors[property_id] = e.message

        return report

    def occupancy_summary(self, property_id: str) -> OccupancySummary:
        rooms = self.rooms.get_by_property(property_id)
        total = len(rooms)
        occupied = count_status(rooms, RoomStatus.occupied.value)

        return OccupancySummary(
            total=total,
            occupied=occupied,
            vacant=count_status(rooms, RoomStatus.vacant.value),
            maintenance=count_status(rooms, RoomStatus.maintenance.value),
            occupancy_rate=occupancy_rate(total, occupied),
        )

    def financial_summary(self, property_id: str) -> FinancialSummary:
        rows = self.payments.amounts_by_status(
            property_id, [PaymentStatus.paid.value] + OUTSTANDING_PAYMENT_STATUSES
        )

        def total(status: str) -> float:
            return sum_amounts(r for r in rows if r.get("status") == status)

        return FinancialSummary(
            total_revenue=total(PaymentStatus.paid.value),
            pending_payments=total(PaymentStatus.pending.value),
            overdue_payments=total(PaymentStatus.overdue.value),
        )

    def backoffice_overview(self) -> BackofficeOverview:
        paid = self.payments.all_amounts_by_status([PaymentStatus.paid.value])

        return BackofficeOverview(
            total_users=self.backoffice_users.count(),
            total_properties=self.properties.count(),
            total_revenue=sum_amounts(paid),
            active_tenants=self.tenants.count(status=TenantStatus.active.value),
        )
