# repositories/payment_repo.py

from typing import Any, Dict, List

from core.errors import store_error
from repositories.base import SupabaseRepository


class PaymentRepository(SupabaseRepository):
    table = "payments"
    label = "Payment"

    def amounts_by_status(self, property_id: str, statuses: List[str]) -> List[Dict[str, Any]]:
        """Only the columns the statistics need."""
        try:
            res = (
                self.client.table(self.table)
                .select("amount, status")
                .eq("property_id", property_id)
                .in_("status", statuses)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to fetch payments") from e
        return res.data or []

    def all_amounts_by_status(self, statuses: List[str]) -> List[Dict[str, Any]]:
        try:
            res = (
                self.client.table(self.table)
                .select("amount, status")
                .in_("status", statuses)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to fetch payments") from e
        return res.data or []
