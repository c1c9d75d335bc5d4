# repositories/property_repo.py

from typing import Any, Dict, List

from core.errors import store_error
from repositories.base import SupabaseRepository


class PropertyRepository(SupabaseRepository):
    table = "properties"
    label = "Property"
    property_scoped = False

    def list(self) -> List[Dict[str, Any]]:
        """Every property visible to the caller (RLS decides), newest first."""
        try:
            res = (
                self.client.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to fetch properties") from e
        return res.data or []

    def get_by_property(self, property_id: str) -> List[Dict[str, Any]]:
        return [self.get(property_id)]

    def create_owned(self, data: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        return self.create({**data, "owner_id": owner_id})
