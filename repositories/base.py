# repositories/base.py

"""
Base repository over a Supabase (PostgREST) table.

Every call goes straight to the hosted store; store rejections are
wrapped in StoreError subclasses with the store's message intact and
are never retried here. Successful writes are published to the
in-process change feed.
"""

from typing import Any, Dict, List, Optional

from supabase import Client

from core.change_feed import ChangeFeed, change_feed
from core.errors import (
    CreateFailed,
    DeleteFailed,
    NotFound,
    StoreError,
    UpdateFailed,
    store_error,
)
from core.utils import sanitize, utc_now_iso


class SupabaseRepository:
    table: str = ""
    label: str = "Record"
    order_column: str = "created_at"
    order_desc: bool = True
    touches_updated_at: bool = True
    property_scoped: bool = True

    def __init__(self, client: Client, feed: ChangeFeed = change_feed):
        self.client = client
        self.feed = feed

    # -----------------------------------------------------
    # READ
    # -----------------------------------------------------
    def get_by_property(self, property_id: str) -> List[Dict[str, Any]]:
        try:
            res = (
                self.client.table(self.table)
                .select("*")
                .eq("property_id", property_id)
                .order(self.order_column, desc=self.order_desc)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Failed to fetch {self.table}") from e
        return res.data or []

    def find(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table(self.table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Failed to fetch {self.table}") from e
        return res.data[0] if res.data else None

    def get(self, record_id: str) -> Dict[str, Any]:
        row = self.find(record_id)
        if not row:
            raise NotFound(f"{self.label} not found")
        return row

    # -----------------------------------------------------
    # WRITE
    # -----------------------------------------------------
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = sanitize(data)

        if self.property_scoped:
            self._require_property(cleaned.get("property_id"))

        try:
            res = self.client.table(self.table).insert(cleaned).execute()
        except Exception as e:
            raise store_error(e, f"Failed to create {self.label.lower()}", CreateFailed) from e

        if not res.data:
            raise CreateFailed(f"Failed to create {self.label.lower()}: no data returned")

        row = res.data[0]
        self.feed.publish_row(self.table, "INSERT", row)
        return row

    def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = sanitize(data)
        if self.touches_updated_at:
            cleaned["updated_at"] = utc_now_iso()

        try:
            res = (
                self.client.table(self.table)
                .update(cleaned)
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Failed to update {self.label.lower()}", UpdateFailed) from e

        if not res.data:
            raise NotFound(f"{self.label} not found")

        row = res.data[0]
        self.feed.publish_row(self.table, "UPDATE", row, {"id": record_id})
        return row

    def delete(self, record_id: str) -> Dict[str, Any]:
        try:
            res = (
                self.client.table(self.table)
                .delete()
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Failed to delete {self.label.lower()}", DeleteFailed) from e

        if not res.data:
            raise NotFound(f"{self.label} not found")

        row = res.data[0]
        self.feed.publish_row(self.table, "DELETE", {}, row)
        return row

    # -----------------------------------------------------
    # Helpers
    # -----------------------------------------------------
    def count(self, **filters) -> int:
        try:
            query = self.client.table(self.table).select("id", count="exact")
            for column, value in filters.items():
                if isinstance(value, (list, tuple)):
                    query = query.in_(column, list(value))
                else:
                    query = query.eq(column, value)
            res = query.execute()
        except Exception as e:
            raise store_error(e, f"Failed to count {self.table}") from e

        if res.count is not None:
            return res.count
        return len(res.data or [])

    def _require_property(self, property_id: Optional[str]):
        if not property_id:
            raise NotFound("Property not found")

        try:
            res = (
                self.client.table("properties")
                .select("id")
                .eq("id", property_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to verify property", StoreError) from e

        if not res.data:
            raise NotFound(f"Property {property_id} not found")
