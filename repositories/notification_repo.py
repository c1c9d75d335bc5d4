# repositories/notification_repo.py

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.change_feed import ChangeFilter
from core.errors import UpdateFailed, store_error
from models.enums import NotificationStatus
from repositories.base import SupabaseRepository


# ============================================================
# Visibility scope
# ============================================================

@dataclass(frozen=True)
class NotificationScope:
    """
    Which notifications a consumer sees.

    - user scope: targeted at `user_id`, or broadcast (no target user)
    - include_all: every row (backoffice console)
    - property_id: additionally narrow to that property or to rows
      with no target property

    The same scope drives listing, bulk mark-read and the change
    subscription.
    """

    user_id: Optional[str] = None
    property_id: Optional[str] = None
    include_all: bool = False

    @classmethod
    def for_user(cls, user_id: str, property_id: Optional[str] = None) -> "NotificationScope":
        return cls(user_id=user_id, property_id=property_id)

    @classmethod
    def backoffice(cls, property_id: Optional[str] = None) -> "NotificationScope":
        return cls(property_id=property_id, include_all=True)

    def apply(self, query):
        if not self.include_all:
            query = query.or_(f"target_user_id.eq.{self.user_id},target_user_id.is.null")
        if self.property_id:
            query = query.or_(f"target_property_id.eq.{self.property_id},target_property_id.is.null")
        return query

    def where(self):
        clauses = []
        if not self.include_all:
            clauses.append(("target_user_id", (self.user_id, None)))
        if self.property_id:
            clauses.append(("target_property_id", (self.property_id, None)))
        return tuple(clauses)

    def change_filter(self) -> ChangeFilter:
        return ChangeFilter(table=NotificationRepository.table, where=self.where())

    def matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) in accepted for column, accepted in self.where())


# ============================================================
# Repository
# ============================================================

class NotificationRepository(SupabaseRepository):
    table = "notifications"
    label = "Notification"
    touches_updated_at = False
    property_scoped = False

    def list(self, scope: NotificationScope) -> List[Dict[str, Any]]:
        try:
            query = self.client.table(self.table).select("*")
            res = scope.apply(query).order("created_at", desc=True).execute()
        except Exception as e:
            raise store_error(e, "Failed to fetch notifications") from e
        return res.data or []

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return super().create({**data, "status": NotificationStatus.unread.value})

    def mark_read(self, notification_id: str) -> Dict[str, Any]:
        return self.update(notification_id, {"status": NotificationStatus.read.value})

    def mark_all_read(self, scope: NotificationScope) -> int:
        """Mark every unread notification in scope as read. Returns the row count."""
        try:
            query = self.client.table(self.table).update({"status": NotificationStatus.read.value})
            res = scope.apply(query).eq("status", NotificationStatus.unread.value).execute()
        except Exception as e:
            raise store_error(e, "Failed to mark notifications as read", UpdateFailed) from e

        rows = res.data or []
        for row in rows:
            self.feed.publish_row(self.table, "UPDATE", row, {"id": row.get("id")})
        return len(rows)
