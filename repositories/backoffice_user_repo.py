# repositories/backoffice_user_repo.py

from typing import Any, Dict, List, Optional

from core.errors import CreateFailed, store_error
from core.utils import utc_now_iso
from repositories.base import SupabaseRepository


class BackofficeUserRepository(SupabaseRepository):
    """
    Profile rows for platform operators. `id` is the Supabase Auth
    identity id; deleting the identity cascades to this row.
    """

    table = "backoffice_users"
    label = "User"
    property_scoped = False

    def list(self) -> List[Dict[str, Any]]:
        try:
            res = (
                self.client.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to fetch backoffice users") from e
        return res.data or []

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table(self.table)
                .select("id, email")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to check existing user") from e
        return res.data[0] if res.data else None

    def insert_profile(self, user_id: str, email: str, name: str, role: str, status: str) -> Dict[str, Any]:
        try:
            res = (
                self.client.table(self.table)
                .insert({
                    "id": user_id,
                    "email": email,
                    "name": name,
                    "role": role,
                    "status": status,
                })
                .execute()
            )
        except Exception as e:
            raise store_error(e, "Failed to create backoffice user", CreateFailed) from e

        if not res.data:
            raise CreateFailed("Failed to create backoffice user")

        row = res.data[0]
        self.feed.publish_row(self.table, "INSERT", row)
        return row

    def record_login(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Stamp last_login; returns None for identities without a profile."""
        if not self.find(user_id):
            return None
        return self.update(user_id, {"last_login": utc_now_iso()})
