# -------------------------
# Entity repositories (Supabase / PostgREST)
# -------------------------
from .base import SupabaseRepository
from .property_repo import PropertyRepository
from .room_repo import RoomRepository
from .tenant_repo import TenantRepository
from .payment_repo import PaymentRepository
from .maintenance_repo import MaintenanceRequestRepository
from .notification_repo import NotificationRepository, NotificationScope
from .backoffice_user_repo import BackofficeUserRepository

__all__ = [
    "SupabaseRepository",
    "PropertyRepository",
    "RoomRepository",
    "TenantRepository",
    "PaymentRepository",
    "MaintenanceRequestRepository",
    "NotificationRepository",
    "NotificationScope",
    "BackofficeUserRepository",
]
