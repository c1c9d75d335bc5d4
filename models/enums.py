from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# BACKOFFICE
# -----------------------------------------------------
class BackofficeRole(BaseStrEnum):
    """Platform-operator roles. Only superadmin manages accounts."""

    superadmin = "superadmin"
    admin = "admin"
    support = "support"


class AccountStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"


# -----------------------------------------------------
# TENANTS
# -----------------------------------------------------
class TenantStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"


# -----------------------------------------------------
# ROOMS
# -----------------------------------------------------
class RoomType(BaseStrEnum):
    single = "single"
    double = "double"
    deluxe = "deluxe"


class RoomStatus(BaseStrEnum):
    occupied = "occupied"
    vacant = "vacant"
    maintenance = "maintenance"


# -----------------------------------------------------
# PAYMENTS (also used for tenant.payment_status)
# -----------------------------------------------------
class PaymentStatus(BaseStrEnum):
    paid = "paid"
    pending = "pending"
    overdue = "overdue"


OUTSTANDING_PAYMENT_STATUSES = [PaymentStatus.pending.value, PaymentStatus.overdue.value]


# -----------------------------------------------------
# MAINTENANCE
# -----------------------------------------------------
class MaintenanceStatus(BaseStrEnum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class MaintenancePriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"


# -----------------------------------------------------
# NOTIFICATIONS
# -----------------------------------------------------
class NotificationType(BaseStrEnum):
    system = "system"
    user = "user"
    property = "property"
    payment = "payment"


class NotificationStatus(BaseStrEnum):
    unread = "unread"
    read = "read"
