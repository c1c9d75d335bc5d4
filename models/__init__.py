from .enums import (
    BackofficeRole,
    AccountStatus,
    TenantStatus,
    RoomType,
    RoomStatus,
    PaymentStatus,
    MaintenanceStatus,
    MaintenancePriority,
    NotificationType,
    NotificationStatus,
)
from .common import RecordRead, MessageResponse
from .property import PropertyCreate, PropertyRead, PropertyUpdate
from .room import RoomCreate, RoomRead, RoomUpdate
from .tenant import TenantCreate, TenantRead, TenantUpdate
from .payment import PaymentCreate, PaymentRead, PaymentUpdate
from .maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceRequestUpdate,
)
from .notification import NotificationCreate, NotificationRead, NotificationList
from .backoffice_user import (
    BackofficeUserRead,
    CreateBackofficeUserRequest,
    DeleteBackofficeUserRequest,
    BackofficeStatusUpdate,
)
from .stats import (
    PropertyStats,
    PropertyStatsReport,
    OccupancySummary,
    FinancialSummary,
    BackofficeOverview,
)
from .auth import LoginRequest, TokenResponse
