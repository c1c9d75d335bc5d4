from fastapi import APIRouter

from .auth import router as auth_router
from .backoffice import router as backoffice_router
from .backoffice_users import router as backoffice_users_router
from .health import router as health_router
from .maintenance import router as maintenance_router
from .notifications import router as notifications_router
from .payments import router as payments_router
from .properties import router as properties_router
from .rooms import router as rooms_router
from .stats import router as stats_router
from .tenants import router as tenants_router


api_router = APIRouter()

# Auth
api_router.include_router(auth_router)

# Core Data Routers
api_router.include_router(properties_router)
api_router.include_router(rooms_router)
api_router.include_router(tenants_router)
api_router.include_router(payments_router)
api_router.include_router(maintenance_router)
api_router.include_router(notifications_router)
api_router.include_router(stats_router)

# Backoffice
api_router.include_router(backoffice_users_router)
api_router.include_router(backoffice_router)

# Health
api_router.include_router(health_router)
