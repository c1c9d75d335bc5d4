# routers/maintenance.py

from models.maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceRequestUpdate,
)
from repositories.maintenance_repo import MaintenanceRequestRepository
from routers.crud import property_scoped_router


router = property_scoped_router(
    prefix="/maintenance-requests",
    tag="Maintenance",
    repo_cls=MaintenanceRequestRepository,
    create_model=MaintenanceRequestCreate,
    update_model=MaintenanceRequestUpdate,
    read_model=MaintenanceRequestRead,
)
