# routers/tenants.py

from models.tenant import TenantCreate, TenantRead, TenantUpdate
from repositories.tenant_repo import TenantRepository
from routers.crud import property_scoped_router


router = property_scoped_router(
    prefix="/tenants",
    tag="Tenants",
    repo_cls=TenantRepository,
    create_model=TenantCreate,
    update_model=TenantUpdate,
    read_model=TenantRead,
)
