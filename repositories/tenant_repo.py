# repositories/tenant_repo.py

from repositories.base import SupabaseRepository


class TenantRepository(SupabaseRepository):
    table = "tenants"
    label = "Tenant"
