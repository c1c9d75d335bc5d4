# repositories/maintenance_repo.py

from repositories.base import SupabaseRepository


class MaintenanceRequestRepository(SupabaseRepository):
    table = "maintenance_requests"
    label = "Maintenance request"
