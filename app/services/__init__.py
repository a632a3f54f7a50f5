# Services module
from app.services.photo_store import PhotoStore, SupabasePhotoStore, MockPhotoStore, create_photo_store
from app.services.job_transitions import JobTransition, apply_transition, check_transition
from app.services.job_service import JobService
from app.services.service_record_service import ServiceRecordService
from app.services.equipment_service import EquipmentService
from app.services.inspection_service import InspectionService

__all__ = [
    "PhotoStore",
    "SupabasePhotoStore",
    "MockPhotoStore",
    "create_photo_store",
    # Job lifecycle
    "JobTransition",
    "apply_transition",
    "check_transition",
    "JobService",
    "ServiceRecordService",
    # Equipment and inspections
    "EquipmentService",
    "InspectionService",
]
