from app.models.equipment import Equipment, EquipmentStatus
from app.models.job import Job, JobStatus
from app.models.service_record import ServiceRecord
from app.models.inspection import Inspection

__all__ = [
    "Equipment",
    "EquipmentStatus",
    "Job",
    "JobStatus",
    "ServiceRecord",
    "Inspection",
]
