"""Job schemas. Jobs are read-only through the API."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.job import JobStatus
from app.schemas.equipment import EquipmentSummary, EquipmentResponse
from app.schemas.service_record import ServiceRecordSummary, ServiceRecordResponse


class JobResponse(BaseModel):
    id: str
    equipment_id: str
    customer_id: str
    customer_name: str
    site_address: str
    contact_name: str
    contact_phone: str
    contact_email: Optional[str] = None
    issue_description: str
    status: JobStatus
    technician_id: Optional[str] = None
    technician_name: Optional[str] = None
    assigned_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class JobListItem(JobResponse):
    """Job row for the technician's active/completed lists."""

    equipment: EquipmentSummary
    service_record: Optional[ServiceRecordSummary] = None


class JobDetailResponse(JobResponse):
    equipment: EquipmentResponse
    service_record: Optional[ServiceRecordResponse] = None


class JobWithEquipment(JobResponse):
    equipment: EquipmentResponse


class ServiceRecordWithJob(ServiceRecordResponse):
    """Completed record for the recent-work feed."""

    job: JobWithEquipment
