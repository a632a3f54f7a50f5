from app.schemas.equipment import (
    EquipmentSummary,
    EquipmentResponse,
    EquipmentBrief,
)
from app.schemas.inspection import (
    InspectionCreate,
    InspectionResponse,
    InspectionWithEquipment,
    EquipmentDetailResponse,
)
from app.schemas.service_record import (
    CheckInRequest,
    CompleteRequest,
    UpdateCheckInRequest,
    UpdateCompletionRequest,
    ServiceRecordSummary,
    ServiceRecordResponse,
)
from app.schemas.job import (
    JobResponse,
    JobListItem,
    JobDetailResponse,
    JobWithEquipment,
    ServiceRecordWithJob,
)
from app.schemas.upload import UploadRequest, UploadResponse

__all__ = [
    "EquipmentSummary",
    "EquipmentResponse",
    "EquipmentBrief",
    "InspectionCreate",
    "InspectionResponse",
    "InspectionWithEquipment",
    "EquipmentDetailResponse",
    "CheckInRequest",
    "CompleteRequest",
    "UpdateCheckInRequest",
    "UpdateCompletionRequest",
    "ServiceRecordSummary",
    "ServiceRecordResponse",
    "JobResponse",
    "JobListItem",
    "JobDetailResponse",
    "JobWithEquipment",
    "ServiceRecordWithJob",
    "UploadRequest",
    "UploadResponse",
]
