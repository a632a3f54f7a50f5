"""Service record schemas for the check-in / completion workflow."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.models.service_record import MAX_PHOTOS
from app.schemas.types import EntityId, PhotoUrl


class CheckInRequest(BaseModel):
    """Arrival on site: before photos, notes and engine hours."""

    job_id: EntityId
    before_photos: list[PhotoUrl] = Field(..., max_length=MAX_PHOTOS)
    before_notes: Optional[str] = Field(None, max_length=2000)
    before_engine_hours: int = Field(..., gt=0)
    arrived_at: datetime


class UpdateCheckInRequest(BaseModel):
    before_photos: list[PhotoUrl] = Field(..., max_length=MAX_PHOTOS)
    before_notes: Optional[str] = Field(None, max_length=2000)
    before_engine_hours: int = Field(..., gt=0)


class UpdateCompletionRequest(BaseModel):
    after_photos: list[PhotoUrl] = Field(..., max_length=MAX_PHOTOS)
    diagnosis: str = Field(..., min_length=1, max_length=2000)
    work_performed: str = Field(..., min_length=1, max_length=2000)
    parts_used: Optional[str] = Field(None, max_length=2000)
    after_engine_hours: int = Field(..., gt=0)


class CompleteRequest(UpdateCompletionRequest):
    """Job completion: diagnosis, work performed, after photos and engine hours."""

    completed_at: datetime


class ServiceRecordSummary(BaseModel):
    """Check-in projection embedded in job lists."""

    id: str
    before_photos: list[str]
    before_notes: Optional[str] = None
    before_engine_hours: int
    arrived_at: datetime
    is_check_in_complete: bool
    revised_at: Optional[datetime] = None
    revision_count: int

    model_config = ConfigDict(from_attributes=True)


class ServiceRecordResponse(ServiceRecordSummary):
    job_id: str
    after_photos: list[str]
    diagnosis: Optional[str] = None
    work_performed: Optional[str] = None
    parts_used: Optional[str] = None
    after_engine_hours: Optional[int] = None
    completed_at: Optional[datetime] = None
    is_job_complete: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
