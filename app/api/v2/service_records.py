"""Service Records API - Two-phase job documentation.

Check-in moves the job from ASSIGNED to IN_PROGRESS and completion moves it
to COMPLETED. Edits made after completion are recorded as revisions.
"""
from fastapi import APIRouter, Path, Query, status
from typing import Annotated, List
import logging

from app.api.deps import ServiceRecordServiceDep
from app.schemas.job import ServiceRecordWithJob
from app.schemas.service_record import (
    CheckInRequest,
    CompleteRequest,
    UpdateCheckInRequest,
    UpdateCompletionRequest,
    ServiceRecordResponse,
)
from app.schemas.errors import QUERY_ERROR_RESPONSES, TRANSITION_ERROR_RESPONSES
from app.schemas.types import UUID_PATTERN, PHOTO_URL_PATTERN

logger = logging.getLogger(__name__)
router = APIRouter()

RecordId = Annotated[str, Path(pattern=UUID_PATTERN, description="Service record ID")]


@router.get("/recent", response_model=List[ServiceRecordWithJob], responses=QUERY_ERROR_RESPONSES)
async def list_recent_service_records(
    records: ServiceRecordServiceDep,
    limit: int = Query(10, ge=1, le=50),
):
    """Completed service records with their job and equipment, newest completion first."""
    return await records.recent(limit)


@router.post(
    "/check-in",
    response_model=ServiceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses=TRANSITION_ERROR_RESPONSES,
)
async def check_in(data: CheckInRequest, records: ServiceRecordServiceDep):
    """Record arrival on site. The job must be ASSIGNED."""
    return await records.check_in(data)


@router.post("/{record_id}/complete", response_model=ServiceRecordResponse, responses=TRANSITION_ERROR_RESPONSES)
async def complete(
    data: CompleteRequest,
    record_id: RecordId,
    records: ServiceRecordServiceDep,
):
    """Record the finished work. The job must be IN_PROGRESS."""
    return await records.complete(record_id, data)


@router.put("/{record_id}/check-in", response_model=ServiceRecordResponse, responses=TRANSITION_ERROR_RESPONSES)
async def update_check_in(
    data: UpdateCheckInRequest,
    record_id: RecordId,
    records: ServiceRecordServiceDep,
):
    return await records.update_check_in(record_id, data)


@router.put("/{record_id}/completion", response_model=ServiceRecordResponse, responses=TRANSITION_ERROR_RESPONSES)
async def update_completion(
    data: UpdateCompletionRequest,
    record_id: RecordId,
    records: ServiceRecordServiceDep,
):
    return await records.update_completion(record_id, data)


@router.delete("/{record_id}/before-photos", response_model=ServiceRecordResponse, responses=TRANSITION_ERROR_RESPONSES)
async def delete_before_photo(
    record_id: RecordId,
    records: ServiceRecordServiceDep,
    photo_url: str = Query(..., pattern=PHOTO_URL_PATTERN),
):
    """Remove one before photo URL. The stored blob is kept."""
    return await records.delete_before_photo(record_id, photo_url)


@router.delete("/{record_id}/after-photos", response_model=ServiceRecordResponse, responses=TRANSITION_ERROR_RESPONSES)
async def delete_after_photo(
    record_id: RecordId,
    records: ServiceRecordServiceDep,
    photo_url: str = Query(..., pattern=PHOTO_URL_PATTERN),
):
    """Remove one after photo URL. The stored blob is kept."""
    return await records.delete_after_photo(record_id, photo_url)
