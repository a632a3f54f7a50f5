"""Jobs API - Technician job lists and job detail.

Job status is never written here; it moves through the service record
endpoints.
"""
from fastapi import APIRouter, Path, Query
from typing import List
import logging

from app.api.deps import JobServiceDep
from app.schemas.job import JobListItem, JobDetailResponse
from app.schemas.errors import QUERY_ERROR_RESPONSES, READ_ERROR_RESPONSES
from app.schemas.types import UUID_PATTERN

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/active", response_model=List[JobListItem], responses=QUERY_ERROR_RESPONSES)
async def list_active_jobs(
    jobs: JobServiceDep,
    technician_id: str = Query(..., min_length=1, description="Technician the jobs are assigned to"),
):
    """ASSIGNED and IN_PROGRESS jobs for a technician, most recently assigned first."""
    return await jobs.list_active(technician_id)


@router.get("/completed", response_model=List[JobListItem], responses=QUERY_ERROR_RESPONSES)
async def list_completed_jobs(
    jobs: JobServiceDep,
    technician_id: str = Query(..., min_length=1, description="Technician the jobs are assigned to"),
):
    """COMPLETED jobs for a technician, most recently updated first."""
    return await jobs.list_completed(technician_id)


@router.get("/{job_id}", response_model=JobDetailResponse, responses=READ_ERROR_RESPONSES)
async def get_job(
    jobs: JobServiceDep,
    job_id: str = Path(..., pattern=UUID_PATTERN),
):
    """Get a single job with its equipment and service record."""
    return await jobs.get_job(job_id)
