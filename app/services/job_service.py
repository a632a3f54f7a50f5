"""
Job lifecycle queries for the technician app.

Jobs change status only through service record operations; this service is
the read side: the technician's active and completed lists and the job detail.
"""
import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import NotFoundError, ValidationError
from app.models.job import Job, JobStatus, ACTIVE_JOB_STATUSES

logger = logging.getLogger(__name__)

JOB_NOT_FOUND = "Job not found"


class JobService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active(self, technician_id: str) -> list[Job]:
        """ASSIGNED and IN_PROGRESS jobs for a technician, most recently assigned first."""
        return await self._list_for_technician(
            technician_id, ACTIVE_JOB_STATUSES, order_by=Job.assigned_at.desc()
        )

    async def list_completed(self, technician_id: str) -> list[Job]:
        """COMPLETED jobs for a technician, most recently updated first."""
        return await self._list_for_technician(
            technician_id, (JobStatus.COMPLETED,), order_by=Job.updated_at.desc()
        )

    async def get_job(self, job_id: str) -> Job:
        """Job with its full equipment and service record (or None)."""
        result = await self.db.execute(
            select(Job)
            .where(Job.id == job_id)
            .options(selectinload(Job.equipment), selectinload(Job.service_record))
            .execution_options(populate_existing=True)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError(JOB_NOT_FOUND)
        return job

    async def _list_for_technician(
        self,
        technician_id: str,
        statuses: Iterable[JobStatus],
        order_by,
    ) -> list[Job]:
        if not technician_id or not technician_id.strip():
            raise ValidationError("Technician ID required")

        query = (
            select(Job)
            .where(
                Job.technician_id == technician_id,
                Job.status.in_([s.value for s in statuses]),
            )
            .options(selectinload(Job.equipment), selectinload(Job.service_record))
            .order_by(order_by)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        jobs = list(result.scalars().all())
        logger.debug(f"Found {len(jobs)} job(s) for technician {technician_id}")
        return jobs
