"""
Service record lifecycle: check-in, completion and post-completion amendments.

Every operation validates state first and then writes in a single
transaction on the request's session. Check-in and completion also move the
parent job (see app.services.job_transitions) inside that same transaction.

Amendments made while the parent job is COMPLETED are revisions: they bump
revision_count by one and stamp revised_at. The job row is re-read with a row
lock at the start of each amendment so the decision and the update see the
same status.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import ErrorCode, InvalidStateError, NotFoundError, UpstreamError
from app.models.job import Job, JobStatus
from app.models.service_record import ServiceRecord
from app.schemas.service_record import (
    CheckInRequest,
    CompleteRequest,
    UpdateCheckInRequest,
    UpdateCompletionRequest,
)
from app.services.job_service import JOB_NOT_FOUND
from app.services.job_transitions import JobTransition, apply_transition, check_transition
from app.services.photo_store import PhotoStore

logger = logging.getLogger(__name__)

SERVICE_RECORD_NOT_FOUND = "Service record not found"
SERVICE_RECORD_EXISTS = "Service record already exists for this job"
CHECK_IN_INCOMPLETE = "Cannot complete job before check-in is complete"
JOB_ALREADY_COMPLETED = "Job is already completed"
JOB_NOT_COMPLETED = "Job has not been completed yet"
ENGINE_HOURS_DECREASED = "After engine hours cannot be less than before engine hours"
BEFORE_HOURS_EXCEED_AFTER = "Before engine hours cannot exceed after engine hours"

DEFAULT_RECENT_LIMIT = 10


def _is_duplicate_service_record(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "uq_service_records_job_id" in message or "service_records.job_id" in message


class ServiceRecordService:
    def __init__(self, db: AsyncSession, photo_store: PhotoStore):
        self.db = db
        self.photo_store = photo_store

    # ---- Two-phase workflow ----

    async def check_in(self, data: CheckInRequest) -> ServiceRecord:
        """Create the job's service record and move the job to IN_PROGRESS."""
        result = await self.db.execute(
            select(Job)
            .where(Job.id == data.job_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError(JOB_NOT_FOUND)

        check_transition(job, JobTransition.TO_IN_PROGRESS)

        # Fast path only; uq_service_records_job_id settles concurrent check-ins
        if await self._record_exists_for_job(job.id):
            raise InvalidStateError(SERVICE_RECORD_EXISTS)

        record = ServiceRecord(
            job_id=job.id,
            before_photos=list(data.before_photos),
            before_notes=data.before_notes,
            before_engine_hours=data.before_engine_hours,
            arrived_at=data.arrived_at,
            is_check_in_complete=True,
        )

        try:
            self.db.add(record)
            apply_transition(job, JobTransition.TO_IN_PROGRESS)
            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            # The winning check-in may reference the same photos; leave them in place
            if isinstance(exc, IntegrityError) and _is_duplicate_service_record(exc):
                raise InvalidStateError(SERVICE_RECORD_EXISTS) from exc
            await self._discard_photos(data.before_photos, reason=f"failed check-in for job {data.job_id}")
            if isinstance(exc, SQLAlchemyError):
                logger.error(f"Check-in transaction failed for job {data.job_id}: {exc}")
                raise UpstreamError("Database", "check-in could not be saved", code=ErrorCode.DATABASE_ERROR) from exc
            raise

        await self.db.refresh(record)
        logger.info(f"Checked in to job {job.id}: service record {record.id}, job now IN_PROGRESS")
        return record

    async def complete(self, record_id: str, data: CompleteRequest) -> ServiceRecord:
        """Store the after bundle and move the job to COMPLETED."""
        record, job = await self._load_for_update(record_id)

        if not record.is_check_in_complete:
            raise InvalidStateError(CHECK_IN_INCOMPLETE)
        if record.is_job_complete:
            raise InvalidStateError(JOB_ALREADY_COMPLETED)
        check_transition(job, JobTransition.TO_COMPLETED)
        if data.after_engine_hours < record.before_engine_hours:
            raise InvalidStateError(ENGINE_HOURS_DECREASED)

        self._set_after_bundle(record, data)
        record.completed_at = data.completed_at
        record.is_job_complete = True
        apply_transition(job, JobTransition.TO_COMPLETED)

        await self._commit(f"complete service record {record_id}")
        await self.db.refresh(record)
        logger.info(f"Completed service record {record.id}: job {job.id} now COMPLETED")
        return record

    # ---- Amendments ----

    async def update_check_in(self, record_id: str, data: UpdateCheckInRequest) -> ServiceRecord:
        record, job = await self._load_for_update(record_id)

        if record.after_engine_hours is not None and data.before_engine_hours > record.after_engine_hours:
            raise InvalidStateError(BEFORE_HOURS_EXCEED_AFTER)

        record.before_photos = list(data.before_photos)
        record.before_notes = data.before_notes
        record.before_engine_hours = data.before_engine_hours
        self._apply_revision(record, job)

        await self._commit(f"update check-in of service record {record_id}")
        await self.db.refresh(record)
        return record

    async def update_completion(self, record_id: str, data: UpdateCompletionRequest) -> ServiceRecord:
        record, job = await self._load_for_update(record_id)

        if not record.is_job_complete and job.status != JobStatus.COMPLETED:
            raise InvalidStateError(JOB_NOT_COMPLETED)
        if data.after_engine_hours < record.before_engine_hours:
            raise InvalidStateError(ENGINE_HOURS_DECREASED)

        self._set_after_bundle(record, data)
        self._apply_revision(record, job)

        await self._commit(f"update completion of service record {record_id}")
        await self.db.refresh(record)
        return record

    async def delete_before_photo(self, record_id: str, photo_url: str) -> ServiceRecord:
        return await self._remove_photo(record_id, photo_url, "before_photos")

    async def delete_after_photo(self, record_id: str, photo_url: str) -> ServiceRecord:
        return await self._remove_photo(record_id, photo_url, "after_photos")

    # ---- Queries ----

    async def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[ServiceRecord]:
        """Completed service records, newest completion first."""
        result = await self.db.execute(
            select(ServiceRecord)
            .where(ServiceRecord.is_job_complete.is_(True))
            .options(selectinload(ServiceRecord.job).selectinload(Job.equipment))
            .order_by(ServiceRecord.completed_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ---- Helpers ----

    async def _record_exists_for_job(self, job_id: str) -> bool:
        result = await self.db.execute(
            select(ServiceRecord.id).where(ServiceRecord.job_id == job_id)
        )
        return result.first() is not None

    async def _load_for_update(self, record_id: str) -> tuple[ServiceRecord, Job]:
        """Lock the record and its job; the job status read here drives the revision decision."""
        result = await self.db.execute(
            select(ServiceRecord)
            .where(ServiceRecord.id == record_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(SERVICE_RECORD_NOT_FOUND)

        job_result = await self.db.execute(
            select(Job)
            .where(Job.id == record.job_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return record, job_result.scalar_one()

    async def _remove_photo(self, record_id: str, photo_url: str, field: str) -> ServiceRecord:
        # The blob itself stays in the photo store
        record, job = await self._load_for_update(record_id)

        photos = getattr(record, field) or []
        setattr(record, field, [photo for photo in photos if photo != photo_url])
        self._apply_revision(record, job)

        await self._commit(f"remove photo from {field} of service record {record_id}")
        await self.db.refresh(record)
        return record

    @staticmethod
    def _set_after_bundle(record: ServiceRecord, data: UpdateCompletionRequest) -> None:
        record.after_photos = list(data.after_photos)
        record.diagnosis = data.diagnosis
        record.work_performed = data.work_performed
        record.parts_used = data.parts_used
        record.after_engine_hours = data.after_engine_hours

    @staticmethod
    def _apply_revision(record: ServiceRecord, job: Job) -> bool:
        if job.status != JobStatus.COMPLETED:
            return False
        record.revised_at = datetime.now(timezone.utc)
        record.revision_count = ServiceRecord.revision_count + 1
        logger.info(f"Revising service record {record.id} of completed job {job.id}")
        return True

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(f"Failed to {action}: {exc}")
            raise UpstreamError("Database", f"could not {action}", code=ErrorCode.DATABASE_ERROR) from exc

    async def _discard_photos(self, urls: list[str], reason: str) -> None:
        if not urls:
            return
        logger.warning(f"Deleting {len(urls)} uploaded photo(s) after {reason}")
        await self.photo_store.delete_blobs(list(urls))
