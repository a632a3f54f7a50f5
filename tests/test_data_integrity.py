"""Data integrity tests for constraints, defaults and schema validation.

These tests use the real SQLAlchemy models against the in-memory SQLite
database from conftest, with foreign key enforcement enabled.
"""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from app.models import Equipment, Inspection, Job, ServiceRecord
from app.schemas.inspection import InspectionCreate
from app.schemas.service_record import CheckInRequest, CompleteRequest
from tests.factories import (
    CheckInFactory,
    CheckedInRecordFactory,
    CompletionFactory,
    EquipmentFactory,
    InspectionFactory,
    photo_url,
)


# ============================================================================
# 1. Unique and foreign key constraints
# ============================================================================


class TestConstraints:
    async def test_one_service_record_per_job(self, test_db, assigned_job):
        test_db.add(ServiceRecord(**CheckedInRecordFactory(job_id=assigned_job.id)))
        await test_db.commit()

        test_db.add(ServiceRecord(**CheckedInRecordFactory(job_id=assigned_job.id)))
        with pytest.raises(IntegrityError) as exc_info:
            await test_db.commit()
        await test_db.rollback()

        assert "service_records.job_id" in str(exc_info.value.orig)

    async def test_serial_number_unique(self, test_db, equipment):
        test_db.add(Equipment(**EquipmentFactory(serial_number=equipment.serial_number)))
        with pytest.raises(IntegrityError):
            await test_db.commit()
        await test_db.rollback()

    async def test_job_requires_existing_equipment(self, test_db, assigned_job):
        test_db.add(Job(
            customer_id="cust-1",
            customer_name="Acme",
            site_address="1 Quarry Rd",
            contact_name="Pat",
            contact_phone="555-0100",
            issue_description="Noise",
            equipment_id=str(uuid.uuid4()),
        ))
        with pytest.raises(IntegrityError):
            await test_db.commit()
        await test_db.rollback()

    async def test_job_status_check_constraint(self, test_db, assigned_job):
        assigned_job.status = "ON_HOLD"
        with pytest.raises(IntegrityError):
            await test_db.commit()
        await test_db.rollback()


# ============================================================================
# 2. Column defaults
# ============================================================================


class TestDefaults:
    async def test_new_job_is_pending(self, test_db, equipment):
        job = Job(
            equipment_id=equipment.id,
            customer_id="cust-1",
            customer_name="Acme",
            site_address="1 Quarry Rd",
            contact_name="Pat",
            contact_phone="555-0100",
            issue_description="Noise",
        )
        test_db.add(job)
        await test_db.commit()
        await test_db.refresh(job)

        assert job.status == "PENDING"
        assert len(job.id) == 36
        assert job.created_at is not None

    async def test_service_record_defaults(self, test_db, assigned_job):
        record = ServiceRecord(
            job_id=assigned_job.id,
            before_engine_hours=10,
            arrived_at=datetime.now(timezone.utc),
        )
        test_db.add(record)
        await test_db.commit()
        await test_db.refresh(record)

        assert record.before_photos == []
        assert record.after_photos == []
        assert record.is_check_in_complete is False
        assert record.is_job_complete is False
        assert record.revision_count == 0
        assert record.revised_at is None

    async def test_inspection_photo_urls_default(self, test_db, equipment):
        inspection = Inspection(
            equipment_id=equipment.id,
            status="OPERATIONAL",
            engine_hours=10,
            inspector_name="Sam",
            latitude=0.0,
            longitude=0.0,
        )
        test_db.add(inspection)
        await test_db.commit()
        await test_db.refresh(inspection)

        assert inspection.photo_urls == []
        assert inspection.timestamp is not None


# ============================================================================
# 3. Pydantic schema validation
# ============================================================================


class TestSchemaValidation:
    def test_check_in_rejects_fifth_photo(self):
        with pytest.raises(ValidationError):
            CheckInRequest(**CheckInFactory(job_id=str(uuid.uuid4()), before_photos=[photo_url()] * 5))

    def test_check_in_accepts_four_photos(self):
        req = CheckInRequest(**CheckInFactory(job_id=str(uuid.uuid4()), before_photos=[photo_url()] * 4))
        assert len(req.before_photos) == 4

    def test_check_in_rejects_non_url_photo(self):
        with pytest.raises(ValidationError):
            CheckInRequest(**CheckInFactory(job_id=str(uuid.uuid4()), before_photos=["file:///tmp/a.jpg"]))

    def test_complete_parts_used_optional(self):
        req = CompleteRequest(**CompletionFactory(parts_used=None))
        assert req.parts_used is None

    def test_complete_rejects_long_work_performed(self):
        with pytest.raises(ValidationError):
            CompleteRequest(**CompletionFactory(work_performed="x" * 2001))

    def test_inspection_inspector_name_length(self):
        with pytest.raises(ValidationError):
            InspectionCreate(**InspectionFactory(equipment_id=str(uuid.uuid4()), inspector_name="x" * 101))

    def test_inspection_boundary_coordinates(self):
        req = InspectionCreate(**InspectionFactory(
            equipment_id=str(uuid.uuid4()), latitude=-90, longitude=180
        ))
        assert req.latitude == -90
