from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.database import Base

MAX_PHOTOS = 4


class ServiceRecord(Base):
    """Documentation of one job's field visit: check-in, then completion.

    The unique constraint on job_id is what actually keeps a job to a single
    record when two check-ins race.
    """

    __tablename__ = "service_records"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False)

    # Check-in (before) bundle
    before_photos = Column(JSON, nullable=False, default=list)  # List of photo URLs
    before_notes = Column(Text, nullable=True)
    before_engine_hours = Column(Integer, nullable=False)
    arrived_at = Column(DateTime(timezone=True), nullable=False)
    is_check_in_complete = Column(Boolean, nullable=False, default=False)

    # Completion (after) bundle
    after_photos = Column(JSON, nullable=False, default=list)
    diagnosis = Column(Text, nullable=True)
    work_performed = Column(Text, nullable=True)
    parts_used = Column(Text, nullable=True)
    after_engine_hours = Column(Integer, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True, index=True)
    is_job_complete = Column(Boolean, nullable=False, default=False)

    # Edits made after the job reached COMPLETED
    revised_at = Column(DateTime(timezone=True), nullable=True)
    revision_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("job_id", name="uq_service_records_job_id"),
    )

    # Relationships
    job = relationship("Job", back_populates="service_record")

    def __repr__(self):
        return f"<ServiceRecord {self.id} - job {self.job_id}>"
