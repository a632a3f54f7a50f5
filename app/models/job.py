from enum import Enum
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.database import Base


class JobStatus(str, Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


ACTIVE_JOB_STATUSES = (JobStatus.ASSIGNED, JobStatus.IN_PROGRESS)


class Job(Base):
    """Job model - one field visit for one piece of equipment.

    Jobs are created by dispatch outside this service. Status only moves
    through ServiceRecord operations (see app.services.job_transitions).
    """

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    equipment_id = Column(String(36), ForeignKey("equipment.id"), nullable=False, index=True)

    # Customer
    customer_id = Column(String(100), nullable=False)
    customer_name = Column(String(255), nullable=False)
    site_address = Column(String(500), nullable=False)

    # Site contact
    contact_name = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=True)

    issue_description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=JobStatus.PENDING.value, index=True)

    # Assignment
    technician_id = Column(String(100), nullable=True, index=True)
    technician_name = Column(String(255), nullable=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status in ('PENDING','ASSIGNED','IN_PROGRESS','COMPLETED','CANCELLED')",
            name="ck_jobs_status",
        ),
    )

    # Relationships
    equipment = relationship("Equipment", back_populates="jobs")
    service_record = relationship("ServiceRecord", back_populates="job", uselist=False)

    def __repr__(self):
        return f"<Job {self.id} - {self.status}>"
