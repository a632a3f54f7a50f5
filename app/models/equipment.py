"""Equipment model for heavy machines serviced in the field."""
from enum import Enum
from sqlalchemy import Column, String, DateTime, Integer, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.database import Base


class EquipmentStatus(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    NEEDS_SERVICE = "NEEDS_SERVICE"
    BROKEN = "BROKEN"
    IN_REPAIR = "IN_REPAIR"


class Equipment(Base):
    """A physical machine. Status and engine hours mirror the latest submitted inspection."""

    __tablename__ = "equipment"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)

    # Machine identity
    serial_number = Column(String(100), nullable=False, unique=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)

    # Denormalized from the most recent inspection
    status = Column(String(20), nullable=False, default=EquipmentStatus.OPERATIONAL.value)
    engine_hours = Column(Integer, nullable=False, default=0)
    last_inspection_at = Column(DateTime(timezone=True), nullable=True)

    # Location
    project_site = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    jobs = relationship("Job", back_populates="equipment")
    inspections = relationship("Inspection", back_populates="equipment")

    def __repr__(self):
        return f"<Equipment {self.serial_number} - {self.make} {self.model}>"
