"""Inspection model: append-only equipment condition snapshots."""
from sqlalchemy import Column, String, DateTime, Text, Integer, Float, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from app.database import Base


class Inspection(Base):
    """Point-in-time condition of one piece of equipment. Never updated after insert."""

    __tablename__ = "inspections"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    equipment_id = Column(String(36), ForeignKey("equipment.id"), nullable=False, index=True)

    # Observed condition
    status = Column(String(20), nullable=False)  # EquipmentStatus value
    engine_hours = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)

    # Documentation
    photo_urls = Column(JSON, nullable=False, default=list)  # List of photo URLs
    inspector_name = Column(String(100), nullable=False)

    # GPS at time of inspection
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    # Relationships
    equipment = relationship("Equipment", back_populates="inspections")

    def __repr__(self):
        return f"<Inspection {self.id} - {self.status}>"
