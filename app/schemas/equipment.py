"""Equipment schemas for response shaping."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.equipment import EquipmentStatus


class EquipmentSummary(BaseModel):
    """Equipment projection embedded in job lists."""

    id: str
    serial_number: str
    make: str
    model: str
    engine_hours: int
    project_site: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class EquipmentResponse(EquipmentSummary):
    """Full equipment record."""

    status: EquipmentStatus
    last_inspection_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EquipmentBrief(BaseModel):
    """Identity fields shown next to an inspection."""

    serial_number: str
    make: str
    model: str

    model_config = ConfigDict(from_attributes=True)
