"""Inspection schemas."""

from datetime import datetime
from typing import Optional, Annotated
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.models.equipment import EquipmentStatus
from app.schemas.equipment import EquipmentBrief, EquipmentResponse
from app.schemas.types import EntityId

# Base64 photo payload as captured by the mobile camera
Base64Photo = Annotated[str, StringConstraints(min_length=1)]


class InspectionCreate(BaseModel):
    """Schema for recording an inspection."""

    equipment_id: EntityId
    status: EquipmentStatus
    engine_hours: int = Field(..., gt=0, description="Engine hours must be a positive integer")
    notes: Optional[str] = Field(None, max_length=2000)
    photos: list[Base64Photo] = Field(default_factory=list, max_length=4)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    inspector_name: str = Field(..., min_length=1, max_length=100)


class InspectionResponse(BaseModel):
    id: str
    equipment_id: str
    status: EquipmentStatus
    engine_hours: int
    notes: Optional[str] = None
    photo_urls: list[str]
    inspector_name: str
    latitude: float
    longitude: float
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class InspectionWithEquipment(InspectionResponse):
    equipment: EquipmentBrief


class EquipmentDetailResponse(EquipmentResponse):
    """Equipment with its most recent inspections, newest first."""

    inspections: list[InspectionResponse]
