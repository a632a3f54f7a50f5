"""Equipment API - Fleet machines and their inspection history."""
from fastapi import APIRouter, Path
from typing import List
import logging

from app.api.deps import EquipmentServiceDep
from app.schemas.equipment import EquipmentResponse
from app.schemas.inspection import EquipmentDetailResponse, InspectionResponse
from app.schemas.errors import QUERY_ERROR_RESPONSES, READ_ERROR_RESPONSES
from app.schemas.types import UUID_PATTERN

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[EquipmentResponse], responses=QUERY_ERROR_RESPONSES)
async def list_equipment(equipment: EquipmentServiceDep):
    """Most recently updated equipment first, capped at 100."""
    return await equipment.list_equipment()


@router.get("/{equipment_id}", response_model=EquipmentDetailResponse, responses=READ_ERROR_RESPONSES)
async def get_equipment(
    equipment: EquipmentServiceDep,
    equipment_id: str = Path(..., pattern=UUID_PATTERN),
):
    """Get one machine with its 50 newest inspections."""
    item, inspections = await equipment.get_equipment(equipment_id)
    return EquipmentDetailResponse(
        **EquipmentResponse.model_validate(item).model_dump(),
        inspections=[InspectionResponse.model_validate(i) for i in inspections],
    )
