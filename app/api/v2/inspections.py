"""Inspections API - Equipment condition snapshots with photos."""
from fastapi import APIRouter, Query, status
from typing import List
import logging

from app.api.deps import InspectionServiceDep
from app.schemas.inspection import InspectionCreate, InspectionResponse, InspectionWithEquipment
from app.schemas.errors import QUERY_ERROR_RESPONSES, TRANSITION_ERROR_RESPONSES

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=InspectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=TRANSITION_ERROR_RESPONSES,
)
async def create_inspection(data: InspectionCreate, inspections: InspectionServiceDep):
    """Record an inspection, upload its photos and update the equipment's current state."""
    return await inspections.create_inspection(data)


@router.get("/recent", response_model=List[InspectionWithEquipment], responses=QUERY_ERROR_RESPONSES)
async def list_recent_inspections(
    inspections: InspectionServiceDep,
    limit: int = Query(20, ge=1, le=50),
):
    return await inspections.recent_inspections(limit)
