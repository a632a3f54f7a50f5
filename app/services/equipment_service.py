"""Read-only equipment queries."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models.equipment import Equipment
from app.models.inspection import Inspection

logger = logging.getLogger(__name__)

EQUIPMENT_NOT_FOUND = "Equipment not found"
EQUIPMENT_LIST_LIMIT = 100
EQUIPMENT_INSPECTION_LIMIT = 50


class EquipmentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_equipment(self) -> list[Equipment]:
        result = await self.db.execute(
            select(Equipment).order_by(Equipment.updated_at.desc()).limit(EQUIPMENT_LIST_LIMIT)
        )
        return list(result.scalars().all())

    async def get_equipment(self, equipment_id: str) -> tuple[Equipment, list[Inspection]]:
        """Equipment and its newest inspections. Ties on timestamp come back in no set order."""
        equipment = await self.db.get(Equipment, equipment_id, populate_existing=True)
        if equipment is None:
            raise NotFoundError(EQUIPMENT_NOT_FOUND)

        result = await self.db.execute(
            select(Inspection)
            .where(Inspection.equipment_id == equipment_id)
            .order_by(Inspection.timestamp.desc())
            .limit(EQUIPMENT_INSPECTION_LIMIT)
        )
        inspections = list(result.scalars().all())
        logger.debug(f"Loaded equipment {equipment.serial_number} with {len(inspections)} inspection(s)")
        return equipment, inspections
