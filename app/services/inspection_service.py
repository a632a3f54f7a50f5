"""
Inspection recorder.

Photos are uploaded to the photo store one at a time before the database
transaction opens. The inspection row and the equipment's denormalized state
are then written together. If anything after the first upload fails, the
photos uploaded so far are deleted before the error propagates.
"""
import base64
import binascii
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import ErrorCode, NotFoundError, UpstreamError, ValidationError
from app.models.equipment import Equipment
from app.models.inspection import Inspection
from app.schemas.inspection import InspectionCreate
from app.services.equipment_service import EQUIPMENT_NOT_FOUND
from app.services.photo_store import PhotoStore, photo_key

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 20


def decode_photo(payload: str) -> bytes:
    """Decode a base64 photo, accepting an optional data URL prefix."""
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Photo is not valid base64 data") from e


class InspectionService:
    def __init__(self, db: AsyncSession, photo_store: PhotoStore):
        self.db = db
        self.photo_store = photo_store

    async def create_inspection(self, data: InspectionCreate) -> Inspection:
        equipment = await self.db.get(Equipment, data.equipment_id)
        if equipment is None:
            raise NotFoundError(EQUIPMENT_NOT_FOUND)

        # Decode everything first so a bad payload never leaves orphaned uploads
        payloads = [decode_photo(photo) for photo in data.photos]

        now = datetime.now(timezone.utc)
        timestamp_ms = int(now.timestamp() * 1000)
        uploaded: list[str] = []

        try:
            for index, payload in enumerate(payloads):
                url = await self.photo_store.upload_blob(
                    photo_key(data.equipment_id, index, timestamp_ms), payload
                )
                uploaded.append(url)

            inspection = Inspection(
                equipment_id=equipment.id,
                status=data.status.value,
                engine_hours=data.engine_hours,
                notes=data.notes,
                photo_urls=uploaded,
                inspector_name=data.inspector_name,
                latitude=data.latitude,
                longitude=data.longitude,
                timestamp=now,
            )
            self.db.add(inspection)

            # Submitted values are trusted as the latest state
            equipment.status = data.status.value
            equipment.engine_hours = data.engine_hours
            equipment.last_inspection_at = now

            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            if uploaded:
                logger.warning(
                    f"Deleting {len(uploaded)} uploaded photo(s) after failed inspection of equipment {data.equipment_id}"
                )
                await self.photo_store.delete_blobs(uploaded)
            if isinstance(exc, SQLAlchemyError):
                logger.error(f"Inspection transaction failed for equipment {data.equipment_id}: {exc}")
                raise UpstreamError(
                    "Database", "inspection could not be saved", code=ErrorCode.DATABASE_ERROR
                ) from exc
            raise

        await self.db.refresh(inspection)
        logger.info(
            f"Recorded inspection {inspection.id} for equipment {equipment.id}: "
            f"{data.status.value}, {data.engine_hours}h, {len(uploaded)} photo(s)"
        )
        return inspection

    async def recent_inspections(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Inspection]:
        result = await self.db.execute(
            select(Inspection)
            .options(selectinload(Inspection.equipment))
            .order_by(Inspection.timestamp.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

