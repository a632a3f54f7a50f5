"""
FastAPI Dependencies

Provides dependency injection for database sessions, the photo store
and the per-request managers built on top of them.
"""

from typing import Annotated
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.database import get_db
from app.services.photo_store import PhotoStore
from app.services.job_service import JobService
from app.services.service_record_service import ServiceRecordService
from app.services.inspection_service import InspectionService
from app.services.equipment_service import EquipmentService

logger = logging.getLogger(__name__)


def get_photo_store(request: Request) -> PhotoStore:
    """Process-wide photo store created in the application lifespan."""
    store = getattr(request.app.state, "photo_store", None)
    if store is None:
        raise RuntimeError("Photo store is not initialized")
    return store


# Type aliases for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
PhotoStoreDep = Annotated[PhotoStore, Depends(get_photo_store)]


def get_job_service(db: DbSession) -> JobService:
    return JobService(db)


def get_service_record_service(db: DbSession, photo_store: PhotoStoreDep) -> ServiceRecordService:
    return ServiceRecordService(db, photo_store)


def get_inspection_service(db: DbSession, photo_store: PhotoStoreDep) -> InspectionService:
    return InspectionService(db, photo_store)


def get_equipment_service(db: DbSession) -> EquipmentService:
    return EquipmentService(db)


JobServiceDep = Annotated[JobService, Depends(get_job_service)]
ServiceRecordServiceDep = Annotated[ServiceRecordService, Depends(get_service_record_service)]
InspectionServiceDep = Annotated[InspectionService, Depends(get_inspection_service)]
EquipmentServiceDep = Annotated[EquipmentService, Depends(get_equipment_service)]
