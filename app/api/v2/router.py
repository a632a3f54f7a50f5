from fastapi import APIRouter
from app.api.v2 import (
    jobs,
    service_records,
    equipment,
    inspections,
    uploads,
)

api_router = APIRouter()

# Include all v2 routers
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(service_records.router, prefix="/service-records", tags=["service-records"])
api_router.include_router(equipment.router, prefix="/equipment", tags=["equipment"])
api_router.include_router(inspections.router, prefix="/inspections", tags=["inspections"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
