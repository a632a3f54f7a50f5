"""
Test factories for generating realistic test data.

Uses factory_boy for declarative test data generation. Factories build plain
dicts; tests turn them into ORM rows or request bodies as needed.
"""

from .equipment import EquipmentFactory
from .job import JobFactory, AssignedJobFactory, PendingJobFactory
from .service_record import (
    CheckInFactory,
    CompletionFactory,
    CheckedInRecordFactory,
    CompletedRecordFactory,
)
from .inspection import InspectionFactory, photo_url, b64_photo

__all__ = [
    "EquipmentFactory",
    # Jobs
    "JobFactory",
    "AssignedJobFactory",
    "PendingJobFactory",
    # Service records
    "CheckInFactory",
    "CompletionFactory",
    "CheckedInRecordFactory",
    "CompletedRecordFactory",
    # Inspections
    "InspectionFactory",
    "photo_url",
    "b64_photo",
]
