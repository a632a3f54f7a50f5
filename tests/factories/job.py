"""
Job test factory.

Generates service jobs for a technician.
"""

import uuid
from datetime import datetime, timedelta, timezone

import factory
from faker import Faker

fake = Faker()

ISSUES = [
    "Hydraulic leak at boom cylinder",
    "Engine overheating under load",
    "Track tension warning",
    "Starter motor failure",
    "Scheduled 500 hour service",
]


class JobFactory(factory.Factory):
    """
    Factory for generating Job test data.

    Usage:
        job = JobFactory(equipment_id=equipment.id)
        job = AssignedJobFactory(equipment_id=equipment.id, technician_id="tech-1")
    """

    class Meta:
        model = dict

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    equipment_id = None
    customer_id = factory.LazyFunction(lambda: f"cust-{fake.random_int(min=1, max=500)}")
    customer_name = factory.LazyFunction(fake.company)
    site_address = factory.LazyFunction(fake.address)
    contact_name = factory.LazyFunction(fake.name)
    contact_phone = factory.LazyFunction(lambda: fake.phone_number()[:20])
    contact_email = factory.LazyFunction(lambda: fake.email().lower())
    issue_description = factory.LazyFunction(lambda: fake.random_element(ISSUES))
    status = "PENDING"
    technician_id = None
    technician_name = None
    assigned_at = None


class PendingJobFactory(JobFactory):
    """Factory for unassigned jobs."""

    status = "PENDING"


class AssignedJobFactory(JobFactory):
    """Factory for jobs assigned to a technician."""

    status = "ASSIGNED"
    technician_id = "tech-1"
    technician_name = factory.LazyFunction(fake.name)
    assigned_at = factory.LazyFunction(
        lambda: datetime.now(timezone.utc) - timedelta(hours=fake.random_int(min=1, max=48))
    )
