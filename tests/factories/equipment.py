"""
Equipment test factory.

Generates heavy machines with realistic makes and models.
"""

import uuid

import factory
from faker import Faker

fake = Faker()

MACHINES = [
    ("Caterpillar", "320 GC"),
    ("Caterpillar", "D6"),
    ("Komatsu", "PC210LC"),
    ("John Deere", "310SL"),
    ("Volvo", "EC220E"),
    ("Bobcat", "S650"),
]


class EquipmentFactory(factory.Factory):
    """
    Factory for generating Equipment test data.

    Usage:
        equipment = EquipmentFactory()
        equipment = EquipmentFactory(status="BROKEN")
    """

    class Meta:
        model = dict

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    serial_number = factory.Sequence(lambda n: f"SN-{n:06d}")
    make = factory.LazyFunction(lambda: fake.random_element(MACHINES)[0])
    model = factory.LazyFunction(lambda: fake.random_element(MACHINES)[1])
    status = "OPERATIONAL"
    engine_hours = factory.LazyFunction(lambda: fake.random_int(min=100, max=9000))
    project_site = factory.LazyFunction(lambda: f"{fake.city()} Site")
    latitude = factory.LazyFunction(lambda: float(fake.latitude()))
    longitude = factory.LazyFunction(lambda: float(fake.longitude()))
