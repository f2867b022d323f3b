"""
Shared fixtures: empty repositories, a queue and valid owner data.
"""

from datetime import date

import pytest

from models.animal import Animal
from models.vaccine import Vaccine
from repositories.animal_repo import AnimalRepository
from repositories.attention_queue import AttentionQueue
from repositories.owner_repo import OwnerRepository


@pytest.fixture
def owner_fields() -> dict:
    """Keyword arguments for a valid owner."""
    return {
        "name": "Ana Torres",
        "username": "ana_torres",
        "email": "ana@example.com",
        "password": "Secret#123",
        "age": 30,
        "phone": "5551234567",
        "address": "12 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip": "62701",
        "country": "USA",
    }


@pytest.fixture
def animal_repo() -> AnimalRepository:
    return AnimalRepository()


@pytest.fixture
def owner_repo() -> OwnerRepository:
    return OwnerRepository()


@pytest.fixture
def queue() -> AttentionQueue:
    return AttentionQueue()


@pytest.fixture
def vaccinated_animals() -> list[Animal]:
    """Three animals with two dated vaccines each."""
    animals = []
    for i, (name, age) in enumerate([("Rex", 3), ("Luna", 1), ("Milo", 7)]):
        animal = Animal(name=name, age=age)
        animal.add_vaccines([
            Vaccine(volume_in_ml=2 + i, brand="Rabivac", date_of_application=date(2024, 1, 10 + i)),
            Vaccine(volume_in_ml=5, brand=f"Nobivac-{name}", date_of_application=date(2024, 3, 1)),
        ])
        animals.append(animal)
    return animals
