"""
models/ - Domain Layer
======================
Validated entities: Animal, Owner and Vaccine.
Constructors and setters validate eagerly, so an invalid entity never exists.
"""

from models.animal import Animal
from models.owner import Owner
from models.vaccine import Vaccine

__all__ = ["Animal", "Owner", "Vaccine"]
