"""
models/owner.py
---------------
Domain model for an animal owner (clinic client).
"""

import re
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from models.base import ValidatedModel, int_at_least, matching, non_empty, uuid_value

USERNAME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9_]{7,30}")
EMAIL_PATTERN = re.compile(r"[^@ \t\r\n]+@[^@ \t\r\n]+\.[^@ \t\r\n]+")
PASSWORD_PATTERN = re.compile(
    r"(?=.*?[A-Z])(?=.*?[a-z])(?=.*?[0-9])(?=.*?[#?!@$ %^&*-]).{8,}"
)
PHONE_PATTERN = re.compile(r"[0-9]{10}")
ZIP_PATTERN = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")

MINIMUM_AGE = 18

PASSWORD_RULES = (
    "at least 8 characters with one upper case letter, one lower case letter, "
    "one digit and one symbol from #?!@$ %^&*-"
)


@dataclass(eq=False)
class Owner(ValidatedModel):
    """
    A registered owner.

    Attributes:
        name: Full name.
        username: Starts with a letter, 8-31 letters, digits or underscores.
        email: ``local@domain.tld``.
        password: See ``PASSWORD_RULES``.
        age: 18 or older.
        phone: Exactly 10 digits.
        address, city, state, country: Non-empty.
        zip: 5 digits with an optional ``-NNNN`` suffix.
        animal_ids: Ids of owned animals in insertion order.
        id: Unique identifier.

    Username uniqueness is enforced by OwnerRepository, not here; like
    ``id``, the username cannot change once set.
    """
    name: str
    username: str
    email: str
    password: str = field(repr=False)
    age: int
    phone: str
    address: str
    city: str
    state: str
    zip: str
    country: str
    animal_ids: list[UUID] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    # the repository indexes owners by username
    _immutable = frozenset({"id", "username"})

    _validators = {
        "name": non_empty("name"),
        "username": matching("username", USERNAME_PATTERN),
        "email": matching("email", EMAIL_PATTERN),
        "password": matching("password", PASSWORD_PATTERN, PASSWORD_RULES),
        "age": int_at_least("age", MINIMUM_AGE),
        "phone": matching("phone", PHONE_PATTERN),
        "address": non_empty("address"),
        "city": non_empty("city"),
        "state": non_empty("state"),
        "zip": matching("zip", ZIP_PATTERN),
        "country": non_empty("country"),
        "id": uuid_value,
    }

    def add_animal_id(self, animal_id: UUID) -> None:
        uuid_value(animal_id)
        self.animal_ids.append(animal_id)

    def remove_animal_id(self, animal_id: UUID) -> bool:
        """Remove the first occurrence of ``animal_id``. Returns False if absent."""
        try:
            self.animal_ids.remove(animal_id)
        except ValueError:
            return False
        return True

    def animal_id_list(self) -> list[UUID]:
        """Return a copy of the owned animal ids."""
        return list(self.animal_ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Owner):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.username}) <{self.email}>"
