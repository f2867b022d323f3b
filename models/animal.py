"""
models/animal.py
----------------
Domain model for an animal patient and its vaccination history.
"""

from dataclasses import dataclass, field
from typing import Iterable
from uuid import UUID, uuid4

from models.base import ValidatedModel, int_at_least, non_empty, uuid_value
from models.vaccine import Vaccine


@dataclass(eq=False)
class Animal(ValidatedModel):
    """
    An animal registered at the clinic.

    Attributes:
        name: Non-empty name.
        age: Age in years, zero or more.
        vaccines: Vaccines in administration order (duplicates allowed).
        owner_ids: Ids of the owners linked to this animal.
        id: Unique identifier, immutable once created.

    Two animals are equal when they share the same ``id``.
    ``owner_ids`` is not kept in sync with ``Owner.animal_ids``; callers
    update both sides (see ``ClinicService.link_animal_and_owner``).
    """
    name: str
    age: int
    vaccines: list[Vaccine] = field(default_factory=list)
    owner_ids: set[UUID] = field(default_factory=set)
    id: UUID = field(default_factory=uuid4)

    _validators = {
        "name": non_empty("name"),
        "age": int_at_least("age", 0),
        "id": uuid_value,
    }

    # ── Owners ────────────────────────────────────────────

    def add_owner_id(self, owner_id: UUID) -> None:
        uuid_value(owner_id)
        self.owner_ids.add(owner_id)

    def owner_id_set(self) -> set[UUID]:
        """Return a copy of the owner ids."""
        return set(self.owner_ids)

    # ── Vaccines ──────────────────────────────────────────

    def add_vaccine(self, volume_in_ml: int, brand: str) -> Vaccine:
        """Administer a new vaccine today and append it to the history."""
        vaccine = Vaccine.administer(volume_in_ml, brand)
        self.vaccines.append(vaccine)
        return vaccine

    def add_vaccines(self, vaccines: Iterable[Vaccine]) -> bool:
        """Append already-built vaccines. Returns True if any was added."""
        before = len(self.vaccines)
        self.vaccines.extend(vaccines)
        return len(self.vaccines) > before

    def vaccine_list(self) -> list[Vaccine]:
        """Return a copy of the vaccine history."""
        return list(self.vaccines)

    def unique_brands(self) -> list[str]:
        """Brands of this animal's vaccines, de-duplicated in first-seen order."""
        return list(dict.fromkeys(v.brand for v in self.vaccines))

    # ── Identity ──────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Animal):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"id: {self.id} name: '{self.name}' age: {self.age}"
