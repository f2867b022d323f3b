"""
repositories/animal_repo.py
---------------------------
In-memory repository for animals and their vaccination history.
Loading and saving go through the storage layer.
"""

from datetime import date
from typing import TYPE_CHECKING, Iterator, Optional
from uuid import UUID

from config import CSV_DELIMITER
from models.animal import Animal
from models.vaccine import Vaccine
from repositories.attention_queue import AttentionQueue
from storage import csv_codec, snapshot
from storage.files import write_text_file
from utils.errors import NotFoundError, ValidationError
from utils.logger import get_logger

if TYPE_CHECKING:
    from repositories.owner_repo import OwnerRepository

logger = get_logger(__name__)


class AnimalRepository:
    """Owns the ordered collection of animals."""

    def __init__(self):
        self._animals: list[Animal] = []

    def __len__(self) -> int:
        return len(self._animals)

    def __iter__(self) -> Iterator[Animal]:
        return iter(list(self._animals))

    # ── CREATE ────────────────────────────────────────────

    def add(self, name: str, age: int) -> Animal:
        """
        Register a new animal.

        Args:
            name: Non-empty name.
            age: Age in years, zero or more.

        Returns:
            The created Animal with a freshly generated id.

        Raises:
            ValidationError: If the name or age is invalid.
        """
        animal = Animal(name=name, age=age)
        self._animals.append(animal)
        logger.info(f"Added animal '{animal.name}' #{animal.id}")
        return animal

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Animal]:
        """Return a copy of the collection, in insertion order."""
        return list(self._animals)

    def find_by_id(self, animal_id: UUID) -> Optional[Animal]:
        return next((a for a in self._animals if a.id == animal_id), None)

    def find_by_name(self, name: str) -> Optional[Animal]:
        """First animal whose name equals ``name`` exactly (case-sensitive)."""
        return next((a for a in self._animals if a.name == name), None)

    def get_by_id(self, animal_id: UUID) -> Animal:
        """Like ``find_by_id`` but raises NotFoundError when absent."""
        animal = self.find_by_id(animal_id)
        if animal is None:
            raise NotFoundError(f"Animal with id {animal_id} not found")
        return animal

    def get_by_name(self, name: str) -> Animal:
        animal = self.find_by_name(name)
        if animal is None:
            raise NotFoundError(f"Animal with name {name} not found")
        return animal

    # ── UPDATE ────────────────────────────────────────────

    def add_vaccine_by_name(self, name: str, volume_in_ml: int, brand: str) -> Vaccine:
        """
        Administer a vaccine, dated today, to the first animal named ``name``.

        Raises:
            NotFoundError: If no animal has that name.
            ValidationError: If the volume or brand is invalid.
        """
        animal = self.get_by_name(name)
        vaccine = animal.add_vaccine(volume_in_ml, brand)
        logger.info(f"Vaccine {vaccine.brand} ({vaccine.volume_in_ml} ml) given to '{animal.name}' #{animal.id}")
        return vaccine

    def add_vaccine_to_queued_animal(
        self, queue: AttentionQueue, brand: str, volume_in_ml: int
    ) -> Optional[Animal]:
        """
        Attend the animal at the head of ``queue`` and vaccinate it.

        Returns:
            The attended animal, or None (nothing changed) if the queue is empty.
        """
        if queue.is_empty():
            logger.info("Attention queue is empty; no vaccine administered")
            return None
        vaccine = Vaccine.administer(volume_in_ml, brand)
        animal = queue.dequeue()
        animal.add_vaccines([vaccine])
        logger.info(f"Attended '{animal.name}' #{animal.id} with {brand} ({volume_in_ml} ml)")
        return animal

    def link_owner(self, animal_id: UUID, owner_id: UUID) -> UUID:
        """
        Add ``owner_id`` to the animal's owner set. Only this side of the
        relationship is updated; the owner's list is the caller's job.

        Returns:
            The animal id.

        Raises:
            NotFoundError: If the animal does not exist.
        """
        animal = self.get_by_id(animal_id)
        animal.add_owner_id(owner_id)
        logger.info(f"Linked owner #{owner_id} to animal #{animal.id}")
        return animal.id

    def enqueue_for_appointment(self, animal_id: UUID, queue: AttentionQueue) -> bool:
        """
        Put the animal in the attention queue unless it is already waiting.

        Returns:
            True if enqueued, False if it was already in the queue.

        Raises:
            NotFoundError: If the animal does not exist.
        """
        animal = self.get_by_id(animal_id)
        if queue.contains(animal):
            return False
        queue.enqueue(animal)
        logger.info(f"Animal '{animal.name}' #{animal.id} queued (position {queue.size()})")
        return True

    # ── REPORTS ───────────────────────────────────────────

    def vaccine_count_report(self) -> list[str]:
        return [f"{a.name} Number of vaccines: {len(a.vaccines)}" for a in self._animals]

    def unique_brands_report(self) -> list[str]:
        """Brands used across all animals, de-duplicated in first-seen order."""
        brands = (brand for a in self._animals for brand in a.unique_brands())
        return list(dict.fromkeys(brands))

    def expired_vaccines_report(self, on: Optional[date] = None) -> list[str]:
        """One line per (animal, expired vaccine) pair, evaluated on ``on`` (default: today)."""
        return [
            f"{a.name} has {v.brand} of {v.volume_in_ml} ml expired on {v.date_of_next_application}"
            for a in self._animals
            for v in a.vaccines
            if v.is_expired(on)
        ]

    def animal_names(self) -> list[str]:
        return [a.name for a in self._animals]

    def animals_and_owners_report(self, owner_repo: "OwnerRepository") -> list[str]:
        """
        One line per animal listing its owners' names in alphabetical order.

        Raises:
            NotFoundError: If an animal references an unknown owner id.
        """
        return [
            f"{a.name} Owners: "
            + ", ".join(sorted(owner_repo.get_by_id(owner_id).name for owner_id in a.owner_ids))
            for a in self._animals
        ]

    def write_expired_vaccines_report(self, path: str, on: Optional[date] = None) -> int:
        return write_text_file(path, self.expired_vaccines_report(on))

    # ── PERSISTENCE ───────────────────────────────────────

    def load_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> bool:
        """
        Append the animals of a CSV file to the collection.
        Existing animals are kept.

        Returns:
            True if the collection grew.
        """
        animals = csv_codec.read_animals(path, delimiter)
        before = len(self._animals)
        self._animals.extend(animals)
        logger.info(f"Loaded {len(animals)} animals from {path}")
        return len(self._animals) > before

    def load_vaccines_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> bool:
        """
        Attach the vaccines of a CSV file to already-loaded animals.

        Rows are applied in file order. When a row references an unknown
        animal, NotFoundError is raised and earlier rows stay applied.

        Returns:
            True if at least one vaccine was attached.
        """
        rows = csv_codec.read_vaccines(path, delimiter)
        for animal_id, vaccine in rows:
            animal = self.find_by_id(animal_id)
            if animal is None:
                raise NotFoundError(
                    f"Error while assigning vaccines to animal: Animal with id {animal_id} not found"
                )
            animal.add_vaccines([vaccine])
        logger.info(f"Loaded {len(rows)} vaccines from {path}")
        return bool(rows)

    def save_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> int:
        return csv_codec.write_animals(path, self._animals, delimiter)

    def save_vaccines_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> int:
        return csv_codec.write_vaccines(path, self._animals, delimiter)

    def load_snapshot(self, path: str) -> None:
        """
        Replace the whole collection with the contents of a snapshot file.
        The collection is left untouched if the snapshot is unreadable or
        contains duplicate ids.
        """
        animals = snapshot.load_animals(path)
        seen: set[UUID] = set()
        for animal in animals:
            if animal.id in seen:
                raise ValidationError(f"Snapshot {path} holds duplicate animal #{animal.id}")
            seen.add(animal.id)
        self._animals = animals
        logger.info(f"Replaced animal collection with {len(animals)} animals from {path}")

    def save_snapshot(self, path: str) -> None:
        snapshot.save_animals(path, self._animals)
        logger.info(f"Saved {len(self._animals)} animals to {path}")
