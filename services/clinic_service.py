"""
services/clinic_service.py
--------------------------
Orchestrates the animal and owner repositories and the attention queue.
This is the object an outer command dispatcher talks to.
"""

from typing import Optional
from uuid import UUID

import config
from models.animal import Animal
from repositories.animal_repo import AnimalRepository
from repositories.attention_queue import AttentionQueue
from repositories.owner_repo import OwnerRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ClinicService:
    """
    Handles operations that span more than one repository.

    Workflow for a visit:
        1. ``queue_for_appointment`` puts an animal in the attention queue.
        2. ``attend_next`` takes the head of the queue and vaccinates it.
    """

    def __init__(
        self,
        animals: Optional[AnimalRepository] = None,
        owners: Optional[OwnerRepository] = None,
        queue: Optional[AttentionQueue] = None,
    ):
        self.animals = animals if animals is not None else AnimalRepository()
        self.owners = owners if owners is not None else OwnerRepository()
        self.queue = queue if queue is not None else AttentionQueue()

    # ── Relationships ─────────────────────────────────────

    def link_animal_and_owner(self, animal_id: UUID, username: str) -> UUID:
        """
        Link an animal and an owner on both sides at once.

        Both ends are resolved before anything is changed, so an unknown
        animal or username leaves both repositories untouched.

        Returns:
            The animal id.

        Raises:
            NotFoundError: If the animal or the owner does not exist.
        """
        self.animals.get_by_id(animal_id)
        owner = self.owners.get_by_username(username)
        self.animals.link_owner(animal_id, owner.id)
        self.owners.link_animal(username, animal_id)
        return animal_id

    def owners_report(self) -> list[str]:
        return self.owners.owners_and_animals_report(self.animals)

    def animals_report(self) -> list[str]:
        return self.animals.animals_and_owners_report(self.owners)

    # ── Attention queue ───────────────────────────────────

    def queue_for_appointment(self, animal_id: UUID) -> bool:
        return self.animals.enqueue_for_appointment(animal_id, self.queue)

    def next_in_queue(self) -> Optional[Animal]:
        return self.queue.peek()

    def attend_next(self, brand: str, volume_in_ml: int) -> Optional[Animal]:
        """Vaccinate the animal at the head of the queue, or return None if nobody waits."""
        return self.animals.add_vaccine_to_queued_animal(self.queue, brand, volume_in_ml)

    # ── Persistence with configured defaults ──────────────

    def load_csv(self, delimiter: str = config.CSV_DELIMITER) -> bool:
        """
        Load animals, then their vaccines, then owners from the configured
        CSV paths. Returns True only if every step added data.
        """
        animals_loaded = self.animals.load_csv(config.ANIMALS_CSV_PATH, delimiter)
        vaccines_loaded = self.animals.load_vaccines_csv(config.VACCINES_CSV_PATH, delimiter)
        owners_loaded = self.owners.load_csv(config.OWNERS_CSV_PATH, delimiter)
        return animals_loaded and vaccines_loaded and owners_loaded

    def save_csv(self, delimiter: str = config.CSV_DELIMITER) -> None:
        self.animals.save_csv(config.ANIMALS_CSV_PATH, delimiter)
        self.animals.save_vaccines_csv(config.VACCINES_CSV_PATH, delimiter)
        self.owners.save_csv(config.OWNERS_CSV_PATH, delimiter)

    def load_snapshots(self) -> None:
        """Replace animals and owners with the configured snapshot files."""
        self.animals.load_snapshot(config.ANIMALS_SNAPSHOT_PATH)
        self.owners.load_snapshot(config.OWNERS_SNAPSHOT_PATH)

    def save_snapshots(self) -> None:
        self.animals.save_snapshot(config.ANIMALS_SNAPSHOT_PATH)
        self.owners.save_snapshot(config.OWNERS_SNAPSHOT_PATH)

    def write_expired_report(self) -> int:
        return self.animals.write_expired_vaccines_report(config.EXPIRED_REPORT_PATH)
