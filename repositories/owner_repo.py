"""
repositories/owner_repo.py
--------------------------
In-memory repository for owners, indexed by id and by username.
"""

from typing import TYPE_CHECKING, Iterable, Iterator, Optional
from uuid import UUID

from config import CSV_DELIMITER
from models.owner import Owner
from storage import csv_codec, snapshot
from utils.errors import NotFoundError, UsernameTakenError, ValidationError
from utils.logger import get_logger

if TYPE_CHECKING:
    from repositories.animal_repo import AnimalRepository

logger = get_logger(__name__)


class OwnerRepository:
    """
    Owns the registered owners.

    Two indexes, ``id -> Owner`` and ``username -> Owner``, always hold the
    same set of owners: an insert touches neither unless it can touch both.
    """

    def __init__(self):
        self._by_id: dict[UUID, Owner] = {}
        self._by_username: dict[str, Owner] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Owner]:
        return iter(list(self._by_id.values()))

    # ── CREATE ────────────────────────────────────────────

    def add(
        self,
        name: str,
        username: str,
        email: str,
        password: str,
        age: int,
        phone: str,
        address: str,
        city: str,
        state: str,
        zip: str,
        country: str,
    ) -> Owner:
        """
        Register a new owner.

        Returns:
            The created Owner.

        Raises:
            ValidationError: On the first invalid field.
            UsernameTakenError: If the username is already registered.
        """
        owner = Owner(
            name=name, username=username, email=email, password=password, age=age,
            phone=phone, address=address, city=city, state=state, zip=zip, country=country,
        )
        self._insert(owner)
        logger.info(f"Added owner '{owner.username}' #{owner.id}")
        return owner

    def _insert(self, owner: Owner) -> None:
        if owner.username in self._by_username:
            raise UsernameTakenError(f"Username {owner.username} is already taken")
        if owner.id in self._by_id:
            raise ValidationError(f"Owner with id {owner.id} already exists")
        self._by_id[owner.id] = owner
        self._by_username[owner.username] = owner

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Owner]:
        """Return the owners in insertion order."""
        return list(self._by_id.values())

    def find_by_id(self, owner_id: UUID) -> Optional[Owner]:
        return self._by_id.get(owner_id)

    def get_by_id(self, owner_id: UUID) -> Owner:
        owner = self._by_id.get(owner_id)
        if owner is None:
            raise NotFoundError(f"Owner with id {owner_id} not found")
        return owner

    def get_by_username(self, username: str) -> Owner:
        owner = self._by_username.get(username)
        if owner is None:
            raise NotFoundError(f"Owner with username {username} not found")
        return owner

    def is_username_taken(self, username: str) -> bool:
        return username in self._by_username

    # ── UPDATE ────────────────────────────────────────────

    def link_animal(self, username: str, animal_id: UUID) -> Owner:
        """
        Append ``animal_id`` to the owner's animal list. Only the owner side
        of the relationship is updated.

        Raises:
            NotFoundError: If no owner has that username.
        """
        owner = self.get_by_username(username)
        owner.add_animal_id(animal_id)
        logger.info(f"Linked animal #{animal_id} to owner '{username}'")
        return owner

    def unlink_animal(self, username: str, animal_id: UUID) -> bool:
        """Remove the first occurrence of ``animal_id`` from the owner's list."""
        removed = self.get_by_username(username).remove_animal_id(animal_id)
        if removed:
            logger.info(f"Unlinked animal #{animal_id} from owner '{username}'")
        return removed

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, owner_id: UUID) -> Owner:
        """
        Remove an owner from both indexes.

        Returns:
            The removed Owner.

        Raises:
            NotFoundError: If no owner has that id.
        """
        owner = self.get_by_id(owner_id)
        del self._by_id[owner_id]
        del self._by_username[owner.username]
        logger.info(f"Deleted owner '{owner.username}' #{owner_id}")
        return owner

    # ── REPORTS ───────────────────────────────────────────

    def owners_and_animals_report(self, animal_repo: "AnimalRepository") -> list[str]:
        """
        One line per owner: ``"<name><username> owns :<animal names>"``.

        Raises:
            NotFoundError: If an owner references an unknown animal id.
        """
        return [
            f"{o.name}{o.username} owns :"
            + ", ".join(animal_repo.get_by_id(animal_id).name for animal_id in o.animal_ids)
            for o in self._by_id.values()
        ]

    # ── PERSISTENCE ───────────────────────────────────────

    def _add_all(self, owners: Iterable[Owner]) -> bool:
        """Insert owners in order; stop at the first rejected one."""
        added = 0
        for owner in owners:
            try:
                self._insert(owner)
            except (UsernameTakenError, ValidationError) as e:
                logger.warning(f"Stopped loading owners after {added} added: {e}")
                return False
            added += 1
        return True

    def load_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> bool:
        """
        Add the owners of a CSV file to the repository.

        Loading stops at the first owner whose username or id is already
        registered; owners added before it are kept.

        Returns:
            True only if every owner in the file was added.
        """
        owners = csv_codec.read_owners(path, delimiter)
        loaded = self._add_all(owners)
        logger.info(f"Loaded owners from {path} ({len(owners)} rows, complete={loaded})")
        return loaded

    def save_csv(self, path: str, delimiter: str = CSV_DELIMITER) -> int:
        return csv_codec.write_owners(path, self._by_id.values(), delimiter)

    def load_snapshot(self, path: str) -> None:
        """
        Replace every owner with the contents of a snapshot file.
        The repository is left untouched if the snapshot is unreadable or
        contains duplicate ids or usernames.
        """
        owners = snapshot.load_owners(path)
        by_id: dict[UUID, Owner] = {}
        by_username: dict[str, Owner] = {}
        for owner in owners:
            if owner.id in by_id or owner.username in by_username:
                raise ValidationError(f"Snapshot {path} holds duplicate owner '{owner.username}'")
            by_id[owner.id] = owner
            by_username[owner.username] = owner
        self._by_id, self._by_username = by_id, by_username
        logger.info(f"Replaced owners with {len(owners)} owners from {path}")

    def save_snapshot(self, path: str) -> None:
        snapshot.save_owners(path, self._by_id.values())
        logger.info(f"Saved {len(self._by_id)} owners to {path}")
