"""
storage/csv_codec.py
--------------------
Headerless, delimiter-separated row codec for animals, owners and vaccines.

Row formats (``;`` shown as the default outer delimiter):
    Animal : id;name;age;{ownerId,ownerId,...}
    Owner  : id;name;username;email;password;age;phone;address;city;state;zip;country;{animalId,...}
    Vaccine: id;volume;brand;dd/MM/yyyy;animalId

Id sets are written as ``{a,b,c}`` and always use a comma inside the braces,
whatever the outer delimiter is.
"""

from typing import Callable, Iterable, TypeVar
from uuid import UUID

from config import CSV_DELIMITER
from models.animal import Animal
from models.owner import Owner
from models.vaccine import Vaccine
from storage.files import read_lines, write_text_file
from utils.errors import FormatError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ANIMAL_COLUMNS = ("id", "name", "age", "owners")
OWNER_COLUMNS = (
    "id", "name", "username", "email", "password", "age", "phone",
    "address", "city", "state", "zip", "country", "animalIds",
)
VACCINE_COLUMNS = ("id", "volume", "brand", "dateOfApplication", "animalId")

SET_OPEN = "{"
SET_CLOSE = "}"
SET_DELIMITER = ","


# ── Brace-set encoding ────────────────────────────────────

def encode_id_set(ids: Iterable[UUID]) -> str:
    """Render ids as ``{id1,id2,...}``; an empty collection renders as ``{}``."""
    return SET_OPEN + SET_DELIMITER.join(str(i) for i in ids) + SET_CLOSE


def decode_id_set(text: str) -> list[UUID]:
    """
    Parse a ``{id1, id2}`` field into ids, keeping their order.

    ``{}`` decodes to an empty list. Missing braces, empty tokens or
    invalid UUIDs raise FormatError.
    """
    value = text.strip()
    if not (value.startswith(SET_OPEN) and value.endswith(SET_CLOSE)):
        raise FormatError(f"Id set must be enclosed in braces: {text!r}")
    inner = value[1:-1].strip()
    if not inner:
        return []
    return [_parse_uuid(token.strip(), "id set") for token in inner.split(SET_DELIMITER)]


# ── Field helpers ─────────────────────────────────────────

def _parse_uuid(text: str, column: str) -> UUID:
    try:
        return UUID(text.strip())
    except ValueError as e:
        raise FormatError(f"Column '{column}' is not a valid id: {text!r}") from e


def _parse_int(text: str, column: str) -> int:
    try:
        return int(text.strip())
    except ValueError as e:
        raise FormatError(f"Column '{column}' is not an integer: {text!r}") from e


def _check_delimiter(delimiter: str) -> None:
    if not delimiter or "\n" in delimiter or "\r" in delimiter:
        raise FormatError(f"Invalid CSV delimiter: {delimiter!r}")


def _split(line: str, delimiter: str, columns: tuple[str, ...], trailing_set: bool) -> list[str]:
    _check_delimiter(delimiter)
    # A trailing id set may itself contain the outer delimiter when it is a comma.
    maxsplit = len(columns) - 1 if trailing_set else -1
    values = line.split(delimiter, maxsplit)
    if len(values) != len(columns):
        raise FormatError(
            f"Expected {len(columns)} columns ({delimiter.join(columns)}), got {len(values)}"
        )
    return values


def _join(values: list[str], delimiter: str) -> str:
    _check_delimiter(delimiter)
    for value in values:
        if delimiter in value or "\n" in value or "\r" in value:
            raise FormatError(f"Value {value!r} contains the delimiter or a line break")
    return delimiter.join(values)


# ── Animal rows ───────────────────────────────────────────

def animal_to_row(animal: Animal, delimiter: str = CSV_DELIMITER) -> str:
    # Check the scalar columns only; the id set carries commas by design.
    row = _join([str(animal.id), animal.name, str(animal.age)], delimiter)
    return row + delimiter + encode_id_set(animal.owner_ids)


def animal_from_row(line: str, delimiter: str = CSV_DELIMITER) -> Animal:
    raw_id, name, age, owners = _split(line, delimiter, ANIMAL_COLUMNS, trailing_set=True)
    return Animal(
        id=_parse_uuid(raw_id, "id"),
        name=name,
        age=_parse_int(age, "age"),
        owner_ids=set(decode_id_set(owners)),
    )


# ── Owner rows ────────────────────────────────────────────

def owner_to_row(owner: Owner, delimiter: str = CSV_DELIMITER) -> str:
    row = _join(
        [
            str(owner.id), owner.name, owner.username, owner.email, owner.password,
            str(owner.age), owner.phone, owner.address, owner.city, owner.state,
            owner.zip, owner.country,
        ],
        delimiter,
    )
    return row + delimiter + encode_id_set(owner.animal_ids)


def owner_from_row(line: str, delimiter: str = CSV_DELIMITER) -> Owner:
    (
        raw_id, name, username, email, password, age, phone,
        address, city, state, zip_code, country, animal_ids,
    ) = _split(line, delimiter, OWNER_COLUMNS, trailing_set=True)
    return Owner(
        id=_parse_uuid(raw_id, "id"),
        name=name,
        username=username,
        email=email,
        password=password,
        age=_parse_int(age, "age"),
        phone=phone,
        address=address,
        city=city,
        state=state,
        zip=zip_code,
        country=country,
        animal_ids=decode_id_set(animal_ids),
    )


# ── Vaccine rows ──────────────────────────────────────────

def vaccine_to_row(vaccine: Vaccine, animal_id: UUID, delimiter: str = CSV_DELIMITER) -> str:
    return _join(
        [
            str(vaccine.id), str(vaccine.volume_in_ml), vaccine.brand,
            vaccine.format_date(), str(animal_id),
        ],
        delimiter,
    )


def vaccine_from_row(line: str, delimiter: str = CSV_DELIMITER) -> tuple[UUID, Vaccine]:
    """Decode a vaccine row into ``(animal_id, vaccine)``."""
    raw_id, volume, brand, applied, animal_id = _split(
        line, delimiter, VACCINE_COLUMNS, trailing_set=False
    )
    vaccine = Vaccine(
        id=_parse_uuid(raw_id, "id"),
        volume_in_ml=_parse_int(volume, "volume"),
        brand=brand,
        date_of_application=Vaccine.parse_date(applied),
    )
    return _parse_uuid(animal_id, "animalId"), vaccine


# ── Whole files ───────────────────────────────────────────

def _read_rows(path: str, delimiter: str, decode: Callable[[str, str], T]) -> list[T]:
    rows = []
    for number, line in enumerate(read_lines(path), start=1):
        if not line.strip():
            continue
        try:
            rows.append(decode(line, delimiter))
        except FormatError as e:
            logger.error(f"{path}:{number}: {e}")
            raise FormatError(f"{path}, line {number}: {e}") from e
    return rows


def read_animals(path: str, delimiter: str = CSV_DELIMITER) -> list[Animal]:
    return _read_rows(path, delimiter, animal_from_row)


def read_owners(path: str, delimiter: str = CSV_DELIMITER) -> list[Owner]:
    return _read_rows(path, delimiter, owner_from_row)


def read_vaccines(path: str, delimiter: str = CSV_DELIMITER) -> list[tuple[UUID, Vaccine]]:
    """Read vaccine rows as ``(animal_id, vaccine)`` pairs in file order."""
    return _read_rows(path, delimiter, vaccine_from_row)


def write_animals(path: str, animals: Iterable[Animal], delimiter: str = CSV_DELIMITER) -> int:
    rows = [animal_to_row(a, delimiter) for a in animals]
    return write_text_file(path, rows)


def write_owners(path: str, owners: Iterable[Owner], delimiter: str = CSV_DELIMITER) -> int:
    rows = [owner_to_row(o, delimiter) for o in owners]
    return write_text_file(path, rows)


def write_vaccines(path: str, animals: Iterable[Animal], delimiter: str = CSV_DELIMITER) -> int:
    """Write every vaccine of every animal, animals in order, vaccines in history order."""
    rows = [
        vaccine_to_row(vaccine, animal.id, delimiter)
        for animal in animals
        for vaccine in animal.vaccines
    ]
    return write_text_file(path, rows)
