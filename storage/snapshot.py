"""
storage/snapshot.py
-------------------
Whole-collection binary snapshots.

A snapshot file holds one complete animal list or owner list. The format is
versioned and length-prefixed (all integers big-endian):

    header  magic b"VETSNAP" | version u16 | kind u8
    body    count u32, then `count` records

    string  u32 byte length + UTF-8 bytes
    uuid    16 raw bytes
    int     i64
    date    i32 proleptic Gregorian ordinal

    animal  uuid id | string name | int age
            | u32 n + n * uuid owner id
            | u32 n + n * (uuid id | int volume | string brand | date applied)
    owner   uuid id | string name, username, email, password, phone,
            address, city, state, zip, country | int age
            | u32 n + n * uuid animal id

Decoding rebuilds entities through their validating constructors.
"""

import struct
from datetime import date
from typing import Callable, Iterable, TypeVar
from uuid import UUID

from models.animal import Animal
from models.owner import Owner
from models.vaccine import Vaccine
from storage.files import read_bytes, write_bytes
from utils.errors import FormatError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MAGIC = b"VETSNAP"
VERSION = 1
KIND_ANIMALS = 1
KIND_OWNERS = 2

_HEADER = struct.Struct(">7sHB")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")

_OWNER_TEXT_FIELDS = (
    "name", "username", "email", "password", "phone",
    "address", "city", "state", "zip", "country",
)


class _Writer:
    def __init__(self, kind: int):
        self._parts: list[bytes] = [_HEADER.pack(MAGIC, VERSION, kind)]

    def u32(self, value: int) -> None:
        self._parts.append(_U32.pack(value))

    def i64(self, value: int) -> None:
        try:
            self._parts.append(_I64.pack(value))
        except struct.error as e:
            raise FormatError(f"Integer {value} does not fit in a snapshot field") from e

    def day(self, value: date) -> None:
        self._parts.append(_I32.pack(value.toordinal()))

    def uuid(self, value: UUID) -> None:
        self._parts.append(value.bytes)

    def string(self, value: str) -> None:
        encoded = value.encode("utf-8")
        self.u32(len(encoded))
        self._parts.append(encoded)

    def uuids(self, values: Iterable[UUID]) -> None:
        values = list(values)
        self.u32(len(values))
        for value in values:
            self.uuid(value)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


class _Reader:
    def __init__(self, data: bytes, kind: int):
        self._data = data
        self._offset = 0
        if len(data) < _HEADER.size:
            raise FormatError("Snapshot is too short to contain a header")
        magic, version, found_kind = _HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise FormatError("Not a snapshot file (bad magic)")
        if version != VERSION:
            raise FormatError(f"Unsupported snapshot version {version} (expected {VERSION})")
        if found_kind != kind:
            raise FormatError(f"Snapshot holds kind {found_kind}, expected {kind}")
        self._offset = _HEADER.size

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise FormatError("Snapshot is truncated")
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def i64(self) -> int:
        return _I64.unpack(self._take(_I64.size))[0]

    def day(self) -> date:
        return date.fromordinal(_I32.unpack(self._take(_I32.size))[0])

    def uuid(self) -> UUID:
        return UUID(bytes=self._take(16))

    def string(self) -> str:
        return self._take(self.u32()).decode("utf-8")

    def uuids(self) -> list[UUID]:
        return [self.uuid() for _ in range(self.u32())]

    def records(self, decode: Callable[["_Reader"], T]) -> list[T]:
        items = [decode(self) for _ in range(self.u32())]
        if self._offset != len(self._data):
            raise FormatError(f"Snapshot has {len(self._data) - self._offset} trailing bytes")
        return items


def _decode(data: bytes, kind: int, decode: Callable[[_Reader], T]) -> list[T]:
    try:
        return _Reader(data, kind).records(decode)
    except FormatError:
        raise
    except ValueError as e:
        # bad ordinal, bad UTF-8 or an entity that fails validation
        raise FormatError(f"Snapshot contains an invalid record: {e}") from e


# ── Animals ───────────────────────────────────────────────

def _write_animal(w: _Writer, animal: Animal) -> None:
    w.uuid(animal.id)
    w.string(animal.name)
    w.i64(animal.age)
    w.uuids(animal.owner_ids)
    w.u32(len(animal.vaccines))
    for vaccine in animal.vaccines:
        w.uuid(vaccine.id)
        w.i64(vaccine.volume_in_ml)
        w.string(vaccine.brand)
        w.day(vaccine.date_of_application)


def _read_animal(r: _Reader) -> Animal:
    animal_id = r.uuid()
    name = r.string()
    age = r.i64()
    owner_ids = set(r.uuids())
    vaccines = [
        Vaccine(id=r.uuid(), volume_in_ml=r.i64(), brand=r.string(), date_of_application=r.day())
        for _ in range(r.u32())
    ]
    return Animal(id=animal_id, name=name, age=age, vaccines=vaccines, owner_ids=owner_ids)


def encode_animals(animals: Iterable[Animal]) -> bytes:
    animals = list(animals)
    w = _Writer(KIND_ANIMALS)
    w.u32(len(animals))
    for animal in animals:
        _write_animal(w, animal)
    return w.getvalue()


def decode_animals(data: bytes) -> list[Animal]:
    return _decode(data, KIND_ANIMALS, _read_animal)


# ── Owners ────────────────────────────────────────────────

def _write_owner(w: _Writer, owner: Owner) -> None:
    w.uuid(owner.id)
    for name in _OWNER_TEXT_FIELDS:
        w.string(getattr(owner, name))
    w.i64(owner.age)
    w.uuids(owner.animal_ids)


def _read_owner(r: _Reader) -> Owner:
    owner_id = r.uuid()
    fields = {name: r.string() for name in _OWNER_TEXT_FIELDS}
    age = r.i64()
    return Owner(id=owner_id, age=age, animal_ids=r.uuids(), **fields)


def encode_owners(owners: Iterable[Owner]) -> bytes:
    owners = list(owners)
    w = _Writer(KIND_OWNERS)
    w.u32(len(owners))
    for owner in owners:
        _write_owner(w, owner)
    return w.getvalue()


def decode_owners(data: bytes) -> list[Owner]:
    return _decode(data, KIND_OWNERS, _read_owner)


# ── Files ─────────────────────────────────────────────────

def save_animals(path: str, animals: Iterable[Animal]) -> None:
    write_bytes(path, encode_animals(animals))


def load_animals(path: str) -> list[Animal]:
    try:
        return decode_animals(read_bytes(path))
    except FormatError as e:
        logger.error(f"Failed to decode animal snapshot {path}: {e}")
        raise


def save_owners(path: str, owners: Iterable[Owner]) -> None:
    write_bytes(path, encode_owners(owners))


def load_owners(path: str) -> list[Owner]:
    try:
        return decode_owners(read_bytes(path))
    except FormatError as e:
        logger.error(f"Failed to decode owner snapshot {path}: {e}")
        raise
