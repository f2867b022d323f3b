"""
models/base.py
--------------
Field validation shared by the entity dataclasses.

Each entity declares a ``_validators`` mapping of field name to a
callable that raises ValidationError. ``ValidatedModel.__setattr__``
runs it both from the dataclass ``__init__`` and on later assignment,
so a rejected value never reaches the instance.
"""

import re
from typing import Any, Callable
from uuid import UUID

from utils.errors import ValidationError

Validator = Callable[[Any], None]


class ValidatedModel:
    """Mixin that validates every assignment and freezes ``id`` once set."""

    _validators: dict[str, Validator] = {}
    _immutable: frozenset[str] = frozenset({"id"})

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._immutable and name in self.__dict__:
            raise ValidationError(f"{name} cannot be changed once set")
        validator = self._validators.get(name)
        if validator is not None:
            validator(value)
        super().__setattr__(name, value)


def non_empty(field: str) -> Validator:
    """Require a non-empty string."""
    label = field.replace("_", " ").capitalize()

    def check(value: Any) -> None:
        if value is None:
            raise ValidationError(f"{label} cannot be null")
        if not isinstance(value, str):
            raise ValidationError(f"{label} must be a string")
        if not value:
            raise ValidationError(f"{label} cannot be empty")

    return check


def matching(field: str, pattern: re.Pattern, hint: str = "") -> Validator:
    """Require a non-empty string that fully matches ``pattern``."""
    base = non_empty(field)
    label = field.replace("_", " ").capitalize()

    def check(value: Any) -> None:
        base(value)
        if not pattern.fullmatch(value):
            message = f"{label} must be in the appropriate format"
            raise ValidationError(f"{message}: {hint}" if hint else message)

    return check


def int_at_least(field: str, minimum: int) -> Validator:
    """Require an integer (not a bool) greater than or equal to ``minimum``."""
    label = field.replace("_", " ").capitalize()

    def check(value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{label} must be an integer")
        if value < minimum:
            raise ValidationError(f"{label} cannot be less than {minimum}")

    return check


def uuid_value(value: Any) -> None:
    if not isinstance(value, UUID):
        raise ValidationError("Id must be a UUID")
