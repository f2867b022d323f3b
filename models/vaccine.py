"""
models/vaccine.py
-----------------
Domain model for a single vaccine application.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from dateutil.relativedelta import relativedelta

from config import CSV_DATE_FORMAT, VACCINE_VALIDITY_MONTHS
from models.base import ValidatedModel, int_at_least, non_empty, uuid_value
from utils.errors import FormatError, ValidationError


def _validate_application_date(value: Any) -> None:
    # datetime is a date subclass but carries a time component
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValidationError("Date of application must be a calendar date")


@dataclass
class Vaccine(ValidatedModel):
    """
    A vaccine administered to an animal.

    Attributes:
        volume_in_ml: Administered volume, zero or more millilitres.
        brand: Vaccine brand name.
        date_of_application: Day the vaccine was applied (default: today).
        id: Unique identifier, generated when not supplied.
    """
    volume_in_ml: int
    brand: str
    date_of_application: date = field(default_factory=date.today)
    id: UUID = field(default_factory=uuid4)

    _validators = {
        "volume_in_ml": int_at_least("volume_in_ml", 0),
        "brand": non_empty("brand"),
        "date_of_application": _validate_application_date,
        "id": uuid_value,
    }

    @classmethod
    def administer(cls, volume_in_ml: int, brand: str) -> "Vaccine":
        """
        Create a vaccine applied today. Unlike reconstruction from a file,
        a fresh application must have a strictly positive volume.
        """
        int_at_least("volume_in_ml", 1)(volume_in_ml)
        return cls(volume_in_ml=volume_in_ml, brand=brand)

    @staticmethod
    def parse_date(text: str) -> date:
        """Parse a ``dd/MM/yyyy`` date, raising FormatError on mismatch."""
        try:
            return datetime.strptime(text.strip(), CSV_DATE_FORMAT).date()
        except ValueError as e:
            raise FormatError(
                f"Date of application '{text}' must be in the format dd/MM/yyyy"
            ) from e

    def format_date(self) -> str:
        return self.date_of_application.strftime(CSV_DATE_FORMAT)

    @property
    def date_of_next_application(self) -> date:
        """Application date plus six calendar months, clamped to month end."""
        return self.date_of_application + relativedelta(months=VACCINE_VALIDITY_MONTHS)

    def is_expired(self, on: Optional[date] = None) -> bool:
        """True when ``on`` (default: today) is strictly after the next application date."""
        return (on or date.today()) > self.date_of_next_application

    def __str__(self) -> str:
        return (
            f"{self.brand} {self.volume_in_ml} ml | applied {self.date_of_application}"
            f" | next {self.date_of_next_application}"
        )
