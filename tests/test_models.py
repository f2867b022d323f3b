"""
Tests for the domain models: Vaccine, Animal and Owner.

Covers:
1. Field validation on construction and on assignment
2. Vaccine expiry and next-application dates
3. Entity identity (id equality, immutable ids)
"""

from datetime import date, datetime
from uuid import uuid4

import pytest

from models.animal import Animal
from models.owner import Owner
from models.vaccine import Vaccine
from utils.errors import FormatError, ValidationError


# =============================================================================
# VACCINE
# =============================================================================


class TestVaccine:
    """Tests for Vaccine"""

    @pytest.fixture
    def january_vaccine(self) -> Vaccine:
        return Vaccine(volume_in_ml=3, brand="Rabivac", date_of_application=date(2024, 1, 1))

    def test_next_application_is_six_months_later(self, january_vaccine: Vaccine) -> None:
        assert january_vaccine.date_of_next_application == date(2024, 7, 1)

    def test_expired_after_six_months(self, january_vaccine: Vaccine) -> None:
        assert january_vaccine.is_expired(on=date(2024, 7, 2)) is True

    def test_not_expired_within_six_months(self, january_vaccine: Vaccine) -> None:
        assert january_vaccine.is_expired(on=date(2024, 6, 1)) is False

    def test_not_expired_on_next_application_day(self, january_vaccine: Vaccine) -> None:
        """Expiry is strictly after the next application date"""
        assert january_vaccine.is_expired(on=date(2024, 7, 1)) is False

    def test_next_application_clamps_to_month_end(self) -> None:
        vaccine = Vaccine(volume_in_ml=1, brand="X", date_of_application=date(2024, 8, 31))
        assert vaccine.date_of_next_application == date(2025, 2, 28)

    def test_defaults_to_today(self) -> None:
        vaccine = Vaccine(volume_in_ml=1, brand="X")
        assert vaccine.date_of_application == date.today()
        assert vaccine.is_expired() is False

    def test_reconstructed_vaccine_accepts_zero_volume(self) -> None:
        assert Vaccine(volume_in_ml=0, brand="X").volume_in_ml == 0

    def test_administer_requires_positive_volume(self) -> None:
        with pytest.raises(ValidationError):
            Vaccine.administer(0, "Rabivac")

    def test_negative_volume_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vaccine(volume_in_ml=-1, brand="X")

    def test_empty_brand_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vaccine(volume_in_ml=1, brand="")

    def test_datetime_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Vaccine(volume_in_ml=1, brand="X", date_of_application=datetime(2024, 1, 1, 10, 0))

    def test_setter_revalidates_and_keeps_old_value(self, january_vaccine: Vaccine) -> None:
        with pytest.raises(ValidationError):
            january_vaccine.brand = ""
        assert january_vaccine.brand == "Rabivac"

        january_vaccine.volume_in_ml = 4
        assert january_vaccine.volume_in_ml == 4

    def test_parse_date(self) -> None:
        assert Vaccine.parse_date("02/07/2024") == date(2024, 7, 2)

    @pytest.mark.parametrize("text", ["2024-07-02", "31/02/2024", "", "7/2/24x"])
    def test_parse_date_rejects_bad_format(self, text: str) -> None:
        with pytest.raises(FormatError):
            Vaccine.parse_date(text)

    def test_format_date(self, january_vaccine: Vaccine) -> None:
        assert january_vaccine.format_date() == "01/01/2024"


# =============================================================================
# ANIMAL
# =============================================================================


class TestAnimal:
    """Tests for Animal"""

    def test_creation_generates_id(self) -> None:
        a, b = Animal(name="Rex", age=3), Animal(name="Rex", age=3)
        assert a.id != b.id
        assert a.vaccines == []
        assert a.owner_ids == set()

    @pytest.mark.parametrize("name", ["", None])
    def test_invalid_name_rejected(self, name) -> None:
        with pytest.raises(ValidationError):
            Animal(name=name, age=1)

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Animal(name="Rex", age=-1)

    def test_zero_age_allowed(self) -> None:
        assert Animal(name="Rex", age=0).age == 0

    def test_setters_revalidate(self) -> None:
        animal = Animal(name="Rex", age=3)
        with pytest.raises(ValidationError):
            animal.age = -2
        with pytest.raises(ValidationError):
            animal.name = ""
        assert (animal.name, animal.age) == ("Rex", 3)

        animal.name = "Rexy"
        assert animal.name == "Rexy"

    def test_id_is_immutable(self) -> None:
        animal = Animal(name="Rex", age=3)
        with pytest.raises(ValidationError):
            animal.id = uuid4()

    def test_equality_by_id(self) -> None:
        animal = Animal(name="Rex", age=3)
        twin = Animal(name="Other", age=9, id=animal.id)
        assert animal == twin
        assert hash(animal) == hash(twin)
        assert animal != Animal(name="Rex", age=3)

    def test_add_vaccine_uses_today(self) -> None:
        animal = Animal(name="Rex", age=3)
        vaccine = animal.add_vaccine(2, "Rabivac")
        assert animal.vaccines == [vaccine]
        assert vaccine.date_of_application == date.today()

    def test_add_vaccine_invalid_leaves_history_unchanged(self) -> None:
        animal = Animal(name="Rex", age=3)
        with pytest.raises(ValidationError):
            animal.add_vaccine(0, "Rabivac")
        assert animal.vaccines == []

    def test_unique_brands_first_seen_order(self) -> None:
        animal = Animal(name="Rex", age=3)
        for brand in ["B", "A", "B", "C", "A"]:
            animal.add_vaccine(1, brand)
        assert animal.unique_brands() == ["B", "A", "C"]

    def test_owner_ids_are_a_set(self) -> None:
        animal = Animal(name="Rex", age=3)
        owner_id = uuid4()
        animal.add_owner_id(owner_id)
        animal.add_owner_id(owner_id)
        assert animal.owner_id_set() == {owner_id}

    def test_getters_return_copies(self) -> None:
        animal = Animal(name="Rex", age=3)
        animal.add_vaccine(1, "A")
        animal.vaccine_list().clear()
        animal.owner_id_set().add(uuid4())
        assert len(animal.vaccines) == 1
        assert animal.owner_ids == set()


# =============================================================================
# OWNER
# =============================================================================


class TestOwner:
    """Tests for Owner"""

    def test_valid_owner(self, owner_fields: dict) -> None:
        owner = Owner(**owner_fields)
        assert owner.username == "ana_torres"
        assert owner.animal_ids == []

    def test_short_username_rejected(self, owner_fields: dict) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "username": "ab"})

    def test_eight_char_username_accepted(self, owner_fields: dict) -> None:
        assert Owner(**{**owner_fields, "username": "abcdefgh"}).username == "abcdefgh"

    @pytest.mark.parametrize(
        "username",
        ["abcdefg", "1abcdefgh", "_abcdefgh", "abcd efgh", "a" * 32, "abcdefgh!"],
    )
    def test_bad_usernames_rejected(self, owner_fields: dict, username: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "username": username})

    def test_longest_username_accepted(self, owner_fields: dict) -> None:
        assert Owner(**{**owner_fields, "username": "a" * 31})

    @pytest.mark.parametrize(
        "password",
        ["secret#123", "SECRET#123", "Secret#abc", "Secret1234", "Se#1", ""],
    )
    def test_weak_passwords_rejected(self, owner_fields: dict, password: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "password": password})

    @pytest.mark.parametrize("password", ["Secret#123", "aB3 efgh", "Zz9-zzzz"])
    def test_strong_passwords_accepted(self, owner_fields: dict, password: str) -> None:
        assert Owner(**{**owner_fields, "password": password}).password == password

    @pytest.mark.parametrize("email", ["ana", "ana@example", "ana@@example.com", "a na@x.io"])
    def test_bad_email_rejected(self, owner_fields: dict, email: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "email": email})

    def test_underage_rejected(self, owner_fields: dict) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "age": 17})

    @pytest.mark.parametrize("phone", ["555123456", "55512345678", "555-123-4567", "555123456\n"])
    def test_bad_phone_rejected(self, owner_fields: dict, phone: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "phone": phone})

    @pytest.mark.parametrize("zip_code", ["62701", "62701-1234"])
    def test_zip_accepted(self, owner_fields: dict, zip_code: str) -> None:
        assert Owner(**{**owner_fields, "zip": zip_code}).zip == zip_code

    @pytest.mark.parametrize("zip_code", ["6270", "62701-12", "62701 1234", "abcde"])
    def test_bad_zip_rejected(self, owner_fields: dict, zip_code: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, "zip": zip_code})

    @pytest.mark.parametrize("field", ["name", "address", "city", "state", "country"])
    def test_empty_text_fields_rejected(self, owner_fields: dict, field: str) -> None:
        with pytest.raises(ValidationError):
            Owner(**{**owner_fields, field: ""})

    def test_username_cannot_change(self, owner_fields: dict) -> None:
        owner = Owner(**owner_fields)
        with pytest.raises(ValidationError):
            owner.username = "someone_else"

    def test_setter_revalidates(self, owner_fields: dict) -> None:
        owner = Owner(**owner_fields)
        with pytest.raises(ValidationError):
            owner.email = "broken"
        assert owner.email == "ana@example.com"

    def test_animal_ids_keep_duplicates_and_order(self, owner_fields: dict) -> None:
        owner = Owner(**owner_fields)
        a, b = uuid4(), uuid4()
        for animal_id in (a, b, a):
            owner.add_animal_id(animal_id)
        assert owner.animal_id_list() == [a, b, a]

        assert owner.remove_animal_id(a) is True
        assert owner.animal_ids == [b, a]
        assert owner.remove_animal_id(uuid4()) is False

    def test_password_not_in_repr(self, owner_fields: dict) -> None:
        assert "Secret#123" not in repr(Owner(**owner_fields))
