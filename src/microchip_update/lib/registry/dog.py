"""A single dog's record from the Dog Information Report.

The dog number is the only field stored as a number and the only one that
is validated when a row is loaded.  Everything else is kept as text exactly
as it appears in the report, which may be valid or may be garbage; the
``verify_*`` methods check (and where possible fix) the fields that matter
for a Found.org registration.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

from microchip_update.lib.registry.validators import (
    ValidationResult,
    derive_birthday,
    parse_date,
    validate_email,
    validate_phone,
    validate_sex,
    validate_spay_neuter,
    validate_state,
    validate_zip,
)

if TYPE_CHECKING:
    from microchip_update.lib.errors.log import ErrorLog

MAX_DOG_NUMBER = 99999

_DOG_NUMBER_RE = re.compile(r"\d+", re.ASCII)


class InvalidDogNumberError(ValueError):
    """Raised when a report row has a missing or out of range dog number."""


def parse_dog_number(text: str) -> int:
    """Parse and range check a dog number.

    Raises:
        InvalidDogNumberError: If the text is not a number in 1..99999.
    """
    if not _DOG_NUMBER_RE.fullmatch(text):
        msg = f"invalid dog number {text}"
        raise InvalidDogNumberError(msg)
    number = int(text)
    if number == 0 or number > MAX_DOG_NUMBER:
        msg = f"invalid dog number {number}"
        raise InvalidDogNumberError(msg)
    return number


@dataclass
class DogRecord:
    """One dog from the Dog Information Report.

    ``number`` and ``microchip`` are the keys of a DogRegistry and must not
    be changed once the record has been added to one.
    """

    number: int
    name: str = ""
    microchip: str = ""
    age: str = ""
    sex: str = ""
    neuter: str = ""
    status: str = ""
    location: str = ""
    how_acquired: str = ""
    date_acquired: str = ""
    primary_contact_first_name: str = ""
    primary_contact_last_name: str = ""
    surrender_first_name: str = ""
    surrender_last_name: str = ""
    surrender_address: str = ""
    surrender_city: str = ""
    surrender_state: str = ""
    surrender_zip: str = ""
    originating_area: str = ""
    adopter_first_name: str = ""
    adopter_last_name: str = ""
    ac_first_name: str = ""
    ac_last_name: str = ""
    adopter_address: str = ""
    adopter_city: str = ""
    adopter_state: str = ""
    adopter_zip: str = ""
    adopter_area: str = ""
    adopter_email: str = ""
    adopter_home_phone: str = ""
    adopter_work_phone: str = ""
    adopter_cell_phone: str = ""
    adoption_status: str = ""
    disposition_date: str = ""
    update_required: bool = field(default=False, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> DogRecord:
        """Build a record from a parsed report row keyed by field name.

        Raises:
            InvalidDogNumberError: If the dog number is missing or invalid.
        """
        number = parse_dog_number(row.get("number", ""))
        text_fields = {f.name for f in fields(cls)} - {"number", "update_required"}
        values = {name: row.get(name, "") for name in text_fields}
        # People like to type "None" in the microchip column
        if values["microchip"].lower() == "none":
            values["microchip"] = ""
        return cls(number=number, **values)

    # --- Status tests.  The database is none too accurate, so beware! ---

    @property
    def has_chip(self) -> bool:
        return bool(self.microchip)

    @property
    def is_euthanized(self) -> bool:
        return "Euthanized" in self.status

    @property
    def is_died(self) -> bool:
        return "Died" in self.status

    @property
    def is_dead(self) -> bool:
        return self.is_euthanized or self.is_died

    @property
    def is_returned(self) -> bool:
        return "Returned" in self.status

    @property
    def is_adopted(self) -> bool:
        """A dog is adopted if an adopter first or last name is recorded.

        The status column can't be trusted for this; plenty of adopted dogs
        are not marked "Adopted" in our database.
        """
        return bool(self.adopter_first_name or self.adopter_last_name)

    @property
    def responsible_party(self) -> str:
        """Best guess at the volunteer responsible for this dog.

        The primary contact is preferred, then the area coordinator.  Failing
        both, the location or originating area is the best we can do.
        """
        if self.primary_contact_first_name or self.primary_contact_last_name:
            return f"{self.primary_contact_first_name} {self.primary_contact_last_name}"
        if self.ac_first_name or self.ac_last_name:
            return f"{self.ac_first_name} {self.ac_last_name}"
        if self.location:
            return self.location
        return self.originating_area

    def acquired_year(self) -> int | None:
        parsed = parse_date(self.date_acquired)
        return parsed[0] if parsed else None

    def was_acquired_after(self, year: int, errors: ErrorLog) -> bool:
        """True if the dog was acquired on or after 1-JAN of ``year``.

        A dog with no usable acquisition date is reported and kept.
        """
        acquired = self.acquired_year()
        if acquired is None:
            errors.add(self, "no acquisition date recorded")
            return True
        return acquired >= year

    def birthday(self) -> str | None:
        """Date of birth as ``MM/01/YYYY``, or None if it can't be worked out."""
        return derive_birthday(self.age, self.date_acquired)

    # --- Verification ---

    def _apply(self, attr: str, result: ValidationResult, errors: ErrorLog, *, quiet: bool = False) -> bool:
        setattr(self, attr, result.value)
        if not result.ok and not quiet:
            errors.add(self, result.reason or "invalid data")
        return result.ok

    def verify_sex(self, errors: ErrorLog) -> bool:
        return self._apply("sex", validate_sex(self.sex), errors)

    def verify_spay_neuter(self, errors: ErrorLog) -> bool:
        return self._apply("neuter", validate_spay_neuter(self.neuter), errors)

    def verify_home_phone(self, errors: ErrorLog, *, quiet: bool = False) -> bool:
        return self._apply("adopter_home_phone", validate_phone(self.adopter_home_phone, "home"), errors, quiet=quiet)

    def verify_work_phone(self, errors: ErrorLog, *, quiet: bool = False) -> bool:
        return self._apply("adopter_work_phone", validate_phone(self.adopter_work_phone, "work"), errors, quiet=quiet)

    def verify_cell_phone(self, errors: ErrorLog, *, quiet: bool = False) -> bool:
        return self._apply("adopter_cell_phone", validate_phone(self.adopter_cell_phone, "cell"), errors, quiet=quiet)

    def verify_adopter_zip(self, errors: ErrorLog) -> bool:
        return self._apply("adopter_zip", validate_zip(self.adopter_zip), errors)

    def verify_adopter_email(self, errors: ErrorLog) -> bool:
        return self._apply("adopter_email", validate_email(self.adopter_email), errors)

    def verify_adopter_state(self, errors: ErrorLog) -> bool:
        return self._apply("adopter_state", validate_state(self.adopter_state), errors)

    def adoption_fields_blank(self) -> bool:
        return not any(
            (
                self.adopter_email,
                self.adopter_first_name,
                self.adopter_last_name,
                self.adopter_cell_phone,
                self.adopter_home_phone,
                self.adopter_work_phone,
                self.adopter_address,
                self.adopter_state,
                self.adopter_zip,
            )
        )

    def verify_all(self, errors: ErrorLog) -> bool:
        """Verify (and fix where possible) every field Found.org cares about.

        If an adopter name is present the rest of the adopter data must be
        valid; if not, all of the adopter data must be blank.  Problems are
        logged to ``errors``; nothing is raised.

        Returns:
            True if every required check passed.
        """
        ok = self.verify_sex(errors)
        ok &= self.verify_spay_neuter(errors)

        if self.birthday() is None:
            errors.add(self, "has no valid DOB")
            ok = False

        if self.is_adopted:
            ok &= self.verify_adopter_email(errors)
            # Home phone is required, cell and work are optional
            ok &= self.verify_home_phone(errors)
            self.verify_cell_phone(errors, quiet=True)
            self.verify_work_phone(errors, quiet=True)
            ok &= self.verify_adopter_zip(errors)
            ok &= self.verify_adopter_state(errors)
        elif not self.adoption_fields_blank():
            errors.add(self, "adoption information should be blank")
            ok = False

        return ok

    def describe(self) -> list[tuple[str, str]]:
        """Labelled field values for display."""
        return [
            ("Name", self.name),
            ("Microchip", self.microchip),
            ("Age", self.age),
            ("Sex", self.sex),
            ("Neuter", self.neuter),
            ("Status", self.status),
            ("Location", self.location),
            ("How Acquired", self.how_acquired),
            ("Date Acquired", self.date_acquired),
            ("A/C Name", f"{self.ac_first_name} {self.ac_last_name}"),
            ("Primary Contact", f"{self.primary_contact_first_name} {self.primary_contact_last_name}"),
            ("Surrender Name", f"{self.surrender_first_name} {self.surrender_last_name}"),
            ("Surrender Address", self.surrender_address),
            ("Surrender City", self.surrender_city),
            ("Surrender State", self.surrender_state),
            ("Surrender Zip", self.surrender_zip),
            ("Originating Area", self.originating_area),
            ("Adopter Name", f"{self.adopter_first_name} {self.adopter_last_name}"),
            ("Adopter Address", self.adopter_address),
            ("Adopter City", self.adopter_city),
            ("Adopter State", self.adopter_state),
            ("Adopter Zip", self.adopter_zip),
            ("Adopter Area", self.adopter_area),
            ("Adopter Email", self.adopter_email),
            ("Adopter Home Phone", self.adopter_home_phone),
            ("Adopter Work Phone", self.adopter_work_phone),
            ("Adopter Cell Phone", self.adopter_cell_phone),
            ("Adoption Status", self.adoption_status),
            ("Disposition Date", self.disposition_date),
        ]
