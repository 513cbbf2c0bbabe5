"""Build the Found.org microchip update records.

An update record carries its own copy of everything Found.org needs; it is
not a view onto the dog record, because what we register often differs
from what the database says (dogs not adopted yet are registered to the
rescue itself).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import astuple, dataclass, fields
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from microchip_update.lib.exporter.csv_writer import write_csv
from microchip_update.lib.registry.validators import validate_microchip

if TYPE_CHECKING:
    from microchip_update.core.config import OrganizationProfile
    from microchip_update.lib.errors.log import ErrorLog
    from microchip_update.lib.registry.dog import DogRecord
    from microchip_update.lib.registry.registry import DogRegistry

FOUND_HEADERS: list[str] = [
    "First Name",
    "Last Name",
    "Email Address",
    "Address 1",
    "Address 2",
    "City",
    "State",
    "Zip Code",
    "Home Phone",
    "Work Phone",
    "Cell Phone",
    "Pet Name",
    "Microchip Number",
    "Service Date",
    "Date of Birth",
    "Species",
    "Sex",
    "Spayed/Neutered",
    "Primary Breed",
    "Secondary Breed",
    "Rescue Group Email",
    "Notes",
]

# We always spay or neuter before adoption, whatever the DIR says about the
# dog's condition when it came in.
SPAYED_NEUTERED = "Yes"


@dataclass(frozen=True)
class UpdateRecord:
    """One row of the Found.org update file.  Field order matches FOUND_HEADERS."""

    first_name: str
    last_name: str
    email: str
    address_1: str
    address_2: str
    city: str
    state: str
    zip_code: str
    home_phone: str
    work_phone: str
    cell_phone: str
    pet_name: str
    microchip: str
    service_date: str
    date_of_birth: str
    species: str
    sex: str
    spayed_neutered: str
    primary_breed: str
    secondary_breed: str
    rescue_group_email: str
    notes: str

    def to_row(self) -> dict[str, str]:
        return dict(zip(FOUND_HEADERS, astuple(self), strict=True))


assert len(fields(UpdateRecord)) == len(FOUND_HEADERS)


def build_update(
    dog: DogRecord,
    microchip: str,
    organization: OrganizationProfile,
    today: date | None = None,
) -> UpdateRecord:
    """Build the Found.org record for one dog.

    Args:
        dog: The dog being registered.
        microchip: The verified (and normalized) chip number.
        organization: Identity used when the dog isn't adopted yet.
        today: Service date; defaults to today's date.

    Returns:
        The update record.
    """
    service_date = (today or date.today()).isoformat()

    if dog.is_adopted:
        # There's no second address line in our database
        contact = {
            "first_name": dog.adopter_first_name,
            "last_name": dog.adopter_last_name,
            "email": dog.adopter_email,
            "address_1": dog.adopter_address,
            "address_2": "",
            "city": dog.adopter_city,
            "state": dog.adopter_state,
            "zip_code": dog.adopter_zip,
            "home_phone": dog.adopter_home_phone,
            "work_phone": dog.adopter_work_phone,
            "cell_phone": dog.adopter_cell_phone,
        }
    else:
        # Found.org insists on a name, email and phone, so register it to us.
        contact = {
            "first_name": organization.first_name,
            "last_name": organization.last_name,
            "email": organization.email,
            "address_1": "",
            "address_2": "",
            "city": "",
            "state": "",
            "zip_code": "",
            "home_phone": organization.phone,
            "work_phone": "",
            "cell_phone": "",
        }

    return UpdateRecord(
        **contact,
        pet_name=dog.name,
        microchip=microchip,
        service_date=service_date,
        date_of_birth=dog.birthday() or "",
        species=organization.species,
        sex=dog.sex,
        spayed_neutered=SPAYED_NEUTERED,
        primary_breed=organization.primary_breed,
        secondary_breed="",
        rescue_group_email=organization.email,
        notes=f"{organization.notes_prefix}{dog.number}",
    )


class UpdateCollection:
    """Update records keyed by microchip.  The first record for a chip wins."""

    def __init__(self) -> None:
        self._updates: dict[str, UpdateRecord] = {}

    def add(self, update: UpdateRecord, dog: DogRecord, errors: ErrorLog) -> bool:
        if update.microchip in self._updates:
            errors.add(dog, f'duplicate microchip "{update.microchip}"')
            return False
        self._updates[update.microchip] = update
        return True

    def find(self, chip: str) -> UpdateRecord | None:
        return self._updates.get(chip)

    def write(self, path: Path) -> int:
        """Write the Found.org update file and return the number of rows."""
        # Found.org gets adopter data exactly as recorded
        count = write_csv(
            path, (u.to_row() for u in self._updates.values()), columns=FOUND_HEADERS, sanitize=False
        )
        logger.info(f"Wrote {count} rows to {path}")
        return count

    def __len__(self) -> int:
        return len(self._updates)

    def __iter__(self) -> Iterator[UpdateRecord]:
        return iter(self._updates.values())


def build_updates(
    registry: DogRegistry,
    errors: ErrorLog,
    organization: OrganizationProfile,
    today: date | None = None,
) -> UpdateCollection:
    """Build update records for every dog marked ``update_required``.

    Each flagged dog is fully verified first, which fixes what can be fixed
    and reports the rest.

    Args:
        registry: The new registry, after reconciliation.
        errors: Error log for data problems.
        organization: Identity used for dogs not adopted yet.
        today: Service date; defaults to today's date.

    Returns:
        The collection of update records.
    """
    updates = UpdateCollection()
    for dog in registry:
        if not dog.update_required:
            continue
        if not dog.has_chip:
            errors.add(dog, "requires update but has no microchip!")
            continue
        dog.verify_all(errors)
        result = validate_microchip(dog.microchip)
        if not result.ok:
            errors.add(dog, f'has invalid microchip "{dog.microchip}"')
            continue
        updates.add(build_update(dog, result.value, organization, today), dog, errors)
    return updates
