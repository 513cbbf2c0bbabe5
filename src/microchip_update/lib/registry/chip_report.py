"""Dogs Data (microchip) report reconciliation.

The rescue's web page can also export a "Dogs Data" report listing chips
and their registered owners.  It was meant to be the Found.org upload file
but has never been in the right format, so we only use it for one thing:
when a dog is adopted by one of our own volunteers, the DIR carries no
adopter data for it and the only copy is in this report.  Applying the
report copies that adopter data onto the matching dog records.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from microchip_update.lib.registry.parser import read_report
from microchip_update.lib.registry.validators import validate_microchip

if TYPE_CHECKING:
    from microchip_update.lib.errors.log import ErrorLog
    from microchip_update.lib.registry.registry import DogRegistry

CHIP_REPORT_HEADERS: list[str] = [
    "Adoption FName",
    "Adoption LName",
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

# Chip report column -> DogRecord adopter field
_ADOPTER_COLUMNS: dict[str, str] = {
    "Adoption FName": "adopter_first_name",
    "Adoption LName": "adopter_last_name",
    "Email Address": "adopter_email",
    "Address 1": "adopter_address",
    "City": "adopter_city",
    "State": "adopter_state",
    "Zip Code": "adopter_zip",
    "Home Phone": "adopter_home_phone",
    "Work Phone": "adopter_work_phone",
    "Cell Phone": "adopter_cell_phone",
}


def apply_chip_report(file_path: Path, registry: DogRegistry, errors: ErrorLog) -> int:
    """Copy adopter data from a Dogs Data report onto the matching dogs.

    Rows are matched to dogs by the microchip number exactly as recorded in
    the DIR.  Rows with an invalid chip or no matching dog are skipped with
    a warning, and a chip listed twice is reported against its dog.

    Args:
        file_path: Path to the Dogs Data report CSV.
        registry: Registry whose records are updated in place.
        errors: Error log for data problems.

    Returns:
        Number of dogs updated.

    Raises:
        ReportFormatError: If the file can't be read or has the wrong layout.
    """
    frame = read_report(file_path, CHIP_REPORT_HEADERS)
    seen: set[str] = set()
    applied = 0

    for row in frame.to_dict(orient="records"):
        chip = str(row["Microchip Number"])
        result = validate_microchip(chip)
        if not result.ok:
            logger.warning(f"Skipping chip report row: {result.reason}")
            continue

        dog = registry.find_chip(chip)
        if dog is None:
            logger.warning(f"no dog record for microchip {result.value}")
            continue
        if result.value in seen:
            errors.add(dog, f'duplicate microchip "{result.value}"')
            continue
        seen.add(result.value)

        pet_name = str(row["Pet Name"])
        if pet_name != dog.name:
            errors.add(dog, f'dog name doesn\'t match dog data - "{pet_name}" vs "{dog.name}"')

        for column, attr in _ADOPTER_COLUMNS.items():
            setattr(dog, attr, str(row[column]))
        dog.verify_all(errors)
        applied += 1

    logger.info(f"{applied} chips loaded from {file_path}")
    return applied
