"""Shared test fixtures: error logs, dog record factories, and report files."""

import csv
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from microchip_update.core.config import OrganizationProfile
from microchip_update.lib.errors import ErrorLog
from microchip_update.lib.registry import NEW_DIR_HEADERS, OLD_DIR_HEADERS, DogRecord, DogRegistry
from microchip_update.lib.registry.parser import DIR_COLUMN_MAP


@pytest.fixture
def errors() -> ErrorLog:
    """Fresh error log."""
    return ErrorLog()


@pytest.fixture
def organization() -> OrganizationProfile:
    """Organization identity used for unadopted registrations."""
    return OrganizationProfile(
        first_name="NGRR",
        last_name="Rescue",
        email="chips@example.org",
        phone="4085550100",
        species="Dog",
        primary_breed="Golden Retriever",
        notes_prefix="NGRR #",
    )


def _dog(number: int = 101, **overrides: Any) -> DogRecord:
    values: dict[str, Any] = {
        "name": "Buddy",
        "microchip": "",
        "age": "2 Years 3 Months",
        "sex": "Male",
        "neuter": "Yes",
        "status": "Available",
        "date_acquired": "2020-06-15",
        "primary_contact_first_name": "Pat",
        "primary_contact_last_name": "Jones",
    }
    values.update(overrides)
    return DogRecord(number=number, **values)


def _adopted_dog(number: int = 101, **overrides: Any) -> DogRecord:
    values: dict[str, Any] = {
        "status": "Adopted",
        "microchip": "981020000000001",
        "adopter_first_name": "Jane",
        "adopter_last_name": "Smith",
        "adopter_address": "1 Main St",
        "adopter_city": "San Jose",
        "adopter_state": "CA",
        "adopter_zip": "95123",
        "adopter_email": "jane@example.com",
        "adopter_home_phone": "(408) 555-1212",
        "disposition_date": "2021-01-10",
    }
    values.update(overrides)
    return _dog(number, **values)


@pytest.fixture
def make_dog() -> Callable[..., DogRecord]:
    """Factory for a plausible, unadopted dog record."""
    return _dog


@pytest.fixture
def make_adopted_dog() -> Callable[..., DogRecord]:
    """Factory for an adopted dog with complete, valid adopter data."""
    return _adopted_dog


@pytest.fixture
def make_registry() -> Callable[..., DogRegistry]:
    """Factory for a registry holding the given dogs."""

    def _registry(*dogs: DogRecord) -> DogRegistry:
        registry = DogRegistry()
        log = ErrorLog()
        for dog in dogs:
            assert registry.add(dog, log), log.entries
        return registry

    return _registry


def _dir_row(number: int | str, *, new_format: bool = True, **fields: str) -> list[str]:
    headers = NEW_DIR_HEADERS if new_format else OLD_DIR_HEADERS
    values = {"number": str(number), "name": "Buddy", "date_acquired": "2020-06-15", **fields}
    return [values.get(DIR_COLUMN_MAP[h] or "", "") for h in headers]


@pytest.fixture
def dir_row() -> Callable[..., list[str]]:
    """Factory for one DIR row in column order, from DogRecord field names."""
    return _dir_row


@pytest.fixture
def write_dir(tmp_path: Path) -> Callable[..., Path]:
    """Write a DIR CSV file with the header for the chosen layout."""

    def _write(name: str, rows: list[list[str]], *, new_format: bool = True) -> Path:
        path = tmp_path / name
        headers = NEW_DIR_HEADERS if new_format else OLD_DIR_HEADERS
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            writer.writerows(rows)
        return path

    return _write
