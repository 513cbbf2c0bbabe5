"""Collector for dog data problems found while loading and comparing reports.

Every problem is attributed to a dog and written to the error report CSV,
which is handy for producing a summary of the records that need fixing.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from microchip_update.lib.exporter.csv_writer import write_csv

if TYPE_CHECKING:
    from microchip_update.lib.registry.dog import DogRecord

ERROR_HEADERS = ["Name", "Number", "Contact Member", "Error"]


@dataclass(frozen=True)
class ErrorEntry:
    """One line of the error report."""

    name: str
    number: str
    contact: str
    message: str

    def to_row(self) -> dict[str, str]:
        """Map this entry onto the error report columns."""
        return dict(zip(ERROR_HEADERS, (self.name, self.number, self.contact, self.message), strict=True))


class ErrorLog:
    """Ordered list of error entries.  Insertion order is report order."""

    def __init__(self) -> None:
        self._entries: list[ErrorEntry] = []

    def add(self, dog: DogRecord, message: str) -> ErrorEntry:
        """Record a problem with a dog record."""
        return self.add_entry(dog.name, str(dog.number), dog.responsible_party, message)

    def add_entry(self, name: str, number: str, contact: str, message: str) -> ErrorEntry:
        """Record a problem from its individual parts."""
        entry = ErrorEntry(name=name, number=number, contact=contact, message=message)
        logger.warning(f"dog {name} #{number} contact {contact} - {message}")
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> list[ErrorEntry]:
        return list(self._entries)

    def messages_for(self, number: int) -> list[str]:
        """Return every message logged against one dog number."""
        return [e.message for e in self._entries if e.number == str(number)]

    def clear(self) -> None:
        self._entries.clear()

    def write(self, path: Path) -> int:
        """Write the error report CSV and return the number of rows written."""
        count = write_csv(path, (e.to_row() for e in self._entries), columns=ERROR_HEADERS)
        logger.info(f"Wrote {count} bad dogs to {path}")
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)


@contextmanager
def open_error_log(path: Path) -> Iterator[ErrorLog]:
    """Yield a fresh error log and write it to ``path`` however the block exits."""
    errors = ErrorLog()
    try:
        yield errors
    finally:
        errors.write(path)
