"""Collection of dog records for one Dog Information Report snapshot.

Every dog has a unique dog number and is kept in the primary store.  Only
dogs with a non-blank microchip appear in the chip index, which maps the
chip to the dog number; the store owns the records, the index only points
at them.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from microchip_update.lib.registry.dog import DogRecord, InvalidDogNumberError
from microchip_update.lib.registry.parser import parse_dir

if TYPE_CHECKING:
    from microchip_update.lib.errors.log import ErrorLog


class DogRegistry:
    """Dogs from one report, indexed by dog number and by microchip."""

    def __init__(self) -> None:
        self._dogs: dict[int, DogRecord] = {}
        self._chips: dict[str, int] = {}

    def add(self, dog: DogRecord, errors: ErrorLog) -> bool:
        """Add a dog, rejecting duplicate dog numbers and duplicate chips.

        Both checks happen before either index is touched, so a rejected dog
        leaves the registry unchanged.

        Returns:
            True if the dog was added.
        """
        if dog.number in self._dogs:
            errors.add(dog, "already in collection")
            return False
        if dog.microchip:
            other = self.find_chip(dog.microchip)
            if other is not None:
                errors.add(dog, f"and {other.name} #{other.number} have the same microchip")
                return False

        self._dogs[dog.number] = dog
        if dog.microchip:
            self._chips[dog.microchip] = dog.number
        return True

    def find(self, number: int) -> DogRecord | None:
        return self._dogs.get(number)

    def find_chip(self, chip: str) -> DogRecord | None:
        number = self._chips.get(chip)
        return None if number is None else self._dogs[number]

    @property
    def chip_count(self) -> int:
        return len(self._chips)

    def __len__(self) -> int:
        return len(self._dogs)

    def __iter__(self) -> Iterator[DogRecord]:
        return iter(self._dogs.values())

    def __contains__(self, number: object) -> bool:
        return number in self._dogs

    @classmethod
    def load(
        cls,
        file_path: Path,
        cutoff_year: int,
        errors: ErrorLog,
        *,
        new_format: bool = True,
    ) -> DogRegistry:
        """Load a registry from a Dog Information Report CSV.

        The report holds every dog since the beginning of time, so dogs
        acquired before 1-JAN of ``cutoff_year`` are discarded.  Dog data is
        NOT verified here; the database is full of junk and only the dogs
        that need registering get checked.

        Args:
            file_path: Path to the DIR CSV file.
            cutoff_year: Earliest acquisition year to keep.
            errors: Error log for bad rows.
            new_format: True for the 36 column layout, False for 35.

        Returns:
            The loaded registry.

        Raises:
            ReportFormatError: If the file can't be read or has the wrong layout.
        """
        registry = cls()
        for row in parse_dir(file_path, new_format=new_format):
            try:
                dog = DogRecord.from_row(row)
            except InvalidDogNumberError as e:
                errors.add_entry(row.get("name", ""), row.get("number", ""), "", str(e))
                continue
            if dog.was_acquired_after(cutoff_year, errors):
                registry.add(dog, errors)

        logger.info(f"Registry created from {file_path}, {len(registry)} dogs, {registry.chip_count} chips")
        return registry


def check_new_microchips(registry: DogRegistry, since_year: int, errors: ErrorLog) -> int:
    """Report living dogs acquired since ``since_year`` that have no chip.

    Every dog is supposed to be chipped when we get it, but sometimes the
    chip number never makes it into the database.

    Returns:
        Number of dogs reported.
    """
    count = 0
    for dog in registry:
        if dog.is_dead or dog.is_returned:
            continue
        if dog.was_acquired_after(since_year, errors) and not dog.has_chip:
            errors.add(dog, "should have a microchip!!")
            count += 1
    return count
