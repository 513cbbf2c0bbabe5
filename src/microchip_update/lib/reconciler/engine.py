"""Compare an old Dog Information Report with a new one.

The database doesn't tell us which dogs need their chip registration
updated, so we infer it from what changed between two reports: dogs that
were rescued, had a chip added, were adopted, or came back to us.  Along
the way every inconsistency we notice is reported.

The comparison is a fixed pipeline of passes.  Each pass reads both
registries and records errors and dogs to flag in a shared state; the
flags are applied to the new registry once every pass has run.  Passes run
in the order listed in ``PASSES`` so the error report always comes out in
the same order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from microchip_update.lib.errors.log import ErrorLog
    from microchip_update.lib.registry.registry import DogRegistry

PLACEHOLDER_DATE = "0000-00-00"


@dataclass
class ReconcileState:
    """Accumulates the results of the comparison passes."""

    errors: ErrorLog
    flagged: list[int] = field(default_factory=list)

    def flag(self, number: int) -> None:
        if number not in self.flagged:
            self.flagged.append(number)


@dataclass
class ReconcileResult:
    """Summary of one comparison."""

    old_count: int
    new_count: int
    flagged: list[int]
    error_count: int


ReconcilePass = Callable[["DogRegistry", "DogRegistry", ReconcileState], None]


def check_disappeared(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """Dogs are never deleted, yet they do vanish.  Only chipped ones matter."""
    for old_dog in old:
        if old_dog.number not in new and old_dog.has_chip:
            state.errors.add(old_dog, f"has microchip {old_dog.microchip} but is not found in new dog report")


def check_acquisitions(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """Find newly acquired dogs and chips that were added or changed."""
    for new_dog in new:
        if new_dog.is_dead or new_dog.is_returned:
            continue
        old_dog = old.find(new_dog.number)
        if old_dog is None:
            logger.info(f"dog {new_dog.name} #{new_dog.number} was acquired")
            if not new_dog.has_chip:
                state.errors.add(new_dog, "no microchip number recorded")
            else:
                state.flag(new_dog.number)
        elif not old_dog.has_chip and new_dog.has_chip:
            logger.info(f"dog {new_dog.name} #{new_dog.number} microchip was added")
            state.flag(new_dog.number)
        elif old_dog.microchip != new_dog.microchip:
            # Found.org can't be fixed from here, so this one is up to a human.
            state.errors.add(
                new_dog,
                f'microchip number changed - was "{old_dog.microchip}" is "{new_dog.microchip}"',
            )


def check_adopted_without_adopter(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """Status says Adopted but nobody is recorded as the adopter.

    Usually a dog adopted by a volunteer; the web page won't record the
    adopter for those.
    """
    for new_dog in new:
        if new_dog.status == "Adopted" and not new_dog.adopter_first_name and not new_dog.adopter_last_name:
            state.errors.add(new_dog, f"{new_dog.status} but no adopting party is recorded")


def check_adopter_without_adoption(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """An adopter is recorded but the status isn't Adopted or Adoption Pending."""
    for new_dog in new:
        if not new_dog.adopter_first_name and not new_dog.adopter_last_name:
            continue
        if new_dog.status in ("Adopted", "Adoption Pending"):
            continue
        # Some dogs died or went home after adoption and still show the adopter.
        if new_dog.is_dead or new_dog.is_returned:
            continue
        state.errors.add(new_dog, f"adopting party is recorded but status is {new_dog.status}")


def check_disposition_dates(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """A disposition date is recorded but the dog is still Evaluation or Available."""
    for new_dog in new:
        if not new_dog.disposition_date or new_dog.disposition_date == PLACEHOLDER_DATE:
            continue
        if new_dog.status in ("Evaluation", "Available"):
            state.errors.add(
                new_dog,
                f"disposition date is {new_dog.disposition_date} but status is {new_dog.status}",
            )


def check_adoptions(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """Flag dogs adopted since the old report; report adopter changes.

    A change of adopting family is only reported.  Whether it should also
    force an update is an open question for the registration coordinator.
    """
    for new_dog in new:
        if new_dog.is_dead or new_dog.is_returned or not new_dog.is_adopted:
            continue
        old_dog = old.find(new_dog.number)
        if old_dog is not None and old_dog.is_adopted:
            if (
                old_dog.adopter_first_name != new_dog.adopter_first_name
                or old_dog.adopter_last_name != new_dog.adopter_last_name
            ):
                state.errors.add(old_dog, "adopting family changed")
        else:
            logger.info(
                f"dog {new_dog.name} #{new_dog.number} was adopted by "
                f"{new_dog.adopter_first_name} {new_dog.adopter_last_name}"
            )
            state.flag(new_dog.number)


def check_returns(old: DogRegistry, new: DogRegistry, state: ReconcileState) -> None:
    """Flag dogs that were adopted in the old report but aren't now."""
    for new_dog in new:
        old_dog = old.find(new_dog.number)
        if old_dog is None or not old_dog.is_adopted:
            continue
        if not new_dog.is_adopted:
            logger.info(f"dog {new_dog.name} #{new_dog.number} was returned")
            state.flag(new_dog.number)


PASSES: tuple[ReconcilePass, ...] = (
    check_disappeared,
    check_acquisitions,
    check_adopted_without_adopter,
    check_adopter_without_adoption,
    check_disposition_dates,
    check_adoptions,
    check_returns,
)


def reconcile(old: DogRegistry, new: DogRegistry, errors: ErrorLog) -> ReconcileResult:
    """Compare two registries and mark the new dogs that need a Found.org update.

    Args:
        old: Registry loaded from the previous report.
        new: Registry loaded from the current report; ``update_required``
            is set on its flagged records.
        errors: Error log for every inconsistency found.

    Returns:
        ReconcileResult with the flagged dog numbers in the order found.
    """
    logger.info(f"Comparing {len(old)} old dogs with {len(new)} new dogs ...")
    start = len(errors)
    state = ReconcileState(errors=errors)

    for check in PASSES:
        check(old, new, state)

    for number in state.flagged:
        dog = new.find(number)
        if dog is not None:
            dog.update_required = True

    logger.info(f"{len(state.flagged)} dogs need updates, {len(errors) - start} problems found")
    return ReconcileResult(
        old_count=len(old),
        new_count=len(new),
        flagged=list(state.flagged),
        error_count=len(errors) - start,
    )
