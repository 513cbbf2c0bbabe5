"""CLI commands for comparing Dog Information Reports."""

from pathlib import Path

import typer

from microchip_update.core.config import get_settings
from microchip_update.lib.errors import ErrorLog, open_error_log
from microchip_update.lib.reconciler import reconcile
from microchip_update.lib.registry import (
    DogRegistry,
    ReportFormatError,
    apply_chip_report,
    check_new_microchips,
)
from microchip_update.lib.updates import build_updates


def apply_default_extension(path: Path, extension: str) -> Path:
    """Add ``extension`` to a file name that has none."""
    return path if path.suffix else path.with_suffix(extension)


def compare(
    old_file: Path = typer.Argument(..., help="Previous Dog Information Report"),  # noqa: B008
    new_file: Path = typer.Argument(..., help="Current Dog Information Report"),  # noqa: B008
    updates_file: Path | None = typer.Argument(None, help="Found.org update file to write"),  # noqa: B008
    errors_file: Path | None = typer.Argument(None, help="Error report file to write"),  # noqa: B008
    cutoff: int | None = typer.Option(  # noqa: B008
        None, "--cutoff", "-c", min=2010, max=2050, help="Ignore dogs acquired before 1-JAN of this year"
    ),
    old_format: int = typer.Option(  # noqa: B008
        0,
        "--old-format",
        "-o",
        min=0,
        max=2,
        help="1: the old report uses the 35 column layout; 2: both reports do",
    ),
    chip_report: Path | None = typer.Option(  # noqa: B008
        None, "--chip-report", help="Dogs Data report with adopter data for volunteer adoptions"
    ),
    require_chips_since: int | None = typer.Option(  # noqa: B008
        None, "--require-chips-since", help="Report living dogs acquired since this year without a chip"
    ),
) -> None:
    """Compare two reports and write the Found.org update and error files."""
    settings = get_settings()
    extension = settings.default_extension
    old_path = apply_default_extension(old_file, extension)
    new_path = apply_default_extension(new_file, extension)
    updates_path = apply_default_extension(updates_file or Path(settings.updates_file), extension)
    errors_path = apply_default_extension(errors_file or Path(settings.errors_file), extension)
    cutoff_year = cutoff if cutoff is not None else settings.cutoff_year

    with open_error_log(errors_path) as errors:
        try:
            count = _run_compare(
                errors,
                old_path=old_path,
                new_path=new_path,
                updates_path=updates_path,
                cutoff_year=cutoff_year,
                old_new_format=old_format == 0,
                new_new_format=old_format < 2,
                chip_report=chip_report,
                require_chips_since=require_chips_since,
            )
        except ReportFormatError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo(f"  Updates written: {count} to {updates_path}")
        typer.echo(f"  Errors written:  {len(errors)} to {errors_path}")


def _run_compare(
    errors: ErrorLog,
    *,
    old_path: Path,
    new_path: Path,
    updates_path: Path,
    cutoff_year: int,
    old_new_format: bool,
    new_new_format: bool,
    chip_report: Path | None,
    require_chips_since: int | None,
) -> int:
    """Load both reports, compare them and write the update file."""
    settings = get_settings()
    old_dogs = DogRegistry.load(old_path, cutoff_year, errors, new_format=old_new_format)
    new_dogs = DogRegistry.load(new_path, cutoff_year, errors, new_format=new_new_format)
    typer.echo(f"Loaded {len(old_dogs)} old dogs and {len(new_dogs)} new dogs (cutoff {cutoff_year})")

    if chip_report is not None:
        applied = apply_chip_report(chip_report, new_dogs, errors)
        typer.echo(f"Applied adopter data for {applied} chips from {chip_report}")
    if require_chips_since is not None:
        check_new_microchips(new_dogs, require_chips_since, errors)

    result = reconcile(old_dogs, new_dogs, errors)
    typer.echo(f"Compared {result.old_count} old dogs with {result.new_count} new dogs")
    typer.echo(f"  Updates required: {len(result.flagged)}")

    updates = build_updates(new_dogs, errors, settings.organization)
    return updates.write(updates_path)


def show(
    report: Path = typer.Argument(..., help="Dog Information Report", exists=True),  # noqa: B008
    number: int = typer.Argument(..., help="Dog number"),  # noqa: B008
    old_format: bool = typer.Option(False, "--old-format", "-o", help="Report uses the 35 column layout"),  # noqa: B008
) -> None:
    """Print every field of one dog from a report."""
    errors = ErrorLog()
    try:
        dogs = DogRegistry.load(report, 0, errors, new_format=not old_format)
    except ReportFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    dog = dogs.find(number)
    if dog is None:
        typer.echo(f"Dog #{number} not found in {report}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f">>>>> Data for dog #{dog.number} <<<<<")
    for label, value in dog.describe():
        typer.echo(f"  {label:<20} = {value!r}")
