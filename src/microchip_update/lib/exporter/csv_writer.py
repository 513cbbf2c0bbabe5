"""CSV writer for the update and error reports."""

import csv
from collections.abc import Iterable
from pathlib import Path

# Characters that trigger formula execution in spreadsheet applications
_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _sanitize_cell(value: object) -> object:
    """Sanitize a cell value to prevent CSV formula injection.

    Prefixes values starting with formula-triggering characters with
    a single quote to prevent execution in spreadsheet applications.

    Args:
        value: The cell value to sanitize.

    Returns:
        The sanitized value.
    """
    if isinstance(value, str) and value and value[0] in _FORMULA_PREFIXES:
        return f"'{value}"
    return value


def write_csv(
    output_path: Path,
    records: Iterable[dict[str, str]],
    *,
    columns: list[str],
    sanitize: bool = True,
) -> int:
    """Write report rows to a CSV file with a header row.

    Args:
        output_path: Path to write the CSV file.
        records: Iterable of row dicts keyed by column name.
        columns: Column names, in output order.
        sanitize: Guard cells against spreadsheet formula execution.  Turn
            this off for files uploaded elsewhere, which must carry the
            values unchanged.

    Returns:
        Number of records written.
    """
    count = 0

    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()

        for record in records:
            row = {k: _sanitize_cell(v) for k, v in record.items()} if sanitize else record
            writer.writerow(row)
            count += 1

    return count
