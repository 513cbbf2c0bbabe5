"""Dog Information Report (DIR) CSV parser.

The DIR is exported from the rescue's web page and is a dump of every dog
ever entered in the database.  The layout has changed over the years; the
current ("new") report has a County column after Originating Area that
the previous ("old") report lacks.  And yes, "Micropchip" really is spelled
that way in the report.
"""

import csv
from collections.abc import Iterator
from pathlib import Path

import pandas as pd
from loguru import logger

# DIR header -> DogRecord field name.  None marks a column we don't keep.
DIR_COLUMN_MAP: dict[str, str | None] = {
    "Dog Name": "name",
    "Dog Number": "number",
    "Micropchip number": "microchip",
    "Dog Age": "age",
    "Dog Sex": "sex",
    "Dog Breed": None,
    "Dog Neuter": "neuter",
    "Dog Status": "status",
    "Dog Location": "location",
    "How Acquired": "how_acquired",
    "Date Acquired": "date_acquired",
    "Primary Contact Fname": "primary_contact_first_name",
    "Primary Contact Lname": "primary_contact_last_name",
    "Surrender Fname": "surrender_first_name",
    "Surrender Lname": "surrender_last_name",
    "Surrender Address": "surrender_address",
    "Surrender City": "surrender_city",
    "Surrender State": "surrender_state",
    "Surrender Zip Code": "surrender_zip",
    "Originating Area": "originating_area",
    "County": None,
    "Adoption Fname": "adopter_first_name",
    "Adoption Lname": "adopter_last_name",
    "AC Fname": "ac_first_name",
    "AC Lname": "ac_last_name",
    "Adoption Address": "adopter_address",
    "Adoption City": "adopter_city",
    "Adoption State": "adopter_state",
    "Adoption Zip Code": "adopter_zip",
    "Adoption Area": "adopter_area",
    "Adoption Email": "adopter_email",
    "Adoption Home Phone": "adopter_home_phone",
    "Adoption Work Phone": "adopter_work_phone",
    "Adoption Cell Phone": "adopter_cell_phone",
    "Adoption Status": "adoption_status",
    "Adoption or Disposition Date": "disposition_date",
}

NEW_DIR_HEADERS: list[str] = list(DIR_COLUMN_MAP)
OLD_DIR_HEADERS: list[str] = [h for h in NEW_DIR_HEADERS if h != "County"]

assert len(OLD_DIR_HEADERS) == 35
assert len(NEW_DIR_HEADERS) == 36


class ReportFormatError(ValueError):
    """A report file can't be used at all: unreadable, wrong header, or ragged rows."""


def detect_encoding(file_path: Path) -> str:
    """Detect file encoding by attempting to read with common encodings.

    Args:
        file_path: Path to the CSV file.

    Returns:
        The detected encoding string.

    Raises:
        ReportFormatError: If the file can't be opened or decoded.
    """
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            with file_path.open("r", encoding=encoding) as f:
                f.read(8192)
            return encoding
        except UnicodeDecodeError:
            continue
        except OSError as e:
            msg = f"Unable to open {file_path}: {e}"
            raise ReportFormatError(msg) from e
    msg = f"Cannot detect encoding for {file_path}"
    raise ReportFormatError(msg)


def _check_row_widths(file_path: Path, encoding: str, width: int) -> None:
    """Reject the report if any non-blank row has other than ``width`` fields.

    pandas silently pads short rows, so the raw rows are counted here.
    """
    with file_path.open("r", encoding=encoding, newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if row and len(row) != width:
                msg = f"Wrong number of columns in line {reader.line_num} of {file_path}"
                raise ReportFormatError(msg)


def read_report(file_path: Path, headers: list[str]) -> pd.DataFrame:
    """Read a report CSV and verify its header row and row widths.

    Every value is read as text; blank cells stay blank.

    Args:
        file_path: Path to the CSV file.
        headers: The exact column headers the file must start with.

    Returns:
        DataFrame of the data rows, columns named by ``headers``.

    Raises:
        ReportFormatError: If the file can't be read, the header doesn't
            match, or any row has the wrong number of columns.
    """
    encoding = detect_encoding(file_path)
    try:
        frame = pd.read_csv(
            file_path,
            header=None,
            encoding=encoding,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        msg = f"{file_path} is empty"
        raise ReportFormatError(msg) from e
    except pd.errors.ParserError as e:
        msg = f"Wrong number of columns in {file_path}: {e}"
        raise ReportFormatError(msg) from e

    found = [str(c).strip() for c in frame.iloc[0]]
    if found != headers:
        msg = f"Header of {file_path} does not match the expected {len(headers)} column layout"
        raise ReportFormatError(msg)

    _check_row_widths(file_path, encoding, len(headers))

    data = frame.iloc[1:].copy()
    data.columns = headers
    logger.info(f"Read {len(data)} rows from {file_path}")
    return data


def parse_dir(file_path: Path, *, new_format: bool = True) -> Iterator[dict[str, str]]:
    """Parse a Dog Information Report into rows keyed by DogRecord field name.

    Args:
        file_path: Path to the DIR CSV file.
        new_format: True for the 36 column layout with County, False for
            the older 35 column layout.

    Yields:
        One dict per dog row.

    Raises:
        ReportFormatError: If the file layout is wrong.
    """
    headers = NEW_DIR_HEADERS if new_format else OLD_DIR_HEADERS
    frame = read_report(file_path, headers)
    rename_map = {h: f for h, f in DIR_COLUMN_MAP.items() if f is not None and h in headers}
    frame = frame[list(rename_map)].rename(columns=rename_map)
    for record in frame.to_dict(orient="records"):
        yield {k: str(v) for k, v in record.items()}
