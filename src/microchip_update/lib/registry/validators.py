"""Field validators for Dog Information Report data.

Every validator is a pure function that takes the raw field text and
returns a :class:`ValidationResult`.  On success ``value`` is the normalized
text; on failure it is what the caller should store in place of the bad
value (blank, or a default) and ``reason`` describes the problem.
"""

import re
from dataclasses import dataclass

# ISO/FDXB chips are 15 decimal digits.  When the first digit is a 9 the
# first 3 or 5 digits identify the manufacturer (981 Datamars, 956 Trovan,
# 977 AVID, 982 Allflex, 985 HomeAgain ...).  Other ISO chips start with a
# country code, which we don't accept.
_ISO_CHIP_RE = re.compile(r"9\d{14}", re.ASCII)
# One dog came to us with a 15 digit chip that starts with 202.
_LEGACY_202_CHIP_RE = re.compile(r"202\d{12}", re.ASCII)
# FDXA chips are 10 character alphanumeric codes (AVID, Allflex, HomeAgain, Trovan).
_FDXA_CHIP_RE = re.compile(r"[0-9A-Fa-f]{10}")
# Old 9 digit chips, traditionally written in groups of three.
_NINE_DIGIT_CHIP_RE = re.compile(r"(\d{3})[ *]?(\d{3})[ *]?(\d{3})", re.ASCII)

_PHONE_RE = re.compile(r"\+?1?\s?\(?(\d{3})\)?[\s\-/*,.]*(\d{3})[\s\-=*,.]*(\d{4})", re.ASCII)
_ZIP_RE = re.compile(r"\d{5}(-\d{4})?", re.ASCII)
_EMAIL_RE = re.compile(r"[A-Za-z0-9_%+\-.]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")
_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_AGE_RE = re.compile(r"(\d+)\s+years\s+(\d+)\s+months", re.ASCII)

USPS_STATE_CODES = frozenset(
    {
        "AL", "AK", "AS", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FM", "FL", "GA", "GU",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MH", "MD", "MA", "MI", "MN",
        "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "MP", "OH", "OK",
        "OR", "PW", "PA", "PR", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VI", "VA", "WA",
        "WV", "WI", "WY",
    }
)  # fmt: skip

DEFAULT_STATE = "CA"
DEFAULT_SEX = "Male"
DEFAULT_SPAY_NEUTER = "Yes"

MAX_AGE_YEARS = 20
MAX_AGE_MONTHS = 12
MIN_DATE_YEAR = 1990
MAX_DATE_YEAR = 2099


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a single field."""

    ok: bool
    value: str
    reason: str | None = None


def _accept(value: str) -> ValidationResult:
    return ValidationResult(ok=True, value=value)


def _reject(reason: str, value: str = "") -> ValidationResult:
    return ValidationResult(ok=False, value=value, reason=reason)


def validate_microchip(chip: str) -> ValidationResult:
    """Validate a microchip number, normalizing old 9 digit chips.

    A blank chip always fails; callers must tell "no chip" apart from a bad
    chip before calling this.

    Args:
        chip: Raw microchip text.

    Returns:
        ValidationResult.  On failure ``value`` is the original text, since
        a chip number is never cleared.
    """
    if not chip:
        return _reject("microchip cannot be blank")
    if _ISO_CHIP_RE.fullmatch(chip) or _LEGACY_202_CHIP_RE.fullmatch(chip) or _FDXA_CHIP_RE.fullmatch(chip):
        return _accept(chip)
    match = _NINE_DIGIT_CHIP_RE.fullmatch(chip)
    if match:
        return _accept("".join(match.groups()))
    return _reject(f'invalid microchip "{chip}"', chip)


def validate_phone(phone: str, which: str = "home") -> ValidationResult:
    """Validate a phone number and reduce it to ten bare digits.

    Blank and "none" are accepted as "no phone".  International numbers
    are not supported.

    Args:
        phone: Raw phone text.
        which: Which phone this is (home, work or cell), for the message.

    Returns:
        ValidationResult with the 10 digit number, or blank on failure.
    """
    if not phone or phone.lower() == "none":
        return _accept("")
    match = _PHONE_RE.fullmatch(phone)
    if match is None:
        return _reject(f'invalid {which} phone "{phone}"')
    return _accept("".join(match.groups()))


def validate_zip(zip_code: str) -> ValidationResult:
    """Validate a five digit or ZIP+4 zip code.  Blank is not allowed."""
    if not zip_code:
        return _reject("zip code cannot be blank")
    if _ZIP_RE.fullmatch(zip_code):
        return _accept(zip_code)
    return _reject(f'invalid zip code "{zip_code}"')


def validate_email(email: str) -> ValidationResult:
    """Check that an email address looks syntactically valid.  Blank is not allowed."""
    if not email:
        return _reject("email address cannot be blank")
    if _EMAIL_RE.fullmatch(email):
        return _accept(email)
    return _reject(f'invalid email address "{email}"')


def validate_state(state: str) -> ValidationResult:
    """Validate a USPS two letter state abbreviation.

    A lot of people leave the state out, so blank quietly becomes CA.
    Lower case abbreviations are rejected.
    """
    if not state:
        return _accept(DEFAULT_STATE)
    if len(state) == 2 and state in USPS_STATE_CODES:
        return _accept(state)
    return _reject(f'invalid state "{state}"')


def validate_sex(sex: str) -> ValidationResult:
    """Validate Male/Female, defaulting to Male."""
    if sex.lower() in ("male", "female"):
        return _accept(sex)
    return _reject(f'invalid sex "{sex}"', DEFAULT_SEX)


def validate_spay_neuter(neuter: str) -> ValidationResult:
    """Validate the Yes/No spay/neuter flag, defaulting to Yes."""
    if neuter.lower() in ("yes", "no"):
        return _accept(neuter)
    return _reject(f'invalid spay/neuter "{neuter}"', DEFAULT_SPAY_NEUTER)


def parse_date(value: str) -> tuple[int, int, int] | None:
    """Parse a ``YYYY-MM-DD`` report date into (year, month, day).

    Only range checks are applied (year 1990-2099, month 1-12, day 1-31);
    the day is not checked against the length of the month.
    """
    match = _DATE_RE.fullmatch(value)
    if match is None:
        return None
    year, month, day = (int(group) for group in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    if not MIN_DATE_YEAR <= year <= MAX_DATE_YEAR:
        return None
    return year, month, day


def parse_age(age: str) -> tuple[int, int] | None:
    """Parse an age of the form ``"2 Years 3 Months"`` into (years, months)."""
    match = _AGE_RE.fullmatch(age.lower())
    if match is None:
        return None
    years, months = int(match.group(1)), int(match.group(2))
    if years > MAX_AGE_YEARS or months > MAX_AGE_MONTHS:
        return None
    return years, months


def format_date(day: int, month: int, year: int) -> str:
    """Format a date as ``MM/DD/YYYY``."""
    return f"{month:02d}/{day:02d}/{year:04d}"


def derive_birthday(age: str, date_acquired: str) -> str | None:
    """Work out a date of birth from the age recorded at acquisition.

    The report only gives the age in years and months relative to the date
    the dog was acquired, so the day of the month is always 01.

    Args:
        age: Age text, e.g. ``"2 Years 3 Months"``.
        date_acquired: Acquisition date, ``YYYY-MM-DD``.

    Returns:
        The birthday as ``MM/01/YYYY``, or None if either input is blank or
        malformed.
    """
    if not age or not date_acquired:
        return None
    parsed_age = parse_age(age)
    acquired = parse_date(date_acquired)
    if parsed_age is None or acquired is None:
        return None
    age_years, age_months = parsed_age
    acquired_year, acquired_month, _ = acquired
    year = acquired_year - age_years
    month = acquired_month - age_months
    if month < 1:
        year -= 1
        month += 12
    return format_date(1, month, year)
