"""Tests for the report field validators."""

import pytest

from microchip_update.lib.registry.validators import (
    derive_birthday,
    format_date,
    parse_age,
    parse_date,
    validate_email,
    validate_microchip,
    validate_phone,
    validate_sex,
    validate_spay_neuter,
    validate_state,
    validate_zip,
)


class TestValidateMicrochip:
    """Tests for validate_microchip."""

    @pytest.mark.parametrize("chip", ["981234567890123", "900000000000000", "985112003456789"])
    def test_iso_chip_valid(self, chip: str) -> None:
        """15 digit chips starting with 9 are accepted unchanged."""
        result = validate_microchip(chip)
        assert result.ok
        assert result.value == chip

    def test_fdxa_hex_chip_valid(self) -> None:
        """10 character hex chips are accepted."""
        assert validate_microchip("1234567890").ok
        assert validate_microchip("0A1b2C3d4E").ok

    def test_legacy_202_chip_valid(self) -> None:
        """The 202 manufacturer exception is accepted."""
        assert validate_microchip("202000000000000").ok

    @pytest.mark.parametrize("chip", ["123 456 789", "123*456*789", "123456789"])
    def test_nine_digit_chip_normalized(self, chip: str) -> None:
        """Nine digit chips lose their group separators."""
        result = validate_microchip(chip)
        assert result.ok
        assert result.value == "123456789"

    @pytest.mark.parametrize("chip", ["98123456789012", "9812345678901234", "123456789012345", "12345678G0"])
    def test_invalid_chip(self, chip: str) -> None:
        """Anything outside the known formats is rejected and kept as is."""
        result = validate_microchip(chip)
        assert not result.ok
        assert result.value == chip
        assert chip in (result.reason or "")

    def test_blank_chip_fails(self) -> None:
        """A blank chip is never valid."""
        result = validate_microchip("")
        assert not result.ok
        assert result.reason == "microchip cannot be blank"


class TestValidatePhone:
    """Tests for validate_phone."""

    @pytest.mark.parametrize(
        ("phone", "expected"),
        [
            ("(408) 555-1212", "4085551212"),
            ("408-555-1212", "4085551212"),
            ("408.555.1212", "4085551212"),
            ("+1 408 555 1212", "4085551212"),
            ("4085551212", "4085551212"),
        ],
    )
    def test_valid_phone_normalized(self, phone: str, expected: str) -> None:
        """Recognised formats reduce to ten digits."""
        result = validate_phone(phone)
        assert result.ok
        assert result.value == expected

    @pytest.mark.parametrize("phone", ["", "none", "None", "NONE"])
    def test_blank_or_none_is_no_phone(self, phone: str) -> None:
        """Blank and "none" mean there is no phone."""
        result = validate_phone(phone)
        assert result.ok
        assert result.value == ""

    def test_short_phone_cleared(self) -> None:
        """A seven digit number is rejected and cleared."""
        result = validate_phone("555-1212", "cell")
        assert not result.ok
        assert result.value == ""
        assert result.reason == 'invalid cell phone "555-1212"'


class TestValidateZip:
    """Tests for validate_zip."""

    @pytest.mark.parametrize("zip_code", ["94110", "94110-1234"])
    def test_valid_zip(self, zip_code: str) -> None:
        result = validate_zip(zip_code)
        assert result.ok
        assert result.value == zip_code

    @pytest.mark.parametrize("zip_code", ["", "9411", "941101", "94110-12"])
    def test_invalid_zip_cleared(self, zip_code: str) -> None:
        result = validate_zip(zip_code)
        assert not result.ok
        assert result.value == ""


class TestValidateEmail:
    """Tests for validate_email."""

    def test_valid_email(self) -> None:
        assert validate_email("jane.smith+dogs@example.co.uk").ok

    @pytest.mark.parametrize("email", ["", "jane", "jane@example", "jane@@example.com", "jane smith@example.com"])
    def test_invalid_email_cleared(self, email: str) -> None:
        result = validate_email(email)
        assert not result.ok
        assert result.value == ""


class TestValidateState:
    """Tests for validate_state."""

    def test_blank_defaults_to_ca(self) -> None:
        """A missing state quietly becomes CA."""
        result = validate_state("")
        assert result.ok
        assert result.value == "CA"

    @pytest.mark.parametrize("state", ["CA", "NV", "PR", "DC"])
    def test_valid_state(self, state: str) -> None:
        assert validate_state(state).ok

    @pytest.mark.parametrize("state", ["ca", "ZZ", "Calif", "C"])
    def test_invalid_state_cleared(self, state: str) -> None:
        """Lower case and unknown codes are rejected."""
        result = validate_state(state)
        assert not result.ok
        assert result.value == ""


class TestValidateSexAndNeuter:
    """Tests for validate_sex and validate_spay_neuter."""

    @pytest.mark.parametrize("sex", ["Male", "female", "MALE"])
    def test_valid_sex_kept(self, sex: str) -> None:
        result = validate_sex(sex)
        assert result.ok
        assert result.value == sex

    def test_invalid_sex_defaults_to_male(self) -> None:
        result = validate_sex("Unknown")
        assert not result.ok
        assert result.value == "Male"

    def test_invalid_neuter_defaults_to_yes(self) -> None:
        result = validate_spay_neuter("")
        assert not result.ok
        assert result.value == "Yes"

    def test_valid_neuter_kept(self) -> None:
        assert validate_spay_neuter("no").value == "no"


class TestParsing:
    """Tests for the date and age parsers."""

    def test_parse_date(self) -> None:
        assert parse_date("2020-06-15") == (2020, 6, 15)

    @pytest.mark.parametrize("value", ["", "06/15/2020", "2020-13-01", "2020-00-10", "1989-01-01", "2020-01-32"])
    def test_parse_date_rejects(self, value: str) -> None:
        assert parse_date(value) is None

    def test_parse_age_case_insensitive(self) -> None:
        assert parse_age("2 Years 3 Months") == (2, 3)
        assert parse_age("10  YEARS  0  MONTHS") == (10, 0)

    @pytest.mark.parametrize("age", ["21 Years 0 Months", "1 Years 13 Months", "2 Years", "two Years 3 Months"])
    def test_parse_age_rejects(self, age: str) -> None:
        assert parse_age(age) is None

    def test_format_date(self) -> None:
        assert format_date(1, 3, 2018) == "03/01/2018"


class TestDeriveBirthday:
    """Tests for derive_birthday."""

    def test_simple_subtraction(self) -> None:
        """Years and months are subtracted from the acquisition date."""
        assert derive_birthday("2 Years 3 Months", "2020-06-15") == "03/01/2018"

    def test_month_borrows_from_year(self) -> None:
        """A month below 1 borrows twelve months from the year."""
        assert derive_birthday("0 Years 1 Months", "2020-01-15") == "12/01/2019"

    def test_same_month(self) -> None:
        assert derive_birthday("1 Years 0 Months", "2021-07-04") == "07/01/2020"

    @pytest.mark.parametrize(
        ("age", "acquired"),
        [("", "2020-06-15"), ("2 Years 3 Months", ""), ("puppy", "2020-06-15"), ("2 Years 3 Months", "June 2020")],
    )
    def test_missing_or_malformed(self, age: str, acquired: str) -> None:
        assert derive_birthday(age, acquired) is None


class TestStrictMatching:
    """Values must match a format exactly, in ASCII digits."""

    ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

    @pytest.mark.parametrize("chip", ["981234567890123\n", "1234567890\n", "123 456 789\n", " 981234567890123"])
    def test_chip_with_surrounding_whitespace_rejected(self, chip: str) -> None:
        assert not validate_microchip(chip).ok

    def test_chip_with_non_ascii_digits_rejected(self) -> None:
        assert not validate_microchip("9" + self.ARABIC_INDIC_DIGITS[1] * 14).ok
        assert not validate_microchip(self.ARABIC_INDIC_DIGITS[:9]).ok

    def test_zip_with_trailing_newline_rejected(self) -> None:
        result = validate_zip("94110\n")
        assert not result.ok
        assert result.value == ""

    def test_zip_with_non_ascii_digits_rejected(self) -> None:
        assert not validate_zip(self.ARABIC_INDIC_DIGITS[:5]).ok

    def test_phone_with_non_ascii_digits_rejected(self) -> None:
        result = validate_phone(self.ARABIC_INDIC_DIGITS)
        assert not result.ok
        assert result.value == ""

    def test_phone_with_trailing_newline_rejected(self) -> None:
        assert not validate_phone("4085551212\n").ok

    def test_email_with_trailing_newline_rejected(self) -> None:
        assert not validate_email("jane@example.com\n").ok

    def test_date_and_age_with_non_ascii_digits_rejected(self) -> None:
        assert parse_date("2020-06-15\n") is None
        assert parse_date(self.ARABIC_INDIC_DIGITS[2] + "020-06-15") is None
        assert parse_age(self.ARABIC_INDIC_DIGITS[2] + " Years 3 Months") is None
