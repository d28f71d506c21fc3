"""Unit tests for the TD3 quick-field extractor."""

from dataclasses import FrozenInstanceError

import pytest

from src.mrz.checksum import calculate_check_digit, verify_check_digit
from src.mrz.quick_parser import (
    TD3_LINE_LENGTH,
    find_quick_result,
    is_td3_second_line,
    parse_quick_mrz,
)
from src.mrz.types import QuickResult


def build_second_line(
    number: str = "L898902C<",
    nationality: str = "UTO",
    birth: str = "740812",
    sex: str = "F",
    expiry: str = "120415",
    optional: str = "ZE184226B<<<<<",
) -> str:
    """Build a TD3 second line with correct check digits."""
    line = (
        number
        + str(calculate_check_digit(number))
        + nationality
        + birth
        + str(calculate_check_digit(birth))
        + sex
        + expiry
        + str(calculate_check_digit(expiry))
        + optional
        + str(calculate_check_digit(optional))
    )
    return line + "0"


def replace_char(line: str, index: int, char: str) -> str:
    return line[:index] + char + line[index + 1 :]


class TestIsTD3SecondLine:
    """Test the structural TD3 pattern."""

    def test_specimen(self, icao_second_line):
        assert len(icao_second_line) == TD3_LINE_LENGTH
        assert is_td3_second_line(icao_second_line) is True

    def test_wrong_length(self, icao_second_line):
        assert is_td3_second_line(icao_second_line[:-1]) is False
        assert is_td3_second_line(icao_second_line + "0") is False
        assert is_td3_second_line("") is False

    def test_lowercase_rejected(self, icao_second_line):
        assert is_td3_second_line(icao_second_line.lower()) is False

    def test_invalid_sex(self, icao_second_line):
        assert is_td3_second_line(replace_char(icao_second_line, 20, "Q")) is False

    def test_optional_check_may_be_filler(self, icao_second_line):
        assert is_td3_second_line(replace_char(icao_second_line, 42, "<")) is True

    def test_first_line_is_not_second_line(self, icao_mrz_lines):
        assert is_td3_second_line(icao_mrz_lines[0]) is False


class TestParseQuickMRZ:
    """Test field extraction with check digit validation."""

    def test_specimen(self, icao_second_line):
        result = parse_quick_mrz(icao_second_line)

        assert result == QuickResult(
            passport_number="L898902C3", birth_date="740812", expiry_date="120415"
        )

    def test_filler_stripped_from_passport_number(self):
        result = parse_quick_mrz(build_second_line(number="L898902C<"))

        assert result is not None
        assert result.passport_number == "L898902C"

    def test_short_passport_number(self):
        result = parse_quick_mrz(build_second_line(number="AB12<<<<<", sex="<"))

        assert result is not None
        assert result.passport_number == "AB12"

    def test_round_trip(self):
        """Returned fields re-validate against the embedded check digits."""
        line = build_second_line(number="X12345678", birth="991231", expiry="300101")
        result = parse_quick_mrz(line)

        assert result is not None
        assert verify_check_digit(line[0:9], int(line[9]))
        assert verify_check_digit(result.birth_date, int(line[19]))
        assert verify_check_digit(result.expiry_date, int(line[27]))
        assert result.passport_number == line[0:9].replace("<", "")

    def test_passport_number_checksum_mismatch(self, icao_second_line):
        wrong = (int(icao_second_line[9]) + 1) % 10
        assert parse_quick_mrz(replace_char(icao_second_line, 9, str(wrong))) is None

    def test_birth_date_checksum_mismatch(self, icao_second_line):
        wrong = (int(icao_second_line[19]) + 1) % 10
        assert parse_quick_mrz(replace_char(icao_second_line, 19, str(wrong))) is None

    def test_expiry_date_checksum_mismatch(self, icao_second_line):
        wrong = (int(icao_second_line[27]) + 1) % 10
        assert parse_quick_mrz(replace_char(icao_second_line, 27, str(wrong))) is None

    def test_composite_digit_not_checked(self, icao_second_line):
        """Only the three quick fields are validated."""
        assert parse_quick_mrz(replace_char(icao_second_line, 43, "7")) is not None

    def test_ocr_misread_in_field(self, icao_second_line):
        """A misread character in the birth date fails its check digit."""
        assert parse_quick_mrz(replace_char(icao_second_line, 14, "1")) is None

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "L898902C36UTO7408122F1204159ZE184226B<<<<<1",
            "L898902C36UTO7408122F1204159ZE184226B<<<<<100",
            "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
            "L898902C3 UTO7408122F1204159ZE184226B<<<<<10",
        ],
    )
    def test_structural_mismatch(self, line):
        assert parse_quick_mrz(line) is None

    def test_result_is_immutable(self, icao_second_line):
        result = parse_quick_mrz(icao_second_line)
        with pytest.raises(FrozenInstanceError):
            result.birth_date = "000000"

    def test_to_dict(self, icao_second_line):
        assert parse_quick_mrz(icao_second_line).to_dict() == {
            "passport_number": "L898902C3",
            "birth_date": "740812",
            "expiry_date": "120415",
        }


class TestFindQuickResult:
    """Test bottom-up candidate search."""

    def test_finds_second_line_among_noise(self, noisy_ocr_lines):
        result = find_quick_result(noisy_ocr_lines)

        assert result is not None
        assert result.passport_number == "L898902C3"

    def test_prefers_lowest_valid_line(self):
        upper = build_second_line(number="AAAAAAAAA")
        lower = build_second_line(number="BBBBBBBBB")

        result = find_quick_result([upper, lower])

        assert result.passport_number == "BBBBBBBBB"

    def test_skips_invalid_lines_at_bottom(self, icao_second_line):
        broken = replace_char(icao_second_line, 19, "0")
        result = find_quick_result([icao_second_line, broken, "garbage"])

        assert result is not None
        assert result.birth_date == "740812"

    def test_no_valid_line(self, icao_mrz_lines):
        assert find_quick_result(icao_mrz_lines[:1]) is None
        assert find_quick_result([]) is None
