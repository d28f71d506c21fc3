"""Unit tests for ICAO 9303 check digit calculation."""

import pytest

from src.mrz.checksum import (
    MRZ_WEIGHTS,
    calculate_check_digit,
    char_value,
    checked_substring,
    verify_check_digit,
)


class TestCharValue:
    """Test character-to-value mapping."""

    def test_digits(self):
        """Digits map to their numeric value."""
        for digit in range(10):
            assert char_value(str(digit)) == digit

    def test_filler(self):
        """Filler '<' maps to 0."""
        assert char_value("<") == 0

    def test_letters(self):
        """Letters map to 10-35 (A=10 ... Z=35)."""
        assert char_value("A") == 10
        assert char_value("B") == 11
        assert char_value("L") == 21
        assert char_value("Z") == 35

    def test_unmapped_characters_are_zero(self):
        """Unmapped characters are tolerated and map to 0."""
        assert char_value("a") == 0
        assert char_value("@") == 0
        assert char_value(" ") == 0
        assert char_value("é") == 0


class TestCalculateCheckDigit:
    """Test check digit calculation with 7-3-1 weights."""

    def test_weights(self):
        """Weights repeat 7, 3, 1."""
        assert MRZ_WEIGHTS == (7, 3, 1)

    def test_worked_example(self):
        """AB2 -> (10*7 + 11*3 + 2*1) mod 10 = 105 mod 10 = 5."""
        assert calculate_check_digit("AB2") == 5

    def test_icao_document_number(self):
        """Specimen document number field with filler."""
        assert calculate_check_digit("L898902C<") == 3

    def test_icao_specimen_fields(self):
        """Known check digits of the ICAO specimen passport."""
        assert calculate_check_digit("L898902C3") == 6
        assert calculate_check_digit("740812") == 2
        assert calculate_check_digit("120415") == 9

    def test_weights_restart_per_field(self):
        """Weights are indexed by position within the field, not the line."""
        # "7" alone gets weight 7; prefixed by one char it gets weight 3
        assert calculate_check_digit("7") == 9  # 49 mod 10
        assert calculate_check_digit("<7") == 1  # 21 mod 10

    def test_empty_field(self):
        """Empty field has check digit 0."""
        assert calculate_check_digit("") == 0

    def test_all_fillers(self):
        """Fillers contribute nothing."""
        assert calculate_check_digit("<<<<<<<<<") == 0

    def test_unmapped_characters_do_not_raise(self):
        """Lowercase and symbols are treated as 0 instead of raising."""
        assert calculate_check_digit("a@b") == 0

    def test_result_range(self):
        """Check digit is always a single decimal digit."""
        for field in ["ZZZZZZZZZ", "999999", "A1B2C3<<<", "X"]:
            result = calculate_check_digit(field)
            assert isinstance(result, int)
            assert 0 <= result <= 9


class TestVerifyCheckDigit:
    """Test check digit verification."""

    def test_valid(self):
        assert verify_check_digit("AB2", 5) is True
        assert verify_check_digit("740812", 2) is True

    def test_invalid(self):
        assert verify_check_digit("AB2", 4) is False
        assert verify_check_digit("740812", 3) is False


class TestCheckedSubstring:
    """Test extraction of check-digit-protected fields."""

    def test_valid_field(self, icao_second_line):
        """Returns the inclusive slice when its check digit matches."""
        assert checked_substring(icao_second_line, 0, 8) == "L898902C3"
        assert checked_substring(icao_second_line, 13, 18) == "740812"
        assert checked_substring(icao_second_line, 21, 26) == "120415"

    def test_wrong_check_digit(self, icao_second_line):
        """Returns None when the trailing digit does not match."""
        corrupted = icao_second_line[:9] + "7" + icao_second_line[10:]
        assert checked_substring(corrupted, 0, 8) is None

    def test_non_digit_check_character(self):
        """A non-digit check character is a mismatch."""
        assert checked_substring("AB2<", 0, 2) is None

    def test_line_too_short(self):
        """Missing check character returns None instead of raising."""
        assert checked_substring("AB2", 0, 2) is None
        assert checked_substring("", 0, 2) is None

    def test_invalid_offsets(self):
        """Negative or inverted offsets return None."""
        assert checked_substring("AB25", -1, 2) is None
        assert checked_substring("AB25", 2, 1) is None


@pytest.mark.parametrize(
    "field",
    ["L898902C3", "740812", "120415", "ZE184226B<<<<<", "D23145890"],
)
def test_verify_accepts_calculated_digit(field):
    """A field always verifies against its own calculated digit."""
    assert verify_check_digit(field, calculate_check_digit(field))
