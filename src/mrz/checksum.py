"""ICAO 9303 check digit calculation.

This module implements the check digit algorithm used by every checked field
of a Machine-Readable Zone (document number, dates, optional data, composite).

References:
    - ICAO Doc 9303 Part 3 - Specifications Common to all MRTDs, Section 4.9
"""

from typing import Optional

# Weights repeat with period 3, indexed by position within the checked field
MRZ_WEIGHTS = (7, 3, 1)

FILLER = "<"


def char_value(char: str) -> int:
    """Map a single MRZ character to its numeric value.

    Mapping:
        - Digits (0-9): their numeric value
        - Filler '<': 0
        - Letters (A-Z): 10-35 (A=10, B=11, ..., Z=35)
        - Anything else: 0

    Unmapped characters are tolerated rather than rejected so that stray OCR
    noise only fails the check digit comparison instead of raising.

    Args:
        char: Single character

    Returns:
        Character value (0-35)

    Example:
        >>> char_value("7")
        7
        >>> char_value("C")
        12
        >>> char_value("<")
        0
    """
    if char == FILLER:
        return 0
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "Z":
        return ord(char) - 65 + 10
    return 0


def calculate_check_digit(field: str) -> int:
    """Calculate the ICAO 9303 check digit of a field.

    Algorithm:
        1. Map each character to its value (see :func:`char_value`)
        2. Multiply by weight 7, 3, 1, 7, 3, 1, ... by position in the field
        3. Check digit = sum mod 10

    Args:
        field: Characters covered by the check digit (any length)

    Returns:
        Check digit (0-9)

    Example:
        >>> calculate_check_digit("L898902C<")
        3
        >>> calculate_check_digit("740812")
        2
    """
    total = sum(
        char_value(char) * MRZ_WEIGHTS[pos % 3] for pos, char in enumerate(field)
    )
    return total % 10


def verify_check_digit(field: str, expected_digit: int) -> bool:
    """Check a field against its expected check digit.

    Args:
        field: Characters covered by the check digit
        expected_digit: Check digit read from the document (0-9)

    Returns:
        True if the calculated digit equals ``expected_digit``
    """
    return calculate_check_digit(field) == expected_digit


def checked_substring(line: str, start: int, end: int) -> Optional[str]:
    """Extract ``line[start..end]`` (inclusive) if its check digit validates.

    The check digit is the character immediately after the field, at
    offset ``end + 1``.

    Args:
        line: Full MRZ line
        start: Offset of the first field character
        end: Offset of the last field character (inclusive)

    Returns:
        The field text when the trailing check digit matches, None otherwise
        (including when the line is too short or the check character is not a digit)

    Example:
        >>> checked_substring("L898902C<3UTO", 0, 8)
        'L898902C<'
    """
    if start < 0 or end < start or end + 1 >= len(line):
        return None

    check_char = line[end + 1]
    if not ("0" <= check_char <= "9"):
        return None

    field = line[start : end + 1]
    if not verify_check_digit(field, int(check_char)):
        return None

    return field
