"""MRZ text processing: sanitizing, check digits and quick field extraction.

This module turns the raw, error-prone per-line OCR output of a travel document
frame into validated fields of its Machine-Readable Zone (ICAO 9303).

Core Components:
    - sanitizer: Drops OCR lines that cannot belong to the MRZ
    - checksum: ICAO 9303 check digit calculation (weights 7-3-1)
    - quick_parser: TD3 second-line extraction of passport number and dates
    - types: Result data structures

Example:
    >>> from src.mrz import find_quick_result, sanitize_recognized_lines
    >>> lines = sanitize_recognized_lines(ocr_lines)
    >>> result = find_quick_result(lines or [])
    >>> if result is not None:
    ...     print(result.passport_number, result.birth_date, result.expiry_date)
"""

from .checksum import (
    MRZ_WEIGHTS,
    calculate_check_digit,
    char_value,
    checked_substring,
    verify_check_digit,
)
from .quick_parser import (
    TD3_LINE_LENGTH,
    find_quick_result,
    is_td3_second_line,
    parse_quick_mrz,
)
from .sanitizer import sanitize_lines, sanitize_recognized_lines
from .types import QuickResult, SanitizedLines

__all__ = [
    # Types
    "QuickResult",
    "SanitizedLines",
    # Check digits
    "MRZ_WEIGHTS",
    "char_value",
    "calculate_check_digit",
    "verify_check_digit",
    "checked_substring",
    # Sanitizing
    "sanitize_lines",
    "sanitize_recognized_lines",
    # Quick extraction
    "TD3_LINE_LENGTH",
    "is_td3_second_line",
    "parse_quick_mrz",
    "find_quick_result",
]
