"""Quick extraction of key fields from a TD3 passport MRZ second line.

The full MRZ grammar is handled by a dedicated parser; this module is the fast
path used during live scanning. It only needs the second line of a TD3 MRZ to
recover the three fields required for chip access (BAC): document number,
date of birth and date of expiry.

TD3 second line layout (44 characters, zero-based offsets):

    0-8    document number (filler '<')
    9      check digit
    10-12  nationality
    13-18  date of birth (YYMMDD)
    19     check digit
    20     sex (M, F, X or '<')
    21-26  date of expiry (YYMMDD)
    27     check digit
    28-41  optional data
    42     optional data check digit (or '<')
    43     composite check digit
"""

import logging
import re
from typing import Optional, Sequence

from .checksum import FILLER, checked_substring
from .types import QuickResult

logger = logging.getLogger(__name__)

TD3_LINE_LENGTH = 44

TD3_SECOND_LINE_PATTERN = re.compile(
    r"[A-Z0-9<]{9}[0-9][A-Z]{3}[0-9]{6}[0-9][MFX<][0-9]{6}[0-9][A-Z0-9<]{14}[0-9<][0-9]"
)

# (start, end) inclusive offsets; the check digit follows at end + 1
PASSPORT_NUMBER_SPAN = (0, 8)
BIRTH_DATE_SPAN = (13, 18)
EXPIRY_DATE_SPAN = (21, 26)


def is_td3_second_line(line: str) -> bool:
    """Check whether a line has the shape of a TD3 second line.

    Args:
        line: Candidate line

    Returns:
        True if the whole line (exactly 44 characters) matches the TD3 pattern
    """
    return TD3_SECOND_LINE_PATTERN.fullmatch(line) is not None


def parse_quick_mrz(second_line: str) -> Optional[QuickResult]:
    """Extract passport number, birth date and expiry date from a TD3 line.

    Fields are validated in order and parsing stops at the first failing
    check digit; partial results are never returned.

    Args:
        second_line: Candidate MRZ second line

    Returns:
        QuickResult if the line matches the TD3 pattern and all three check
        digits validate, None otherwise.

    Example:
        >>> result = parse_quick_mrz("L898902C36UTO7408122F1204159ZE184226B<<<<<10")
        >>> result.passport_number, result.birth_date, result.expiry_date
        ('L898902C3', '740812', '120415')
    """
    if not is_td3_second_line(second_line):
        return None

    passport_number = checked_substring(second_line, *PASSPORT_NUMBER_SPAN)
    if passport_number is None:
        logger.debug("Passport number check digit mismatch")
        return None

    birth_date = checked_substring(second_line, *BIRTH_DATE_SPAN)
    if birth_date is None:
        logger.debug("Birth date check digit mismatch")
        return None

    expiry_date = checked_substring(second_line, *EXPIRY_DATE_SPAN)
    if expiry_date is None:
        logger.debug("Expiry date check digit mismatch")
        return None

    return QuickResult(
        passport_number=passport_number.replace(FILLER, ""),
        birth_date=birth_date,
        expiry_date=expiry_date,
    )


def find_quick_result(lines: Sequence[str]) -> Optional[QuickResult]:
    """Search recognized lines bottom-up for a valid TD3 second line.

    The second MRZ line is normally the last or second-to-last line recognized
    on a passport page, so scanning from the bottom reaches it first and avoids
    header text. The scan stops at the first line that parses.

    Args:
        lines: Recognized lines in vertical order

    Returns:
        QuickResult of the lowest valid line, or None if no line parses.
    """
    for line in reversed(lines):
        result = parse_quick_mrz(line)
        if result is not None:
            return result
    return None
