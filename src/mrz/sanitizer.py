"""Line sanitizer for raw OCR output.

Reduces the recognized text of one frame to the lines that plausibly belong to
the MRZ. True MRZ lines are the longest and most uniform lines in the text, so
anything shorter than the average line length (headers, partial words, noise)
is dropped. Structural validation is left to the MRZ parsers.

Example:
    >>> sanitize_lines("P<UTO\\nL898902C36UTO7408122F1204159ZE184226B<<<<<10")
    ['L898902C36UTO7408122F1204159ZE184226B<<<<<10']
"""

import logging
from typing import Optional, Sequence

from .types import SanitizedLines

logger = logging.getLogger(__name__)


def sanitize_lines(raw_text: str, strip_spaces: bool = True) -> Optional[SanitizedLines]:
    """Filter multi-line OCR text down to candidate MRZ lines.

    Steps:
        1. Remove spaces (OCR frequently inserts them between MRZ characters)
        2. Split on line breaks and drop empty lines
        3. Drop lines shorter than the integer average line length

    Args:
        raw_text: Recognized text with lines joined by "\\n"
        strip_spaces: Remove spaces before splitting (default: True)

    Returns:
        Remaining lines in their original order, or None if no line survives.

    Example:
        >>> sanitize_lines("X\\nABCDEFGHIJ\\nABCDEFGHIJ\\nY")
        ['ABCDEFGHIJ', 'ABCDEFGHIJ']
        >>> sanitize_lines("") is None
        True
    """
    text = raw_text.replace(" ", "") if strip_spaces else raw_text
    lines = [line for line in text.split("\n") if line]

    if not lines:
        return None

    average_length = sum(len(line) for line in lines) // len(lines)
    kept = [line for line in lines if len(line) >= average_length]

    logger.debug(
        f"Sanitized {len(lines)} lines -> {len(kept)} "
        f"(average length threshold={average_length})"
    )

    return kept or None


def sanitize_recognized_lines(
    lines: Sequence[str], strip_spaces: bool = True
) -> Optional[SanitizedLines]:
    """Sanitize the line list produced by an OCR engine.

    Args:
        lines: Recognized strings in vertical order, one per detected line
        strip_spaces: Remove spaces before filtering (default: True)

    Returns:
        Sanitized lines, or None if nothing plausible remains.
    """
    return sanitize_lines("\n".join(lines), strip_spaces=strip_spaces)
