"""Type definitions for the MRZ module.

This module defines the result structures produced by the MRZ text pipeline,
following the ICAO 9303 TD3 (passport) layout.
"""

from dataclasses import dataclass
from typing import List

# Sanitized candidate MRZ lines for one frame (vertical order preserved)
SanitizedLines = List[str]


@dataclass(frozen=True)
class QuickResult:
    """Fields extracted from a TD3 second line with all check digits validated.

    Attributes:
        passport_number: Document number with '<' fillers stripped (max 9 chars)
        birth_date: Date of birth as YYMMDD
        expiry_date: Date of expiry as YYMMDD
    """

    passport_number: str
    birth_date: str
    expiry_date: str

    def to_dict(self) -> dict:
        """Convert result to a plain dictionary."""
        return {
            "passport_number": self.passport_number,
            "birth_date": self.birth_date,
            "expiry_date": self.expiry_date,
        }
