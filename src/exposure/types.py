"""
Data structures for the Exposure module.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExposureParams:
    """Image enhancement parameters derived from average luminance."""

    exposure_adjustment: float  # Exposure value (EV) applied before OCR
    binarization_threshold: float  # Luminance threshold in [0, 1]
