"""
Adaptive Exposure Estimation

Derives exposure and binarization parameters for OCR pre-processing from a
single statistic: the average luminance of the crop.

Document backgrounds dominate the average luminance, so the binarization
threshold follows a convex curve that stays low until the frame is very bright.
Exposure is pulled down on washed-out frames and boosted exponentially on dark
ones. Both corrections pivot on mid-gray luminance, independent of the
configured baseline exposure.
"""

import logging

import cv2
import numpy as np

from .types import ExposureParams

logger = logging.getLogger(__name__)

# Luminance both exposure corrections are measured from
MID_LUMINANCE = 0.5


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or single-channel image to a 2D grayscale array."""
    if len(image.shape) == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    if len(image.shape) == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return image.reshape(image.shape[:2])


def calculate_average_luminance(image: np.ndarray) -> float:
    """
    Calculate the average luminance of an image in range [0, 1].

    Args:
        image: Input image (BGR, BGRA or grayscale, dtype uint8)

    Returns:
        Mean grayscale intensity divided by 255.

    Raises:
        ValueError: If the image is empty.

    Example:
        >>> image = np.full((10, 10), 204, dtype=np.uint8)
        >>> calculate_average_luminance(image)
        0.8
    """
    if image.size == 0:
        raise ValueError("Cannot compute luminance of an empty image")

    return float(np.mean(to_grayscale(image))) / 255.0


def estimate_params(
    average_luminance: float,
    baseline: float = 0.5,
    bright_threshold: float = 0.8,
    dark_threshold: float = 0.35,
    threshold_exponent: float = 0.2,
) -> ExposureParams:
    """
    Estimate exposure adjustment and binarization threshold.

    Formulas:
        threshold = 1 - (1 - L) ^ 0.2
        exposure = 0.5
        if L > 0.8:  exposure -= (L - 0.5) * 2
        if L < 0.35: exposure += 2 ^ (0.5 - L)

    The 0.5 in both corrections is MID_LUMINANCE, a fixed luminance pivot.
    ``baseline`` only sets the starting exposure.

    Args:
        average_luminance: Average luminance L of the crop in [0, 1]
        baseline: Exposure of a correctly lit frame (default: 0.5)
        bright_threshold: Luminance above which exposure is reduced
        dark_threshold: Luminance below which exposure is boosted
        threshold_exponent: Exponent of the threshold curve

    Returns:
        ExposureParams for the image-processing stage.

    Raises:
        ValueError: If average_luminance is outside [0, 1].

    Example:
        >>> params = estimate_params(0.9)
        >>> round(params.binarization_threshold, 3), round(params.exposure_adjustment, 3)
        (0.369, -0.3)
    """
    if not 0.0 <= average_luminance <= 1.0:
        raise ValueError(
            f"average_luminance must be in [0, 1], got {average_luminance}"
        )

    threshold = 1.0 - (1.0 - average_luminance) ** threshold_exponent
    exposure = baseline

    # Both branches are checked independently
    if average_luminance > bright_threshold:
        exposure -= (average_luminance - MID_LUMINANCE) * 2

    if average_luminance < dark_threshold:
        exposure += 2 ** (MID_LUMINANCE - average_luminance)

    logger.debug(
        f"Exposure params: L={average_luminance:.3f} -> "
        f"EV={exposure:.3f}, threshold={threshold:.3f}"
    )

    return ExposureParams(
        exposure_adjustment=exposure, binarization_threshold=threshold
    )
