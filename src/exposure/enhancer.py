"""
OCR Image Enhancement

Applies ExposureParams to a crop before recognition:
    1. Exposure adjustment (multiply intensities by 2^EV)
    2. Lanczos upscaling
    3. Luminance thresholding to a binary image
"""

import logging

import cv2
import numpy as np

from .estimator import calculate_average_luminance, estimate_params, to_grayscale
from .types import ExposureParams

logger = logging.getLogger(__name__)


def adjust_exposure(image_gray: np.ndarray, exposure: float) -> np.ndarray:
    """
    Scale intensities by 2^exposure, saturating at 255.

    Args:
        image_gray: Grayscale image (H x W, dtype uint8)
        exposure: Exposure value (EV); positive brightens, negative darkens

    Returns:
        Adjusted uint8 image.
    """
    gain = 2.0**exposure
    adjusted = image_gray.astype(np.float32) * gain
    return np.clip(adjusted, 0, 255).astype(np.uint8)


def binarize(image_gray: np.ndarray, threshold: float) -> np.ndarray:
    """
    Threshold a grayscale image at a luminance level in [0, 1].

    Pixels brighter than the threshold become 255, the rest 0.
    """
    _, binary = cv2.threshold(image_gray, threshold * 255.0, 255, cv2.THRESH_BINARY)
    return binary


def enhance_for_ocr(
    image: np.ndarray, params: ExposureParams, scale: float = 2.0
) -> np.ndarray:
    """
    Prepare a crop for OCR using pre-computed exposure parameters.

    Args:
        image: Crop (BGR, BGRA or grayscale, dtype uint8)
        params: Parameters from :func:`estimate_params`
        scale: Upscale factor (default: 2.0)

    Returns:
        Binary uint8 image, ``scale`` times the input size.

    Raises:
        ValueError: If the image is empty or scale is not positive.
    """
    if image.size == 0:
        raise ValueError("Cannot enhance an empty image")
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    gray = to_grayscale(image)

    exposed = adjust_exposure(gray, params.exposure_adjustment)
    scaled = cv2.resize(
        exposed, None, fx=scale, fy=scale, interpolation=cv2.INTER_LANCZOS4
    )
    binary = binarize(scaled, params.binarization_threshold)

    logger.debug(
        f"Enhanced crop {gray.shape[1]}x{gray.shape[0]} -> "
        f"{binary.shape[1]}x{binary.shape[0]} "
        f"(EV={params.exposure_adjustment:.2f}, "
        f"threshold={params.binarization_threshold:.3f})"
    )
    return binary


def preprocess_image(image: np.ndarray, scale: float = 2.0, **estimator_kwargs) -> np.ndarray:
    """
    Estimate parameters from the crop itself and enhance it.

    Args:
        image: Crop (BGR, BGRA or grayscale, dtype uint8)
        scale: Upscale factor (default: 2.0)
        **estimator_kwargs: Forwarded to :func:`estimate_params`

    Returns:
        Binary uint8 image ready for OCR.
    """
    params = estimate_params(calculate_average_luminance(image), **estimator_kwargs)
    return enhance_for_ocr(image, params, scale=scale)
