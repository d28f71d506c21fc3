"""
Adaptive Exposure: luminance-driven enhancement for OCR

Derives an exposure shift and a binarization threshold from the average
luminance of a crop, and applies them (exposure, Lanczos upscale, threshold)
before the crop is handed to the OCR engine.

Example:
    >>> from src.exposure import calculate_average_luminance, enhance_for_ocr, estimate_params
    >>> params = estimate_params(calculate_average_luminance(crop))
    >>> binary = enhance_for_ocr(crop, params)
"""

from .enhancer import adjust_exposure, binarize, enhance_for_ocr, preprocess_image
from .estimator import calculate_average_luminance, estimate_params
from .types import ExposureParams

__all__ = [
    "ExposureParams",
    "calculate_average_luminance",
    "estimate_params",
    "adjust_exposure",
    "binarize",
    "enhance_for_ocr",
    "preprocess_image",
]
