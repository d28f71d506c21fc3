"""
Region Mapping: from the on-screen cutout to image-pixel crops

Maps the fixed UI cutout into the pixel space of landscape sensor frames for
every device orientation, and locates the MRZ band inside the document crop.

Pipeline stages:
1. Cutout geometry (view space) and normalization
2. Orientation-aware mapping to pixel coordinates
3. Optional enlargement by a height-relative margin
4. Clamped cropping and MRZ band detection from text rectangles
"""

from src.region.cutout import (
    DOCUMENT_FRAME_RATIO,
    calculate_cutout_rect,
    cutout_relative_center,
    normalize_layer_rect,
)
from src.region.mapper import (
    OutOfBoundsPolicy,
    crop_image,
    enlarge_region,
    map_cutout_to_image,
    mrz_band_from_text_boxes,
)
from src.region.types import Orientation

__all__ = [
    "Orientation",
    "OutOfBoundsPolicy",
    "map_cutout_to_image",
    "enlarge_region",
    "crop_image",
    "mrz_band_from_text_boxes",
    "DOCUMENT_FRAME_RATIO",
    "calculate_cutout_rect",
    "cutout_relative_center",
    "normalize_layer_rect",
]
