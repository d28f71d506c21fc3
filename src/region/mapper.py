"""
Cutout-to-Image Region Mapping

Maps the fixed on-screen cutout (already converted to normalized capture
coordinates) onto the pixel grid of a captured frame, enlarges crops, narrows
them to the MRZ band and performs the actual crop with bounds handling.

The camera sensor always delivers landscape buffers. When the UI is in a
portrait orientation the normalized cutout is expressed with x/y swapped
relative to the buffer, so the mapper swaps the axes before scaling.
"""

import logging
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from src.common.types import CropRegion, NormalizedRect

from .types import Orientation

logger = logging.getLogger(__name__)


class OutOfBoundsPolicy(str, Enum):
    """What to do when a crop region does not overlap the frame."""

    FULL_IMAGE = "full_image"  # Fall back to the whole frame
    SKIP = "skip"  # Skip the frame, try again on the next one


# Every orientation is listed; a missing entry is a programming error
_SWAPS_AXES = {
    Orientation.PORTRAIT: True,
    Orientation.PORTRAIT_UPSIDE_DOWN: True,
    Orientation.LANDSCAPE_LEFT: False,
    Orientation.LANDSCAPE_RIGHT: False,
}


def map_cutout_to_image(
    cutout: NormalizedRect,
    orientation: Orientation,
    image_width: int,
    image_height: int,
) -> CropRegion:
    """
    Convert a normalized cutout rectangle into an image-pixel crop region.

    Portrait orientations (axes swapped):
        x = rect.min_y * W, y = rect.min_x * H,
        width = rect.height * W, height = rect.width * H
    Landscape orientations:
        x = rect.min_x * W, y = rect.min_y * H,
        width = rect.width * W, height = rect.height * H

    Args:
        cutout: Cutout in normalized [0, 1] capture coordinates.
        orientation: Orientation of the frame.
        image_width: Frame width in pixels.
        image_height: Frame height in pixels.

    Returns:
        CropRegion in pixel coordinates.

    Raises:
        ValueError: If the image dimensions are not positive or the
            orientation is unknown.

    Example:
        >>> rect = NormalizedRect(x=0.1, y=0.2, width=0.5, height=0.1)
        >>> map_cutout_to_image(rect, Orientation.PORTRAIT, 1000, 2000).to_tuple()
        (200.0, 200.0, 100.0, 1000.0)
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {image_width}x{image_height}"
        )

    try:
        swap_axes = _SWAPS_AXES[orientation]
    except KeyError as e:
        raise ValueError(f"Unsupported orientation: {orientation!r}") from e

    if swap_axes:
        region = CropRegion(
            x=cutout.min_y * image_width,
            y=cutout.min_x * image_height,
            width=cutout.height * image_width,
            height=cutout.width * image_height,
        )
    else:
        region = CropRegion(
            x=cutout.min_x * image_width,
            y=cutout.min_y * image_height,
            width=cutout.width * image_width,
            height=cutout.height * image_height,
        )

    logger.debug(
        f"Mapped cutout {cutout.x:.3f},{cutout.y:.3f} "
        f"({orientation.value}, {image_width}x{image_height}) -> {region!r}"
    )
    return region


def enlarge_region(region: CropRegion, margin_fraction: float = 0.05) -> CropRegion:
    """
    Grow a crop region by a margin proportional to its height on every side.

    Gives the OCR engine a few extra pixels of context around a tight crop.
    The result may extend past the image; crop with :func:`crop_image`.

    Args:
        region: Region to enlarge.
        margin_fraction: Margin as a fraction of ``region.height`` (default: 5%).

    Returns:
        Enlarged CropRegion (width and height grow by 2 * margin).

    Raises:
        ValueError: If margin_fraction is negative.
    """
    if margin_fraction < 0:
        raise ValueError(f"margin_fraction cannot be negative, got {margin_fraction}")

    margin = margin_fraction * region.height
    return CropRegion(
        x=region.min_x - margin,
        y=region.min_y - margin,
        width=region.width + 2 * margin,
        height=region.height + 2 * margin,
    )


def crop_image(
    image: np.ndarray,
    region: CropRegion,
    policy: OutOfBoundsPolicy = OutOfBoundsPolicy.FULL_IMAGE,
) -> Optional[np.ndarray]:
    """
    Crop an image to a region, clamping the region to the image bounds.

    Args:
        image: Frame as numpy array (H x W or H x W x C).
        region: Crop region in pixel coordinates.
        policy: Behaviour when the region does not overlap the image at all.

    Returns:
        Cropped view of the image, the whole image (FULL_IMAGE policy), or
        None (SKIP policy) when the region lies completely outside.
    """
    image_height, image_width = image.shape[:2]
    bbox = region.clip_to_image(image_width, image_height)

    if bbox is None:
        if policy == OutOfBoundsPolicy.FULL_IMAGE:
            logger.debug(f"{region!r} outside {image_width}x{image_height}, using full image")
            return image
        logger.debug(f"{region!r} outside {image_width}x{image_height}, skipping")
        return None

    return image[bbox.y_min : bbox.y_max, bbox.x_min : bbox.x_max]


def mrz_band_from_text_boxes(
    text_boxes: Sequence[NormalizedRect],
    image_width: int,
    image_height: int,
    min_width_ratio: float = 0.8,
) -> Optional[CropRegion]:
    """
    Locate the MRZ band from text rectangles found on the document crop.

    MRZ lines run across almost the whole document, so only boxes wider than
    ``min_width_ratio`` of the crop are kept; their union is the band.

    Args:
        text_boxes: Detected text rectangles in normalized coordinates with a
            bottom-left origin (text detector convention).
        image_width: Document crop width in pixels.
        image_height: Document crop height in pixels.
        min_width_ratio: Minimum box width relative to the crop width.

    Returns:
        Union of the qualifying boxes in top-left pixel coordinates, or None
        if no box is wide enough.
    """
    band: Optional[CropRegion] = None

    for box in text_boxes:
        # Flip vertically: y_top = (1 - y - h) * H
        region = CropRegion(
            x=box.min_x * image_width,
            y=(1.0 - box.max_y) * image_height,
            width=box.width * image_width,
            height=box.height * image_height,
        )
        if region.width <= image_width * min_width_ratio:
            continue
        band = region if band is None else band.union(region)

    if band is None:
        logger.debug(f"No text box wider than {min_width_ratio:.0%} of the crop")

    return band
