"""
Cutout Geometry

Computes the on-screen cutout the user aligns the document with, and converts
view-space rectangles into the normalized coordinates the region mapper expects.
"""

from typing import Optional, Tuple

from src.common.types import CropRegion, NormalizedRect

from .types import Orientation

# Width/height ratio of the cutout: passport page width (125 mm) over the
# height of the MRZ area shown in the cutout
DOCUMENT_FRAME_RATIO = 125.0 / 22.0


def calculate_cutout_rect(
    view_width: float,
    view_height: float,
    width_fraction: float = 0.9,
    document_ratio: float = DOCUMENT_FRAME_RATIO,
    top_offset_ratio: float = 0.4,
) -> CropRegion:
    """
    Calculate the cutout rectangle in view coordinates.

    The cutout fills ``width_fraction`` of the view width, is centered
    horizontally, and sits with ``top_offset_ratio`` of the free vertical
    space above it.

    Args:
        view_width: View width in points.
        view_height: View height in points.
        width_fraction: Share of the view width covered by the cutout.
        document_ratio: Cutout width / height.
        top_offset_ratio: Share of the remaining vertical space above the cutout.

    Returns:
        Cutout rectangle in view coordinates.

    Raises:
        ValueError: If the view dimensions are not positive.

    Example:
        >>> rect = calculate_cutout_rect(400, 800)
        >>> round(rect.width), round(rect.height, 2)
        (360, 63.36)
    """
    if view_width <= 0 or view_height <= 0:
        raise ValueError(f"View dimensions must be positive, got {view_width}x{view_height}")

    width = view_width * width_fraction
    height = width / document_ratio
    top_offset = (view_height - height) * top_offset_ratio
    left_offset = (view_width - width) / 2

    return CropRegion(x=left_offset, y=top_offset, width=width, height=height)


def cutout_relative_center(
    cutout: CropRegion, view_width: float, view_height: float
) -> Tuple[float, float]:
    """
    Center of the cutout as a fraction of the view size.

    Used as the camera focus point of interest.

    Returns:
        (x, y) in [0, 1] view-relative coordinates.
    """
    center_x = cutout.min_x + cutout.width / 2
    center_y = cutout.min_y + cutout.height / 2
    return (center_x / view_width, center_y / view_height)


def normalize_layer_rect(
    rect: CropRegion,
    view_width: float,
    view_height: float,
    orientation: Optional[Orientation] = None,
) -> NormalizedRect:
    """
    Express a view-space rectangle in normalized capture coordinates.

    Assumes the preview fills the view without letterboxing. Parts of the
    rectangle outside the view are clipped off.

    The landscape sensor is rotated against a portrait view, so for portrait
    orientations the rectangle is turned into sensor space:
        PORTRAIT:             x = y,             y = 1 - max_x
        PORTRAIT_UPSIDE_DOWN: x = 1 - max_y,     y = x
    with width and height swapped. Landscape orientations (and None) keep the
    view axes.

    Args:
        rect: Rectangle in view coordinates.
        view_width: View width in points.
        view_height: View height in points.
        orientation: Orientation of the device, or None for plain view
            coordinates.

    Returns:
        Normalized rectangle, ready for :func:`map_cutout_to_image`.

    Raises:
        ValueError: If the view dimensions are not positive or the rectangle
            lies outside the view.
    """
    if view_width <= 0 or view_height <= 0:
        raise ValueError(f"View dimensions must be positive, got {view_width}x{view_height}")

    x_min = max(0.0, rect.min_x / view_width)
    y_min = max(0.0, rect.min_y / view_height)
    x_max = min(1.0, rect.max_x / view_width)
    y_max = min(1.0, rect.max_y / view_height)

    if x_min >= x_max or y_min >= y_max:
        raise ValueError(f"{rect!r} lies outside the {view_width}x{view_height} view")

    width = x_max - x_min
    height = y_max - y_min

    if orientation == Orientation.PORTRAIT:
        return NormalizedRect(x=y_min, y=1.0 - x_max, width=height, height=width)
    if orientation == Orientation.PORTRAIT_UPSIDE_DOWN:
        return NormalizedRect(x=1.0 - y_max, y=x_min, width=height, height=width)

    return NormalizedRect(x=x_min, y=y_min, width=width, height=height)
