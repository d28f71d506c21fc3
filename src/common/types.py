"""
Common type definitions for the MRZ scanner core.

This module provides Pydantic-based type definitions for the geometry and image
structures shared by the region mapper, the exposure estimator and the frame
pipeline: image buffers, normalized rectangles, pixel crop regions and integer
bounding boxes.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Helper methods for common geometric operations
- Integration with numpy arrays and OpenCV
"""

from typing import Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ImageBuffer(BaseModel):
    """
    Type-safe wrapper for a captured frame (numpy.ndarray).

    The capture source hands the pipeline raw pixel buffers; this wrapper
    validates that they can be treated as 2D images with integer width/height.

    Attributes:
        data: The underlying numpy array containing image data.
            Shape: (H, W, C) for color images, (H, W) for grayscale.
            Dtype: uint8 (0-255).

    Example:
        >>> import cv2
        >>> frame = cv2.imread("passport.jpg")
        >>> buffer = ImageBuffer(data=frame)
        >>> print(buffer.height, buffer.width)  # 1080, 1920
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a valid image.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(
                f"Expected 1, 3, or 4 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        return v

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape (H, W) or (H, W, C)."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get image height in pixels."""
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        """Get image width in pixels."""
        return int(self.data.shape[1])

    def __repr__(self) -> str:
        """String representation of ImageBuffer."""
        return f"ImageBuffer(shape={self.shape}, dtype={self.data.dtype})"


class BBox(BaseModel):
    """
    Integer pixel box [x_min, y_min, x_max, y_max] that lies inside an image.

    BBox is what a CropRegion becomes once it has been clipped against the real
    image bounds; it can be used directly for numpy slicing.

    Attributes:
        x_min: Minimum X-coordinate (left edge, inclusive).
        y_min: Minimum Y-coordinate (top edge, inclusive).
        x_max: Maximum X-coordinate (right edge, exclusive).
        y_max: Maximum Y-coordinate (bottom edge, exclusive).

    Example:
        >>> bbox = BBox(x_min=100, y_min=50, x_max=500, y_max=300)
        >>> roi = image[bbox.y_min : bbox.y_max, bbox.x_min : bbox.x_max]
    """

    x_min: int = Field(..., description="Minimum X-coordinate (left edge)")
    y_min: int = Field(..., description="Minimum Y-coordinate (top edge)")
    x_max: int = Field(..., description="Maximum X-coordinate (right edge)")
    y_max: int = Field(..., description="Maximum Y-coordinate (bottom edge)")

    @field_validator("x_min", "y_min", "x_max", "y_max", mode="before")
    @classmethod
    def _convert_to_int(cls, v: Union[int, float]) -> int:
        """Convert coordinate to int, rounding if float."""
        if isinstance(v, (int, float, np.integer, np.floating)):
            return int(round(float(v)))
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @model_validator(mode="after")
    def _validate_bbox(self) -> "BBox":
        """
        Validate bbox coordinates after initialization.

        Raises:
            ValueError: If coordinates are invalid.
        """
        if self.x_min >= self.x_max:
            raise ValueError(
                f"Invalid bbox: x_min ({self.x_min}) must be < x_max ({self.x_max})"
            )
        if self.y_min >= self.y_max:
            raise ValueError(
                f"Invalid bbox: y_min ({self.y_min}) must be < y_max ({self.y_max})"
            )

        if self.x_min < 0 or self.y_min < 0:
            raise ValueError(
                f"Invalid bbox: coordinates must be non-negative, "
                f"got x_min={self.x_min}, y_min={self.y_min}"
            )

        return self

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Convert BBox to tuple (x_min, y_min, x_max, y_max)."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    @property
    def width(self) -> int:
        """Get bounding box width (x_max - x_min)."""
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        """Get bounding box height (y_max - y_min)."""
        return self.y_max - self.y_min

    def __repr__(self) -> str:
        """String representation of BBox."""
        return (
            f"BBox(x_min={self.x_min}, y_min={self.y_min}, "
            f"x_max={self.x_max}, y_max={self.y_max}, "
            f"width={self.width}, height={self.height})"
        )


class NormalizedRect(BaseModel):
    """
    Rectangle expressed in normalized [0, 1] coordinates.

    This is the coordinate space the capture pipeline produces when a UI-space
    rectangle is converted into metadata-output coordinates. It is independent
    of the pixel resolution of any particular frame.

    Attributes:
        x: Left edge as a fraction of the reference width.
        y: Top edge as a fraction of the reference height.
        width: Width as a fraction of the reference width.
        height: Height as a fraction of the reference height.

    Example:
        >>> rect = NormalizedRect(x=0.1, y=0.2, width=0.5, height=0.1)
        >>> rect.max_x
        0.6
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., ge=0.0, le=1.0)
    y: float = Field(..., ge=0.0, le=1.0)
    width: float = Field(..., gt=0.0, le=1.0)
    height: float = Field(..., gt=0.0, le=1.0)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


class CropRegion(BaseModel):
    """
    Rectangle in image-pixel coordinates (origin top-left).

    A CropRegion is computed per frame from a normalized cutout and may extend
    past the image edges (for example after enlargement). Use
    :meth:`clip_to_image` to obtain the in-bounds pixel box before slicing.

    Attributes:
        x: Left edge in pixels.
        y: Top edge in pixels.
        width: Width in pixels (> 0).
        height: Height in pixels (> 0).
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(..., gt=0.0)
    height: float = Field(..., gt=0.0)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert region to tuple (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def union(self, other: "CropRegion") -> "CropRegion":
        """
        Smallest region containing both this region and ``other``.

        Args:
            other: Region to merge with.

        Returns:
            New CropRegion covering both inputs.
        """
        x_min = min(self.min_x, other.min_x)
        y_min = min(self.min_y, other.min_y)
        x_max = max(self.max_x, other.max_x)
        y_max = max(self.max_y, other.max_y)
        return CropRegion(x=x_min, y=y_min, width=x_max - x_min, height=y_max - y_min)

    def clip_to_image(self, image_width: int, image_height: int) -> Optional[BBox]:
        """
        Clip region to image boundaries.

        Fractional edges are expanded outward to whole pixels before clipping.

        Args:
            image_width: Image width in pixels.
            image_height: Image height in pixels.

        Returns:
            In-bounds BBox, or None if the region does not overlap the image
            by at least one pixel in each direction.
        """
        x_min = max(0, int(np.floor(self.min_x)))
        y_min = max(0, int(np.floor(self.min_y)))
        x_max = min(image_width, int(np.ceil(self.max_x)))
        y_max = min(image_height, int(np.ceil(self.max_y)))

        if x_min >= x_max or y_min >= y_max:
            return None

        return BBox(x_min=x_min, y_min=y_min, x_max=x_max, y_max=y_max)

    def __repr__(self) -> str:
        """String representation of CropRegion."""
        return (
            f"CropRegion(x={self.x:.1f}, y={self.y:.1f}, "
            f"width={self.width:.1f}, height={self.height:.1f})"
        )
