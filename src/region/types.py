"""
Data types for the Region module.

Provides the orientation tag attached to every captured frame.
"""

from enum import Enum


class Orientation(Enum):
    """Device/video orientation of a captured frame."""

    PORTRAIT = "portrait"
    PORTRAIT_UPSIDE_DOWN = "portrait_upside_down"
    LANDSCAPE_LEFT = "landscape_left"
    LANDSCAPE_RIGHT = "landscape_right"

    @property
    def is_portrait(self) -> bool:
        """Check if the UI is upright or upside-down portrait."""
        return self in (Orientation.PORTRAIT, Orientation.PORTRAIT_UPSIDE_DOWN)
