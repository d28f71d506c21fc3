"""
Common types and utilities shared across all modules.

This module provides standardized geometry and image types for the MRZ scanner,
ensuring consistency between the region mapper, exposure estimator and frame pipeline.
"""

from src.common.types import BBox, CropRegion, ImageBuffer, NormalizedRect

__all__ = ["ImageBuffer", "BBox", "CropRegion", "NormalizedRect"]
