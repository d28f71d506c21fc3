"""
Frame pipeline: per-frame MRZ scanning with explicit session state.

Connects the region mapper, exposure estimator, OCR collaborator and MRZ
parsers for live scanning. All failures are recoverable frame rejections.
"""

from src.pipeline.config_loader import (
    Config,
    ExposureConfig,
    OCREngineConfig,
    PipelineConfig,
    RegionConfig,
    SanitizerConfig,
    ScannerModuleConfig,
    get_default_config,
    load_config,
)
from src.pipeline.interfaces import FullMRZParser, TextRecognizer, TextRectangleDetector
from src.pipeline.processor import MRZFrameProcessor
from src.pipeline.types import DecisionStatus, FrameRejection, FrameResult, ScanSession

__all__ = [
    "MRZFrameProcessor",
    "ScanSession",
    "FrameResult",
    "FrameRejection",
    "DecisionStatus",
    "TextRecognizer",
    "TextRectangleDetector",
    "FullMRZParser",
    "Config",
    "ScannerModuleConfig",
    "SanitizerConfig",
    "RegionConfig",
    "ExposureConfig",
    "PipelineConfig",
    "OCREngineConfig",
    "load_config",
    "get_default_config",
]
