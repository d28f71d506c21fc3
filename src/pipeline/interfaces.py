"""Collaborator interfaces used by the frame processor.

The OCR engine, the text rectangle detector and the full MRZ grammar parser
live outside the core. Any object with the matching method can be plugged in;
see ``src.ocr.engine_tesseract`` for a Tesseract-based implementation.
"""

from typing import Any, List, Optional, Protocol, Sequence

import numpy as np

from src.common.types import NormalizedRect


class TextRecognizer(Protocol):
    """OCR engine: image region -> recognized lines in vertical order.

    Absence of text is signalled by an empty list, never by an exception.
    """

    def recognize(self, image: np.ndarray) -> List[str]: ...


class TextRectangleDetector(Protocol):
    """Text line detector: image -> line rectangles.

    Rectangles are normalized to the image size with a bottom-left origin.
    """

    def detect(self, image: np.ndarray) -> List[NormalizedRect]: ...


class FullMRZParser(Protocol):
    """Structural multi-line MRZ parser (returns None when lines do not parse)."""

    def parse(self, lines: Sequence[str]) -> Optional[Any]: ...
