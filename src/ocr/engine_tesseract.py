"""Tesseract OCR engine wrapper for MRZ line recognition.

This module provides the OCR collaborator of the frame pipeline on top of
Tesseract. It returns the recognized text lines of an image in vertical order
and, from the same layout analysis, the rectangles of those lines.

Example:
    >>> from src.ocr import TesseractLineRecognizer
    >>> engine = TesseractLineRecognizer()
    >>> engine.recognize(mrz_image)
    ['P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<',
     'L898902C36UTO7408122F1204159ZE184226B<<<<<10']
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pytesseract

from src.common.types import NormalizedRect
from src.exposure.estimator import to_grayscale
from src.pipeline.config_loader import OCREngineConfig

logger = logging.getLogger(__name__)


@dataclass
class RecognizedLine:
    """One text line found by Tesseract.

    Attributes:
        text: Words of the line joined by single spaces.
        confidence: Average word confidence (0.0-1.0).
        box: (x1, y1, x2, y2) pixel box, top-left origin.
    """

    text: str
    confidence: float
    box: Tuple[int, int, int, int]


class TesseractLineRecognizer:
    """Tesseract-based line recognizer and text rectangle detector.

    Implements both ``recognize`` (TextRecognizer) and ``detect``
    (TextRectangleDetector) so one instance can serve the whole pipeline.

    Args:
        config: OCR engine configuration. If None, uses defaults.

    Raises:
        RuntimeError: If the Tesseract binary is not available.
    """

    def __init__(self, config: Optional[OCREngineConfig] = None):
        self.config = config or OCREngineConfig()

        # Verify Tesseract is available
        try:
            version = pytesseract.get_tesseract_version()
            logger.info(f"Tesseract engine initialized: version {version}")
        except Exception as e:
            logger.error(f"Tesseract not found or not properly configured: {e}")
            raise RuntimeError(
                "Tesseract not available. Please install Tesseract OCR.\n"
                "Windows: choco install tesseract\n"
                "Linux: sudo apt-get install tesseract-ocr\n"
                "MacOS: brew install tesseract"
            ) from e

    @property
    def tesseract_config(self) -> str:
        """Command line options passed to Tesseract."""
        options = f"--psm {self.config.psm}"
        if self.config.char_whitelist:
            options += f" -c tessedit_char_whitelist={self.config.char_whitelist}"
        return options

    def extract_lines(self, image: np.ndarray) -> List[RecognizedLine]:
        """Run Tesseract and group the detected words into lines.

        Args:
            image: Grayscale or BGR image.

        Returns:
            Lines sorted top to bottom; empty list if nothing was found or the
            image is invalid.
        """
        if image is None or image.size == 0:
            logger.error("Invalid image: empty or None")
            return []

        gray = to_grayscale(image)

        data = pytesseract.image_to_data(
            gray,
            lang=self.config.lang,
            config=self.tesseract_config,
            output_type=pytesseract.Output.DICT,
        )

        grouped: Dict[Tuple[int, int, int], List[int]] = {}
        for i, raw_text in enumerate(data["text"]):
            text = raw_text.strip()
            conf = float(data["conf"][i])

            # conf < 0 marks layout entries without text
            if not text or conf < 0 or conf < self.config.min_confidence:
                continue

            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            grouped.setdefault(key, []).append(i)

        lines = []
        for indices in grouped.values():
            indices.sort(key=lambda i: data["left"][i])
            x1 = min(data["left"][i] for i in indices)
            y1 = min(data["top"][i] for i in indices)
            x2 = max(data["left"][i] + data["width"][i] for i in indices)
            y2 = max(data["top"][i] + data["height"][i] for i in indices)
            lines.append(
                RecognizedLine(
                    text=" ".join(data["text"][i].strip() for i in indices),
                    confidence=float(np.mean([float(data["conf"][i]) for i in indices]))
                    / 100.0,
                    box=(x1, y1, x2, y2),
                )
            )

        lines.sort(key=lambda line: line.box[1])

        logger.debug(
            f"Tesseract found {len(lines)} lines: {[line.text for line in lines]}"
        )
        return lines

    def recognize(self, image: np.ndarray) -> List[str]:
        """Recognized lines of the image in vertical order."""
        return [line.text for line in self.extract_lines(image)]

    def detect(self, image: np.ndarray) -> List[NormalizedRect]:
        """Line rectangles normalized to the image, bottom-left origin."""
        if image is None or image.size == 0:
            return []

        height, width = image.shape[:2]
        rects = []
        for line in self.extract_lines(image):
            x1, y1, x2, y2 = line.box
            x1, x2 = max(0, x1), min(width, x2)
            y1, y2 = max(0, y1), min(height, y2)
            if x1 >= x2 or y1 >= y2:
                continue
            rects.append(
                NormalizedRect(
                    x=x1 / width,
                    y=1.0 - y2 / height,
                    width=(x2 - x1) / width,
                    height=(y2 - y1) / height,
                )
            )
        return rects
