"""OCR engine adapters for the MRZ frame pipeline.

The scanning core treats OCR as an external collaborator: anything that turns
an image into recognized text lines can be plugged into the frame processor.
This package provides a Tesseract implementation.

Example:
    >>> from src.ocr import TesseractLineRecognizer
    >>> engine = TesseractLineRecognizer()
    >>> lines = engine.recognize(mrz_image)
"""

from .engine_tesseract import RecognizedLine, TesseractLineRecognizer

__all__ = [
    "RecognizedLine",
    "TesseractLineRecognizer",
]
