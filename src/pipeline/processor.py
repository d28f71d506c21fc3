"""Per-frame MRZ scanning pipeline.

This module orchestrates the work done for every captured frame:
    1. REGION MAPPING: Cutout -> document crop (orientation aware)
    2. MRZ BAND: Narrow the crop to the wide text lines of the MRZ
    3. ENHANCEMENT: Optional exposure/threshold pre-processing
    4. RECOGNITION: OCR collaborator returns the recognized lines
    5. PARSING: Quick TD3 extraction and/or the full MRZ parser

Every failure rejects the frame and scanning continues with the next one.

Example:
    >>> from src.ocr import TesseractLineRecognizer
    >>> from src.pipeline import MRZFrameProcessor, ScanSession
    >>> engine = TesseractLineRecognizer()
    >>> processor = MRZFrameProcessor(recognizer=engine, detector=engine)
    >>> cutout = processor.cutout_for_view(390, 844, Orientation.PORTRAIT)
    >>> session = ScanSession()
    >>> result = processor.process_frame(frame, cutout, Orientation.PORTRAIT, session)
    >>> if result.is_pass():
    ...     print(result.quick_result.passport_number)
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from src.common.types import CropRegion, ImageBuffer, NormalizedRect
from src.exposure import calculate_average_luminance, enhance_for_ocr, estimate_params
from src.mrz import find_quick_result, sanitize_recognized_lines
from src.region import (
    Orientation,
    OutOfBoundsPolicy,
    calculate_cutout_rect,
    crop_image,
    enlarge_region,
    map_cutout_to_image,
    mrz_band_from_text_boxes,
    normalize_layer_rect,
)

from .config_loader import Config, get_default_config, load_config
from .interfaces import FullMRZParser, TextRecognizer, TextRectangleDetector
from .types import DecisionStatus, FrameRejection, FrameResult, ScanSession

logger = logging.getLogger(__name__)


class MRZFrameProcessor:
    """Frame-by-frame MRZ scanning pipeline.

    The processor holds only configuration and collaborators; all per-session
    state is kept in the ScanSession passed to :meth:`process_frame`.

    Args:
        recognizer: OCR engine returning recognized lines
        detector: Optional text rectangle detector used to find the MRZ band
        full_parser: Optional full MRZ grammar parser
        config: Pre-loaded configuration. If None, loads from config_path.
        config_path: Optional path to config YAML. If None, uses defaults.

    Attributes:
        config: Full configuration object
        recognizer: OCR collaborator
        detector: Text rectangle collaborator (may be None)
        full_parser: Full MRZ parser collaborator (may be None)
    """

    def __init__(
        self,
        recognizer: TextRecognizer,
        detector: Optional[TextRectangleDetector] = None,
        full_parser: Optional[FullMRZParser] = None,
        config: Optional[Config] = None,
        config_path: Optional[Path] = None,
    ):
        if config is not None:
            self.config = config
        elif config_path is not None:
            self.config = load_config(config_path)
        else:
            self.config = get_default_config()

        self.recognizer = recognizer
        self.detector = detector
        self.full_parser = full_parser

        pipeline = self.config.scanner.pipeline
        if pipeline.use_full_parser and full_parser is None:
            logger.warning("use_full_parser is enabled but no full parser was supplied")
        if pipeline.detect_mrz_band and detector is None:
            logger.info("No text rectangle detector supplied, OCR runs on the whole crop")

        logger.info(
            f"Initialized MRZFrameProcessor: quick={pipeline.use_quick_parser}, "
            f"full={pipeline.use_full_parser and full_parser is not None}, "
            f"band={pipeline.detect_mrz_band and detector is not None}, "
            f"enhance={pipeline.enhance_images}"
        )

    def process_frame(
        self,
        image: np.ndarray,
        cutout: NormalizedRect,
        orientation: Orientation,
        session: Optional[ScanSession] = None,
    ) -> FrameResult:
        """Run one captured frame through the pipeline.

        Args:
            image: Captured frame (landscape sensor buffer, uint8)
            cutout: Cutout rectangle in normalized capture coordinates
            orientation: Orientation of the frame
            session: Scan session; when given and ``stop_after_result`` is set,
                only the first successful frame is delivered

        Returns:
            FrameResult with PASS and the parsed result, or REJECT with the
            reason the frame was skipped.

        Raises:
            ValueError: If the frame is not a valid image.
        """
        start_time = time.perf_counter()
        stop_after_result = self.config.scanner.pipeline.stop_after_result

        if session is not None:
            if stop_after_result and session.finished:
                return self._reject(FrameRejection.SESSION_FINISHED, start_time)
            session.frames_processed += 1

        frame = ImageBuffer(data=image)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 1: REGION MAPPING
        # ═══════════════════════════════════════════════════════════════
        region = self._document_region(cutout, orientation, frame.width, frame.height)
        document = crop_image(
            frame.data, region, self.config.scanner.region.out_of_bounds_policy
        )
        if document is None:
            return self._reject(FrameRejection.OUT_OF_BOUNDS, start_time, region=region)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 2: MRZ BAND
        # ═══════════════════════════════════════════════════════════════
        try:
            mrz_image = self._mrz_band_image(document)
        except Exception as e:
            logger.warning(f"Text rectangle detection failed: {e}")
            return self._reject(
                FrameRejection.RECOGNITION_FAILED, start_time, region=region
            )
        if mrz_image is None:
            return self._reject(FrameRejection.NO_MRZ_BAND, start_time, region=region)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 3: ENHANCEMENT
        # ═══════════════════════════════════════════════════════════════
        if self.config.scanner.pipeline.enhance_images:
            mrz_image = self._enhance(mrz_image)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 4: RECOGNITION
        # ═══════════════════════════════════════════════════════════════
        try:
            lines = list(self.recognizer.recognize(mrz_image))
        except Exception as e:
            logger.warning(f"Text recognition failed: {e}")
            return self._reject(
                FrameRejection.RECOGNITION_FAILED, start_time, region=region
            )

        if not lines:
            return self._reject(FrameRejection.NO_TEXT, start_time, region=region)

        # ═══════════════════════════════════════════════════════════════
        # STAGE 5: PARSING
        # ═══════════════════════════════════════════════════════════════
        quick_result = None
        full_result = None
        pipeline = self.config.scanner.pipeline

        if pipeline.use_quick_parser:
            quick_result = find_quick_result(self._candidate_lines(lines))

        if pipeline.use_full_parser and self.full_parser is not None:
            sanitized = sanitize_recognized_lines(
                lines, strip_spaces=self.config.scanner.sanitizer.strip_spaces
            )
            if sanitized is not None:
                try:
                    full_result = self.full_parser.parse(sanitized)
                except Exception as e:
                    logger.warning(f"Full MRZ parsing failed: {e}")
                    if quick_result is None:
                        return self._reject(
                            FrameRejection.RECOGNITION_FAILED,
                            start_time,
                            region=region,
                            lines=lines,
                        )

        if quick_result is None and full_result is None:
            return self._reject(
                FrameRejection.NO_MATCH, start_time, region=region, lines=lines
            )

        result = FrameResult(
            decision=DecisionStatus.PASS,
            quick_result=quick_result,
            full_result=full_result,
            recognized_lines=lines,
            crop_region=region,
            rejection=FrameRejection.NONE,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

        if session is not None and stop_after_result:
            if not session.try_deliver(result):
                return self._reject(
                    FrameRejection.SESSION_FINISHED, start_time, region=region, lines=lines
                )
            logger.info(
                f"MRZ found after {session.frames_processed} frames "
                f"({result.processing_time_ms:.1f}ms)"
            )

        return result

    def cutout_for_view(
        self, view_width: float, view_height: float, orientation: Orientation
    ) -> NormalizedRect:
        """Normalized cutout rectangle for a preview view of the given size.

        Args:
            view_width: Preview view width in points
            view_height: Preview view height in points
            orientation: Device orientation the view is shown in

        Returns:
            Cutout in normalized coordinates, ready for :meth:`process_frame`
        """
        region = self.config.scanner.region
        cutout = calculate_cutout_rect(
            view_width,
            view_height,
            width_fraction=region.cutout_width_fraction,
            document_ratio=region.cutout_document_ratio,
            top_offset_ratio=region.cutout_top_offset_ratio,
        )
        return normalize_layer_rect(cutout, view_width, view_height, orientation)

    def _document_region(
        self,
        cutout: NormalizedRect,
        orientation: Orientation,
        image_width: int,
        image_height: int,
    ) -> CropRegion:
        """Map the cutout onto the frame, enlarging it if configured."""
        region = map_cutout_to_image(cutout, orientation, image_width, image_height)
        if self.config.scanner.pipeline.enlarge_crop:
            region = enlarge_region(region, self.config.scanner.region.enlarge_margin)
        return region

    def _mrz_band_image(self, document: np.ndarray) -> Optional[np.ndarray]:
        """Crop the document image to its MRZ band.

        Returns the document unchanged when band detection is disabled or no
        detector is available, and None when no band is found.
        """
        if not self.config.scanner.pipeline.detect_mrz_band or self.detector is None:
            return document

        height, width = document.shape[:2]
        band = mrz_band_from_text_boxes(
            self.detector.detect(document),
            width,
            height,
            min_width_ratio=self.config.scanner.region.min_band_width_ratio,
        )
        if band is None:
            return None

        return crop_image(document, band, OutOfBoundsPolicy.SKIP)

    def _enhance(self, image: np.ndarray) -> np.ndarray:
        """Apply luminance-driven exposure and thresholding."""
        exposure = self.config.scanner.exposure
        params = estimate_params(
            calculate_average_luminance(image),
            baseline=exposure.baseline,
            bright_threshold=exposure.bright_threshold,
            dark_threshold=exposure.dark_threshold,
            threshold_exponent=exposure.threshold_exponent,
        )
        return enhance_for_ocr(image, params, scale=exposure.upscale_factor)

    def _candidate_lines(self, lines: List[str]) -> List[str]:
        """Lines for the quick parser, with spaces removed if configured."""
        if self.config.scanner.sanitizer.strip_spaces:
            return [line.replace(" ", "") for line in lines]
        return lines

    def _reject(
        self,
        reason: FrameRejection,
        start_time: float,
        region: Optional[CropRegion] = None,
        lines: Optional[List[str]] = None,
    ) -> FrameResult:
        """Create a REJECT result."""
        logger.debug(f"Frame rejected: {reason.value}")
        return FrameResult(
            decision=DecisionStatus.REJECT,
            recognized_lines=list(lines) if lines else [],
            crop_region=region,
            rejection=reason,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def get_processing_stats(self) -> dict:
        """Get processor configuration summary.

        Returns:
            Dictionary with enabled stages and key parameters
        """
        pipeline = self.config.scanner.pipeline
        return {
            "quick_parser": pipeline.use_quick_parser,
            "full_parser": pipeline.use_full_parser and self.full_parser is not None,
            "mrz_band_detection": pipeline.detect_mrz_band and self.detector is not None,
            "enhancement": pipeline.enhance_images,
            "enlarge_margin": (
                self.config.scanner.region.enlarge_margin
                if pipeline.enlarge_crop
                else 0.0
            ),
            "out_of_bounds_policy": self.config.scanner.region.out_of_bounds_policy.value,
        }
