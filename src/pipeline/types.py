"""Type definitions for the frame pipeline.

This module defines the per-frame result returned by the frame processor and
the per-session state owned by the scanning layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from src.common.types import CropRegion
from src.mrz.types import QuickResult


class DecisionStatus(Enum):
    """Decision status for one processed frame."""

    PASS = "pass"
    REJECT = "reject"


class FrameRejection(Enum):
    """Why a frame did not produce a result.

    Every rejection is recoverable: the caller simply tries the next frame.
    """

    NONE = "none"
    SESSION_FINISHED = "session_finished"  # A result was already delivered
    OUT_OF_BOUNDS = "out_of_bounds"  # Crop region misses the frame
    NO_MRZ_BAND = "no_mrz_band"  # No text rectangle wide enough for an MRZ line
    RECOGNITION_FAILED = "recognition_failed"  # OCR collaborator raised
    NO_TEXT = "no_text"  # OCR returned no lines
    NO_MATCH = "no_match"  # No line parsed / checksum mismatch


@dataclass
class FrameResult:
    """Outcome of processing one frame.

    Attributes:
        decision: PASS if a result was produced for delivery, REJECT otherwise
        quick_result: Fields from the TD3 quick parser, if it succeeded
        full_result: Result of the full MRZ parser, if one ran and succeeded
        recognized_lines: Raw OCR lines of the frame (empty if OCR did not run)
        crop_region: Document crop in frame pixel coordinates
        rejection: Reason for REJECT (NONE on PASS)
        processing_time_ms: Total processing time in milliseconds
    """

    decision: DecisionStatus
    quick_result: Optional[QuickResult] = None
    full_result: Optional[Any] = None
    recognized_lines: List[str] = field(default_factory=list)
    crop_region: Optional[CropRegion] = None
    rejection: FrameRejection = FrameRejection.NONE
    processing_time_ms: float = 0.0

    def is_pass(self) -> bool:
        """Check if decision is PASS."""
        return self.decision == DecisionStatus.PASS

    def is_reject(self) -> bool:
        """Check if decision is REJECT."""
        return self.decision == DecisionStatus.REJECT


@dataclass
class ScanSession:
    """Mutable state of one scanning session.

    The MRZ functions themselves are stateless; the "already delivered a
    result" latch lives here and is owned by the scanning layer.

    Attributes:
        finished: True once a result has been delivered
        frames_processed: Number of frames handed to the processor
        last_result: The delivered result, if any
    """

    finished: bool = False
    frames_processed: int = 0
    last_result: Optional[FrameResult] = None

    def try_deliver(self, result: FrameResult) -> bool:
        """Latch the session on its first result.

        Returns:
            True if this call delivered the result, False if the session had
            already finished.
        """
        if self.finished:
            return False
        self.finished = True
        self.last_result = result
        return True

    def reset(self) -> None:
        """Start a new session (e.g. when scanning restarts)."""
        self.finished = False
        self.frames_processed = 0
        self.last_result = None
