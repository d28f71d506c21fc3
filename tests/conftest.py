"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest

# ICAO 9303 Part 4 specimen passport (Anna Maria Eriksson, Utopia)
ICAO_FIRST_LINE = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
ICAO_SECOND_LINE = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"


@pytest.fixture
def icao_second_line():
    """Fixture providing the specimen TD3 second line."""
    return ICAO_SECOND_LINE


@pytest.fixture
def icao_mrz_lines():
    """Fixture providing both specimen MRZ lines in document order."""
    return [ICAO_FIRST_LINE, ICAO_SECOND_LINE]


@pytest.fixture
def noisy_ocr_lines():
    """Fixture providing OCR output with header noise around the MRZ."""
    return [
        "PASSPORT",
        "UTOPIA",
        "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
        "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
        "x",
    ]


@pytest.fixture
def sample_frame():
    """Fixture providing a landscape 1920x1080 BGR frame with a bright band."""
    import numpy as np

    frame = np.full((1080, 1920, 3), 40, dtype=np.uint8)
    frame[400:700, 200:1700] = 220
    return frame
