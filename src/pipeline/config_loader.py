"""Configuration loader with Pydantic validation for the MRZ scanner.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from src.region.mapper import OutOfBoundsPolicy


class SanitizerConfig(BaseModel):
    """Line sanitizer configuration.

    Attributes:
        strip_spaces: Remove spaces from recognized text before filtering
    """

    strip_spaces: bool = True


class RegionConfig(BaseModel):
    """Cutout-to-image mapping configuration.

    Attributes:
        enlarge_margin: Margin added on every side, as a fraction of crop height
        min_band_width_ratio: Minimum text box width (relative to the document
            crop) for a box to count as part of the MRZ band
        out_of_bounds_policy: Behaviour when the crop misses the frame entirely
        cutout_width_fraction: Fraction of the view width filled by the cutout
        cutout_document_ratio: Width/height ratio of the cutout
        cutout_top_offset_ratio: Share of the free vertical space above the cutout
    """

    enlarge_margin: float = Field(default=0.05, ge=0.0, le=1.0)
    min_band_width_ratio: float = Field(default=0.8, gt=0.0, le=1.0)
    out_of_bounds_policy: OutOfBoundsPolicy = OutOfBoundsPolicy.FULL_IMAGE
    cutout_width_fraction: float = Field(default=0.9, gt=0.0, le=1.0)
    cutout_document_ratio: float = Field(default=125.0 / 22.0, gt=0.0)
    cutout_top_offset_ratio: float = Field(default=0.4, ge=0.0, le=1.0)


class ExposureConfig(BaseModel):
    """Adaptive exposure configuration.

    Attributes:
        baseline: Exposure value applied to a correctly lit frame
        bright_threshold: Average luminance above which exposure is reduced
        dark_threshold: Average luminance below which exposure is boosted
        threshold_exponent: Exponent of the binarization threshold curve
        upscale_factor: Lanczos upscale factor applied before binarization
    """

    baseline: float = 0.5
    bright_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    dark_threshold: float = Field(default=0.35, ge=0.0, le=1.0)
    threshold_exponent: float = Field(default=0.2, gt=0.0)
    upscale_factor: float = Field(default=2.0, gt=0.0)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "ExposureConfig":
        if self.dark_threshold > self.bright_threshold:
            raise ValueError(
                f"dark_threshold ({self.dark_threshold}) must not exceed "
                f"bright_threshold ({self.bright_threshold})"
            )
        return self


class PipelineConfig(BaseModel):
    """Frame pipeline configuration.

    Attributes:
        use_quick_parser: Run the TD3 quick-field extractor
        use_full_parser: Run the full MRZ parser when one is supplied
        detect_mrz_band: Narrow the crop to the MRZ band using text rectangles
        enhance_images: Apply exposure/threshold enhancement before OCR
        enlarge_crop: Enlarge the document crop by the configured margin
        stop_after_result: Deliver only the first result of a session
    """

    use_quick_parser: bool = True
    use_full_parser: bool = False
    detect_mrz_band: bool = True
    enhance_images: bool = False
    enlarge_crop: bool = False
    stop_after_result: bool = True


class OCREngineConfig(BaseModel):
    """Tesseract OCR engine configuration.

    Attributes:
        lang: Tesseract language (e.g. "eng", or a trained "ocrb" model)
        psm: Page segmentation mode (6 = uniform block of text)
        char_whitelist: Characters Tesseract may output (MRZ alphabet)
        min_confidence: Minimum word confidence (0-100) to keep a word
    """

    lang: str = "eng"
    psm: int = Field(default=6, ge=0, le=13)
    char_whitelist: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
    min_confidence: float = Field(default=0.0, ge=0.0, le=100.0)


class ScannerModuleConfig(BaseModel):
    """Complete scanner configuration.

    Attributes:
        sanitizer: Line sanitizer configuration
        region: Region mapping configuration
        exposure: Adaptive exposure configuration
        pipeline: Frame pipeline configuration
        ocr: OCR engine configuration
    """

    sanitizer: SanitizerConfig = SanitizerConfig()
    region: RegionConfig = RegionConfig()
    exposure: ExposureConfig = ExposureConfig()
    pipeline: PipelineConfig = PipelineConfig()
    ocr: OCREngineConfig = OCREngineConfig()


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        scanner: Scanner configuration
    """

    scanner: ScannerModuleConfig = ScannerModuleConfig()


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    The file may either contain the scanner sections at the top level or
    nest them under a ``scanner`` key.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("src/pipeline/config.yaml"))
        >>> print(config.scanner.region.enlarge_margin)
        0.05
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    if "scanner" in config_dict:
        config_dict = config_dict["scanner"] or {}

    return Config(scanner=ScannerModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from src/pipeline/config.yaml
    """
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()
