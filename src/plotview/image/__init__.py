"""Source rasters and color-keyed region extraction."""

from .source import ImageLoadError, SourceImage, fit_ratio
from .extraction import (
    FOREGROUND_MARGIN,
    CropBox,
    EmptyCropError,
    ExtractedImage,
    color_key,
    extract_region,
)

__all__ = [
    "ImageLoadError",
    "SourceImage",
    "fit_ratio",
    "FOREGROUND_MARGIN",
    "CropBox",
    "EmptyCropError",
    "ExtractedImage",
    "color_key",
    "extract_region",
]
