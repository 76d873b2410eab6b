"""
Full-resolution source raster and its downscaled preview copies.

Everything is held as RGBA so that extraction and rendering can index
channels uniformly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from ..logging import get_logger

logger = get_logger(__name__)


class ImageLoadError(Exception):
    """Raised when a raster file cannot be decoded."""


class SourceImage:
    def __init__(self, image: Image.Image, path: Path | str) -> None:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image
        self._path = Path(path)

    @classmethod
    def open(cls, path: Path | str) -> SourceImage:
        path = Path(path)
        if not path.exists():
            raise ImageLoadError(f"Image file does not exist: {path}")

        try:
            with Image.open(path) as img:
                img.load()
                rgba = img.convert("RGBA")
        except Exception as exc:
            raise ImageLoadError(f"Failed to decode image: {path}") from exc

        logger.debug(f"Loaded {path} ({rgba.width}x{rgba.height})")
        return cls(rgba, path)

    @classmethod
    def from_pil(cls, image: Image.Image, path: Path | str) -> SourceImage:
        return cls(image, path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dimensions(self) -> Tuple[int, int]:
        """(width, height) in pixels."""
        return self._image.size

    @property
    def pil_image(self) -> Image.Image:
        return self._image

    def as_array(self) -> np.ndarray:
        """Copy of the pixels as an (H, W, 4) uint8 array."""
        return np.array(self._image, dtype=np.uint8)

    def resized(self, ratio: float) -> SourceImage:
        """Nearest-neighbour copy scaled by ``ratio``, keeping the same path."""
        width, height = self.dimensions
        new_width = int(width * ratio)
        new_height = int(height * ratio)
        resized = self._image.resize((new_width, new_height), Image.Resampling.NEAREST)
        logger.debug(f"Resized {width}x{height} -> {new_width}x{new_height} (ratio={ratio})")
        return SourceImage(resized, self._path)


def fit_ratio(width: int, height: int, max_width: int, max_height: int) -> float:
    """
    Scale ratio that makes an image fit inside ``max_width`` x ``max_height``.

    The ratio starts at 1.0 and is halved until the (truncated) running size
    fits, so previews are always a power-of-two reduction of the source.
    """
    if max_width <= 0 or max_height <= 0:
        raise ValueError(f"Invalid preview bounds: {max_width}x{max_height}")

    ratio = 1.0
    while width > max_width or height > max_height:
        ratio *= 0.5
        width = int(width * 0.5)
        height = int(height * 0.5)
    return ratio
