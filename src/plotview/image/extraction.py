"""
Color-keyed extraction of a region from the full-resolution source.

The preview rectangle is mapped back to source space by dividing by the
scale ratio, the crop is clamped to the source bounds, and every pixel is
binarized: near-black foreground takes the region color, the rest becomes
fully transparent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from ..logging import get_logger
from ..regions.model import Color, Complete, Region, RegionStateError
from .source import SourceImage

logger = get_logger(__name__)

BLACK = Color(0, 0, 0, 255)
TRANSPARENT = Color(0, 0, 0, 0)
FOREGROUND_MARGIN = 200


class EmptyCropError(ValueError):
    """Raised when a region maps to no source pixels."""


@dataclass(frozen=True)
class CropBox:
    """Integer pixel rectangle in source space."""
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_ltrb(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class ExtractedImage:
    """A color-keyed crop, ready to be written as ``file_name``."""
    file_name: str
    sequence: int
    box: CropBox
    color: Color
    image: Image.Image

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.image.size


def map_to_source(state: Complete, ratio: float) -> CropBox:
    """Divide preview coordinates by ``ratio`` and truncate toward zero."""
    if ratio <= 0:
        raise ValueError(f"Scale ratio must be positive, got {ratio}")

    return CropBox(
        x=int(state.x1 / ratio),
        y=int(state.y1 / ratio),
        width=int((state.x2 - state.x1) / ratio),
        height=int((state.y2 - state.y1) / ratio),
    )


def clamp_box(box: CropBox, width: int, height: int) -> CropBox:
    """Intersect ``box`` with the ``width`` x ``height`` source bounds."""
    left = min(max(box.x, 0), width)
    top = min(max(box.y, 0), height)
    right = min(max(box.x + box.width, 0), width)
    bottom = min(max(box.y + box.height, 0), height)
    return CropBox(left, top, right - left, bottom - top)


def color_mask(pixels: np.ndarray, match: Color, margin: int) -> np.ndarray:
    """
    Boolean (H, W) mask of pixels matching ``match``.

    A pixel matches when ANY of its R, G, B channels lies within the
    inclusive ``margin`` of the corresponding channel of ``match``; bounds
    saturate at 0 and 255.
    """
    rgb = pixels[..., :3].astype(np.int16)
    target = np.array(match.to_tuple()[:3], dtype=np.int16)
    low = np.clip(target - margin, 0, 255)
    high = np.clip(target + margin, 0, 255)
    within = (rgb >= low) & (rgb <= high)
    return within.any(axis=-1)


def color_key(pixels: np.ndarray, color: Color, margin: int = FOREGROUND_MARGIN) -> np.ndarray:
    """Return a new RGBA array: foreground -> ``color``, background -> transparent."""
    mask = color_mask(pixels, BLACK, margin)
    keyed = np.empty(pixels.shape[:2] + (4,), dtype=np.uint8)
    keyed[...] = TRANSPARENT.to_tuple()
    keyed[mask] = color.to_tuple()
    return keyed


def crop_file_name(source: SourceImage, counter: int) -> str:
    return f"{source.path.stem}-{counter}.png"


def extract_region(
    source: SourceImage,
    region: Region,
    counter: int,
    ratio: float,
    margin: int = FOREGROUND_MARGIN,
) -> ExtractedImage:
    """
    Crop ``region`` out of the full-resolution ``source`` and color-key it.

    Args:
        source: Full-resolution image the preview was scaled from
        region: Complete region in preview coordinates
        counter: Sequence number used in the output file name
        ratio: Preview size divided by source size
        margin: Per-channel distance from black that counts as foreground

    Raises:
        RegionStateError: If the region is not complete
        EmptyCropError: If the mapped rectangle holds no source pixels
    """
    state = region.state
    if not isinstance(state, Complete):
        raise RegionStateError(f"Unexpected incomplete region: {region!r}")

    width, height = source.dimensions
    mapped = map_to_source(state, ratio)
    box = clamp_box(mapped, width, height)
    if box != mapped:
        logger.warning(f"Region {counter} crop {mapped} clamped to source bounds as {box}")
    if box.is_empty:
        raise EmptyCropError(
            f"Region {counter} maps to an empty crop {mapped} on a {width}x{height} source"
        )

    pixels = np.asarray(source.pil_image.crop(box.to_ltrb()), dtype=np.uint8)
    keyed = color_key(pixels, region.color, margin)
    name = crop_file_name(source, counter)

    logger.debug(f"Extracted {name}: box={box}, color={region.color}")
    return ExtractedImage(
        file_name=name,
        sequence=counter,
        box=box,
        color=region.color,
        image=Image.fromarray(keyed),
    )
