"""
Preview rendering of region outlines and the pointer crosshair.

Frames are (H, W, 4) uint8 RGBA arrays; drawing happens in place with
OpenCV primitives, so colors are passed in frame channel order.
"""

from typing import Iterable

import numpy as np
import cv2

from ..regions.model import Color, Region

CROSSHAIR_COLOR = Color(0, 10, 30, 255)
CROSSHAIR_DASH = 4


def render_regions(frame: np.ndarray, regions: Iterable[Region], stroke_width: int = 4) -> np.ndarray:
    """
    Stroke the outline of every complete region in its tag color.

    Drawing stops at the first region that is still being drawn; only the
    last region of a collection can be in that state.
    """
    for region in regions:
        path = region.path()
        if path is None:
            break

        x1, y1, x2, y2 = path
        cv2.rectangle(
            frame,
            (int(round(x1)), int(round(y1))),
            (int(round(x2)), int(round(y2))),
            region.color.to_tuple(),
            stroke_width,
        )

    return frame


def render_crosshair(frame: np.ndarray, x: float, y: float, thickness: int = 2) -> np.ndarray:
    """Draw dashed full-frame horizontal and vertical lines through (x, y)."""
    height, width = frame.shape[:2]
    cx, cy = int(round(x)), int(round(y))
    color = CROSSHAIR_COLOR.to_tuple()

    for start in range(0, width, CROSSHAIR_DASH * 2):
        cv2.line(frame, (start, cy), (min(start + CROSSHAIR_DASH, width) - 1, cy), color, thickness)
    for start in range(0, height, CROSSHAIR_DASH * 2):
        cv2.line(frame, (cx, start), (cx, min(start + CROSSHAIR_DASH, height) - 1), color, thickness)

    return frame
