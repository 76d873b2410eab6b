"""
Headless cropping session.

Turns discrete pointer events into region operations:

* left click starts a rectangle, the next left click finishes it;
* right click on an outline selects that region and opens the color picker;
* with the picker open, a left click deselects and closes it.

The session owns the preview (working) image and renders frames for
whatever window drives it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..config import Settings
from ..image.extraction import ExtractedImage, clamp_box, map_to_source
from ..image.source import SourceImage
from ..logging import get_logger
from ..regions.collection import Regions
from ..regions.model import GRAY, Color, Complete
from .rendering import render_crosshair, render_regions

logger = get_logger(__name__)


@dataclass
class ColorPickerState:
    color: Color = GRAY
    show: bool = False


class CropSession:
    def __init__(self, source: SourceImage, ratio: float, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.source = source
        self.ratio = ratio
        self.working = source.resized(ratio)
        self.regions = Regions(hit_margin=self.settings.hit_margin)
        self.picker = ColorPickerState()
        self.pointer_x = 0.0
        self.pointer_y = 0.0
        self._background = self.working.as_array()

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the preview."""
        return self.working.dimensions

    def pointer_moved(self, x: float, y: float) -> None:
        self.pointer_x = x
        self.pointer_y = y

    def left_click(self) -> None:
        if self.picker.show:
            self.regions.deselect()
            self.picker.show = False
            return

        if self.regions.is_finished():
            self.regions.start(self.pointer_x, self.pointer_y)
            return

        if not self._crops_source_pixels(self.pointer_x, self.pointer_y):
            logger.warning(
                f"Ignoring click at ({self.pointer_x}, {self.pointer_y}): "
                f"region would not cover any source pixels"
            )
            return

        self.regions.finish(self.pointer_x, self.pointer_y)

    def _crops_source_pixels(self, x2: float, y2: float) -> bool:
        """Whether finishing the current region at (x2, y2) maps to a non-empty crop."""
        drawing = self.regions.regions[-1].state
        left, right = sorted((drawing.x1, x2))
        top, bottom = sorted((drawing.y1, y2))
        width, height = self.source.dimensions
        box = map_to_source(Complete(left, top, right, bottom), self.ratio)
        return not clamp_box(box, width, height).is_empty

    def right_click(self) -> bool:
        """Select the region under the pointer; returns whether one was hit."""
        if not self.regions.select_collided_region(self.pointer_x, self.pointer_y):
            return False

        self.picker.color = self.regions.selected.color
        self.picker.show = True
        return True

    def pick_color(self, color: Color) -> None:
        self.picker.color = color
        self.regions.update_selected_color(color)

    def render(self) -> np.ndarray:
        """RGBA preview frame with region outlines and the crosshair."""
        frame = self._background.copy()
        render_regions(frame, self.regions, self.settings.stroke_width)
        render_crosshair(frame, self.pointer_x, self.pointer_y)
        return frame

    def close(self) -> List[ExtractedImage]:
        """End the session and extract every finished region."""
        return self.regions.export(
            self.ratio,
            self.source,
            foreground_margin=self.settings.foreground_margin,
        )
