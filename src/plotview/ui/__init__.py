"""Interactive cropping session, preview rendering and the OpenCV window."""

from .rendering import render_crosshair, render_regions
from .session import ColorPickerState, CropSession
from .viewer import run_viewer

__all__ = [
    "render_crosshair",
    "render_regions",
    "ColorPickerState",
    "CropSession",
    "run_viewer",
]
