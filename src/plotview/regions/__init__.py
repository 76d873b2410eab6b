"""
Interactive region model.

Regions are drawn in preview space, hit-tested along their outlines and
exported as color-keyed crops of the full-resolution source.
"""

from .geometry import BoundLine
from .model import (
    GRAY,
    Color,
    Complete,
    DegenerateRegionError,
    Drawing,
    Region,
    RegionStateError,
)
from .collection import Regions

__all__ = [
    'BoundLine',
    'GRAY',
    'Color',
    'Complete',
    'DegenerateRegionError',
    'Drawing',
    'Region',
    'RegionStateError',
    'Regions',
]
