"""
Axis-aligned boundary lines used for hit-testing region outlines.

A region is selectable only along its outline, so every edge of its
rectangle becomes a ``BoundLine`` thickened by a collision margin.
"""

from dataclasses import dataclass
from typing import Literal

Orientation = Literal["horizontal", "vertical"]


@dataclass(frozen=True)
class BoundLine:
    """
    One edge of a rectangle, inflated by ``margin`` on every side.

    For a vertical line ``position`` is the x coordinate and ``start``/``end``
    span the y axis; for a horizontal line ``position`` is the y coordinate
    and ``start``/``end`` span the x axis.
    """
    orientation: Orientation
    position: float
    start: float
    end: float
    margin: float

    @classmethod
    def horizontal(cls, y: float, start_x: float, end_x: float, margin: float) -> "BoundLine":
        return cls("horizontal", y, start_x, end_x, margin)

    @classmethod
    def vertical(cls, x: float, start_y: float, end_y: float, margin: float) -> "BoundLine":
        return cls("vertical", x, start_y, end_y, margin)

    def collides(self, px: float, py: float) -> bool:
        """Return True if the point lies inside the margin-thick band (inclusive)."""
        if self.orientation == "vertical":
            across, along = px, py
        else:
            across, along = py, px

        if not (self.position - self.margin <= across <= self.position + self.margin):
            return False
        return self.start - self.margin <= along <= self.end + self.margin
