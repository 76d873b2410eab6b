"""
Region lifecycle model.

A region starts as ``Drawing`` (one corner fixed while the pointer moves)
and becomes ``Complete`` exactly once, with its corners normalized so that
``x1 <= x2`` and ``y1 <= y2``. Coordinates live in preview space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .geometry import BoundLine

DEFAULT_HIT_MARGIN = 4.0


class RegionStateError(RuntimeError):
    """Raised when a caller violates the region state machine."""


class DegenerateRegionError(ValueError):
    """Raised when finishing a region would produce zero width or height."""


@dataclass(frozen=True)
class Color:
    """RGBA color tag, each channel in 0..255."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


GRAY = Color(160, 160, 160, 255)


@dataclass(frozen=True)
class Drawing:
    """First corner fixed, second corner still following the pointer."""
    x1: float
    y1: float


@dataclass(frozen=True)
class Complete:
    """Both corners fixed and normalized."""
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


RegionState = Union[Drawing, Complete]


class Region:
    """A user-drawn rectangle with a lifecycle state and a color tag."""

    def __init__(self, state: RegionState, color: Color = GRAY) -> None:
        self.state: RegionState = state
        self.color = color

    @classmethod
    def start(cls, x1: float, y1: float) -> Region:
        return cls(Drawing(x1, y1))

    @property
    def is_complete(self) -> bool:
        return isinstance(self.state, Complete)

    def finish(self, x2: float, y2: float) -> None:
        """
        Fix the second corner and transition to ``Complete``.

        Raises:
            RegionStateError: If the region is already complete.
            DegenerateRegionError: If the rectangle would have no area. The
                region stays in ``Drawing`` so another corner can be chosen.
        """
        state = self.state
        if not isinstance(state, Drawing):
            raise RegionStateError("This region is already completed")

        x1, y1 = state.x1, state.y1
        if x1 > x2:
            x1, x2 = x2, x1
        if y1 > y2:
            y1, y2 = y2, y1

        if x1 == x2 or y1 == y2:
            raise DegenerateRegionError(
                f"Region ({x1}, {y1})-({x2}, {y2}) has zero width or height"
            )

        self.state = Complete(x1, y1, x2, y2)

    def update_color(self, color: Color) -> None:
        self.color = color

    def path(self) -> Optional[Tuple[float, float, float, float]]:
        """Rectangle as (left, top, right, bottom), or None while drawing."""
        state = self.state
        if isinstance(state, Complete):
            return (state.x1, state.y1, state.x2, state.y2)
        return None

    def boundary_segments(self, margin: float) -> Optional[Tuple[BoundLine, BoundLine, BoundLine, BoundLine]]:
        """Top, bottom, left and right edges, or None while drawing."""
        state = self.state
        if not isinstance(state, Complete):
            return None

        return (
            BoundLine.horizontal(state.y1, state.x1, state.x2, margin),
            BoundLine.horizontal(state.y2, state.x1, state.x2, margin),
            BoundLine.vertical(state.x1, state.y1, state.y2, margin),
            BoundLine.vertical(state.x2, state.y1, state.y2, margin),
        )

    def collides(self, px: float, py: float, margin: float = DEFAULT_HIT_MARGIN) -> Optional[bool]:
        """
        Hit-test the outline of the region.

        Returns None while drawing, otherwise whether the point touches any of
        the four margin-thick edges. Points strictly inside the frame miss.
        """
        segments = self.boundary_segments(margin)
        if segments is None:
            return None
        return any(segment.collides(px, py) for segment in segments)

    def __repr__(self) -> str:
        return f"Region(state={self.state!r}, color={self.color!r})"
