"""Tests for the region lifecycle state machine."""

import pytest
from hypothesis import assume, given, strategies as st

from plotview.regions.model import (
    GRAY,
    Color,
    Complete,
    DegenerateRegionError,
    Drawing,
    Region,
    RegionStateError,
)

coords = st.floats(min_value=-5000, max_value=5000, allow_nan=False)


class TestRegionStart:
    def test_start_is_drawing_with_default_color(self):
        region = Region.start(3.0, 4.0)
        assert region.state == Drawing(3.0, 4.0)
        assert region.color == GRAY
        assert not region.is_complete

    def test_drawing_region_has_no_geometry(self):
        region = Region.start(3.0, 4.0)
        assert region.path() is None
        assert region.boundary_segments(4.0) is None
        assert region.collides(3.0, 4.0) is None


class TestRegionFinish:
    def test_finish_normalizes_corners(self):
        region = Region.start(30.0, 40.0)
        region.finish(10.0, 20.0)
        assert region.state == Complete(10.0, 20.0, 30.0, 40.0)
        assert region.path() == (10.0, 20.0, 30.0, 40.0)

    def test_finish_twice_raises(self):
        region = Region.start(0.0, 0.0)
        region.finish(10.0, 10.0)
        with pytest.raises(RegionStateError, match="already completed"):
            region.finish(20.0, 20.0)
        # The first completion is kept
        assert region.path() == (0.0, 0.0, 10.0, 10.0)

    @pytest.mark.parametrize("x2, y2", [(5.0, 5.0), (5.0, 9.0), (9.0, 5.0)])
    def test_zero_area_is_rejected_and_region_stays_drawing(self, x2, y2):
        region = Region.start(5.0, 5.0)
        with pytest.raises(DegenerateRegionError):
            region.finish(x2, y2)
        assert region.state == Drawing(5.0, 5.0)

        region.finish(15.0, 15.0)
        assert region.is_complete

    @given(x1=coords, y1=coords, x2=coords, y2=coords)
    def test_normalization_property(self, x1, y1, x2, y2):
        """Stored corners are ordered and keep the original coordinate pairs."""
        assume(x1 != x2 and y1 != y2)
        region = Region.start(x1, y1)
        region.finish(x2, y2)

        state = region.state
        assert isinstance(state, Complete)
        assert state.x1 <= state.x2
        assert state.y1 <= state.y2
        assert {state.x1, state.x2} == {x1, x2}
        assert {state.y1, state.y2} == {y1, y2}


class TestRegionColor:
    def test_update_color_in_any_state(self):
        red = Color(255, 0, 0, 255)
        region = Region.start(0.0, 0.0)
        region.update_color(red)
        assert region.color == red

        region.finish(10.0, 10.0)
        blue = Color(0, 0, 255, 128)
        region.update_color(blue)
        assert region.color == blue

    def test_color_channels_are_validated(self):
        with pytest.raises(ValueError):
            Color(256, 0, 0)
        with pytest.raises(ValueError):
            Color(0, 0, 0, -1)

    def test_color_defaults_to_opaque(self):
        assert Color(1, 2, 3).to_tuple() == (1, 2, 3, 255)


class TestRegionHitTest:
    @pytest.fixture
    def square(self):
        region = Region.start(0.0, 0.0)
        region.finish(100.0, 100.0)
        return region

    def test_top_edge_collides(self, square):
        assert square.collides(50.0, 0.0, margin=4.0) is True

    def test_interior_does_not_collide(self, square):
        assert square.collides(50.0, 50.0, margin=4.0) is False

    @pytest.mark.parametrize("point", [(50.0, 100.0), (0.0, 50.0), (100.0, 50.0), (103.0, 103.0), (-4.0, -4.0)])
    def test_every_edge_and_corner_collides(self, square, point):
        assert square.collides(*point) is True

    @pytest.mark.parametrize("point", [(50.0, 4.5), (95.0, 50.0), (50.0, 105.0), (-5.0, 50.0)])
    def test_points_beyond_margin_miss(self, square, point):
        assert square.collides(*point) is False

    def test_default_margin_is_four(self, square):
        assert square.collides(50.0, 4.0) is True
        assert square.collides(50.0, 4.01) is False

    def test_boundary_segments_order(self, square):
        top, bottom, left, right = square.boundary_segments(2.0)
        assert (top.orientation, top.position) == ("horizontal", 0.0)
        assert (bottom.orientation, bottom.position) == ("horizontal", 100.0)
        assert (left.orientation, left.position) == ("vertical", 0.0)
        assert (right.orientation, right.position) == ("vertical", 100.0)
        assert all(segment.margin == 2.0 for segment in (top, bottom, left, right))
