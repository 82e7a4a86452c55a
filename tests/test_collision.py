"""
Tests for the collision engine.

These tests verify:
    - Strict rectangle overlap
    - Paddle reflection angle and speed growth
    - Wall bounce only when heading outward
    - Grid wall/body collisions
    - Free-cell placement
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.core.collision import (
    Rect,
    check_paddle_hit,
    hits_body,
    hits_wall,
    leaves_vertical_bounds,
    place_on_free_cell,
    rects_overlap,
    reflect_off_paddle,
)
from minigames.utils.rng import GameRandom


class TestRectOverlap:
    """Test axis-aligned overlap."""

    def test_overlapping(self):
        assert rects_overlap(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_separate(self):
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(20, 0, 10, 10))

    def test_touching_edges_do_not_count(self):
        """Intersection is strict on both axes."""
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10))
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(0, 10, 10, 10))

    def test_contained(self):
        assert rects_overlap(Rect(0, 0, 100, 100), Rect(40, 40, 2, 2))

    def test_paddle_hit_reports_axis(self):
        result = check_paddle_hit(Rect(25, 200, 8, 8), Rect(20, 160, 10, 80))
        assert result.overlap
        assert result.axis == 'x'

    def test_paddle_miss(self):
        result = check_paddle_hit(Rect(400, 200, 8, 8), Rect(20, 160, 10, 80))
        assert not result.overlap
        assert result.axis is None


class TestReflection:
    """Test the paddle bounce."""

    def test_centre_hit_is_flat(self):
        """Ball at the paddle's centre leaves horizontally, 5% faster."""
        vx, vy = reflect_off_paddle(-4.0, 200.0, 160.0, 80.0, 4.0, 1.05)
        assert vx == pytest.approx(4.2)
        assert vy == pytest.approx(0.0)

    def test_flips_positive_velocity(self):
        vx, _ = reflect_off_paddle(4.0, 200.0, 160.0, 80.0, 4.0, 1.05)
        assert vx == pytest.approx(-4.2)

    def test_top_edge_goes_up(self):
        _, vy = reflect_off_paddle(-4.0, 160.0, 160.0, 80.0, 4.0, 1.05)
        assert vy == pytest.approx(-4.0 * 1.05)

    def test_bottom_edge_goes_down(self):
        _, vy = reflect_off_paddle(-4.0, 240.0, 160.0, 80.0, 4.0, 1.05)
        assert vy == pytest.approx(4.0 * 1.05)

    def test_hit_ratio_clamped(self):
        """A ball overlapping above the paddle top still gets a bounded angle."""
        _, vy = reflect_off_paddle(-4.0, 150.0, 160.0, 80.0, 4.0, 1.05)
        assert vy == pytest.approx(-4.0 * 1.05)

    def test_speed_grows_without_bound(self):
        vx = 4.0
        for _ in range(50):
            vx, _ = reflect_off_paddle(vx, 200.0, 160.0, 80.0, 4.0, 1.05)
        assert abs(vx) == pytest.approx(4.0 * 1.05 ** 50)


class TestWallBounce:
    """Test top/bottom bounds."""

    def test_top_heading_up(self):
        assert leaves_vertical_bounds(-1, -4, 8, 400)

    def test_top_heading_down_not_flipped_again(self):
        """Already bouncing back: no second flip."""
        assert not leaves_vertical_bounds(-1, 4, 8, 400)

    def test_bottom_heading_down(self):
        assert leaves_vertical_bounds(393, 4, 8, 400)

    def test_inside_field(self):
        assert not leaves_vertical_bounds(200, 4, 8, 400)


class TestGridCollisions:
    """Test snake collisions."""

    @pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (20, 5), (5, 20)])
    def test_outside_grid_is_wall(self, cell):
        assert hits_wall(cell, 20)

    @pytest.mark.parametrize("cell", [(0, 0), (19, 19), (10, 3)])
    def test_inside_grid(self, cell):
        assert not hits_wall(cell, 20)

    def test_body_hit_includes_tail(self):
        body = [(5, 5), (5, 4), (5, 3)]
        assert hits_body((5, 3), body)
        assert not hits_body((6, 3), body)


class TestFreeCellPlacement:
    """Test food placement."""

    def test_never_on_occupied(self):
        rng = GameRandom(7)
        occupied = {(r, c) for r in range(5) for c in range(5)}
        for _ in range(50):
            cell = place_on_free_cell(rng, 10, occupied)
            assert cell not in occupied
            assert not hits_wall(cell, 10)

    def test_crowded_board_finds_last_cell(self):
        """Only one free cell: the fallback finds it."""
        rng = GameRandom(1)
        occupied = [(r, c) for r in range(4) for c in range(4) if (r, c) != (2, 3)]
        assert place_on_free_cell(rng, 4, occupied) == (2, 3)

    def test_full_board(self):
        rng = GameRandom(1)
        occupied = [(r, c) for r in range(3) for c in range(3)]
        assert place_on_free_cell(rng, 3, occupied) is None

    def test_seeded_placement_repeats(self):
        a = place_on_free_cell(GameRandom(42), 20, [(10, 10)])
        b = place_on_free_cell(GameRandom(42), 20, [(10, 10)])
        assert a == b
