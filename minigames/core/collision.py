"""
Collision Engine
================

Geometric tests for the physics game (Pong) and grid tests for the
tile game (Snake). All functions are pure; engines own the entities.
"""

from dataclasses import dataclass
from typing import Collection, Iterable, Optional, Tuple

import numpy as np

from ..utils.rng import GameRandom


Cell = Tuple[int, int]  # (row, col)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box; y grows downward."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class CollisionResult:
    """Outcome of one overlap test. axis is 'x' for a paddle face hit."""
    overlap: bool
    axis: Optional[str] = None


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict interval intersection on both axes (touching edges do not count)."""
    return (a.left < b.right and a.right > b.left and
            a.top < b.bottom and a.bottom > b.top)


def check_paddle_hit(ball: Rect, paddle: Rect) -> CollisionResult:
    if rects_overlap(ball, paddle):
        return CollisionResult(True, 'x')
    return CollisionResult(False)


def reflect_off_paddle(
    vx: float,
    ball_y: float,
    paddle_top: float,
    paddle_height: float,
    base_speed: float,
    growth: float,
) -> Tuple[float, float]:
    """
    New ball velocity after striking a paddle.

    The horizontal component flips; the vertical one is rebuilt from where
    the ball struck the paddle (top edge -> -base_speed, centre -> 0,
    bottom edge -> +base_speed). Both are then scaled by `growth`, so
    rallies speed up without bound.

    Returns:
        (vx, vy)
    """
    hit_ratio = (ball_y - paddle_top) / paddle_height
    hit_ratio = min(1.0, max(0.0, hit_ratio))
    new_vx = -vx * growth
    new_vy = (hit_ratio - 0.5) * base_speed * 2 * growth
    return new_vx, new_vy


def leaves_vertical_bounds(y: float, vy: float, size: float, bounds_height: float) -> bool:
    """True when the ball is outside [0, height - size] and still heading out."""
    return (y <= 0 and vy < 0) or (y >= bounds_height - size and vy > 0)


def hits_wall(cell: Cell, tile_count: int) -> bool:
    row, col = cell
    return not (0 <= row < tile_count and 0 <= col < tile_count)


def hits_body(cell: Cell, body: Iterable[Cell]) -> bool:
    """Linear scan of every segment, tail included."""
    return any(cell == segment for segment in body)


def place_on_free_cell(
    rng: GameRandom,
    tile_count: int,
    occupied: Collection[Cell],
    max_attempts: int = 100,
) -> Optional[Cell]:
    """
    Uniformly pick a cell not in `occupied`.

    Rejection sampling first; when the board is crowded enough that the
    draws keep colliding, fall back to choosing among the free cells.

    Returns:
        The chosen cell, or None if the board is full
    """
    occupied_set = set(occupied)
    total = tile_count * tile_count
    if len(occupied_set) >= total:
        return None

    if len(occupied_set) < total * 0.5:
        for _ in range(max_attempts):
            cell = (rng.randint(tile_count), rng.randint(tile_count))
            if cell not in occupied_set:
                return cell

    # Fallback: enumerate free cells (crowded board)
    grid = np.ones((tile_count, tile_count), dtype=bool)
    for row, col in occupied_set:
        if 0 <= row < tile_count and 0 <= col < tile_count:
            grid[row, col] = False
    free = np.argwhere(grid)
    row, col = free[rng.randint(len(free))]
    return int(row), int(col)
