"""
Snake Game Implementation
=========================

Classic Snake on a square tile grid, stepped on a fixed-delay tick.

Key Features:
- Grid dimension derived from board size / cell size (20x20 by default)
- Tick delay shrinks by 10ms every 50 points, never below 50ms
- Rejection-sampled food placement on free cells

Game Rules:
- Steer the snake (arrow keys / WASD in the presentation layer)
- The snake waits in place until the first direction is given
- Eat food to grow by one segment and score 10 points
- Leaving the grid or running into any body segment ends the game
- Filling every cell wins
"""

from collections import deque
from typing import Any, Callable, Deque, Dict, Optional

from .base_game import BaseGame
from ..config import Config
from ..core.actions import Action, ActionKind, Direction
from ..core.collision import Cell, hits_body, hits_wall, place_on_free_cell
from ..core.scheduler import FixedDelayTicker, ManualClock, SchedulingPolicy
from ..core.scores import ScoreStore, SnakeRecord


class Snake(BaseGame):
    """
    Snake engine. Cells are (row, col); the head is snake[0].

    Actions:
        direction(UP | DOWN | LEFT | RIGHT)
    """

    GAME_KEY = SnakeRecord.GAME_KEY
    SCHEDULING = SchedulingPolicy.FIXED_DELAY

    def __init__(self, config: Optional[Config] = None, clock: Optional[ManualClock] = None,
                 score_store: Optional[ScoreStore] = None, seed: Optional[int] = None):
        super().__init__(config, clock, score_store, seed)
        self.tile_count = self.config.SNAKE_TILE_COUNT

        # Game state
        self.snake: Deque[Cell] = deque()
        self.direction: Optional[Direction] = None
        self.next_direction: Optional[Direction] = None  # Buffer for input
        self.food: Optional[Cell] = None
        self.score = 0
        self.delay_ms = self.config.SNAKE_START_DELAY_MS
        self.crashed = False

        self._ticker = FixedDelayTicker(
            self.timers,
            self._ticked(self.tick),
            lambda: self.delay_ms,
            lambda: self.lifecycle.is_running,
        )

        self.reset()

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def board_full(self) -> bool:
        return len(self.snake) >= self.tile_count * self.tile_count

    def reset(self) -> None:
        """Single segment in the centre, standing still, with fresh food."""
        center = self.tile_count // 2
        self.snake.clear()
        self.snake.append((center, center))
        self.direction = None
        self.next_direction = None
        self.score = 0
        self.delay_ms = self.config.SNAKE_START_DELAY_MS
        self.crashed = False
        self._spawn_food()

    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        return {
            'crashed': lambda: self.crashed,
            'filled': lambda: self.board_full,
        }

    def _spawn_food(self) -> None:
        self.food = place_on_free_cell(self.rng, self.tile_count, self.snake)

    def _on_start(self) -> None:
        self._ticker.start()

    # =========================================================================
    # INPUT
    # =========================================================================

    def _handle_action(self, action: Action) -> bool:
        if action.kind is not ActionKind.DIRECTION or not isinstance(action.value, Direction):
            return False
        # Can't reverse straight into the neck
        if self.direction is not None and action.value is self.direction.opposite:
            return False
        self.next_direction = action.value
        return True

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def tick(self) -> None:
        """Advance the snake one cell."""
        self.direction = self.next_direction
        if self.direction is None:
            return

        d_row, d_col = self.direction.vector
        head_row, head_col = self.head
        new_head = (head_row + d_row, head_col + d_col)

        if hits_wall(new_head, self.tile_count) or hits_body(new_head, self.snake):
            self.crashed = True
            return

        self.snake.appendleft(new_head)

        if new_head == self.food:
            self.score += self.config.SNAKE_FOOD_POINTS
            self._spawn_food()
            if self.score % self.config.SNAKE_SPEEDUP_EVERY == 0:
                self.delay_ms = max(self.config.SNAKE_MIN_DELAY_MS,
                                    self.delay_ms - self.config.SNAKE_DELAY_STEP_MS)
        else:
            # Remove tail if didn't eat
            self.snake.pop()

    def _record_result(self, outcome: str) -> None:
        self.record.record_game(self.score)

    def _entities(self) -> Dict[str, Any]:
        return {
            'snake': [list(cell) for cell in self.snake],
            'food': list(self.food) if self.food is not None else None,
            'direction': self.direction.value if self.direction else None,
            'tile_count': self.tile_count,
            'delay_ms': self.delay_ms,
        }
