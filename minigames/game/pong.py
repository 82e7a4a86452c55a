"""
Pong Game Implementation
========================

Classic Pong against a simple computer opponent, stepped once per frame.

Key Features:
- Fixed per-frame velocities (no wall-clock delta scaling)
- Bounce angle depends on where the ball strikes the paddle
- Every paddle hit speeds the ball up by 5%, with no upper limit
- Deliberately imperfect opponent: slower than the player, with a dead zone

Game Rules:
- Player controls the left paddle (held UP/DOWN)
- Opponent controls the right paddle
- A ball past a paddle scores for the other side and is served again
- First to 11 points wins
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .base_game import BaseGame
from ..config import Config
from ..core.actions import Action, ActionKind, PaddleIntent
from ..core.collision import Rect, check_paddle_hit, leaves_vertical_bounds, reflect_off_paddle
from ..core.scheduler import ContinuousLoop, ManualClock, SchedulingPolicy
from ..core.scores import PongRecord, ScoreStore


@dataclass
class PongBall:
    """The ball; (x, y) is its top-left corner."""
    x: float
    y: float
    dx: float
    dy: float
    size: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def move(self) -> None:
        """Update ball position."""
        self.x += self.dx
        self.y += self.dy


@dataclass
class PongPaddle:
    """A paddle for Pong (player or AI)."""
    x: float
    y: float
    width: float
    height: float
    speed: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def center_y(self) -> float:
        """Get vertical center of paddle."""
        return self.y + self.height / 2

    def move(self, direction: float, field_height: float) -> None:
        """
        Move paddle vertically.

        Args:
            direction: -1 for up, 0 for stay, 1 for down (fractions scale speed)
            field_height: Height of the playing field
        """
        self.y += direction * self.speed
        # Keep paddle on the field
        self.y = max(0.0, min(self.y, field_height - self.height))


class Pong(BaseGame):
    """
    Pong engine.

    Actions:
        paddle(UP | DOWN | STOP) - Held key state for the player's paddle
    """

    GAME_KEY = PongRecord.GAME_KEY
    SCHEDULING = SchedulingPolicy.CONTINUOUS

    def __init__(self, config: Optional[Config] = None, clock: Optional[ManualClock] = None,
                 score_store: Optional[ScoreStore] = None, seed: Optional[int] = None):
        super().__init__(config, clock, score_store, seed)

        # Field dimensions
        self.width = self.config.PONG_WIDTH
        self.height = self.config.PONG_HEIGHT
        self.base_speed = self.config.PONG_BALL_SPEED

        # Game objects
        self.player_paddle: Optional[PongPaddle] = None
        self.ai_paddle: Optional[PongPaddle] = None
        self.ball: Optional[PongBall] = None

        # Game state
        self.player_score = 0
        self.ai_score = 0
        self.intent = PaddleIntent.STOP
        self.rally_count = 0  # Paddle hits since the last serve

        self._loop = ContinuousLoop(
            self.timers,
            self._ticked(self.update),
            self.config.FRAME_INTERVAL_MS,
            lambda: self.lifecycle.is_running,
        )

        self.reset()

    @property
    def score(self) -> int:
        return self.player_score

    def reset(self) -> None:
        """Reset scores, centre both paddles and serve."""
        self.player_score = 0
        self.ai_score = 0
        self.intent = PaddleIntent.STOP
        self.rally_count = 0

        paddle_y = self.height / 2 - self.config.PONG_PADDLE_HEIGHT / 2
        self.player_paddle = PongPaddle(
            self.config.PONG_PLAYER_X, paddle_y,
            self.config.PONG_PADDLE_WIDTH, self.config.PONG_PADDLE_HEIGHT,
            self.config.PONG_PADDLE_SPEED,
        )
        self.ai_paddle = PongPaddle(
            self.width - self.config.PONG_AI_MARGIN, paddle_y,
            self.config.PONG_PADDLE_WIDTH, self.config.PONG_PADDLE_HEIGHT,
            self.config.PONG_PADDLE_SPEED * self.config.PONG_AI_SPEED_FACTOR,
        )
        self.ball = PongBall(0.0, 0.0, 0.0, 0.0, self.config.PONG_BALL_SIZE)
        self._serve()

    def _serve(self) -> None:
        """Ball to the centre, heading diagonally in a random direction."""
        assert self.ball is not None
        self.ball.x = self.width / 2
        self.ball.y = self.height / 2
        self.ball.dx = self.base_speed * self.rng.sign()
        self.ball.dy = self.base_speed * self.rng.sign()
        self.rally_count = 0

    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        win = self.config.PONG_WIN_SCORE
        return {
            'player_won': lambda: self.player_score >= win,
            'ai_won': lambda: self.ai_score >= win,
        }

    # =========================================================================
    # SCHEDULING
    # =========================================================================

    def _on_start(self) -> None:
        self._loop.start()

    def _on_pause(self) -> None:
        # Keys released while paused never reach us
        self.intent = PaddleIntent.STOP

    # =========================================================================
    # INPUT
    # =========================================================================

    def _handle_action(self, action: Action) -> bool:
        if action.kind is not ActionKind.PADDLE or not isinstance(action.value, PaddleIntent):
            return False
        self.intent = action.value
        return True

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def update(self) -> None:
        """One frame: paddles, ball, opponent, collisions, scoring."""
        assert self.player_paddle is not None
        assert self.ai_paddle is not None
        assert self.ball is not None

        self.player_paddle.move(self.intent.step, self.height)
        self.ball.move()
        self._update_ai_paddle()
        self._handle_collisions()
        self._check_scoring()

    def _update_ai_paddle(self) -> None:
        """Follow the ball once it is more than the dead zone away."""
        assert self.ai_paddle is not None and self.ball is not None
        dead_zone = self.config.PONG_AI_DEAD_ZONE
        if self.ai_paddle.center_y < self.ball.y - dead_zone:
            self.ai_paddle.move(1, self.height)
        elif self.ai_paddle.center_y > self.ball.y + dead_zone:
            self.ai_paddle.move(-1, self.height)

    def _handle_collisions(self) -> None:
        assert self.ball is not None
        ball = self.ball

        # Wall bounce (top and bottom)
        if leaves_vertical_bounds(ball.y, ball.dy, ball.size, self.height):
            ball.dy = -ball.dy

        # Only the paddle the ball is heading toward can return it
        paddle = self.player_paddle if ball.dx < 0 else self.ai_paddle
        assert paddle is not None
        if check_paddle_hit(ball.rect, paddle.rect).overlap:
            ball.dx, ball.dy = reflect_off_paddle(
                ball.dx, ball.y, paddle.y, paddle.height,
                self.base_speed, self.config.PONG_SPEEDUP,
            )
            self.rally_count += 1

    def _check_scoring(self) -> None:
        assert self.ball is not None
        if self.ball.x <= 0:
            self.ai_score += 1
            self._serve()
        elif self.ball.x >= self.width:
            self.player_score += 1
            self._serve()

    def _record_result(self, outcome: str) -> None:
        self.record.record_result(player_won=(outcome == 'player_won'))

    def _entities(self) -> Dict[str, Any]:
        assert self.player_paddle is not None
        assert self.ai_paddle is not None
        assert self.ball is not None
        return {
            'player_score': self.player_score,
            'ai_score': self.ai_score,
            'rally_count': self.rally_count,
            'ball': {
                'x': self.ball.x, 'y': self.ball.y,
                'dx': self.ball.dx, 'dy': self.ball.dy,
                'size': self.ball.size,
            },
            'player_paddle': {
                'x': self.player_paddle.x, 'y': self.player_paddle.y,
                'width': self.player_paddle.width, 'height': self.player_paddle.height,
            },
            'ai_paddle': {
                'x': self.ai_paddle.x, 'y': self.ai_paddle.y,
                'width': self.ai_paddle.width, 'height': self.ai_paddle.height,
            },
            'field': {'width': self.width, 'height': self.height},
        }
