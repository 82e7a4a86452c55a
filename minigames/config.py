"""
Configuration for the Mini Arcade games
=======================================

All game rules, timings and persistence settings are centralized here.
Modify these values to tune the games without touching engine code.

Usage:
    from minigames.config import Config
    cfg = Config()
    print(cfg.PONG_WIN_SCORE)
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Config:
    """
    Central configuration for the entire project.

    Sections:
    1. Memory Match
    2. Pong
    3. Snake
    4. Tic-Tac-Toe
    5. Whack-a-Mole
    6. Persistence
    7. Logging
    8. Web bridge
    """

    # =========================================================================
    # TIMING
    # =========================================================================

    # Display refresh rate used by the continuous (render-synced) scheduler
    FPS: int = 60

    # =========================================================================
    # MEMORY MATCH SETTINGS
    # =========================================================================

    # Pair count per difficulty (easy 3x4, medium 4x4, hard 6x6 boards)
    MEMORY_PAIRS: Dict[str, int] = field(default_factory=lambda: {
        'easy': 6,
        'medium': 8,
        'hard': 18,
    })
    MEMORY_DEFAULT_DIFFICULTY: str = 'medium'

    # Settle delays before a comparison is finalized
    MEMORY_MATCH_DELAY_MS: int = 500
    MEMORY_MISMATCH_DELAY_MS: int = 1000

    # Elapsed-time display refresh (never touches the cards)
    MEMORY_CLOCK_INTERVAL_MS: int = 1000

    # =========================================================================
    # PONG SETTINGS
    # =========================================================================

    PONG_WIDTH: int = 800
    PONG_HEIGHT: int = 400

    PONG_PADDLE_WIDTH: int = 10
    PONG_PADDLE_HEIGHT: int = 80
    PONG_PADDLE_SPEED: float = 5.0
    PONG_PLAYER_X: int = 20
    PONG_AI_MARGIN: int = 30  # AI paddle sits at width - margin

    PONG_BALL_SIZE: int = 8
    PONG_BALL_SPEED: float = 4.0
    PONG_SPEEDUP: float = 1.05  # Applied to both velocity components per paddle hit

    # Opponent follows the ball at a fraction of the player's speed
    PONG_AI_SPEED_FACTOR: float = 0.8
    PONG_AI_DEAD_ZONE: float = 10.0

    PONG_WIN_SCORE: int = 11

    # =========================================================================
    # SNAKE SETTINGS
    # =========================================================================

    SNAKE_BOARD_SIZE: int = 400  # Pixels per side
    SNAKE_CELL_SIZE: int = 20

    SNAKE_START_DELAY_MS: int = 150
    SNAKE_MIN_DELAY_MS: int = 50
    SNAKE_DELAY_STEP_MS: int = 10
    SNAKE_SPEEDUP_EVERY: int = 50  # Points between speed-ups
    SNAKE_FOOD_POINTS: int = 10

    # =========================================================================
    # TIC-TAC-TOE SETTINGS
    # =========================================================================

    TTT_FIRST_PLAYER: str = 'X'

    # =========================================================================
    # WHACK-A-MOLE SETTINGS
    # =========================================================================

    WHACK_HOLES: int = 9
    WHACK_DURATION_S: int = 30
    WHACK_MOLE_MIN_MS: int = 800
    WHACK_MOLE_MAX_MS: int = 2000
    WHACK_RESPAWN_MS: int = 500  # Delay before the next mole after a hit
    WHACK_BASE_POINTS: int = 10
    WHACK_BONUS_DIVISOR: int = 5  # Bonus = floor(timeLeft / divisor) + 1

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    SCORE_DIR: str = 'scores'
    SCORE_FILE: str = 'best_scores.json'

    # =========================================================================
    # LOGGING
    # =========================================================================

    # One of 'DEBUG', 'INFO', 'WARNING', 'ERROR'
    LOG_LEVEL: str = 'INFO'
    LOG_DIR: str = 'logs'
    LOG_TO_FILE: bool = False

    # =========================================================================
    # WEB BRIDGE
    # =========================================================================

    WEB_HOST: str = '127.0.0.1'
    WEB_PORT: int = 5000
    WEB_PUMP_INTERVAL_MS: int = 8  # How often the real-time clock is pumped

    # Random seed for reproducibility (None for random)
    SEED: Optional[int] = None

    @property
    def FRAME_INTERVAL_MS(self) -> float:
        """Delay between continuous-loop frames."""
        return 1000.0 / self.FPS

    @property
    def SNAKE_TILE_COUNT(self) -> int:
        """Grid dimension derived from board size and cell size."""
        return self.SNAKE_BOARD_SIZE // self.SNAKE_CELL_SIZE

    @property
    def SCORE_PATH(self) -> str:
        """Full path of the best-score file."""
        return os.path.join(self.SCORE_DIR, self.SCORE_FILE)

    def __post_init__(self):
        """Validation of derived constraints."""
        assert self.FPS > 0, "FPS must be positive"
        assert set(self.MEMORY_PAIRS) >= {'easy', 'medium', 'hard'}, \
            "Memory difficulties must include easy, medium and hard"
        assert all(n > 0 for n in self.MEMORY_PAIRS.values()), "Pair counts must be positive"
        assert self.MEMORY_DEFAULT_DIFFICULTY in self.MEMORY_PAIRS, "Unknown default difficulty"
        assert self.PONG_WIDTH > 0 and self.PONG_HEIGHT > 0, "Pong field must have positive size"
        assert self.PONG_PADDLE_HEIGHT < self.PONG_HEIGHT, "Paddle must fit in the field"
        assert self.PONG_SPEEDUP > 1.0, "Pong speed-up factor must be > 1"
        assert self.PONG_WIN_SCORE > 0, "Win score must be positive"
        assert self.SNAKE_CELL_SIZE > 0, "Snake cell size must be positive"
        assert self.SNAKE_TILE_COUNT > 1, "Snake board must hold more than one cell"
        assert 0 < self.SNAKE_MIN_DELAY_MS <= self.SNAKE_START_DELAY_MS, \
            "Snake delay floor must be positive and <= start delay"
        assert self.WHACK_HOLES > 0, "Whack-a-Mole needs at least one hole"
        assert self.WHACK_DURATION_S > 0, "Whack-a-Mole duration must be positive"
        assert 0 < self.WHACK_MOLE_MIN_MS <= self.WHACK_MOLE_MAX_MS, \
            "Mole lifetime range must be positive and ordered"
        assert self.TTT_FIRST_PLAYER in ('X', 'O'), "First player must be X or O"


# Global config instance for easy importing
config = Config()


if __name__ == "__main__":
    # Print configuration summary
    cfg = Config()
    print("=" * 60)
    print("Mini Arcade - Configuration Summary")
    print("=" * 60)
    print(f"\nMemory pairs: {cfg.MEMORY_PAIRS}")
    print(f"Pong: {cfg.PONG_WIDTH}x{cfg.PONG_HEIGHT}, first to {cfg.PONG_WIN_SCORE}")
    print(f"Snake: {cfg.SNAKE_TILE_COUNT}x{cfg.SNAKE_TILE_COUNT} tiles, "
          f"{cfg.SNAKE_START_DELAY_MS}ms -> {cfg.SNAKE_MIN_DELAY_MS}ms")
    print(f"Whack-a-Mole: {cfg.WHACK_HOLES} holes, {cfg.WHACK_DURATION_S}s")
    print(f"\nScores: {cfg.SCORE_PATH}")
    print("=" * 60)
