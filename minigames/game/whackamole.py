"""
Whack-a-Mole Game Implementation
================================

Timed reflex game: one mole at a time pops out of a random hole.

Key Features:
- 30 second countdown ticked once a second
- Each mole stays up for a random 800-2000ms
- Hits score more early in the round

Game Rules:
- Hit the hole with the active mole to score 10 + floor(timeLeft / 5) + 1
- After a hit the next mole appears 500ms later
- An unhit mole ducks and a new one appears immediately
- The round ends when the countdown reaches zero
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .base_game import BaseGame
from ..config import Config
from ..core.actions import Action, ActionKind
from ..core.scheduler import FixedDelayTicker, ManualClock, SchedulingPolicy, TimerHandle
from ..core.scores import ScoreStore, WhackAMoleRecord


@dataclass
class Mole:
    """The active mole and the clock time it ducks back down."""
    hole_index: int
    active_until: float


class WhackAMole(BaseGame):
    """
    Whack-a-Mole engine.

    Actions:
        hole_hit(index) - Strike a hole
    """

    GAME_KEY = WhackAMoleRecord.GAME_KEY
    SCHEDULING = SchedulingPolicy.FIXED_DELAY

    def __init__(self, config: Optional[Config] = None, clock: Optional[ManualClock] = None,
                 score_store: Optional[ScoreStore] = None, seed: Optional[int] = None):
        super().__init__(config, clock, score_store, seed)
        self.hole_count = self.config.WHACK_HOLES

        self.score = 0
        self.time_left = self.config.WHACK_DURATION_S
        self.hits = 0
        self.mole: Optional[Mole] = None
        self._mole_handle: Optional[TimerHandle] = None

        self._countdown = FixedDelayTicker(
            self.timers,
            self._ticked(self._count_down),
            1000,
            lambda: self.lifecycle.is_running,
        )

        self.reset()

    def reset(self) -> None:
        self.score = 0
        self.time_left = self.config.WHACK_DURATION_S
        self.hits = 0
        self.mole = None
        self._mole_handle = None

    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        return {'timeout': lambda: self.time_left <= 0}

    # =========================================================================
    # SCHEDULING
    # =========================================================================

    def _on_start(self) -> None:
        self._countdown.start()
        self._spawn_mole()

    def _on_pause(self) -> None:
        # Timers are already cancelled; the mole ducks so resume starts clean
        self.mole = None
        self._mole_handle = None

    def _on_resume(self) -> None:
        self._countdown.start()
        self._spawn_mole()

    def _on_end(self, outcome: str) -> None:
        self.mole = None
        self._mole_handle = None

    def _count_down(self) -> None:
        self.time_left -= 1

    def _spawn_mole(self) -> None:
        """Pop a mole out of a random hole for a random lifetime."""
        self._clear_mole()
        lifetime = self.rng.uniform(self.config.WHACK_MOLE_MIN_MS, self.config.WHACK_MOLE_MAX_MS)
        self.mole = Mole(self.rng.randint(self.hole_count), self.clock.now() + lifetime)
        self._mole_handle = self._schedule(lifetime, self._mole_expired)

    def _mole_expired(self) -> None:
        self._mole_handle = None
        self._spawn_mole()

    def _clear_mole(self) -> None:
        self.mole = None
        self.timers.cancel(self._mole_handle)
        self._mole_handle = None

    # =========================================================================
    # INPUT
    # =========================================================================

    def _handle_action(self, action: Action) -> bool:
        if action.kind is not ActionKind.HOLE_HIT:
            return False
        index = action.value
        if self.mole is None or index != self.mole.hole_index:
            return False
        self._whack()
        return True

    def points_for_hit(self) -> int:
        """Base points plus a bonus that shrinks as the clock runs down."""
        bonus = self.time_left // self.config.WHACK_BONUS_DIVISOR + 1
        return self.config.WHACK_BASE_POINTS + bonus

    def _whack(self) -> None:
        self.score += self.points_for_hit()
        self.hits += 1
        self._clear_mole()
        self._mole_handle = self._schedule(self.config.WHACK_RESPAWN_MS, self._spawn_mole)

    def _record_result(self, outcome: str) -> None:
        self.record.record_game(self.score)

    def _entities(self) -> Dict[str, Any]:
        return {
            'time_left': self.time_left,
            'hole_count': self.hole_count,
            'active_hole': self.mole.hole_index if self.mole else None,
            'mole_active_until': self.mole.active_until if self.mole else None,
            'hits': self.hits,
        }
