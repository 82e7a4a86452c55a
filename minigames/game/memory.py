"""
Memory Match Game Implementation
================================

Classic concentration: a shuffled board of face-down card pairs.

Key Features:
- Difficulty sets the pair count (easy 6, medium 8, hard 18)
- Event-driven: the board only changes when a card is selected
- A settle delay lets the player see both cards before they are resolved
- Elapsed time display refreshed once a second (pauses excluded)

Game Rules:
- Select two cards per move
- Equal symbols stay matched and leave play
- Different symbols turn back face-down after the mismatch delay
- No third card can be selected while a pair is settling
- Match every pair to win; fewer moves and less time are better
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .base_game import BaseGame
from ..config import Config
from ..core.actions import Action, ActionKind
from ..core.matching import evaluate_pair
from ..core.scheduler import FixedDelayTicker, ManualClock, SchedulingPolicy
from ..core.scores import MemoryRecord, ScoreStore


# Enough distinct symbols for the largest (hard) board
CARD_SYMBOLS = (
    '🎮', '🎲', '🎯', '🎪', '🎨', '🎭', '🎵', '🎸', '🎺',
    '🎻', '🎼', '🎹', '🎤', '🎧', '🎬', '🎳', '🎱', '🎷',
)


@dataclass
class Card:
    """One card on the board."""
    symbol: str
    face_up: bool = False
    matched: bool = False

    def to_dict(self) -> Dict[str, Any]:
        # Face-down symbols stay hidden from the presentation layer
        visible = self.face_up or self.matched
        return {
            'symbol': self.symbol if visible else None,
            'face_up': self.face_up,
            'matched': self.matched,
        }


class MemoryGame(BaseGame):
    """
    Memory match engine.

    Actions:
        cell_select(index)        - Turn a card face-up
        difficulty_change(level)  - 'easy', 'medium' or 'hard'
    """

    GAME_KEY = MemoryRecord.GAME_KEY
    SCHEDULING = SchedulingPolicy.EVENT_DRIVEN
    DIFFICULTIES = ('easy', 'medium', 'hard')

    def __init__(self, config: Optional[Config] = None, clock: Optional[ManualClock] = None,
                 score_store: Optional[ScoreStore] = None, seed: Optional[int] = None,
                 difficulty: Optional[str] = None):
        super().__init__(config, clock, score_store, seed)
        assert len(CARD_SYMBOLS) >= max(self.config.MEMORY_PAIRS.values()), \
            "Not enough card symbols for the largest board"

        self.difficulty = difficulty if difficulty in self.DIFFICULTIES \
            else self.config.MEMORY_DEFAULT_DIFFICULTY

        self.cards: List[Card] = []
        self.selected: List[int] = []
        self.moves = 0
        self.matched_pairs = 0

        # Display-only clock; it never touches the cards
        self._display_clock = FixedDelayTicker(
            self.timers,
            self._emit,
            self.config.MEMORY_CLOCK_INTERVAL_MS,
            lambda: self.lifecycle.is_running,
        )

        self.reset()

    @property
    def pair_count(self) -> int:
        return self.config.MEMORY_PAIRS[self.difficulty]

    @property
    def score(self) -> int:
        """Moves made (two cards per move)."""
        return self.moves

    @property
    def settling(self) -> bool:
        """True while a selected pair waits to be resolved."""
        return len(self.selected) == 2

    def reset(self) -> None:
        """Deal a freshly shuffled board for the current difficulty."""
        symbols = list(CARD_SYMBOLS[:self.pair_count]) * 2
        self.cards = [Card(symbol) for symbol in self.rng.shuffled(symbols)]
        self.selected = []
        self.moves = 0
        self.matched_pairs = 0

    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        return {'won': lambda: self.matched_pairs == self.pair_count}

    def _handle_action(self, action: Action) -> bool:
        if action.kind is not ActionKind.CELL_SELECT:
            return False
        return self._select(action.value)

    def _select(self, index: Any) -> bool:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.cards):
            return False
        if self.settling:
            return False
        card = self.cards[index]
        if card.face_up or card.matched:
            return False

        card.face_up = True
        self.selected.append(index)
        if self.settling:
            self.moves += 1
            self._arm_settle()
        return True

    def _arm_settle(self) -> None:
        first, second = (self.cards[i] for i in self.selected)
        result = evaluate_pair(first.symbol, second.symbol)
        delay = (self.config.MEMORY_MATCH_DELAY_MS if result.is_match
                 else self.config.MEMORY_MISMATCH_DELAY_MS)
        self._schedule(delay, self._settle)

    def _settle(self) -> None:
        """Resolve the selected pair once the settle delay has elapsed."""
        first, second = (self.cards[i] for i in self.selected)
        if evaluate_pair(first.symbol, second.symbol).is_match:
            first.matched = second.matched = True
            self.matched_pairs += 1
        else:
            first.face_up = second.face_up = False
        self.selected = []

    def _on_start(self) -> None:
        self._display_clock.start()

    def _on_resume(self) -> None:
        self._display_clock.start()
        # A pair that was settling when paused settles again from scratch
        if self.settling:
            self._arm_settle()

    def _record_result(self, outcome: str) -> None:
        if outcome == 'won':
            self.record.record_win(self.elapsed_ms, self.moves)

    def _entities(self) -> Dict[str, Any]:
        return {
            'cards': [card.to_dict() for card in self.cards],
            'moves': self.moves,
            'matched_pairs': self.matched_pairs,
            'pair_count': self.pair_count,
            'settling': self.settling,
        }
