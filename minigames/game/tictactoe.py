"""
Tic-Tac-Toe Game Implementation
===============================

Two players share one board and alternate turns, X first. Event-driven:
nothing happens between moves.

Game Rules:
- Select a free cell to place the current player's mark
- Three identical marks in a row, column or diagonal win
- A full board with no line is a draw
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from .base_game import BaseGame
from ..config import Config
from ..core.actions import Action, ActionKind
from ..core.matching import EMPTY, evaluate_board, is_full
from ..core.scheduler import ManualClock, SchedulingPolicy
from ..core.scores import ScoreStore, TicTacToeRecord


class TicTacToe(BaseGame):
    """
    Tic-tac-toe over a fixed 3x3 board, cells indexed 0..8 row-major.

    Actions:
        cell_select(index) - Place the current player's mark
    """

    GAME_KEY = TicTacToeRecord.GAME_KEY
    SCHEDULING = SchedulingPolicy.EVENT_DRIVEN

    BOARD_SIZE = 3
    CELL_COUNT = BOARD_SIZE * BOARD_SIZE
    PLAYERS = ('X', 'O')

    def __init__(self, config: Optional[Config] = None, clock: Optional[ManualClock] = None,
                 score_store: Optional[ScoreStore] = None, seed: Optional[int] = None):
        super().__init__(config, clock, score_store, seed)
        self.board: List[str] = []
        self.current_player = self.config.TTT_FIRST_PLAYER
        self.winning_line: Optional[Tuple[int, int, int]] = None
        self.reset()

    @property
    def score(self) -> int:
        """Marks placed this game."""
        return sum(1 for mark in self.board if mark != EMPTY)

    @property
    def winner(self) -> Optional[str]:
        if self.lifecycle.outcome == 'win':
            return self.current_player
        return None

    def reset(self) -> None:
        self.board = [EMPTY] * self.CELL_COUNT
        self.current_player = self.config.TTT_FIRST_PLAYER
        self.winning_line = None

    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        # Win is checked before draw: a full, won board is a win
        return {
            'win': lambda: self.winning_line is not None,
            'draw': lambda: is_full(self.board),
        }

    def _handle_action(self, action: Action) -> bool:
        if action.kind is not ActionKind.CELL_SELECT:
            return False
        index = action.value
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.CELL_COUNT:
            return False
        if self.board[index] != EMPTY:
            return False

        self.board[index] = self.current_player
        self.winning_line = evaluate_board(self.board).winning_line
        if self.winning_line is None and not is_full(self.board):
            self.current_player = 'O' if self.current_player == 'X' else 'X'
        return True

    def _record_result(self, outcome: str) -> None:
        self.record.record_result(self.current_player if outcome == 'win' else None)

    def _entities(self) -> Dict[str, Any]:
        return {
            'board': list(self.board),
            'current_player': self.current_player,
            'winning_line': list(self.winning_line) if self.winning_line else None,
            'winner': self.winner,
        }
