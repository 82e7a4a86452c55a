"""
Match Evaluator
===============

Symbolic checks for the turn-based games:
    - Pair memory: do two face-up cards show the same symbol?
    - Win lines: does any row, column or diagonal of a 3x3 board hold
      three identical non-empty marks?
"""

from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

import numpy as np


EMPTY = ''

# 3 rows, 3 columns, 2 diagonals over indices 0..8 (row-major)
WIN_LINES = np.array([
    [0, 1, 2], [3, 4, 5], [6, 7, 8],  # Rows
    [0, 3, 6], [1, 4, 7], [2, 5, 8],  # Columns
    [0, 4, 8], [2, 4, 6],             # Diagonals
], dtype=np.intp)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a symbolic check; winning_line is set only for board wins."""
    is_match: bool
    winning_line: Optional[Tuple[int, ...]] = None


def evaluate_pair(first: Hashable, second: Hashable) -> MatchResult:
    """Two selected cards match iff their symbols are equal."""
    return MatchResult(first == second)


def find_winning_line(board: Sequence[str]) -> Optional[Tuple[int, int, int]]:
    """
    First complete line on the board, in WIN_LINES order.

    Args:
        board: 9 marks, EMPTY for a free cell

    Returns:
        Index triple of the winning line, or None
    """
    cells = np.asarray(board, dtype=object)
    marks = cells[WIN_LINES]
    complete = (marks[:, 0] != EMPTY) & (marks[:, 0] == marks[:, 1]) & (marks[:, 1] == marks[:, 2])
    hits = np.flatnonzero(complete)
    if hits.size == 0:
        return None
    a, b, c = WIN_LINES[hits[0]]
    return int(a), int(b), int(c)


def is_full(board: Sequence[str]) -> bool:
    return all(mark != EMPTY for mark in board)


def evaluate_board(board: Sequence[str]) -> MatchResult:
    """Win check only; callers test is_full() afterwards for a draw."""
    line = find_winning_line(board)
    return MatchResult(line is not None, line)

