"""
Best-Score Persistence
======================

Each game keeps one ScoreRecord under a stable key. Records are written
through on every session end and only ever improve: best times and move
counts only go down, counters only go up. The one exception is an
explicit reset requested by the player.

Stores:
    JsonScoreStore     - one JSON file holding every game's record
    InMemoryScoreStore - process-local dict, for tests and headless runs

Contract:
    load(game_key) -> record (default record if the key is absent)
                      raises PersistenceError if storage is unreadable
    save(game_key, record) -> True on success, False on failure
    reset(game_key) -> (default record, saved flag)
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple, Type

from .errors import PersistenceError
from ..utils.logger import get_logger


_logger = get_logger(__name__)


class ScoreRecord:
    """
    Base for per-game records. Subclasses are dataclasses; STORED_NAMES maps
    attribute names to the keys used in the persisted document.
    """

    GAME_KEY = ''
    STORED_NAMES: Dict[str, str] = {}

    def to_dict(self) -> Dict[str, Any]:
        return {self.STORED_NAMES.get(k, k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoreRecord':
        """Build a record from a stored dict; raises TypeError on a badly typed value."""
        attr_for = {stored: attr for attr, stored in cls.STORED_NAMES.items()}
        fields_by_name = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            attr = attr_for.get(key, key)
            # Ignore unknown fields so older/newer files still load
            if attr not in fields_by_name:
                continue
            # Counters are ints; best-so-far fields default to None until set
            nullable = fields_by_name[attr].default is None
            if not (value is None and nullable) and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"{key} must be an integer, got {value!r}")
            values[attr] = value
        return cls(**values)


@dataclass
class MemoryRecord(ScoreRecord):
    GAME_KEY = 'memory'
    STORED_NAMES = {'best_time_ms': 'bestTime', 'best_moves': 'bestMoves', 'games_won': 'gamesWon'}

    best_time_ms: Optional[int] = None
    best_moves: Optional[int] = None
    games_won: int = 0

    def record_win(self, elapsed_ms: int, moves: int) -> None:
        if self.best_time_ms is None or elapsed_ms < self.best_time_ms:
            self.best_time_ms = elapsed_ms
        if self.best_moves is None or moves < self.best_moves:
            self.best_moves = moves
        self.games_won += 1


@dataclass
class WhackAMoleRecord(ScoreRecord):
    GAME_KEY = 'whack_a_mole'
    STORED_NAMES = {'high_score': 'highScore', 'games_played': 'gamesPlayed', 'total_score': 'totalScore'}

    high_score: int = 0
    games_played: int = 0
    total_score: int = 0

    def record_game(self, score: int) -> None:
        self.games_played += 1
        self.total_score += score
        self.high_score = max(self.high_score, score)


@dataclass
class TicTacToeRecord(ScoreRecord):
    GAME_KEY = 'tic_tac_toe'
    STORED_NAMES = {'x_wins': 'X', 'o_wins': 'O', 'draws': 'draw'}

    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0

    def record_result(self, winner: Optional[str]) -> None:
        """winner is 'X', 'O', or None for a draw."""
        if winner is None:
            self.draws += 1
        elif winner == 'X':
            self.x_wins += 1
        elif winner == 'O':
            self.o_wins += 1
        else:
            raise ValueError(f"Unknown player: {winner!r}")


@dataclass
class SnakeRecord(ScoreRecord):
    GAME_KEY = 'snake'
    STORED_NAMES = {'high_score': 'highScore', 'games_played': 'gamesPlayed'}

    high_score: int = 0
    games_played: int = 0

    def record_game(self, score: int) -> None:
        self.games_played += 1
        self.high_score = max(self.high_score, score)


@dataclass
class PongRecord(ScoreRecord):
    GAME_KEY = 'pong'
    STORED_NAMES = {'player_wins': 'playerWins', 'ai_wins': 'aiWins'}

    player_wins: int = 0
    ai_wins: int = 0

    def record_result(self, player_won: bool) -> None:
        if player_won:
            self.player_wins += 1
        else:
            self.ai_wins += 1


RECORD_TYPES: Dict[str, Type[ScoreRecord]] = {
    cls.GAME_KEY: cls
    for cls in (MemoryRecord, WhackAMoleRecord, TicTacToeRecord, SnakeRecord, PongRecord)
}


def default_record(game_key: str) -> ScoreRecord:
    try:
        return RECORD_TYPES[game_key]()
    except KeyError:
        raise KeyError(f"No score record type for game {game_key!r}") from None


class ScoreStore(ABC):
    """Durable key/value storage of best-score records."""

    def load(self, game_key: str) -> ScoreRecord:
        """Load a record, defaulted if the key is absent."""
        data = self._read(game_key)
        if data is None:
            return default_record(game_key)
        try:
            return RECORD_TYPES[game_key].from_dict(data)
        except (TypeError, AttributeError) as e:
            raise PersistenceError(game_key, f"malformed record: {e}") from e

    def save(self, game_key: str, record: ScoreRecord) -> bool:
        """Write a record through; never raises on storage failure."""
        try:
            self._write(game_key, record.to_dict())
        except PersistenceError as e:
            _logger.warning(f"Failed to save scores: {e}")
            return False
        return True

    def reset(self, game_key: str) -> Tuple[ScoreRecord, bool]:
        """Replace a record with the default; returns the new record and whether it was written."""
        record = default_record(game_key)
        return record, self.save(game_key, record)

    @abstractmethod
    def _read(self, game_key: str) -> Optional[Dict[str, Any]]:
        """Raw stored dict, or None if absent."""

    @abstractmethod
    def _write(self, game_key: str, data: Dict[str, Any]) -> None:
        """Persist the raw dict, raising PersistenceError on failure."""


class InMemoryScoreStore(ScoreStore):
    """Scores that live as long as the process."""

    def __init__(self):
        self._data: Dict[str, Dict[str, Any]] = {}

    def _read(self, game_key: str) -> Optional[Dict[str, Any]]:
        data = self._data.get(game_key)
        return dict(data) if data is not None else None

    def _write(self, game_key: str, data: Dict[str, Any]) -> None:
        self._data[game_key] = dict(data)


class JsonScoreStore(ScoreStore):
    """
    All records in one JSON document, e.g.

        {"memory": {"bestTime": 41000, "bestMoves": 12, "gamesWon": 3},
         "tic_tac_toe": {"X": 2, "O": 1, "draw": 0}}

    Writes go to a temp file that replaces the original, so a crash never
    leaves a half-written file. Concurrent writers get last-write-wins.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self, game_key: str) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(game_key, f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(game_key, f"{self.path} does not hold a JSON object")
        return data

    def _read(self, game_key: str) -> Optional[Dict[str, Any]]:
        entry = self._read_all(game_key).get(game_key)
        if entry is not None and not isinstance(entry, dict):
            raise PersistenceError(game_key, "stored record is not an object")
        return entry

    def _write(self, game_key: str, data: Dict[str, Any]) -> None:
        try:
            everything = self._read_all(game_key)
        except PersistenceError:
            # Unreadable file: keep the other games' data out of it rather than fail
            _logger.warning(f"Overwriting unreadable score file {self.path}")
            everything = {}
        everything[game_key] = data

        directory = os.path.dirname(self.path) or '.'
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.scores-', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(everything, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(game_key, f"cannot write {self.path}: {e}") from e
