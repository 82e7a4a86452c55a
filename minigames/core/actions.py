"""
Input actions delivered by the presentation layer.

Every input reaches an engine as one immutable Action. Lifecycle actions
(start, pause, resume, restart) are handled by the shared engine base;
the rest are routed to the game's own rule handler, and only while the
session is running.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ActionKind(Enum):
    """Everything the presentation layer can ask of a game."""
    START = 'start'
    PAUSE = 'pause'
    RESUME = 'resume'
    TOGGLE_PAUSE = 'toggle_pause'
    RESTART = 'restart'
    DIFFICULTY_CHANGE = 'difficulty_change'
    CELL_SELECT = 'cell_select'
    DIRECTION = 'direction'
    PADDLE = 'paddle'
    HOLE_HIT = 'hole_hit'


class Direction(Enum):
    """Snake heading as a (row, col) step."""
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def vector(self) -> Tuple[int, int]:
        return _DIRECTION_VECTORS[self]

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]


# Direction vectors (drow, dcol)
_DIRECTION_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class PaddleIntent(Enum):
    """Held paddle key: -1 up, 0 released, +1 down."""
    UP = 'up'
    STOP = 'stop'
    DOWN = 'down'

    @property
    def step(self) -> int:
        return {'up': -1, 'stop': 0, 'down': 1}[self.value]


# Payload type each kind carries (None = no payload)
_VALUE_TYPES = {
    ActionKind.CELL_SELECT: int,
    ActionKind.HOLE_HIT: int,
    ActionKind.DIRECTION: Direction,
    ActionKind.PADDLE: PaddleIntent,
    ActionKind.DIFFICULTY_CHANGE: str,
}


@dataclass(frozen=True)
class Action:
    """One input event, e.g. Action.cell_select(4)."""
    kind: ActionKind
    value: Any = None

    @classmethod
    def start(cls) -> 'Action':
        return cls(ActionKind.START)

    @classmethod
    def pause(cls) -> 'Action':
        return cls(ActionKind.PAUSE)

    @classmethod
    def resume(cls) -> 'Action':
        return cls(ActionKind.RESUME)

    @classmethod
    def toggle_pause(cls) -> 'Action':
        return cls(ActionKind.TOGGLE_PAUSE)

    @classmethod
    def restart(cls) -> 'Action':
        return cls(ActionKind.RESTART)

    @classmethod
    def difficulty_change(cls, level: str) -> 'Action':
        return cls(ActionKind.DIFFICULTY_CHANGE, level)

    @classmethod
    def cell_select(cls, index: int) -> 'Action':
        return cls(ActionKind.CELL_SELECT, index)

    @classmethod
    def direction(cls, direction: Direction) -> 'Action':
        return cls(ActionKind.DIRECTION, direction)

    @classmethod
    def paddle(cls, intent: PaddleIntent) -> 'Action':
        return cls(ActionKind.PADDLE, intent)

    @classmethod
    def hole_hit(cls, index: int) -> 'Action':
        return cls(ActionKind.HOLE_HIT, index)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Action':
        """
        Parse a wire payload such as {'type': 'direction', 'value': 'up'}.

        Raises:
            ValueError: Unknown type or a payload of the wrong shape
        """
        try:
            kind = ActionKind(data.get('type'))
        except ValueError:
            raise ValueError(f"Unknown action type: {data.get('type')!r}") from None

        value_type = _VALUE_TYPES.get(kind)
        if value_type is None:
            return cls(kind)

        raw: Optional[Any] = data.get('value')
        if raw is None:
            raise ValueError(f"Action {kind.value!r} requires a value")
        if value_type is int:
            if isinstance(raw, bool) or not isinstance(raw, (int, str)):
                raise ValueError(f"Action {kind.value!r} needs an integer index")
            try:
                return cls(kind, int(raw))
            except ValueError:
                raise ValueError(f"Action {kind.value!r} needs an integer index") from None
        if value_type is str:
            return cls(kind, str(raw))
        try:
            return cls(kind, value_type(str(raw).lower()))
        except ValueError:
            raise ValueError(f"Invalid value for {kind.value!r}: {raw!r}") from None

    def to_dict(self) -> Dict[str, Any]:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return {'type': self.kind.value, 'value': value}
