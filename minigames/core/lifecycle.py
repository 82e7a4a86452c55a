"""
Game Lifecycle State Machine
============================

Every game session moves through the same four states:

    IDLE --start--> RUNNING --pause--> PAUSED --resume--> RUNNING
    RUNNING --(terminal condition)--> ENDED
    RUNNING | PAUSED | ENDED --restart--> RUNNING   (passes through IDLE)

Any (state, event) pair not listed is a no-op. Engines query `is_running`
before applying any gameplay mutation, which is the single gate that keeps
late clicks and stale timers from touching an idle, paused or finished
session.

Terminal conditions are plain predicates supplied by each game. They are
evaluated in insertion order, so a game that lists 'win' before 'draw'
gets a win on a board that is both full and won.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ..utils.logger import get_logger


_logger = get_logger(__name__)


class LifecycleState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    PAUSED = 'paused'
    ENDED = 'ended'


class LifecycleEvent(Enum):
    START = 'start'
    PAUSE = 'pause'
    RESUME = 'resume'
    END = 'end'
    RESTART = 'restart'


_TRANSITIONS: Dict[Tuple[LifecycleState, LifecycleEvent], LifecycleState] = {
    (LifecycleState.IDLE, LifecycleEvent.START): LifecycleState.RUNNING,
    (LifecycleState.RUNNING, LifecycleEvent.PAUSE): LifecycleState.PAUSED,
    (LifecycleState.PAUSED, LifecycleEvent.RESUME): LifecycleState.RUNNING,
    (LifecycleState.RUNNING, LifecycleEvent.END): LifecycleState.ENDED,
    (LifecycleState.RUNNING, LifecycleEvent.RESTART): LifecycleState.RUNNING,
    (LifecycleState.PAUSED, LifecycleEvent.RESTART): LifecycleState.RUNNING,
    (LifecycleState.ENDED, LifecycleEvent.RESTART): LifecycleState.RUNNING,
}

TerminalCondition = Callable[[], bool]
TransitionListener = Callable[[LifecycleState, LifecycleEvent, LifecycleState], None]


class GameStateMachine:
    """
    Finite lifecycle shared by all games.

    Args:
        terminal_conditions: Ordered mapping of outcome name -> predicate.
            The first predicate that holds while RUNNING ends the session.
    """

    def __init__(self, terminal_conditions: Optional[Dict[str, TerminalCondition]] = None):
        self.state = LifecycleState.IDLE
        self.outcome: Optional[str] = None
        self._terminal_conditions: Dict[str, TerminalCondition] = dict(terminal_conditions or {})
        self._listeners: List[TransitionListener] = []

    @property
    def is_running(self) -> bool:
        return self.state is LifecycleState.RUNNING

    @property
    def is_active(self) -> bool:
        """True while a session is in progress (running or paused)."""
        return self.state in (LifecycleState.RUNNING, LifecycleState.PAUSED)

    def can(self, event: LifecycleEvent) -> bool:
        return (self.state, event) in _TRANSITIONS

    def on_transition(self, listener: TransitionListener) -> None:
        """Register a callback fired after every accepted transition."""
        self._listeners.append(listener)

    def fire(self, event: LifecycleEvent) -> bool:
        """
        Apply an event.

        Returns:
            True if the event caused a transition, False if it was ignored
        """
        target = _TRANSITIONS.get((self.state, event))
        if target is None:
            _logger.debug(f"Ignored {event.value} while {self.state.value}")
            return False

        previous = self.state
        if event is LifecycleEvent.RESTART:
            # Restart passes through IDLE so the new session starts clean
            self.state = LifecycleState.IDLE
            self.outcome = None
            target = _TRANSITIONS[(LifecycleState.IDLE, LifecycleEvent.START)]
        elif event is LifecycleEvent.START:
            self.outcome = None

        self.state = target
        for listener in self._listeners:
            listener(previous, event, target)
        return True

    def check_terminal(self) -> Optional[str]:
        """
        Evaluate terminal predicates; end the session on the first that holds.

        Returns:
            The outcome name if the session just ended, else None
        """
        if not self.is_running:
            return None
        for outcome, predicate in self._terminal_conditions.items():
            if predicate():
                self.outcome = outcome
                self.fire(LifecycleEvent.END)
                return outcome
        return None

    def reset(self) -> None:
        """Return to IDLE without notifying listeners (new board, no session)."""
        self.state = LifecycleState.IDLE
        self.outcome = None
