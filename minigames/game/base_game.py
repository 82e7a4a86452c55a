"""
Base Game Interface
===================

Abstract base class that every arcade game engine derives from. It owns
the pieces all five games share:

    - the lifecycle state machine gating every mutation
    - the session's timer group (cancelled on pause/restart/end)
    - a stopwatch of running time (paused time excluded)
    - best-score loading, write-through on session end, failure reporting
    - difficulty changes that need confirmation mid-session
    - snapshot emission to the presentation layer

To add a new game:
1. Create a new file in minigames/game/
2. Inherit from BaseGame
3. Implement all abstract methods
4. Register in __init__.py
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config import Config
from ..core.actions import Action, ActionKind
from ..core.errors import PersistenceError
from ..core.lifecycle import GameStateMachine, LifecycleEvent, LifecycleState
from ..core.scheduler import ManualClock, SchedulingPolicy, TimerGroup, TimerHandle
from ..core.scores import InMemoryScoreStore, ScoreRecord, ScoreStore, default_record
from ..utils.logger import get_logger, log_session_result
from ..utils.rng import GameRandom


_logger = get_logger(__name__)

Snapshot = Dict[str, Any]
SnapshotListener = Callable[[Snapshot], None]
ErrorListener = Callable[[str], None]


class BaseGame(ABC):
    """
    Abstract base class for games.

    Properties:
        state: LifecycleState - Current lifecycle state
        elapsed_ms: int - Running time of the session (pauses excluded)

    Methods:
        on_input(action) -> bool
            Deliver one presentation-layer action; False if ignored
        start() / pause() / resume() / restart() -> bool
            Lifecycle controls (also reachable through on_input)
        confirm_destructive_change(accept) -> bool
            Answer a pending mid-session difficulty change
        reset_scores() -> None
            Replace the persisted record with an empty one
        snapshot() -> dict
            Render-ready view of the session
        subscribe(listener) -> unsubscribe callable
            Receive a snapshot after every accepted mutation

    Subclasses provide a `score` attribute or property, implement reset(),
    _handle_action(), _terminal_conditions(), _record_result() and
    _entities(), and override the _on_* hooks to arm their schedulers.
    """

    GAME_KEY = ''
    SCHEDULING = SchedulingPolicy.EVENT_DRIVEN
    DIFFICULTIES: Tuple[str, ...] = ()

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Optional[ManualClock] = None,
        score_store: Optional[ScoreStore] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize shared engine state. Subclasses call reset() once their
        own attributes exist.

        Args:
            config: Configuration object (uses default if None)
            clock: Clock driving timers (virtual ManualClock if None)
            score_store: Best-score persistence (in-memory if None)
            seed: RNG seed (falls back to config.SEED)
        """
        self.config = config or Config()
        self.clock = clock if clock is not None else ManualClock()
        self.score_store = score_store if score_store is not None else InMemoryScoreStore()
        self.rng = GameRandom(seed if seed is not None else self.config.SEED)

        self.timers = TimerGroup(self.clock)
        self.lifecycle = GameStateMachine(self._terminal_conditions())
        self.lifecycle.on_transition(self._log_transition)

        self.difficulty: Optional[str] = None
        self.pending_difficulty: Optional[str] = None
        self.notice: Optional[str] = None

        self._listeners: List[SnapshotListener] = []
        self._error_listeners: List[ErrorListener] = []

        # Stopwatch of running time
        self._elapsed_base_ms = 0.0
        self._running_since: Optional[float] = None

        self.record: ScoreRecord = self._load_record()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def state(self) -> LifecycleState:
        return self.lifecycle.state

    @property
    def elapsed_ms(self) -> int:
        elapsed = self._elapsed_base_ms
        if self._running_since is not None:
            elapsed += self.clock.now() - self._running_since
        return int(elapsed)

    # =========================================================================
    # INPUT
    # =========================================================================

    def on_input(self, action: Action) -> bool:
        """
        Deliver one action from the presentation layer.

        Lifecycle actions are always considered; gameplay actions only
        while RUNNING. Anything not applicable is a silent no-op.

        Returns:
            True if the action was accepted
        """
        kind = action.kind
        if kind is ActionKind.START:
            return self.start()
        if kind is ActionKind.PAUSE:
            return self.pause()
        if kind is ActionKind.RESUME:
            return self.resume()
        if kind is ActionKind.TOGGLE_PAUSE:
            return self.toggle_pause()
        if kind is ActionKind.RESTART:
            return self.restart()
        if kind is ActionKind.DIFFICULTY_CHANGE:
            return self.change_difficulty(action.value)

        if not self.lifecycle.is_running:
            _logger.debug(f"{self.GAME_KEY}: ignored {kind.value} while {self.state.value}")
            return False

        accepted = self._handle_action(action)
        if accepted:
            self._after_mutation()
        else:
            _logger.debug(f"{self.GAME_KEY}: rejected {kind.value}={action.value!r}")
        return accepted

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> bool:
        if not self.lifecycle.can(LifecycleEvent.START):
            return False
        self.timers.cancel_all()
        self.lifecycle.fire(LifecycleEvent.START)
        self._running_since = self.clock.now()
        self._on_start()
        self._emit()
        return True

    def pause(self) -> bool:
        if not self.lifecycle.fire(LifecycleEvent.PAUSE):
            return False
        self.timers.cancel_all()
        self._stop_stopwatch()
        self._on_pause()
        self._emit()
        return True

    def resume(self) -> bool:
        if not self.lifecycle.fire(LifecycleEvent.RESUME):
            return False
        self._running_since = self.clock.now()
        self._on_resume()
        self._emit()
        return True

    def toggle_pause(self) -> bool:
        if self.lifecycle.is_running:
            return self.pause()
        return self.resume()

    def restart(self) -> bool:
        """Discard the current session and start a fresh one."""
        if not self.lifecycle.can(LifecycleEvent.RESTART):
            return False
        self.timers.cancel_all()
        self.pending_difficulty = None
        self._reset_stopwatch()
        self.reset()
        self.lifecycle.fire(LifecycleEvent.RESTART)
        self._running_since = self.clock.now()
        self._on_start()
        self._emit()
        return True

    def change_difficulty(self, level: Any) -> bool:
        """
        Request a difficulty change.

        While a session is running or paused the change only becomes
        pending; the presentation layer must answer through
        confirm_destructive_change() before the session is discarded.
        """
        if level not in self.DIFFICULTIES:
            _logger.debug(f"{self.GAME_KEY}: ignored difficulty {level!r}")
            return False
        if self.lifecycle.is_active:
            self.pending_difficulty = level
            self._emit()
            return True
        self._apply_difficulty(level)
        self._new_board()
        self._emit()
        return True

    def confirm_destructive_change(self, accept: bool) -> bool:
        """
        Answer a pending difficulty change.

        Returns:
            True if the change was applied
        """
        level = self.pending_difficulty
        if level is None:
            return False
        self.pending_difficulty = None
        if not accept:
            self._emit()
            return False
        self._apply_difficulty(level)
        if self.lifecycle.is_active:
            self.restart()
        else:
            self._new_board()
            self._emit()
        return True

    def reset_scores(self) -> None:
        """Replace the persisted best scores with an empty record."""
        self.record, saved = self.score_store.reset(self.GAME_KEY)
        if not saved:
            self._report("Could not save best scores; they are kept for this session only")
        _logger.info(f"{self.GAME_KEY}: best scores reset")
        self._emit()

    # =========================================================================
    # PRESENTATION
    # =========================================================================

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Receive a snapshot after every accepted mutation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_error(self, listener: ErrorListener) -> None:
        """Receive persistence failure messages."""
        self._error_listeners.append(listener)

    def snapshot(self) -> Snapshot:
        """Everything the presentation layer needs to draw the game."""
        snap: Snapshot = {
            'game': self.GAME_KEY,
            'state': self.state.value,
            'outcome': self.lifecycle.outcome,
            'score': self.score,
            'elapsed_ms': self.elapsed_ms,
            'difficulty': self.difficulty,
            'pending_difficulty': self.pending_difficulty,
            'record': self.record.to_dict(),
            'notice': self.notice,
        }
        snap.update(self._entities())
        return snap

    # =========================================================================
    # ABSTRACT INTERFACE
    # =========================================================================

    @abstractmethod
    def reset(self) -> None:
        """Reset all session state (board, entities, score) for a new session."""
        pass

    @abstractmethod
    def _handle_action(self, action: Action) -> bool:
        """Apply a gameplay action while RUNNING; False if not applicable."""
        pass

    @abstractmethod
    def _terminal_conditions(self) -> Dict[str, Callable[[], bool]]:
        """Ordered outcome name -> predicate that ends the session."""
        pass

    @abstractmethod
    def _record_result(self, outcome: str) -> None:
        """Fold the finished session into self.record."""
        pass

    @abstractmethod
    def _entities(self) -> Dict[str, Any]:
        """Game-specific part of the snapshot."""
        pass

    # Scheduler hooks, overridden by timed games
    def _on_start(self) -> None:
        pass

    def _on_pause(self) -> None:
        pass

    def _on_resume(self) -> None:
        self._on_start()

    def _on_end(self, outcome: str) -> None:
        pass

    def _apply_difficulty(self, level: str) -> None:
        self.difficulty = level

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Run a gameplay callback later, owned by this session.

        The callback is dropped if the session is no longer running when
        it fires, and a snapshot is emitted after it runs.
        """
        def run() -> None:
            if not self.lifecycle.is_running:
                return
            callback()
            self._after_mutation()

        return self.timers.call_later(delay_ms, run)

    def _ticked(self, tick: Callable[[], None]) -> Callable[[], None]:
        """Wrap a scheduler tick so it checks for the end and emits."""
        def run() -> None:
            tick()
            self._after_mutation()
        return run

    def _after_mutation(self) -> None:
        outcome = self.lifecycle.check_terminal()
        if outcome is not None:
            self._finish(outcome)
        self._emit()

    def _finish(self, outcome: str) -> None:
        self.timers.cancel_all()
        self._stop_stopwatch()
        self._on_end(outcome)
        self._record_result(outcome)
        self._persist()
        log_session_result(self.GAME_KEY, outcome, self.score, elapsed_ms=self.elapsed_ms)

    def _new_board(self) -> None:
        """Fresh board with no session (after a difficulty change while not playing)."""
        self.timers.cancel_all()
        self.lifecycle.reset()
        self._reset_stopwatch()
        self.reset()

    def _reset_stopwatch(self) -> None:
        self._elapsed_base_ms = 0.0
        self._running_since = None

    def _stop_stopwatch(self) -> None:
        if self._running_since is not None:
            self._elapsed_base_ms += self.clock.now() - self._running_since
            self._running_since = None

    def _load_record(self) -> ScoreRecord:
        try:
            return self.score_store.load(self.GAME_KEY)
        except PersistenceError as e:
            self._report(f"Could not load best scores ({e}); starting from defaults")
            return default_record(self.GAME_KEY)

    def _persist(self) -> None:
        if not self.score_store.save(self.GAME_KEY, self.record):
            self._report("Could not save best scores; they are kept for this session only")

    def _report(self, message: str) -> None:
        self.notice = message
        _logger.warning(f"{self.GAME_KEY}: {message}")
        for listener in self._error_listeners:
            listener(message)

    def _emit(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        self.notice = None
        for listener in list(self._listeners):
            listener(snap)

    def _log_transition(self, previous: LifecycleState, event: LifecycleEvent,
                        current: LifecycleState) -> None:
        _logger.info(f"{self.GAME_KEY}: {previous.value} --{event.value}--> {current.value}")

    def close(self) -> None:
        """Cancel all pending work. Override if needed."""
        self.timers.cancel_all()
        self._listeners.clear()
