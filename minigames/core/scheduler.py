"""
Scheduler
=========

Drives game simulations without threads or blocking. All work is a
callback scheduled on a Clock; "suspension" is simply not re-arming it.

Policies:
    CONTINUOUS   - one step per display frame (Pong). Velocities are fixed
                   per-frame constants, not scaled by wall-clock delta.
    FIXED_DELAY  - one step per delay, the delay re-read after every tick so
                   it can change during the session (Snake speed-ups,
                   Whack-a-Mole countdown).
    EVENT_DRIVEN - no autonomous ticking; the game only advances on player
                   actions (Memory, Tic-Tac-Toe).

Every handle a session schedules goes through its TimerGroup, so pausing,
restarting or ending the session cancels all outstanding work in one call
and nothing from an old session can fire into a new one. Resuming re-arms
fresh; missed ticks are never replayed.

Clocks:
    ManualClock   - virtual time advanced explicitly (tests, headless runs)
    RealTimeClock - virtual time pumped from time.monotonic() by a host loop
"""

import heapq
import itertools
import time
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple, Union

from ..utils.logger import get_logger


_logger = get_logger(__name__)


class SchedulingPolicy(Enum):
    CONTINUOUS = 'continuous'
    FIXED_DELAY = 'fixed_delay'
    EVENT_DRIVEN = 'event_driven'


class TimerHandle:
    """A cancellable pending callback."""

    __slots__ = ('deadline', 'callback', '_cancelled', '_fired')

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        """True until the callback has fired or been cancelled."""
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True

    def _run(self) -> None:
        if not self.active:
            return
        self._fired = True
        self.callback()


class ManualClock:
    """
    Virtual millisecond clock.

    Callbacks run only inside advance(), in deadline order (ties in
    scheduling order), with now() reporting each callback's own deadline.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self._now + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (handle.deadline, next(self._counter), handle))
        return handle

    def advance(self, ms: float) -> int:
        """
        Move time forward, firing every callback that comes due.

        Returns:
            Number of callbacks fired
        """
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = deadline
            handle._run()
            fired += 1
        self._now = target
        return fired

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, handle in self._queue if handle.active)


class RealTimeClock(ManualClock):
    """ManualClock whose time follows the wall clock whenever it is pumped."""

    def __init__(self):
        super().__init__()
        self._origin = time.monotonic()

    def pump(self) -> int:
        """Fire everything due up to the current wall-clock time."""
        elapsed = (time.monotonic() - self._origin) * 1000.0
        return self.advance(max(0.0, elapsed - self._now))


class TimerGroup:
    """The set of handles owned by one game session."""

    def __init__(self, clock: ManualClock):
        self.clock = clock
        self._handles: Set[TimerHandle] = set()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle: Optional[TimerHandle] = None

        def fire():
            self._handles.discard(handle)
            callback()

        handle = self.clock.call_later(delay_ms, fire)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()
            self._handles.discard(handle)

    def cancel_all(self) -> int:
        """Cancel every outstanding handle; returns how many were pending."""
        count = 0
        for handle in self._handles:
            if handle.active:
                handle.cancel()
                count += 1
        self._handles.clear()
        if count:
            _logger.debug(f"Cancelled {count} pending timer(s)")
        return count

    @property
    def pending(self) -> int:
        return sum(1 for handle in self._handles if handle.active)


DelaySource = Union[float, Callable[[], float]]


class FixedDelayTicker:
    """
    Re-arming tick: wait `delay`, run `tick`, repeat while `keep_going()`.

    The delay may be a callable so it is re-read before every re-arm. If
    keep_going() is false when the timer fires, the tick is skipped and
    nothing is rescheduled.
    """

    def __init__(
        self,
        timers: TimerGroup,
        tick: Callable[[], None],
        delay: DelaySource,
        keep_going: Callable[[], bool],
    ):
        self.timers = timers
        self._tick = tick
        self._delay = delay
        self._keep_going = keep_going
        self._handle: Optional[TimerHandle] = None

    @property
    def delay_ms(self) -> float:
        return self._delay() if callable(self._delay) else self._delay

    @property
    def active(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self) -> None:
        """Arm the ticker fresh, dropping any pending tick."""
        self.stop()
        self._handle = self.timers.call_later(self.delay_ms, self._fire)

    def stop(self) -> None:
        self.timers.cancel(self._handle)
        self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._keep_going():
            return
        self._tick()
        if self._keep_going() and self._handle is None:
            self._handle = self.timers.call_later(self.delay_ms, self._fire)


class ContinuousLoop(FixedDelayTicker):
    """Render-synced loop: one step per display frame."""

    def __init__(
        self,
        timers: TimerGroup,
        step: Callable[[], None],
        frame_interval_ms: float,
        keep_going: Callable[[], bool],
    ):
        super().__init__(timers, step, frame_interval_ms, keep_going)
