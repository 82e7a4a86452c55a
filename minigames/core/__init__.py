"""
Core Module
===========

Game-independent building blocks shared by every engine.

Modules:
    lifecycle - Idle/Running/Paused/Ended state machine
    scheduler - Clocks, cancellable timers and tick policies
    collision - Rectangle overlap, paddle reflection, grid collisions
    matching  - Pair matching and tic-tac-toe win lines
    scores    - Best-score records and their stores
    actions   - Input actions from the presentation layer
    errors    - Exception types
"""

from .actions import Action, ActionKind, Direction, PaddleIntent
from .errors import ArcadeError, PersistenceError
from .lifecycle import GameStateMachine, LifecycleEvent, LifecycleState
from .scheduler import (
    ContinuousLoop,
    FixedDelayTicker,
    ManualClock,
    RealTimeClock,
    SchedulingPolicy,
    TimerGroup,
    TimerHandle,
)
from .scores import InMemoryScoreStore, JsonScoreStore, ScoreRecord, ScoreStore

__all__ = [
    'Action',
    'ActionKind',
    'Direction',
    'PaddleIntent',
    'ArcadeError',
    'PersistenceError',
    'GameStateMachine',
    'LifecycleEvent',
    'LifecycleState',
    'ContinuousLoop',
    'FixedDelayTicker',
    'ManualClock',
    'RealTimeClock',
    'SchedulingPolicy',
    'TimerGroup',
    'TimerHandle',
    'InMemoryScoreStore',
    'JsonScoreStore',
    'ScoreRecord',
    'ScoreStore',
]
