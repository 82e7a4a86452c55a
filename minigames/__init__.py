"""
Mini Arcade Games - Source Package
==================================

Rule engines for five classic browser arcade games, sharing one
lifecycle/scheduler/collision/scoring core.

Modules:
    core/  - Lifecycle state machine, scheduler, collision, matching, scores
    game/  - Game engines (Memory, Pong, Snake, Tic-Tac-Toe, Whack-a-Mole)
    utils/ - Logging and randomness helpers
    web/   - Flask + SocketIO bridge to a browser presentation layer
"""

__version__ = "1.0.0"
