"""
Game Module
===========

Contains the arcade game engines.

Classes:
    MemoryGame  - Pair-matching card game
    Pong        - Paddle game against a computer opponent
    Snake       - Grid snake
    TicTacToe   - Two-player 3x3 board
    WhackAMole  - Timed reflex game
    BaseGame    - Abstract base class for creating new games

Game Registry:
    Use get_game(name) to get a game class by name
    Use create_game(name, ...) to build an engine
    Use list_games() to get all available games
    Use get_game_info(name) to get metadata about a game
"""

from typing import Any, Dict, List, Optional, Type

from .base_game import BaseGame
from .memory import MemoryGame
from .pong import Pong
from .snake import Snake
from .tictactoe import TicTacToe
from .whackamole import WhackAMole


# =============================================================================
# GAME REGISTRY
# =============================================================================
# Maps game keys to their classes and metadata.
# To add a new game:
#   1. Create the game class inheriting from BaseGame
#   2. Add an entry to GAME_REGISTRY below
#   3. The game will automatically appear in the CLI and web bridge

GAME_REGISTRY: Dict[str, Dict[str, Any]] = {
    MemoryGame.GAME_KEY: {
        'class': MemoryGame,
        'name': 'Memory Match',
        'description': 'Flip cards two at a time and find every pair',
        'actions': ['cell_select', 'difficulty_change'],
        'icon': '🃏',
    },
    Pong.GAME_KEY: {
        'class': Pong,
        'name': 'Pong',
        'description': 'First to 11 against the computer paddle',
        'actions': ['paddle'],
        'icon': '🏓',
    },
    Snake.GAME_KEY: {
        'class': Snake,
        'name': 'Snake',
        'description': 'Eat, grow, and stay off the walls',
        'actions': ['direction'],
        'icon': '🐍',
    },
    TicTacToe.GAME_KEY: {
        'class': TicTacToe,
        'name': 'Tic-Tac-Toe',
        'description': 'Three in a row for two players',
        'actions': ['cell_select'],
        'icon': '❌',
    },
    WhackAMole.GAME_KEY: {
        'class': WhackAMole,
        'name': 'Whack-a-Mole',
        'description': 'Hit as many moles as you can in 30 seconds',
        'actions': ['hole_hit'],
        'icon': '🔨',
    },
}

# Short names accepted on the command line
_ALIASES = {
    'tictactoe': TicTacToe.GAME_KEY,
    'whackamole': WhackAMole.GAME_KEY,
}


def _resolve(name: str) -> str:
    key = name.lower().replace('-', '_')
    return _ALIASES.get(key, key)


def get_game(name: str) -> Optional[Type[BaseGame]]:
    """
    Get a game class by name.

    Args:
        name: Game identifier (e.g., 'snake', 'tic_tac_toe')

    Returns:
        The game class, or None if not found

    Example:
        >>> GameClass = get_game('snake')
        >>> game = GameClass(config)
    """
    entry = GAME_REGISTRY.get(_resolve(name))
    if entry:
        return entry['class']
    return None


def create_game(name: str, **kwargs) -> BaseGame:
    """
    Build a game engine by name.

    Raises:
        KeyError: Unknown game
    """
    game_class = get_game(name)
    if game_class is None:
        raise KeyError(f"Unknown game: {name!r} (available: {', '.join(list_games())})")
    return game_class(**kwargs)


def list_games() -> List[str]:
    """
    Get a list of all available game keys.

    Example:
        >>> list_games()
        ['memory', 'pong', 'snake', 'tic_tac_toe', 'whack_a_mole']
    """
    return list(GAME_REGISTRY.keys())


def get_game_info(name: str) -> Optional[Dict[str, Any]]:
    """
    Get metadata about a game.

    Info includes:
        - name: Display name
        - description: Short description
        - actions: Gameplay action types
        - icon: Emoji icon
        - scheduling: 'continuous', 'fixed_delay' or 'event_driven'
        - difficulties: Selectable difficulty levels (may be empty)
    """
    entry = GAME_REGISTRY.get(_resolve(name))
    if not entry:
        return None
    info = {k: v for k, v in entry.items() if k != 'class'}
    info['scheduling'] = entry['class'].SCHEDULING.value
    info['difficulties'] = list(entry['class'].DIFFICULTIES)
    return info


def get_all_game_info() -> Dict[str, Dict[str, Any]]:
    """
    Get metadata for all registered games.

    Returns:
        Dictionary mapping game IDs to their info
    """
    return {
        game_id: get_game_info(game_id)
        for game_id in GAME_REGISTRY.keys()
    }


__all__ = [
    # Classes
    'BaseGame',
    'MemoryGame',
    'Pong',
    'Snake',
    'TicTacToe',
    'WhackAMole',
    # Registry functions
    'GAME_REGISTRY',
    'get_game',
    'create_game',
    'list_games',
    'get_game_info',
    'get_all_game_info',
]
