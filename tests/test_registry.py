"""
Tests for the game registry.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.game import (
    GAME_REGISTRY,
    MemoryGame,
    Pong,
    Snake,
    TicTacToe,
    WhackAMole,
    create_game,
    get_all_game_info,
    get_game,
    get_game_info,
    list_games,
)


class TestRegistry:
    """Test lookups."""

    def test_all_five_games(self):
        assert list_games() == ['memory', 'pong', 'snake', 'tic_tac_toe', 'whack_a_mole']

    @pytest.mark.parametrize("name,cls", [
        ('memory', MemoryGame),
        ('pong', Pong),
        ('snake', Snake),
        ('tic_tac_toe', TicTacToe),
        ('tic-tac-toe', TicTacToe),
        ('tictactoe', TicTacToe),
        ('whack_a_mole', WhackAMole),
        ('Whack-A-Mole', WhackAMole),
    ])
    def test_get_game(self, name, cls):
        assert get_game(name) is cls

    def test_unknown_game(self):
        assert get_game('chess') is None
        assert get_game_info('chess') is None
        with pytest.raises(KeyError):
            create_game('chess')

    def test_keys_match_engines(self):
        for key, entry in GAME_REGISTRY.items():
            assert entry['class'].GAME_KEY == key

    def test_info(self):
        info = get_game_info('memory')
        assert info['scheduling'] == 'event_driven'
        assert info['difficulties'] == ['easy', 'medium', 'hard']
        assert 'class' not in info

    def test_scheduling_policies(self):
        info = get_all_game_info()
        assert info['pong']['scheduling'] == 'continuous'
        assert info['snake']['scheduling'] == 'fixed_delay'
        assert info['whack_a_mole']['scheduling'] == 'fixed_delay'
        assert info['tic_tac_toe']['scheduling'] == 'event_driven'

    def test_create_game_passes_kwargs(self, config, clock):
        game = create_game('memory', config=config, clock=clock, difficulty='easy')
        assert game.clock is clock
        assert game.difficulty == 'easy'
