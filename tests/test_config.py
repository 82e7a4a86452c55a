"""
Tests for Config validation.

These tests verify that invalid configurations are caught early
rather than causing confusing behaviour in the middle of a session.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.config import Config


class TestConfigValidation:
    """Test Config.__post_init__ validation."""

    def test_valid_config_passes(self):
        """Default config should validate without errors."""
        cfg = Config()
        assert cfg is not None

    def test_invalid_fps_zero(self):
        cfg = Config()
        cfg.FPS = 0
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_missing_difficulty(self):
        """All three memory difficulties must be configured."""
        with pytest.raises(AssertionError):
            Config(MEMORY_PAIRS={'easy': 6, 'medium': 8})

    def test_speedup_must_grow(self):
        cfg = Config()
        cfg.PONG_SPEEDUP = 1.0
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_snake_floor_above_start(self):
        cfg = Config()
        cfg.SNAKE_MIN_DELAY_MS = 200
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_mole_lifetime_order(self):
        cfg = Config()
        cfg.WHACK_MOLE_MIN_MS = 3000
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_first_player(self):
        with pytest.raises(AssertionError):
            Config(TTT_FIRST_PLAYER='Z')


class TestConfigDerived:
    """Test derived values."""

    def test_snake_tile_count(self):
        assert Config().SNAKE_TILE_COUNT == 20

    def test_frame_interval(self):
        assert Config(FPS=50).FRAME_INTERVAL_MS == pytest.approx(20.0)

    def test_score_path(self):
        cfg = Config(SCORE_DIR='data')
        assert cfg.SCORE_PATH == os.path.join('data', 'best_scores.json')

    def test_memory_pairs_not_shared(self):
        a, b = Config(), Config()
        a.MEMORY_PAIRS['easy'] = 2
        assert b.MEMORY_PAIRS['easy'] == 6
