"""
Tests for the Pong game implementation.

These tests verify:
    - Game initialization and serving
    - Player paddle intent and clamping
    - Computer paddle tracking with a dead zone
    - Wall and paddle bounces (angle, speed-up)
    - Scoring and the first-to-11 win
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.core.actions import Action, PaddleIntent
from minigames.core.lifecycle import LifecycleState
from minigames.game.pong import Pong, PongPaddle


@pytest.fixture
def game(config, clock, store):
    """A started game."""
    g = Pong(config, clock, store, seed=4)
    g.start()
    return g


def frame(game, n=1):
    """Advance the clock by n display frames."""
    game.clock.advance(game.config.FRAME_INTERVAL_MS * n)


def place_ball(game, x, y, dx, dy):
    game.ball.x, game.ball.y, game.ball.dx, game.ball.dy = x, y, dx, dy


class TestPongInitialization:
    """Test game initialization."""

    def test_paddles_centred(self, game):
        assert game.player_paddle.x == 20
        assert game.ai_paddle.x == 800 - 30
        assert game.player_paddle.y == 160
        assert game.ai_paddle.y == 160

    def test_ball_served_from_centre(self, game):
        assert (game.ball.x, game.ball.y) == (400, 200)
        assert abs(game.ball.dx) == 4
        assert abs(game.ball.dy) == 4

    def test_ai_slower_than_player(self, game):
        assert game.ai_paddle.speed == pytest.approx(game.player_paddle.speed * 0.8)

    def test_scores_zero(self, game):
        assert (game.player_score, game.ai_score) == (0, 0)
        assert game.score == 0


class TestPongPaddle:
    """Test paddle movement."""

    def test_move_clamped(self):
        paddle = PongPaddle(20, 5, 10, 80, 5.0)
        paddle.move(-1, 400)
        assert paddle.y == 0
        paddle.y = 318
        paddle.move(1, 400)
        assert paddle.y == 320

    def test_held_intent_moves_every_frame(self, game):
        game.on_input(Action.paddle(PaddleIntent.DOWN))
        frame(game, 3)
        assert game.player_paddle.y == pytest.approx(175)

    def test_stop_intent(self, game):
        game.on_input(Action.paddle(PaddleIntent.UP))
        frame(game, 2)
        game.on_input(Action.paddle(PaddleIntent.STOP))
        frame(game, 5)
        assert game.player_paddle.y == pytest.approx(150)

    def test_pause_releases_paddle(self, game):
        game.on_input(Action.paddle(PaddleIntent.DOWN))
        game.pause()
        game.resume()
        frame(game)
        assert game.player_paddle.y == pytest.approx(160)

    def test_intent_ignored_while_paused(self, game):
        game.pause()
        assert not game.on_input(Action.paddle(PaddleIntent.DOWN))


class TestPongAI:
    """Test the computer paddle."""

    def test_follows_ball_down(self, game):
        place_ball(game, 400, 380, 0, 0)
        game.update()
        assert game.ai_paddle.y == pytest.approx(164)

    def test_follows_ball_up(self, game):
        place_ball(game, 400, 20, 0, 0)
        game.update()
        assert game.ai_paddle.y == pytest.approx(156)

    def test_dead_zone(self, game):
        place_ball(game, 400, 205, 0, 0)
        game.update()
        assert game.ai_paddle.y == pytest.approx(160)


class TestPongCollisions:
    """Test bounces."""

    def test_wall_bounce(self, game):
        place_ball(game, 400, 2, 4, -4)
        game.update()
        assert game.ball.dy == 4

    def test_ai_paddle_return_speeds_up(self, game):
        """Ball at vx=4 meeting the computer paddle's centre leaves at -4.2."""
        place_ball(game, 760, 200, 4, 0)
        game.update()
        assert game.ball.dx == pytest.approx(-4.2)
        assert game.ball.dy == pytest.approx(0)
        assert game.rally_count == 1

    def test_player_paddle_edge_angle(self, game):
        place_ball(game, 30, 160, -4, 0)
        game.update()
        assert game.ball.dx == pytest.approx(4.2)
        assert game.ball.dy == pytest.approx(-4.2)

    def test_no_second_flip_while_leaving(self, game):
        """A ball still overlapping the paddle but moving away is not reflected."""
        place_ball(game, 24, 200, 4.2, 0)
        game.update()
        assert game.ball.dx == pytest.approx(4.2)
        assert game.rally_count == 0

    def test_rally_keeps_accelerating(self, game):
        place_ball(game, 760, 200, 4, 0)
        game.update()
        place_ball(game, 30, 200, game.ball.dx, 0)
        game.update()
        assert game.ball.dx == pytest.approx(4 * 1.05 ** 2)


class TestPongScoring:
    """Test points and the match end."""

    def test_ai_scores_when_ball_passes_player(self, game):
        place_ball(game, 2, 20, -4, 0)
        frame(game)
        assert game.ai_score == 1
        assert (game.ball.x, game.ball.y) == (400, 200)

    def test_player_scores_when_ball_passes_ai(self, game):
        place_ball(game, 798, 20, 4, 0)
        frame(game)
        assert game.player_score == 1
        assert game.rally_count == 0

    def test_player_wins_at_eleven(self, game, store):
        game.player_score = 10
        place_ball(game, 798, 20, 4, 0)
        frame(game)
        assert game.state is LifecycleState.ENDED
        assert game.lifecycle.outcome == 'player_won'
        assert store.load('pong').player_wins == 1

    def test_ai_wins_at_eleven(self, game, store):
        game.ai_score = 10
        place_ball(game, 2, 20, -4, 0)
        frame(game)
        assert game.lifecycle.outcome == 'ai_won'
        assert store.load('pong').ai_wins == 1

    def test_loop_stops_after_match(self, game):
        game.player_score = 10
        place_ball(game, 798, 20, 4, 0)
        frame(game)
        ball_x = game.ball.x
        frame(game, 10)
        assert game.ball.x == ball_x

    def test_restart_resets_scores(self, game):
        game.player_score = 10
        place_ball(game, 798, 20, 4, 0)
        frame(game)
        assert game.restart()
        assert (game.player_score, game.ai_score) == (0, 0)
        assert game.state is LifecycleState.RUNNING

    def test_snapshot(self, game):
        snap = game.snapshot()
        assert snap['game'] == 'pong'
        assert snap['field'] == {'width': 800, 'height': 400}
        assert snap['ball']['size'] == 8
        assert snap['record'] == {'playerWins': 0, 'aiWins': 0}
