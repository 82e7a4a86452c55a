"""
Tests for the Memory Match game implementation.

These tests verify:
    - Board dealing per difficulty
    - Pair selection, settle delays and the third-card lock
    - Winning, best-score updates and elapsed time without pauses
    - Pause/restart cancelling pending settles
    - Difficulty changes needing confirmation mid-session
"""

from collections import defaultdict

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.core.actions import Action
from minigames.core.lifecycle import LifecycleState
from minigames.game.memory import CARD_SYMBOLS, MemoryGame


@pytest.fixture
def game(config, clock, store):
    """A started medium game with a fixed deal."""
    g = MemoryGame(config, clock, store, seed=3)
    g.start()
    return g


def pairs_of(game):
    """Symbol -> [index, index] for the current deal."""
    positions = defaultdict(list)
    for i, card in enumerate(game.cards):
        positions[card.symbol].append(i)
    return list(positions.values())


def mismatched(game):
    """Two indices holding different symbols."""
    first = 0
    second = next(i for i, card in enumerate(game.cards) if card.symbol != game.cards[0].symbol)
    return first, second


def select(game, *indices):
    return [game.on_input(Action.cell_select(i)) for i in indices]


class TestMemoryBoard:
    """Test dealing."""

    @pytest.mark.parametrize("difficulty,cards", [('easy', 12), ('medium', 16), ('hard', 36)])
    def test_board_size(self, config, difficulty, cards):
        game = MemoryGame(config, difficulty=difficulty)
        assert len(game.cards) == cards
        assert game.pair_count == cards // 2

    def test_every_symbol_twice(self, config):
        game = MemoryGame(config, difficulty='hard', seed=1)
        assert all(len(idx) == 2 for idx in pairs_of(game))
        assert len(set(CARD_SYMBOLS)) >= game.pair_count

    def test_default_difficulty(self, config):
        assert MemoryGame(config).difficulty == 'medium'

    def test_seeded_deal_repeats(self, config):
        a = MemoryGame(config, seed=11)
        b = MemoryGame(config, seed=11)
        assert [c.symbol for c in a.cards] == [c.symbol for c in b.cards]

    def test_face_down_symbols_hidden(self, game):
        snap = game.snapshot()
        assert all(card['symbol'] is None for card in snap['cards'])
        select(game, 0)
        assert game.snapshot()['cards'][0]['symbol'] == game.cards[0].symbol


class TestMemorySelection:
    """Test selecting and settling pairs."""

    def test_match_settles_after_500ms(self, game, clock):
        a, b = pairs_of(game)[0]
        assert select(game, a, b) == [True, True]
        assert game.settling
        assert game.moves == 1
        clock.advance(499)
        assert not game.cards[a].matched
        clock.advance(1)
        assert game.cards[a].matched and game.cards[b].matched
        assert game.matched_pairs == 1
        assert not game.settling

    def test_mismatch_flips_back_after_1000ms(self, game, clock):
        a, b = mismatched(game)
        select(game, a, b)
        clock.advance(999)
        assert game.cards[a].face_up
        clock.advance(1)
        assert not game.cards[a].face_up
        assert not game.cards[b].face_up
        assert game.matched_pairs == 0
        assert game.moves == 1

    def test_third_card_rejected_while_settling(self, game):
        a, b = mismatched(game)
        select(game, a, b)
        third = next(i for i in range(len(game.cards)) if i not in (a, b))
        assert not game.on_input(Action.cell_select(third))
        assert not game.cards[third].face_up

    def test_same_card_twice_rejected(self, game):
        assert select(game, 0, 0) == [True, False]
        assert game.moves == 0

    def test_matched_card_rejected(self, game, clock):
        a, b = pairs_of(game)[0]
        select(game, a, b)
        clock.advance(500)
        assert not game.on_input(Action.cell_select(a))

    def test_out_of_range_rejected(self, game):
        assert not game.on_input(Action.cell_select(99))

    def test_bool_index_rejected(self, game):
        assert not game.on_input(Action.cell_select(True))
        assert not game.cards[1].face_up

    def test_select_before_start_ignored(self, config):
        game = MemoryGame(config)
        assert not game.on_input(Action.cell_select(0))
        assert not game.cards[0].face_up


class TestMemoryWin:
    """Test finishing a board."""

    def test_win_updates_record(self, game, clock, store):
        for a, b in pairs_of(game):
            select(game, a, b)
            clock.advance(500)

        assert game.state is LifecycleState.ENDED
        assert game.lifecycle.outcome == 'won'
        record = store.load('memory')
        assert record.games_won == 1
        assert record.best_moves == game.pair_count
        assert record.best_time_ms == 500 * game.pair_count

    def test_elapsed_excludes_pause(self, game, clock):
        clock.advance(2000)
        game.pause()
        clock.advance(10_000)
        game.resume()
        clock.advance(1000)
        assert game.elapsed_ms == 3000

    def test_worse_second_game_keeps_best(self, game, clock, store):
        for a, b in pairs_of(game):
            select(game, a, b)
            clock.advance(500)
        game.restart()
        a, b = mismatched(game)
        select(game, a, b)
        clock.advance(1000)
        for a, b in pairs_of(game):
            select(game, a, b)
            clock.advance(500)
        record = store.load('memory')
        assert record.games_won == 2
        assert record.best_moves == game.pair_count
        assert record.best_time_ms == 500 * game.pair_count


class TestMemoryPauseAndRestart:
    """Test pending settles across pause/restart."""

    def test_pause_holds_settle(self, game, clock):
        a, b = mismatched(game)
        select(game, a, b)
        game.pause()
        clock.advance(5000)
        assert game.cards[a].face_up
        game.resume()
        clock.advance(1000)
        assert not game.cards[a].face_up

    def test_restart_cancels_stale_settle(self, game, clock):
        """A settle from the old session never touches the new board."""
        a, b = pairs_of(game)[0]
        select(game, a, b)
        game.restart()
        clock.advance(5000)
        assert game.matched_pairs == 0
        assert not any(card.face_up or card.matched for card in game.cards)
        assert game.moves == 0

    def test_restart_resets_elapsed(self, game, clock):
        clock.advance(3000)
        game.restart()
        assert game.elapsed_ms == 0


class TestMemoryDifficulty:
    """Test difficulty changes."""

    def test_change_while_idle_applies(self, config):
        game = MemoryGame(config)
        assert game.on_input(Action.difficulty_change('hard'))
        assert game.difficulty == 'hard'
        assert len(game.cards) == 36
        assert game.state is LifecycleState.IDLE

    def test_unknown_difficulty_ignored(self, game):
        assert not game.on_input(Action.difficulty_change('nightmare'))
        assert game.difficulty == 'medium'
        assert game.pending_difficulty is None

    def test_change_mid_session_is_pending(self, game):
        select(game, 0)
        assert game.on_input(Action.difficulty_change('easy'))
        assert game.pending_difficulty == 'easy'
        assert game.difficulty == 'medium'
        assert game.cards[0].face_up

    def test_decline_keeps_session(self, game):
        select(game, 0)
        game.change_difficulty('easy')
        assert not game.confirm_destructive_change(False)
        assert game.pending_difficulty is None
        assert game.difficulty == 'medium'
        assert game.cards[0].face_up
        assert game.state is LifecycleState.RUNNING

    def test_accept_restarts_with_new_board(self, game):
        select(game, 0)
        game.change_difficulty('easy')
        assert game.confirm_destructive_change(True)
        assert game.difficulty == 'easy'
        assert len(game.cards) == 12
        assert game.state is LifecycleState.RUNNING
        assert game.moves == 0

    def test_confirm_without_pending(self, game):
        assert not game.confirm_destructive_change(True)


class TestMemoryDisplayClock:
    """Test the once-a-second snapshot."""

    def test_clock_emits_every_second(self, game, clock):
        snaps = []
        game.subscribe(snaps.append)
        clock.advance(3000)
        assert [s['elapsed_ms'] for s in snaps] == [1000, 2000, 3000]

    def test_clock_stops_when_paused(self, game, clock):
        snaps = []
        game.pause()
        game.subscribe(snaps.append)
        clock.advance(3000)
        assert snaps == []
