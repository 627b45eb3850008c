"""
Tests for exact strategy evaluation (game value, best response, exploitability).

Run with: pytest tests/test_evaluation.py -v
"""

import pytest
import numpy as np

from kuhn_cfr.games.base import Player
from kuhn_cfr.games.kuhn import history_from_string, history_to_string
from kuhn_cfr.solvers.evaluation import (
    decision_histories,
    expected_value,
    best_response_value,
    exploitability,
)


def table_profile(table):
    """Profile from {(rank, "history"): bet probability}, pass elsewhere."""
    def profile(rank, history):
        bet = table.get((rank, history_to_string(history)), 0.0)
        return np.array([1.0 - bet, bet])
    return profile


def uniform_profile(rank, history):
    return np.array([0.5, 0.5])


def always(action_id):
    def profile(rank, history):
        strategy = np.zeros(2)
        strategy[action_id] = 1.0
        return strategy
    return profile


# The alpha = 1/3 equilibrium (bet / call probabilities)
NASH = {
    (1, ""): 1 / 3, (2, ""): 0.0, (3, ""): 1.0,
    (1, "pb"): 0.0, (2, "pb"): 2 / 3, (3, "pb"): 1.0,
    (1, "p"): 1 / 3, (2, "p"): 0.0, (3, "p"): 1.0,
    (1, "b"): 0.0, (2, "b"): 1 / 3, (3, "b"): 1.0,
}


class TestDecisionHistories:

    def test_player_1(self):
        assert sorted(decision_histories(Player.PLAYER_1)) == sorted(
            [history_from_string(""), history_from_string("pb")]
        )

    def test_player_2(self):
        assert sorted(decision_histories(Player.PLAYER_2)) == sorted(
            [history_from_string("p"), history_from_string("b")]
        )


class TestExpectedValue:

    def test_always_pass_is_even(self):
        """Every deal reaches a pass-pass showdown, wins and losses cancel."""
        assert expected_value(always(0)) == pytest.approx(0.0)

    def test_always_bet_is_even(self):
        assert expected_value(always(1)) == pytest.approx(0.0)

    def test_bet_into_folder(self):
        """P1 always bets, P2 always folds: P1 wins 1 every deal."""
        profile = table_profile({(r, ""): 1.0 for r in (1, 2, 3)})
        assert expected_value(profile) == pytest.approx(1.0)

    def test_nash_value(self):
        assert expected_value(table_profile(NASH)) == pytest.approx(-1 / 18)


class TestBestResponse:

    def test_against_always_pass(self):
        """Against a passive opponent either seat wins 1 by betting."""
        assert best_response_value(always(0), Player.PLAYER_1) == pytest.approx(1.0)
        assert best_response_value(always(0), Player.PLAYER_2) == pytest.approx(1.0)
        assert exploitability(always(0)) == pytest.approx(2.0)

    def test_nash_is_unexploitable(self):
        profile = table_profile(NASH)
        assert best_response_value(profile, Player.PLAYER_1) == pytest.approx(-1 / 18)
        assert best_response_value(profile, Player.PLAYER_2) == pytest.approx(1 / 18)
        assert exploitability(profile) == pytest.approx(0.0, abs=1e-9)

    def test_uniform_is_exploitable(self):
        assert exploitability(uniform_profile) > 0.5

    def test_best_response_dominates_profile(self):
        value = expected_value(uniform_profile)
        assert best_response_value(uniform_profile, Player.PLAYER_1) >= value
        assert best_response_value(uniform_profile, Player.PLAYER_2) >= -value

    def test_custom_ranks(self):
        """Only rank order matters."""
        nash = {((10, 20, 30)[r - 1], h): p for (r, h), p in NASH.items()}
        assert exploitability(table_profile(nash), ranks=(10, 20, 30)) == pytest.approx(0.0, abs=1e-9)
