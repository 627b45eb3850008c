"""
Exact evaluation of Kuhn poker strategy profiles.

A profile is any callable ``profile(rank, history) -> [p_pass, p_bet]``,
for example ``KuhnCFR.get_average_strategy``. The game is small enough to
enumerate every deal and every pure best response directly.
"""

from itertools import permutations, product
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from kuhn_cfr.games.base import ACTIONS, Player
from kuhn_cfr.games.kuhn import (
    DEFAULT_RANKS,
    EMPTY_HISTORY,
    append_action,
    current_player,
    is_terminal,
    terminal_utility,
)


Profile = Callable[[int, int], np.ndarray]


def decision_histories(player: Player) -> List[int]:
    """All non-terminal histories at which ``player`` acts."""
    result = []
    frontier = [EMPTY_HISTORY]
    while frontier:
        history = frontier.pop(0)
        if is_terminal(history):
            continue
        if current_player(history) == player:
            result.append(history)
        frontier.extend(append_action(history, action.id) for action in ACTIONS)
    return result


def _value(profile: Profile, cards: Tuple[int, int], history: int) -> float:
    """Expected utility for the player about to act at ``history``."""
    payoff = terminal_utility(cards, history)
    if payoff is not None:
        return payoff

    player = current_player(history)
    strategy = profile(cards[player], history)
    value = 0.0
    for action in ACTIONS:
        p = float(strategy[action.id])
        if p > 0:
            value -= p * _value(profile, cards, append_action(history, action.id))
    return value


def expected_value(profile: Profile, ranks: Sequence[int] = DEFAULT_RANKS) -> float:
    """
    Player 1's expected payoff when both players follow ``profile``.

    Averages over the 6 equally likely deals.
    """
    deals = list(permutations(ranks, 2))
    total = sum(_value(profile, deal, EMPTY_HISTORY) for deal in deals)
    return total / len(deals)


def best_response_value(
    profile: Profile,
    player: Player,
    ranks: Sequence[int] = DEFAULT_RANKS
) -> float:
    """
    Best payoff ``player`` can achieve against the opponent's part of ``profile``.

    Every pure strategy of ``player`` (one action per information set) is
    evaluated; a best response always exists among them.
    """
    player = Player(player)
    infosets = [(rank, history) for rank in ranks for history in decision_histories(player)]

    best = -np.inf
    for choice in product(range(len(ACTIONS)), repeat=len(infosets)):
        pure: Dict[Tuple[int, int], np.ndarray] = {}
        for infoset, action_id in zip(infosets, choice):
            strategy = np.zeros(len(ACTIONS))
            strategy[action_id] = 1.0
            pure[infoset] = strategy

        def mixed(rank: int, history: int) -> np.ndarray:
            strategy = pure.get((rank, history))
            return profile(rank, history) if strategy is None else strategy

        value = expected_value(mixed, ranks)
        if player == Player.PLAYER_2:
            value = -value
        best = max(best, value)
    return float(best)


def exploitability(profile: Profile, ranks: Sequence[int] = DEFAULT_RANKS) -> float:
    """
    Sum of both players' best response values against ``profile``.

    Zero exactly at a Nash equilibrium, positive otherwise.
    """
    return sum(best_response_value(profile, player, ranks) for player in Player)
