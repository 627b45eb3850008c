"""
Per-information-set CFR state.
"""

from typing import Callable

import numpy as np

from kuhn_cfr.engine.backend import Backend
from kuhn_cfr.engine.ops import normalize, regret_match, sample_index
from kuhn_cfr.games.base import NUM_ACTIONS


class Node:
    """
    Regret and strategy accumulators for one information set.

    Attributes:
        key: Packed information set key
        regret_sum: Cumulative counterfactual regret per action (signed)
        strategy_sum: Cumulative strategy weighted by the acting player's
            own reach probability (non-negative, non-decreasing)
        strategy: Strategy of the most recent visit
    """

    __slots__ = ('key', 'regret_sum', 'strategy_sum', 'strategy')

    def __init__(self, key: int, backend: Backend):
        self.key = key
        self.regret_sum = backend.zeros(NUM_ACTIONS)
        self.strategy_sum = backend.zeros(NUM_ACTIONS)
        self.strategy = backend.full(NUM_ACTIONS, 1.0 / NUM_ACTIONS)

    def update_strategy(self, reach: float) -> np.ndarray:
        """
        Recompute the current strategy by regret matching and accumulate it.

        Args:
            reach: The acting player's own reach probability of this
                information set (never the opponent's)

        Returns:
            The new current strategy
        """
        self.strategy = regret_match(self.regret_sum)
        self.strategy_sum += self.strategy * reach
        return self.strategy

    def current_strategy(self) -> np.ndarray:
        """Regret-matched strategy without touching the accumulators."""
        return regret_match(self.regret_sum)

    def average_strategy(self) -> np.ndarray:
        """Average strategy (converges to Nash equilibrium)."""
        return normalize(self.strategy_sum)

    def sample_action(self, uniform: Callable[[], float]) -> int:
        """Draw an action id from the average strategy."""
        return sample_index(self.strategy_sum, uniform)

    def __repr__(self) -> str:
        return (
            f"Node(key={self.key}, regret_sum={self.regret_sum.tolist()}, "
            f"strategy_sum={self.strategy_sum.tolist()})"
        )
