"""
Core CFR vector operations.

All operations act on the per-information-set action vectors (length 2
for Kuhn poker) and preserve the dtype of their input.
"""

from typing import Callable

import numpy as np


def normalize(weights: np.ndarray) -> np.ndarray:
    """
    Turn non-negative weights into a probability distribution.

        if sum(weights) > 0:
            result = weights / sum(weights)
        else:
            result = uniform over actions

    Args:
        weights: Array of shape (num_actions,), non-negative

    Returns:
        Array of the same shape and dtype summing to 1
    """
    total = weights.sum()
    if total > 0:
        return weights / total
    return uniform_strategy(len(weights), weights.dtype)


def regret_match(regret_sum: np.ndarray) -> np.ndarray:
    """
    Convert cumulative regrets to a strategy via regret matching.

    Strategy is proportional to positive regrets. Falls back to uniform if
    all regrets are <= 0 (including the initial state before any update).

    Args:
        regret_sum: Array of shape (num_actions,), may be negative

    Returns:
        strategy: valid probability distribution, same dtype
    """
    return normalize(np.maximum(regret_sum, 0))


def uniform_strategy(num_actions: int, dtype=np.float64) -> np.ndarray:
    """Equal probability for every action."""
    return np.full(num_actions, 1.0 / num_actions, dtype=dtype)


def sample_index(weights: np.ndarray, uniform: Callable[[], float]) -> int:
    """
    Draw an index with probability proportional to its weight.

    The random source is injected so callers control determinism; pass
    ``rng.random`` for a numpy Generator or ``random.random``.

    Args:
        weights: Non-negative weights, need not be normalized
        uniform: Zero-argument callable returning a float in [0, 1)

    Returns:
        Sampled index. All-zero weights are sampled uniformly.
    """
    n = len(weights)
    u = float(uniform())
    total = float(weights.sum())
    if total <= 0:
        return min(int(u * n), n - 1)

    cumulative = np.cumsum(weights, dtype=np.float64)
    index = int(np.searchsorted(cumulative, u * total, side='right'))
    # u * total can round up to the last cumulative weight
    return min(index, n - 1)


def is_valid_distribution(probs: np.ndarray, tolerance: float = 1e-6) -> bool:
    """Non-negative entries summing to 1 within tolerance."""
    return bool(np.all(probs >= 0)) and abs(float(probs.sum()) - 1.0) <= tolerance
