"""
Tests for CFR vector operations (regret matching, sampling).

Run with: pytest tests/test_ops.py -v
"""

import pytest
import numpy as np

from kuhn_cfr.engine.ops import (
    regret_match,
    normalize,
    uniform_strategy,
    sample_index,
    is_valid_distribution,
)


class TestUniformStrategy:
    """Test uniform strategy creation."""

    def test_values(self):
        np.testing.assert_allclose(uniform_strategy(2), [0.5, 0.5])

    def test_dtype(self):
        assert uniform_strategy(2, np.float32).dtype == np.float32

    def test_is_valid_distribution(self):
        assert is_valid_distribution(uniform_strategy(3))


class TestRegretMatch:
    """Test regret matching."""

    def test_proportional_to_positive_regret(self):
        strategy = regret_match(np.array([1.0, 3.0]))
        np.testing.assert_allclose(strategy, [0.25, 0.75])

    def test_negative_regret_ignored(self):
        strategy = regret_match(np.array([-5.0, 2.0]))
        np.testing.assert_allclose(strategy, [0.0, 1.0])

    def test_all_non_positive_is_uniform(self):
        np.testing.assert_allclose(regret_match(np.array([0.0, 0.0])), [0.5, 0.5])
        np.testing.assert_allclose(regret_match(np.array([-1.0, -2.0])), [0.5, 0.5])

    def test_preserves_dtype(self):
        strategy = regret_match(np.array([1.0, -1.0], dtype=np.float32))
        assert strategy.dtype == np.float32

    def test_does_not_modify_input(self):
        regrets = np.array([-1.0, 2.0])
        regret_match(regrets)
        np.testing.assert_array_equal(regrets, [-1.0, 2.0])


class TestNormalize:
    """Test normalization with uniform fallback."""

    def test_normalizes(self):
        np.testing.assert_allclose(normalize(np.array([2.0, 6.0])), [0.25, 0.75])

    def test_zero_sum_is_uniform(self):
        np.testing.assert_allclose(normalize(np.zeros(2)), [0.5, 0.5])


class TestSampleIndex:
    """Test sampling with an injected uniform source."""

    def test_proportional_sampling(self):
        weights = np.array([1.0, 3.0])
        assert sample_index(weights, lambda: 0.2) == 0
        assert sample_index(weights, lambda: 0.3) == 1
        assert sample_index(weights, lambda: 0.99) == 1

    def test_boundary_goes_to_next_action(self):
        """u * total equal to a cumulative weight picks the next action."""
        assert sample_index(np.array([1.0, 3.0]), lambda: 0.25) == 1

    def test_zero_weight_never_sampled(self):
        weights = np.array([0.0, 2.0])
        for u in (0.0, 0.1, 0.5, 0.999):
            assert sample_index(weights, lambda: u) == 1

    def test_zero_weights_sample_uniformly(self):
        weights = np.zeros(2)
        assert sample_index(weights, lambda: 0.4) == 0
        assert sample_index(weights, lambda: 0.6) == 1

    def test_unnormalized_weights(self):
        assert sample_index(np.array([10.0, 30.0]), lambda: 0.5) == 1

    def test_with_numpy_generator(self):
        rng = np.random.default_rng(3)
        weights = np.array([1.0, 1.0])
        samples = [sample_index(weights, rng.random) for _ in range(2000)]
        assert 800 < sum(samples) < 1200


class TestIsValidDistribution:

    def test_valid(self):
        assert is_valid_distribution(np.array([0.3, 0.7]))

    def test_negative(self):
        assert not is_valid_distribution(np.array([-0.1, 1.1]))

    def test_bad_sum(self):
        assert not is_valid_distribution(np.array([0.3, 0.3]))
