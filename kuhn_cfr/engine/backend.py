"""
Precision abstraction for the CFR accumulators.

The whole solver is parameterised by one floating point type:
- float64 (default): safe for any practical iteration count
- float32: halves memory, but regret and strategy sums grow without
  bound and lose resolution; keep runs at or below ~10^6 iterations

Usage:
    backend = get_backend('float32')  # or 'float64'
    x = backend.zeros(2)
    p = backend.scalar(1.0)
"""

from typing import Literal, Tuple
from dataclasses import dataclass
import numpy as np


PrecisionType = Literal['float64', 'float32']

# Largest iteration count recommended for each precision
RECOMMENDED_MAX_ITERATIONS = {
    'float64': None,
    'float32': 1_000_000,
}


@dataclass(frozen=True)
class Backend:
    """
    Array backend for one floating point precision.

    Provides consistent array and scalar construction so every value the
    solver touches shares the same dtype.
    """
    name: PrecisionType
    dtype: type

    def zeros(self, shape):
        """Create zero-filled array."""
        return np.zeros(shape, dtype=self.dtype)

    def full(self, shape, fill_value):
        """Create array filled with value."""
        return np.full(shape, fill_value, dtype=self.dtype)

    def scalar(self, value):
        """Create a scalar of this precision."""
        return self.dtype(value)

    @property
    def max_iterations(self):
        """Recommended iteration ceiling, None if unbounded."""
        return RECOMMENDED_MAX_ITERATIONS[self.name]


# Global backend cache
_backends = {}


def get_backend(name: PrecisionType = 'float64') -> Backend:
    """
    Get or create a backend instance.

    Args:
        name: 'float64' for double or 'float32' for single precision

    Returns:
        Backend instance
    """
    if name in _backends:
        return _backends[name]

    if name == 'float64':
        backend = Backend(name='float64', dtype=np.float64)
    elif name == 'float32':
        backend = Backend(name='float32', dtype=np.float32)
    else:
        raise ValueError(f"Unknown precision: {name}. Use 'float64' or 'float32'.")

    _backends[name] = backend
    return backend


def available_precisions() -> Tuple[str, ...]:
    """Names accepted by get_backend."""
    return tuple(RECOMMENDED_MAX_ITERATIONS)
