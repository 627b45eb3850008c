"""
Numeric layer (Layer 2).

This layer provides precision selection and the small vector operations
CFR needs at every information set.
It may only import from: kuhn_cfr.games
"""

from kuhn_cfr.engine.backend import (
    get_backend,
    available_precisions,
    Backend,
)

from kuhn_cfr.engine.ops import (
    regret_match,
    normalize,
    uniform_strategy,
    sample_index,
    is_valid_distribution,
)

__all__ = [
    'get_backend',
    'available_precisions',
    'Backend',
    'regret_match',
    'normalize',
    'uniform_strategy',
    'sample_index',
    'is_valid_distribution',
]
