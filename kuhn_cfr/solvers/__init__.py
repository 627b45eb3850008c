"""
CFR solver layer (Layer 3 - highest).

This layer implements the chance-sampled CFR trainer and exact strategy
evaluation. It may import from: kuhn_cfr.games, kuhn_cfr.engine
"""

from kuhn_cfr.solvers.node import Node
from kuhn_cfr.solvers.vanilla import KuhnCFR, TrainerConfig
from kuhn_cfr.solvers.evaluation import (
    expected_value,
    best_response_value,
    exploitability,
)

__all__ = [
    'Node',
    'KuhnCFR',
    'TrainerConfig',
    'expected_value',
    'best_response_value',
    'exploitability',
]
