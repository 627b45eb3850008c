"""
Kuhn Poker CFR Solver

A chance-sampled Counterfactual Regret Minimization trainer for
three-card Kuhn poker, built on NumPy accumulators.
"""

__version__ = "0.1.0"
