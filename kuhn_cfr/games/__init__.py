"""
Game definition layer (Layer 1 - lowest).

This layer describes Kuhn poker: actions, ranks, histories and payoffs.
It must not import from: kuhn_cfr.engine, kuhn_cfr.solvers
"""

from kuhn_cfr.games.base import Player, Action, PASS, BET, ACTIONS, NUM_ACTIONS
from kuhn_cfr.games.kuhn import (
    DEFAULT_RANKS,
    EMPTY_HISTORY,
    MAX_HISTORY_LENGTH,
    validate_ranks,
    deal_cards,
    history_from_string,
    history_to_string,
    history_length,
    append_action,
    current_player,
    infoset_key,
    infoset_key_name,
    is_terminal,
    terminal_utility,
)

__all__ = [
    'Player',
    'Action',
    'PASS',
    'BET',
    'ACTIONS',
    'NUM_ACTIONS',
    'DEFAULT_RANKS',
    'EMPTY_HISTORY',
    'MAX_HISTORY_LENGTH',
    'validate_ranks',
    'deal_cards',
    'history_from_string',
    'history_to_string',
    'history_length',
    'append_action',
    'current_player',
    'infoset_key',
    'infoset_key_name',
    'is_terminal',
    'terminal_utility',
]
