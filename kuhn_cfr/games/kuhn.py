"""
Kuhn Poker rules.

Kuhn Poker is a simplified poker game:
- 3-card deck of distinct ranks (1 < 2 < 3 by default)
- Each player antes 1 chip and is dealt one card, the third is unused
- Player 1 acts first: Pass or Bet
- Betting continues until two equal actions in a row or a pass after a bet
- Higher card wins at showdown

Histories are packed into integers: a sentinel 1 bit followed by one bit
per action (1 = bet). The empty history is 1, "p" is 0b10, "pb" is 0b101.
Information set keys pack the acting player's rank above the history.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from .base import ACTIONS, ACTION_BY_NAME, Player


DEFAULT_RANKS: Tuple[int, int, int] = (1, 2, 3)

EMPTY_HISTORY = 1
MAX_HISTORY_LENGTH = 4

# A history of at most 4 actions plus the sentinel fits in 5 bits
HISTORY_BITS = MAX_HISTORY_LENGTH + 1
HISTORY_MASK = (1 << HISTORY_BITS) - 1


def validate_ranks(ranks: Sequence[int]) -> Tuple[int, int, int]:
    """
    Check that a deck holds exactly three distinct integer ranks.

    Ranks must also be non-negative: information set keys pack the rank
    above the history bits (``rank << HISTORY_BITS``), and a negative rank
    would collide with other keys.

    Raises:
        ValueError: if the deck is malformed
    """
    ranks = tuple(ranks)
    if len(ranks) != 3:
        raise ValueError(f"Kuhn poker needs exactly 3 ranks, got {len(ranks)}: {ranks}")
    for rank in ranks:
        if isinstance(rank, bool) or not isinstance(rank, (int, np.integer)):
            raise ValueError(f"Ranks must be integers, got {rank!r}")
        if rank < 0:
            raise ValueError(f"Ranks must be non-negative, got {rank}")
    if len(set(ranks)) != 3:
        raise ValueError(f"Ranks must be distinct, got {ranks}")
    return tuple(int(rank) for rank in ranks)


def deal_cards(rng: np.random.Generator, ranks: Sequence[int] = DEFAULT_RANKS) -> Tuple[int, int]:
    """Shuffle the deck and deal the first two cards to player 1 and player 2."""
    order = rng.permutation(3)
    return int(ranks[order[0]]), int(ranks[order[1]])


# =============================================================================
# Packed histories
# =============================================================================

def history_length(history: int) -> int:
    """Number of actions in a packed history."""
    return history.bit_length() - 1


def append_action(history: int, action_id: int) -> int:
    """Packed history after taking an action."""
    return (history << 1) | action_id


def current_player(history: int) -> Player:
    """Player about to act: even length means player 1."""
    return Player(history_length(history) % 2)


def history_from_string(actions: str) -> int:
    """
    Pack a history written as action symbols, e.g. "pb".

    Raises:
        ValueError: on unknown symbols or a history longer than the game
    """
    if len(actions) > MAX_HISTORY_LENGTH:
        raise ValueError(
            f"History {actions!r} is longer than {MAX_HISTORY_LENGTH} actions"
        )
    history = EMPTY_HISTORY
    for symbol in actions:
        if symbol not in ACTION_BY_NAME:
            raise ValueError(f"Unknown action symbol {symbol!r} in {actions!r}")
        history = append_action(history, ACTION_BY_NAME[symbol].id)
    return history


def history_to_string(history: int) -> str:
    """Render a packed history as action symbols."""
    if history < EMPTY_HISTORY:
        raise ValueError(f"Invalid packed history: {history}")
    n = history_length(history)
    if n > MAX_HISTORY_LENGTH:
        raise ValueError(f"Packed history {history} is longer than {MAX_HISTORY_LENGTH} actions")
    return ''.join(
        ACTIONS[(history >> (n - 1 - i)) & 1].name for i in range(n)
    )


# =============================================================================
# Information sets
# =============================================================================

def infoset_key(rank: int, history: int) -> int:
    """
    Information set key for the acting player.

    Player knows: their own rank + action history
    Player doesn't know: opponent's rank
    """
    return (rank << HISTORY_BITS) | history


def infoset_key_name(key: int) -> str:
    """Human-readable key, e.g. "2pb" for rank 2 after pass-bet."""
    rank = key >> HISTORY_BITS
    history = key & HISTORY_MASK
    return f"{rank}{history_to_string(history)}"


# =============================================================================
# Terminal states
# =============================================================================

def terminal_utility(cards: Sequence[int], history: int) -> Optional[float]:
    """
    Payoff for the player about to act at a terminal history.

    Cases:
        pp:        showdown for the ante, +/-1
        bb, pbb:   showdown for ante and bet, +/-2
        bp, pbp:   the other player folded, exactly 1 regardless of ranks

    Returns:
        The payoff, or None if the history is not terminal
    """
    if history_length(history) < 2:
        return None

    last = history & 1
    previous = (history >> 1) & 1
    if last == previous:
        payoff = 1.0 if last == 0 else 2.0
        player = history_length(history) % 2
        return payoff if cards[player] > cards[1 - player] else -payoff
    if last == 0:
        return 1.0
    return None


def is_terminal(history: int) -> bool:
    """True if no further action is possible after this history."""
    n = history_length(history)
    if n < 2:
        return False
    last = history & 1
    previous = (history >> 1) & 1
    return last == previous or last == 0
