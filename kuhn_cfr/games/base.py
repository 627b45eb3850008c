"""
Basic building blocks shared by the game definition.

Kuhn poker has a fixed two-action alphabet; an action's id doubles as
its bit in a packed history.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Player(IntEnum):
    """Player identifiers."""
    PLAYER_1 = 0
    PLAYER_2 = 1

    @property
    def opponent(self) -> 'Player':
        return Player(1 - self.value)


@dataclass(frozen=True)
class Action:
    """An action that can be taken at a decision node."""
    id: int
    name: str


PASS = Action(id=0, name='p')  # Check / Fold
BET = Action(id=1, name='b')   # Bet / Call

ACTIONS: Tuple[Action, ...] = (PASS, BET)
NUM_ACTIONS = len(ACTIONS)

ACTION_BY_NAME = {action.name: action for action in ACTIONS}
