"""
Chance-sampled CFR (Counterfactual Regret Minimization) Solver for Kuhn Poker.

Every iteration deals one random pair of cards and walks the full betting
tree for that deal depth-first, updating the regret and strategy
accumulators of every information set it reaches.

Actions whose current strategy probability is exactly zero are not
traversed. Their counterfactual utility counts as zero both in the node
value and in the regret update, which differs from textbook vanilla CFR
where every action is evaluated. Lines that stop being reached keep their
early average, so the trained profile retains a residual exploitability
(about 0.17) even though its game value still converges to -1/18.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from kuhn_cfr.engine.backend import get_backend, PrecisionType
from kuhn_cfr.engine.ops import sample_index, uniform_strategy
from kuhn_cfr.games.base import ACTIONS, NUM_ACTIONS, Player
from kuhn_cfr.games.kuhn import (
    DEFAULT_RANKS,
    EMPTY_HISTORY,
    HISTORY_BITS,
    HISTORY_MASK,
    append_action,
    current_player,
    deal_cards,
    history_from_string,
    history_length,
    infoset_key,
    infoset_key_name,
    terminal_utility,
    validate_ranks,
)
from kuhn_cfr.solvers.evaluation import expected_value, exploitability
from kuhn_cfr.solvers.node import Node

logger = logging.getLogger(__name__)

History = Union[int, str]


@dataclass
class TrainerConfig:
    """Training configuration."""
    iterations: int = 100_000
    precision: PrecisionType = 'float64'
    ranks: Tuple[int, int, int] = DEFAULT_RANKS
    seed: Optional[int] = None
    log_every: int = 0  # progress log period in iterations, 0 disables


def _as_history(history: History) -> int:
    if isinstance(history, str):
        return history_from_string(history)
    if not EMPTY_HISTORY <= history < 1 << HISTORY_BITS:
        raise ValueError(f"Packed history {history:#b} is not a Kuhn history")
    return history


class KuhnCFR:
    """
    CFR trainer for Kuhn poker.

    Owns the information set store: a dict from packed information set key
    to Node, filled lazily during training. Each instance has its own store.
    """

    def __init__(
        self,
        iterations: int = 100_000,
        precision: PrecisionType = 'float64',
        ranks: Sequence[int] = DEFAULT_RANKS,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        log_every: int = 0
    ):
        """
        Initialize the CFR solver.

        Args:
            iterations: Number of deals to train on per call to train()
            precision: 'float64' or 'float32' for every accumulator
            ranks: The three distinct card ranks, higher beats lower
            seed: Seed for the deal generator, ignored if rng is given
            rng: Deal generator
            log_every: Log progress every this many iterations (0 = never)

        Raises:
            ValueError: if the deck or precision is invalid
        """
        self.backend = get_backend(precision)
        self.ranks = validate_ranks(ranks)
        self.num_iterations = int(iterations)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.log_every = log_every

        self.nodes: Dict[int, Node] = {}
        self.iterations_done = 0

        self._zero = self.backend.scalar(0.0)
        self._one = self.backend.scalar(1.0)

        max_iterations = self.backend.max_iterations
        if max_iterations is not None and self.num_iterations > max_iterations:
            logger.warning(
                "%d iterations in %s precision may lose accuracy; "
                "use float64 beyond %d iterations",
                self.num_iterations, self.backend.name, max_iterations
            )

    @classmethod
    def from_config(cls, config: TrainerConfig) -> 'KuhnCFR':
        """Build a solver from a TrainerConfig."""
        return cls(
            iterations=config.iterations,
            precision=config.precision,
            ranks=config.ranks,
            seed=config.seed,
            log_every=config.log_every,
        )

    # =========================================================================
    # Training
    # =========================================================================

    def train(self, should_stop: Optional[Callable[[], bool]] = None):
        """
        Run the configured number of CFR iterations.

        Args:
            should_stop: Polled once per iteration; training ends early
                when it returns True

        Returns:
            Average utility of player 1 over the completed iterations, an
            estimate of the game value (-1/18 at equilibrium). Zero if no
            iteration ran.
        """
        if self.num_iterations <= 0:
            logger.warning("Iteration count %d is not positive, nothing to train", self.num_iterations)
            return self._zero

        logger.info(
            "Training Kuhn CFR for %d iterations (%s precision)",
            self.num_iterations, self.backend.name
        )

        total = self._zero
        completed = 0
        for _ in range(self.num_iterations):
            if should_stop is not None and should_stop():
                logger.info("Stopped after %d of %d iterations", completed, self.num_iterations)
                break

            cards = deal_cards(self.rng, self.ranks)
            total += self.cfr(cards, EMPTY_HISTORY, self._one, self._one)
            completed += 1
            self.iterations_done += 1

            if self.log_every and completed % self.log_every == 0:
                logger.info(
                    "Iteration %d/%d: average value %.5f, %d infosets",
                    completed, self.num_iterations, total / completed, len(self.nodes)
                )

        if completed == 0:
            return self._zero
        return self.backend.scalar(total / completed)

    def cfr(self, cards: Tuple[int, int], history: int, p0, p1):
        """
        Recursively compute the counterfactual value of a history.

        Args:
            cards: (player 1 rank, player 2 rank)
            history: Packed action history
            p0: Player 1's reach probability of ``history``
            p1: Player 2's reach probability of ``history``

        Returns:
            Utility for the player about to act at ``history``
        """
        payoff = terminal_utility(cards, history)
        if payoff is not None:
            return self.backend.scalar(payoff)

        player = current_player(history)
        reach = (p0, p1)

        # Update local strategy and accumulate average strategy
        node = self._get_or_create_node(infoset_key(cards[player], history))
        strategy = node.update_strategy(reach[player])

        util = self._zero
        utilities = self.backend.zeros(NUM_ACTIONS)
        for action in ACTIONS:
            p = strategy[action.id]
            if p > 0:
                next_history = append_action(history, action.id)
                if player == Player.PLAYER_1:
                    utilities[action.id] = -self.cfr(cards, next_history, p0 * p, p1)
                else:
                    utilities[action.id] = -self.cfr(cards, next_history, p0, p1 * p)
                util += utilities[action.id] * p

        # Accumulate regrets, weighted by the opponent's reach
        node.regret_sum += reach[player.opponent] * (utilities - util)

        return util

    def _get_or_create_node(self, key: int) -> Node:
        node = self.nodes.get(key)
        if node is None:
            node = Node(key, self.backend)
            self.nodes[key] = node
        return node

    # =========================================================================
    # Queries
    # =========================================================================

    def get_node(self, rank: int, history: History) -> Optional[Node]:
        """Node for an information set, None if it was never visited."""
        return self.nodes.get(infoset_key(rank, _as_history(history)))

    def get_average_strategy(self, rank: int, history: History) -> np.ndarray:
        """
        Average strategy [p_pass, p_bet] for an information set.

        Args:
            rank: The acting player's rank
            history: Packed history or action symbols such as "pb"

        Returns:
            Uniform strategy for information sets never visited
        """
        node = self.get_node(rank, history)
        if node is None:
            return uniform_strategy(NUM_ACTIONS, self.backend.dtype)
        return node.average_strategy()

    def get_current_strategy(self, rank: int, history: History) -> np.ndarray:
        """Current regret-matched strategy, uniform if never visited."""
        node = self.get_node(rank, history)
        if node is None:
            return uniform_strategy(NUM_ACTIONS, self.backend.dtype)
        return node.current_strategy()

    def sample_action(self, rank: int, history: History, uniform: Callable[[], float]) -> int:
        """
        Pick an action id by sampling the trained average strategy.

        Args:
            uniform: Zero-argument callable returning a float in [0, 1)
        """
        node = self.get_node(rank, history)
        if node is None:
            return sample_index(self.backend.zeros(NUM_ACTIONS), uniform)
        return node.sample_action(uniform)

    def strategy_profile(self) -> Dict[str, np.ndarray]:
        """Average strategy of every visited information set, by readable key."""
        return {
            infoset_key_name(key): self.nodes[key].average_strategy()
            for key in sorted(self.nodes)
        }

    @property
    def num_infosets(self) -> int:
        return len(self.nodes)

    def game_value(self) -> float:
        """Exact player 1 value when both players use the average strategy."""
        return expected_value(self.get_average_strategy, self.ranks)

    def exploitability(self) -> float:
        """Exploitability of the average strategy (0 at Nash equilibrium)."""
        return exploitability(self.get_average_strategy, self.ranks)

    # =========================================================================
    # Debug output
    # =========================================================================

    def dump(self) -> str:
        """Every visited information set with its raw accumulators."""
        lines = [
            f"KuhnCFR(precision={self.backend.name}, "
            f"iterations_done={self.iterations_done}, infosets={len(self.nodes)})"
        ]
        for key in sorted(self.nodes):
            node = self.nodes[key]
            lines.append(
                f"  {infoset_key_name(key):6s} "
                f"regret_sum={np.array2string(node.regret_sum, precision=4)} "
                f"strategy_sum={np.array2string(node.strategy_sum, precision=4)}"
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.dump()

    def print_strategy(self) -> None:
        """Print the average strategy for all infosets."""
        print(f"\nAverage Strategy after {self.iterations_done} iterations:")
        print("-" * 50)

        for key in sorted(self.nodes):
            name = infoset_key_name(key)
            player = Player(history_length(key & HISTORY_MASK) % 2)
            probs = self.nodes[key].average_strategy()
            action_strs = [f"{action.name}={probs[action.id]:.3f}" for action in ACTIONS]
            print(f"P{player + 1} [{name}]: {', '.join(action_strs)}")
