"""Bandit functions for MCTS selection.

UCB1:        score = X + C * sqrt(2 ln(N_parent) / N_child)
Pedroso-Rei: score = norm(X) + balance * Cp * sqrt(2 ln(N_parent) / N_child)

where norm() maps X into [0, 1] against the best and worst simulation
results observed so far in the run. Unvisited children score +inf so that
every expanded action is sampled before comparisons matter.
"""

import math
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

import numpy as np

from .node import TreeNode
from .reward.normalization import normalize_reward

OBJECTIVES = ("maximize", "minimize")

# Default exploration constants: C for UCB1, Cp for Pedroso-Rei
UCB1_EXPLORATION = 1.0 / math.sqrt(2.0)
PEDROSO_REI_CP = 1.0 / 0.707


def exploration_term(parent_visits: int, child_visits: int) -> float:
    """sqrt(2 ln(N_parent) / N_child) for a visited child."""
    return math.sqrt(2.0 * math.log(max(parent_visits, 1)) / child_visits)


def ucb1_score(
    exploitation: float,
    parent_visits: int,
    child_visits: int,
    c: float = UCB1_EXPLORATION
) -> float:
    """Compute UCB1 score.

    Args:
        exploitation: Exploitation value of the child's reward
        parent_visits: Visit count of the parent
        child_visits: Visit count of the child
        c: Exploration constant

    Returns:
        UCB1 score, +inf for an unvisited child
    """
    if child_visits == 0:
        return math.inf
    return exploitation + c * exploration_term(parent_visits, child_visits)


@dataclass
class PedrosoReiCoefficients:
    """Per-run coefficients of the Pedroso-Rei bandit.

    global_best / global_worst are the live bounds of all simulation
    results seen in this run. They start unset unless given, and are
    seeded by the first observed update.

    Attributes:
        cp: Exploration parameter
        balance: Search-balance multiplier applied to the exploration term
        objective: "maximize" or "minimize"
        global_best: Best simulation result so far
        global_worst: Worst simulation result so far
    """
    cp: float = PEDROSO_REI_CP
    balance: float = 1.0
    objective: str = "maximize"
    global_best: Optional[float] = None
    global_worst: Optional[float] = None

    def __post_init__(self):
        if self.objective not in OBJECTIVES:
            raise ValueError(f"Unknown objective: {self.objective}")

    def observe(self, update: float) -> None:
        """Widen the global bounds to include update."""
        value = float(update)
        better, worse = (max, min) if self.objective == "maximize" else (min, max)
        self.global_best = value if self.global_best is None else better(self.global_best, value)
        self.global_worst = value if self.global_worst is None else worse(self.global_worst, value)

    def normalize(self, value: float) -> float:
        """Map value into [0, 1]; 0.5 while no variation has been observed."""
        return normalize_reward(value, worst=self.global_worst, best=self.global_best)


def pedroso_rei_score(
    reward: float,
    parent_visits: int,
    child_visits: int,
    coefficients: PedrosoReiCoefficients
) -> float:
    """Compute the Pedroso-Rei score.

    Args:
        reward: Raw (unnormalized) mean reward of the child
        parent_visits: Visit count of the parent
        child_visits: Visit count of the child
        coefficients: Live run coefficients

    Returns:
        Score, +inf for an unvisited child
    """
    if child_visits == 0:
        return math.inf
    exploration = coefficients.balance * coefficients.cp * exploration_term(parent_visits, child_visits)
    return coefficients.normalize(reward) + exploration


class UCB1:
    """Standard UCB1 bandit over any reward representation."""

    def __init__(self, reward_rule, exploration_constant: float = UCB1_EXPLORATION):
        self.reward_rule = reward_rule
        self.exploration_constant = exploration_constant

    def exploitation(self, node: TreeNode) -> float:
        return self.reward_rule.exploitation(node.reward)

    def score(self, node: TreeNode, parent_visits: int) -> float:
        if node.visits == 0:
            return math.inf
        return ucb1_score(
            self.exploitation(node),
            parent_visits,
            node.visits,
            self.exploration_constant
        )

    def observe(self, update: float) -> None:
        """UCB1 keeps no run-level state."""

    def reset(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"UCB1(c={self.exploration_constant:.4f}, reward={self.reward_rule!r})"


class PedrosoRei:
    """Pedroso-Rei bandit: UCB on rewards normalized by global bounds."""

    def __init__(self, reward_rule, coefficients: Optional[PedrosoReiCoefficients] = None):
        self.reward_rule = reward_rule
        self.coefficients = coefficients or PedrosoReiCoefficients()
        self._initial = replace(self.coefficients)

    def exploitation(self, node: TreeNode) -> float:
        """Normalized reward, higher is better for either objective."""
        return self.coefficients.normalize(self.reward_rule.exploitation(node.reward))

    def score(self, node: TreeNode, parent_visits: int) -> float:
        return pedroso_rei_score(
            self.reward_rule.exploitation(node.reward),
            parent_visits,
            node.visits,
            self.coefficients
        )

    def observe(self, update: float) -> None:
        self.coefficients.observe(update)

    def reset(self) -> None:
        """Restore the bounds given at construction for a new run."""
        self.coefficients.global_best = self._initial.global_best
        self.coefficients.global_worst = self._initial.global_worst

    def __repr__(self) -> str:
        return f"PedrosoRei({self.coefficients})"


def select_best_child(
    children: Sequence[TreeNode],
    key: Callable[[TreeNode], float],
    rng: Optional[np.random.Generator] = None
) -> TreeNode:
    """Select the child maximizing key.

    Ties go to the first maximum in iteration order, or to a uniformly
    random maximum when rng is given.

    Args:
        children: Candidate child nodes
        key: Scoring function
        rng: Generator used for random tie-breaking

    Returns:
        Best child node
    """
    if not children:
        raise ValueError("No children to select from")

    best: List[TreeNode] = []
    best_score = -math.inf
    for child in children:
        score = key(child)
        if not best or score > best_score:
            best = [child]
            best_score = score
        elif score == best_score:
            best.append(child)

    if rng is None or len(best) == 1:
        return best[0]
    return best[int(rng.integers(len(best)))]
