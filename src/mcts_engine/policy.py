"""Selection, expansion and simulation phases of MCTS.

tree_policy   walks down from the root with the bandit until it reaches a
              terminal state or a node with untried actions
expand        adds exactly one child for an untried action
default_policy rolls the new state forward to a terminal state and scores it
"""

import logging
from typing import Any, Callable, Hashable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .exceptions import EmptyTransitionError, NoActionSelectedError, StuckStateError
from .node import TreeNode
from .problem import SearchProblem
from .tree import MCTSTree
from .ucb import select_best_child

logger = logging.getLogger(__name__)

ActionSelection = Callable[[Sequence[Hashable]], Optional[Hashable]]


class RandomSelection:
    """Uniform random action selection from a seeded generator."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def __call__(self, actions: Sequence[Hashable]) -> Optional[Hashable]:
        if not actions:
            return None
        return actions[int(self.rng.integers(len(actions)))]


class Rollout(NamedTuple):
    """Result of one simulation."""
    update: float
    terminal_state: Any
    steps: int


def tree_policy(
    tree: MCTSTree,
    problem: SearchProblem,
    bandit,
    tie_rng: Optional[np.random.Generator] = None
) -> Tuple[TreeNode, List[Hashable]]:
    """Descend from the root to the frontier.

    Args:
        tree: Search tree
        problem: Problem definition
        bandit: Object with score(node, parent_visits)
        tie_rng: Generator for random tie-breaking (None = first maximum)

    Returns:
        (frontier node, untried actions there); the list is empty when the
        frontier is terminal

    Raises:
        StuckStateError: A non-terminal node offers no legal actions
    """
    node = tree.root

    while problem.state_is_non_terminal(node.state):
        legal_actions = list(problem.generate_possible_actions(node.state))
        untried = node.untried_actions(legal_actions)
        if untried:
            return node, untried

        if node.is_leaf():
            raise StuckStateError(
                f"Non-terminal state {node.state!r} has no legal actions"
            )

        parent_visits = node.visits
        node = select_best_child(
            tree.children_of(node),
            key=lambda child: bandit.score(child, parent_visits),
            rng=tie_rng
        )

    return node, []


def expand(
    tree: MCTSTree,
    node: TreeNode,
    untried_actions: Sequence[Hashable],
    problem: SearchProblem,
    rng: Optional[np.random.Generator] = None
) -> TreeNode:
    """Attach one new child for an untried action.

    Args:
        tree: Search tree
        node: Frontier node
        untried_actions: Legal actions without a child
        problem: Problem definition
        rng: Picks the action uniformly; None takes the first one

    Returns:
        The new child

    Raises:
        EmptyTransitionError: apply_action returned no state
    """
    if not untried_actions:
        raise ValueError("No untried actions to expand")

    if rng is None:
        action = untried_actions[0]
    else:
        action = untried_actions[int(rng.integers(len(untried_actions)))]

    next_state = problem.apply_action(node.state, action)
    if next_state is None:
        raise EmptyTransitionError(
            f"Applying action {action!r} to state {node.state!r} produced no state; "
            "apply_action and generate_possible_actions disagree"
        )

    return tree.add_child(node, action, next_state)


def default_policy(
    problem: SearchProblem,
    state: Any,
    select_action: ActionSelection,
    max_steps: Optional[int] = None
) -> Rollout:
    """Simulate from state until a terminal state, then evaluate it.

    Args:
        problem: Problem definition
        state: Starting state (may already be terminal)
        select_action: Picks one of the offered actions
        max_steps: Optional cap on rollout length

    Returns:
        Rollout with the terminal evaluation

    Raises:
        NoActionSelectedError: select_action returned None
        EmptyTransitionError: apply_action returned no state
        StuckStateError: no legal actions at a non-terminal state, or
            max_steps exceeded
    """
    steps = 0

    while problem.state_is_non_terminal(state):
        if max_steps is not None and steps >= max_steps:
            raise StuckStateError(
                f"Rollout did not reach a terminal state within {max_steps} steps"
            )

        actions = list(problem.generate_possible_actions(state))
        if not actions:
            raise StuckStateError(f"Non-terminal state {state!r} has no legal actions")

        action = select_action(actions)
        if action is None:
            raise NoActionSelectedError(
                f"select_action chose nothing from {len(actions)} actions"
            )

        next_state = problem.apply_action(state, action)
        if next_state is None:
            raise EmptyTransitionError(
                f"Applying action {action!r} to state {state!r} produced no state; "
                "apply_action and generate_possible_actions disagree"
            )

        state = next_state
        steps += 1

    update = problem.evaluate_terminal(state)
    logger.debug("Rollout finished after %d steps with update %s", steps, update)
    return Rollout(update=update, terminal_state=state, steps=steps)
