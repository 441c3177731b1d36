"""Pytest fixtures for testing."""

import pytest
import numpy as np

from mcts_engine.problem import SearchProblem


class BinaryTreeProblem(SearchProblem):
    """Two actions per step; states are the tuple of actions taken so far."""

    def __init__(self, depth=2, values=None, noise=0.0, seed=0):
        self.depth = depth
        self.values = values if values is not None else {(0, 0): 10.0}
        self.noise = noise
        self.rng = np.random.default_rng(seed)

    def start_state(self):
        return ()

    def generate_possible_actions(self, state):
        if len(state) >= self.depth:
            return []
        return [0, 1]

    def apply_action(self, state, action):
        return state + (action,)

    def state_is_non_terminal(self, state):
        return len(state) < self.depth

    def evaluate_terminal(self, state):
        value = self.values.get(state, 0.0)
        if self.noise:
            value += float(self.rng.normal(0.0, self.noise))
        return value


class SubsetSelectionProblem(SearchProblem):
    """Pick one item from every group; the reward is the summed weight."""

    def __init__(self, weights):
        self.weights = weights

    def start_state(self):
        return frozenset()

    def generate_possible_actions(self, state):
        chosen_groups = {group for group, _ in state}
        return [
            (group, item)
            for group, items in enumerate(self.weights)
            if group not in chosen_groups
            for item in range(len(items))
        ]

    def apply_action(self, state, action):
        return state | {action}

    def state_is_non_terminal(self, state):
        return len(state) < len(self.weights)

    def evaluate_terminal(self, state):
        return float(sum(self.weights[group][item] for group, item in state))


class EmptyTransitionProblem(BinaryTreeProblem):
    """apply_action loses the state for action 1."""

    def apply_action(self, state, action):
        if action == 1:
            return None
        return state + (action,)


class StuckProblem(BinaryTreeProblem):
    """Never terminal, and out of actions after one step."""

    def generate_possible_actions(self, state):
        return [0] if not state else []

    def state_is_non_terminal(self, state):
        return True


class EndlessProblem(BinaryTreeProblem):
    """Always offers actions and never terminates."""

    def generate_possible_actions(self, state):
        return [0, 1]

    def state_is_non_terminal(self, state):
        return True


@pytest.fixture
def seed():
    """Seed for reproducible searches."""
    return 42


@pytest.fixture
def binary_problem():
    """Depth-2 binary tree with terminal values {10, 0, 0, 0}."""
    return BinaryTreeProblem(depth=2, values={(0, 0): 10.0})


@pytest.fixture
def noisy_binary_problem():
    """Depth-3 binary tree with noisy terminal evaluations."""
    values = {state: float(i) for i, state in enumerate(
        (a, b, c) for a in (0, 1) for b in (0, 1) for c in (0, 1)
    )}
    return BinaryTreeProblem(depth=3, values=values, noise=2.0, seed=7)


@pytest.fixture
def subset_problem():
    """Three groups; the best selection is items (0,1), (1,2), (2,2) worth 15."""
    return SubsetSelectionProblem([[1, 5, 2], [3, 1, 4], [2, 2, 6]])


@pytest.fixture
def empty_transition_problem():
    return EmptyTransitionProblem(depth=2)


@pytest.fixture
def stuck_problem():
    return StuckProblem(depth=2)


@pytest.fixture
def endless_problem():
    return EndlessProblem(depth=2)


@pytest.fixture
def deep_problem():
    """Binary tree deeper than the default recursion limit."""
    return BinaryTreeProblem(depth=3000, values={})
