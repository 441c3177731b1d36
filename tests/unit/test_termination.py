"""Unit tests for termination criteria."""

import pytest

from mcts_engine.reward import ScalarReward
from mcts_engine.termination import IterationTermination, TerminationCriterion, TimeTermination
from mcts_engine.tree import MCTSTree
from mcts_engine.variants import standard_mcts


class TickingClock:
    """Fake clock advancing by step on every read."""

    def __init__(self, step=1.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def tree():
    return MCTSTree((), ScalarReward())


def test_iteration_threshold(tree):
    criterion = IterationTermination(3)
    criterion.init()
    assert criterion.within_budget(tree)
    tree.root.visits = 2
    assert criterion.within_budget(tree)
    tree.root.visits = 3
    assert not criterion.within_budget(tree)


def test_iteration_threshold_validation():
    with pytest.raises(ValueError):
        IterationTermination(-1)


def test_time_budget_with_fake_clock(tree):
    criterion = TimeTermination(2.5, clock=TickingClock())
    criterion.init()
    assert criterion.within_budget(tree)
    assert criterion.within_budget(tree)
    assert not criterion.within_budget(tree)


def test_time_budget_validation():
    with pytest.raises(ValueError):
        TimeTermination(-0.1)


def test_exactly_fifty_iterations(binary_problem):
    search = standard_mcts(binary_problem, termination=IterationTermination(50), seed=1)
    tree = search.run()
    assert tree.root.visits == 50
    assert search.last_run_stats["iterations"] == 50


def test_zero_time_budget_runs_no_iterations(binary_problem):
    search = standard_mcts(binary_problem, termination=TimeTermination(0.0), seed=1)
    tree = search.run()
    assert tree.root.visits == 0
    assert len(tree) == 1
    assert search.best_action(tree) is None


def test_time_budget_counts_iterations(binary_problem):
    # init reads t=0, then checks read t=1, 2, 3 (pass) and t=4 (stop)
    termination = TimeTermination(3.5, clock=TickingClock())
    search = standard_mcts(binary_problem, termination=termination, seed=1)
    tree = search.run()
    assert tree.root.visits == 3


def test_real_clock_budget(binary_problem):
    search = standard_mcts(binary_problem, termination=TimeTermination(0.05), seed=1)
    tree = search.run()
    assert tree.root.visits > 0


def test_custom_criterion(binary_problem):
    class RootValueTermination(TerminationCriterion):
        def __init__(self):
            self.initialised = False

        def init(self):
            self.initialised = True

        def within_budget(self, tree):
            return tree.root.visits < 10 or tree.root.reward < 3.0

    criterion = RootValueTermination()
    search = standard_mcts(binary_problem, termination=criterion, seed=3)
    tree = search.run()
    assert criterion.initialised
    assert tree.root.visits >= 10
    assert tree.root.reward >= 3.0
