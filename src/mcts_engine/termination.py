"""Termination criteria for the search loop.

A criterion is initialised once per run and then asked, before every
iteration, whether the run is still within its computational budget.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .tree import MCTSTree


class TerminationCriterion(ABC):
    """Stateful predicate deciding whether the search continues."""

    def init(self) -> None:
        """Reset per-run state; called once before the loop."""

    @abstractmethod
    def within_budget(self, tree: MCTSTree) -> bool:
        """True while another iteration may start."""


class IterationTermination(TerminationCriterion):
    """Stop once the root has been visited iteration_threshold times."""

    def __init__(self, iteration_threshold: int):
        if iteration_threshold < 0:
            raise ValueError("iteration_threshold must be non-negative")
        self.iteration_threshold = iteration_threshold

    def within_budget(self, tree: MCTSTree) -> bool:
        return tree.root.visits < self.iteration_threshold

    def __repr__(self) -> str:
        return f"IterationTermination(iteration_threshold={self.iteration_threshold})"


class TimeTermination(TerminationCriterion):
    """Stop once time_budget seconds of wall clock have elapsed.

    The clock is read once per check. An iteration that starts inside the
    budget always completes, so a run can overrun by one iteration. A zero
    budget performs no iterations.
    """

    def __init__(self, time_budget: float, clock: Callable[[], float] = time.monotonic):
        if time_budget < 0:
            raise ValueError("time_budget must be non-negative")
        self.time_budget = time_budget
        self.clock = clock
        self.start_time: Optional[float] = None

    def init(self) -> None:
        self.start_time = self.clock()

    @property
    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return self.clock() - self.start_time

    def within_budget(self, tree: MCTSTree) -> bool:
        if self.start_time is None:
            self.init()
        return self.elapsed < self.time_budget

    def __repr__(self) -> str:
        return f"TimeTermination(time_budget={self.time_budget})"
