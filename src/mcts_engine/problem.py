"""Interface a problem must implement to be searched."""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional, Sequence


class SearchProblem(ABC):
    """State space definition supplied by the caller.

    States are opaque to the engine. Actions must be hashable, since they
    key a node's children.
    """

    @abstractmethod
    def start_state(self) -> Any:
        """State at the root of the search."""

    @abstractmethod
    def generate_possible_actions(self, state: Any) -> Sequence[Hashable]:
        """Legal actions at state; empty only at terminal states."""

    @abstractmethod
    def apply_action(self, state: Any, action: Hashable) -> Optional[Any]:
        """Successor of state under action.

        Must return a state whenever action came from
        generate_possible_actions(state).
        """

    @abstractmethod
    def state_is_non_terminal(self, state: Any) -> bool:
        """True while the state still has moves to make."""

    @abstractmethod
    def evaluate_terminal(self, state: Any) -> float:
        """Score a terminal state; this is the update that gets backed up."""
