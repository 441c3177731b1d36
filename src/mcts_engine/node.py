"""MCTS tree node."""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Optional


@dataclass(eq=False)
class TreeNode:
    """One explored state, reachable from the root by a unique action path.

    Nodes live in an MCTSTree arena and refer to each other by index, so
    there are no reference cycles between parent and children.

    Attributes:
        state: Problem state, fixed for the node's lifetime
        action: Action that produced this node from its parent (None at root)
        reward: Accumulated reward (float or Distribution), set by backup
        visits: Number of iterations whose path passed through this node
        index: Position of this node in the owning arena
        parent: Arena index of the parent (None at root)
        children: Action -> arena index of the expanded children
        depth: 0 at root, parent depth + 1 otherwise
    """
    state: Any
    action: Optional[Hashable] = None
    reward: Any = 0.0
    visits: int = 0
    index: int = 0
    parent: Optional[int] = None
    children: Dict[Hashable, int] = field(default_factory=dict)
    depth: int = 0

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        """Check if node has no children yet."""
        return len(self.children) == 0

    def untried_actions(self, legal_actions: Iterable[Hashable]) -> List[Hashable]:
        """Legal actions without a child, in the order they were given."""
        return [action for action in legal_actions if action not in self.children]

    def has_untried_actions(self, legal_actions: Iterable[Hashable]) -> bool:
        return any(action not in self.children for action in legal_actions)

    def __repr__(self) -> str:
        return (f"TreeNode(index={self.index}, action={self.action!r}, "
                f"depth={self.depth}, visits={self.visits}, "
                f"children={len(self.children)}, reward={self.reward})")
