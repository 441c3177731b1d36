"""Backpropagation for MCTS.

Each backup updates, from the new node up to the root:
- Visit counts
- Reward (running mean or distribution)

Run-level bandit state (Pedroso-Rei global bounds) sees the update first,
so the bounds always include the result being backed up.
"""

from typing import Optional

from .node import TreeNode
from .tree import MCTSTree


def backpropagate(
    tree: MCTSTree,
    node: TreeNode,
    update: float,
    bandit=None
) -> int:
    """Backpropagate update from node to root.

    Args:
        tree: Tree that owns node
        node: Newly expanded (or terminal frontier) node
        update: Simulation result
        bandit: Optional bandit whose observe() tracks run-level bounds

    Returns:
        Number of nodes updated
    """
    if bandit is not None:
        bandit.observe(update)

    rule = tree.reward_rule
    updated = 0
    current: Optional[TreeNode] = node

    while current is not None:
        current.visits += 1
        current.reward = rule.merge(current.reward, update, current.visits)
        updated += 1
        current = tree.parent_of(current)

    return updated
