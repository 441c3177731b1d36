"""MCTS tree structure.

The tree is an arena: it owns every node in a growable list and nodes
link to their parent and children by index. Nodes are never removed.
"""

from typing import Any, Hashable, List, Optional

import networkx as nx

from .exceptions import DuplicateChildError
from .node import TreeNode


class MCTSTree:
    """Arena holding all nodes of one search tree.

    Args:
        root_state: State at the root of the search
        reward_rule: Reward representation; supplies each node's initial reward
    """

    def __init__(self, root_state: Any, reward_rule: Any):
        self.reward_rule = reward_rule
        self.nodes: List[TreeNode] = []
        self.root = self._allocate(root_state, action=None, parent=None, depth=0)

    def _allocate(
        self,
        state: Any,
        action: Optional[Hashable],
        parent: Optional[int],
        depth: int
    ) -> TreeNode:
        node = TreeNode(
            state=state,
            action=action,
            reward=self.reward_rule.initial(),
            index=len(self.nodes),
            parent=parent,
            depth=depth
        )
        self.nodes.append(node)
        return node

    def add_child(self, node: TreeNode, action: Hashable, state: Any) -> TreeNode:
        """Create a child of node for action and attach it.

        Raises:
            ValueError: If action is None
            DuplicateChildError: If node already has a child for action
        """
        if action is None:
            raise ValueError("Cannot add a child without an action")
        if action in node.children:
            raise DuplicateChildError(
                f"Node {node.index} already has a child for action {action!r}"
            )
        child = self._allocate(state, action=action, parent=node.index, depth=node.depth + 1)
        node.children[action] = child.index
        return child

    def get_node(self, index: int) -> TreeNode:
        return self.nodes[index]

    def parent_of(self, node: TreeNode) -> Optional[TreeNode]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def child(self, node: TreeNode, action: Hashable) -> TreeNode:
        return self.nodes[node.children[action]]

    def children_of(self, node: TreeNode) -> List[TreeNode]:
        """Children in expansion order."""
        return [self.nodes[index] for index in node.children.values()]

    def get_path_to_root(self, node: TreeNode) -> List[TreeNode]:
        """Get path from node to root (node first, root last)."""
        path = []
        current = node
        while current is not None:
            path.append(current)
            current = self.parent_of(current)
        return path

    def count_nodes(self) -> int:
        return len(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get_statistics(self) -> dict:
        """Get tree statistics."""
        root_value = (
            self.reward_rule.exploitation(self.root.reward)
            if self.root.visits > 0 else None
        )
        return {
            "total_nodes": len(self.nodes),
            "leaf_nodes": sum(1 for node in self.nodes if node.is_leaf()),
            "max_depth": max(node.depth for node in self.nodes),
            "root_visits": self.root.visits,
            "root_value": root_value
        }

    def render(self, print_depth: int = 1) -> str:
        """Render the tree as text, one node per line, down to print_depth."""
        lines = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            lines.append(self._render_line(node))
            if node.depth < print_depth:
                stack.extend(reversed(self.children_of(node)))
        return "\n".join(lines) + "\n"

    def _render_line(self, node: TreeNode) -> str:
        lead_in = "" if node.depth == 0 else f"{node.depth}{' ' * (node.depth - 1)}"
        if node.depth == 0:
            node_type = "root"
        elif node.is_leaf():
            node_type = "leaf"
        else:
            node_type = "brch"
        action = "" if node.action is None else f"{node.action}"
        return f"{lead_in}{node_type} - {action} - visits={node.visits} reward={node.reward}"

    def to_networkx(self) -> nx.DiGraph:
        """Export the tree as a DiGraph keyed by arena index."""
        graph = nx.DiGraph()
        for node in self.nodes:
            graph.add_node(
                node.index,
                action=node.action,
                visits=node.visits,
                depth=node.depth
            )
            if node.parent is not None:
                graph.add_edge(node.parent, node.index, action=node.action)
        return graph

    def __repr__(self) -> str:
        return f"MCTSTree(nodes={len(self.nodes)}, root_visits={self.root.visits})"
