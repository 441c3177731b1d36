"""Unit tests for the node arena."""

import networkx as nx
import pytest

from mcts_engine.exceptions import ContractViolation, DuplicateChildError
from mcts_engine.reward import DistributionReward, ScalarReward
from mcts_engine.tree import MCTSTree


@pytest.fixture
def tree():
    return MCTSTree((), ScalarReward())


def test_root(tree):
    root = tree.root
    assert root.action is None
    assert root.parent is None
    assert root.depth == 0
    assert root.visits == 0
    assert root.is_root()
    assert root.is_leaf()
    assert tree.parent_of(root) is None


def test_add_child_links_both_ways(tree):
    child = tree.add_child(tree.root, 0, (0,))
    grandchild = tree.add_child(child, 1, (0, 1))

    assert tree.root.children == {0: child.index}
    assert tree.parent_of(child) is tree.root
    assert tree.child(child, 1) is grandchild
    assert child.depth == 1
    assert grandchild.depth == 2
    assert not tree.root.is_leaf()
    assert grandchild.is_leaf()


def test_duplicate_child_is_contract_violation(tree):
    tree.add_child(tree.root, 0, (0,))
    with pytest.raises(DuplicateChildError):
        tree.add_child(tree.root, 0, (0,))
    with pytest.raises(ContractViolation):
        tree.add_child(tree.root, 0, (0,))
    assert len(tree) == 2


def test_child_needs_action(tree):
    with pytest.raises(ValueError):
        tree.add_child(tree.root, None, (0,))


def test_untried_actions(tree):
    tree.add_child(tree.root, 1, (1,))
    assert tree.root.untried_actions([0, 1, 2]) == [0, 2]
    assert tree.root.has_untried_actions([0, 1])
    assert not tree.root.has_untried_actions([1])


def test_initial_reward_comes_from_rule():
    tree = MCTSTree((), DistributionReward())
    child = tree.add_child(tree.root, 0, (0,))
    assert tree.root.reward.is_empty
    assert child.reward.is_empty


def test_path_to_root(tree):
    a = tree.add_child(tree.root, 0, (0,))
    b = tree.add_child(a, 0, (0, 0))
    assert tree.get_path_to_root(b) == [b, a, tree.root]


def test_children_in_expansion_order(tree):
    for action in (3, 1, 2):
        tree.add_child(tree.root, action, (action,))
    assert [child.action for child in tree.children_of(tree.root)] == [3, 1, 2]


def test_statistics(tree):
    a = tree.add_child(tree.root, 0, (0,))
    tree.add_child(a, 0, (0, 0))
    tree.add_child(tree.root, 1, (1,))
    stats = tree.get_statistics()
    assert stats["total_nodes"] == 4
    assert stats["leaf_nodes"] == 2
    assert stats["max_depth"] == 2
    assert stats["root_visits"] == 0
    assert stats["root_value"] is None


def test_render(tree):
    a = tree.add_child(tree.root, "left", ("left",))
    tree.add_child(a, "down", ("left", "down"))
    tree.add_child(tree.root, "right", ("right",))

    lines = tree.render(print_depth=1).splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("root")
    assert lines[1].startswith("1brch - left")
    assert lines[2].startswith("1leaf - right")

    lines = tree.render(print_depth=2).splitlines()
    assert len(lines) == 4
    assert lines[2].startswith("2 leaf - down")


def test_to_networkx(tree):
    a = tree.add_child(tree.root, 0, (0,))
    tree.add_child(a, 1, (0, 1))
    tree.add_child(tree.root, 1, (1,))

    graph = tree.to_networkx()
    assert isinstance(graph, nx.DiGraph)
    assert graph.number_of_nodes() == 4
    assert nx.is_arborescence(graph)
    assert graph.nodes[a.index]["depth"] == 1
    assert graph.edges[tree.root.index, a.index]["action"] == 0
