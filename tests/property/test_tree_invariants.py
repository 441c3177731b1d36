"""Test structural invariants of searched trees."""

import networkx as nx
import pytest

from mcts_engine.variants import pedroso_rei_mcts, reward_distribution_mcts, standard_mcts
from mcts_engine.termination import IterationTermination


VARIANTS = [standard_mcts, reward_distribution_mcts, pedroso_rei_mcts]


@pytest.mark.parametrize("make_search", VARIANTS)
def test_tree_links(make_search, subset_problem, seed):
    """Parent/child links, depths and actions stay consistent."""
    search = make_search(subset_problem, termination=IterationTermination(500), seed=seed)
    tree = search.run()

    for node in tree.nodes:
        if node.is_root():
            assert node.depth == 0
            continue
        parent = tree.parent_of(node)
        assert parent.children[node.action] == node.index
        assert node.depth == parent.depth + 1
        assert node.state == subset_problem.apply_action(parent.state, node.action)

    graph = tree.to_networkx()
    assert nx.is_arborescence(graph)
    assert graph.number_of_nodes() == len(tree)


@pytest.mark.parametrize("make_search", VARIANTS)
def test_children_have_distinct_actions(make_search, subset_problem, seed):
    search = make_search(subset_problem, termination=IterationTermination(500), seed=seed)
    tree = search.run()

    for node in tree.nodes:
        actions = [child.action for child in tree.children_of(node)]
        assert len(actions) == len(set(actions))
        legal = subset_problem.generate_possible_actions(node.state)
        assert set(actions) <= set(legal)


@pytest.mark.parametrize("make_search", VARIANTS)
def test_same_seed_same_tree(make_search, subset_problem, seed):
    """Identical seeds reproduce tree shape and recommendation."""
    def shape(tree):
        return [(node.parent, node.action, node.visits) for node in tree.nodes]

    search = make_search(subset_problem, termination=IterationTermination(300), seed=seed)
    first = search.run()
    second = search.run()

    assert shape(first) == shape(second)
    assert search.best_action(first) == search.best_action(second)


def test_different_seeds_diverge(subset_problem):
    def shape(tree):
        return [(node.parent, node.action) for node in tree.nodes]

    trees = [
        standard_mcts(subset_problem, termination=IterationTermination(100), seed=s).run()
        for s in (1, 2)
    ]
    assert shape(trees[0]) != shape(trees[1])
