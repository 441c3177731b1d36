"""Main MCTS search loop.

One iteration:

def iterate(tree):
    node, untried = tree_policy(tree)       # select
    if untried:
        node = expand(node, untried)        # grow
    update = default_policy(node.state)     # simulate
    backpropagate(node, update)             # backup

The orchestrator repeats this until the termination criterion says the
budget is spent, then recommends the root child with the best
exploitation value (no exploration bonus).
"""

import logging
import time
from typing import Hashable, List, Optional

import numpy as np

from .backprop import backpropagate
from .exceptions import ContractViolation
from .node import TreeNode
from .policy import ActionSelection, RandomSelection, Rollout, default_policy, expand, tree_policy
from .problem import SearchProblem
from .reward.scalar import ScalarReward
from .termination import IterationTermination, TerminationCriterion
from .tree import MCTSTree
from .ucb import UCB1, select_best_child

logger = logging.getLogger(__name__)


def iterate(
    tree: MCTSTree,
    problem: SearchProblem,
    bandit,
    select_action: ActionSelection,
    rng: Optional[np.random.Generator] = None,
    random_tie_break: bool = False,
    max_rollout_steps: Optional[int] = None
) -> Rollout:
    """Single MCTS iteration.

    Contract violations propagate before any backup of this iteration,
    so earlier statistics stay intact.

    Returns:
        The rollout that was backed up
    """
    tie_rng = rng if random_tie_break else None

    # 1. Selection
    node, untried = tree_policy(tree, problem, bandit, tie_rng)

    # 2. Expansion (skipped at terminal frontiers)
    if untried:
        node = expand(tree, node, untried, problem, rng)

    # 3. Simulation
    rollout = default_policy(problem, node.state, select_action, max_rollout_steps)

    # 4. Backpropagation
    backpropagate(tree, node, rollout.update, bandit)

    return rollout


class MCTSSearch:
    """Configurable MCTS orchestrator.

    Each strategy is a separate collaborator: the reward rule (how updates
    merge into nodes), the bandit (how children are scored), the action
    selection used in rollouts, and the termination criterion.

    Args:
        problem: Problem definition
        reward_rule: ScalarReward (default) or DistributionReward
        bandit: UCB1 (default) or PedrosoRei; must use reward_rule
        termination: Budget check (default: 1000 iterations)
        seed: Seed of the run's random generator
        select_action: Rollout action selection; defaults to uniform random
            from the run's generator
        random_tie_break: Break bandit ties at random instead of by order
        max_rollout_steps: Optional cap on rollout length
        log_every: Log progress every N iterations (None = never)
    """

    def __init__(
        self,
        problem: SearchProblem,
        reward_rule=None,
        bandit=None,
        termination: Optional[TerminationCriterion] = None,
        seed: Optional[int] = None,
        select_action: Optional[ActionSelection] = None,
        random_tie_break: bool = False,
        max_rollout_steps: Optional[int] = None,
        log_every: Optional[int] = None
    ):
        self.problem = problem
        if bandit is not None and reward_rule is None:
            reward_rule = bandit.reward_rule
        self.reward_rule = reward_rule or ScalarReward()
        self.bandit = bandit or UCB1(self.reward_rule)
        if self.bandit.reward_rule is not self.reward_rule:
            raise ValueError(
                f"Bandit scores with {self.bandit.reward_rule!r} but the tree merges "
                f"with {self.reward_rule!r}; pass the same reward rule to both"
            )
        self.termination = termination or IterationTermination(1000)
        self.seed = seed
        self.custom_select_action = select_action
        self.random_tie_break = random_tie_break
        self.max_rollout_steps = max_rollout_steps
        self.log_every = log_every

        self.rng = np.random.default_rng(seed)
        self.last_run_stats: dict = {}

    def new_tree(self) -> MCTSTree:
        """Fresh tree rooted at the problem's start state."""
        return MCTSTree(self.problem.start_state(), self.reward_rule)

    def run(self, tree: Optional[MCTSTree] = None) -> MCTSTree:
        """Search until the termination criterion is exhausted.

        Every call re-seeds the generator, so equal seeds give equal trees.
        An unvisited tree also resets the bandit's run-level state
        (Pedroso-Rei bounds). A tree that already holds backups keeps the
        bounds its rewards were normalized against.

        Args:
            tree: Tree to continue growing (default: a fresh one)

        Returns:
            The searched tree
        """
        if tree is None:
            tree = self.new_tree()
        if tree.root.visits == 0:
            self.bandit.reset()

        self.rng = np.random.default_rng(self.seed)
        select_action = self.custom_select_action or RandomSelection(self.rng)

        logger.debug(
            "Starting search: bandit=%r termination=%r seed=%s",
            self.bandit, self.termination, self.seed
        )

        start_time = time.time()
        iterations = 0
        rollout_steps = 0

        self.termination.init()
        while self.termination.within_budget(tree):
            try:
                rollout = iterate(
                    tree,
                    self.problem,
                    self.bandit,
                    select_action,
                    rng=self.rng,
                    random_tie_break=self.random_tie_break,
                    max_rollout_steps=self.max_rollout_steps
                )
            except ContractViolation as e:
                logger.error("Search aborted after %d iterations: %s", iterations, e)
                raise

            iterations += 1
            rollout_steps += rollout.steps

            if self.log_every and iterations % self.log_every == 0:
                stats = tree.get_statistics()
                logger.info(
                    f"Iter {iterations}: "
                    f"nodes={stats['total_nodes']}, "
                    f"max_depth={stats['max_depth']}, "
                    f"root_value={stats['root_value']}"
                )

        elapsed = time.time() - start_time
        self.last_run_stats = {
            "iterations": iterations,
            "elapsed_time": elapsed,
            "total_nodes": tree.count_nodes(),
            "average_rollout_steps": rollout_steps / max(1, iterations)
        }
        logger.info(
            f"Search complete: {iterations} iterations, "
            f"{tree.count_nodes()} nodes, {elapsed:.3f}s"
        )

        return tree

    def best_child(self, tree: MCTSTree, node: TreeNode) -> Optional[TreeNode]:
        """Child of node with the highest exploitation value, first on ties."""
        children = tree.children_of(node)
        if not children:
            return None
        return select_best_child(children, key=self.bandit.exploitation)

    def best_action(self, tree: MCTSTree) -> Optional[Hashable]:
        """Recommended action at the root, None if nothing was expanded."""
        child = self.best_child(tree, tree.root)
        return None if child is None else child.action

    def best_game(self, tree: MCTSTree) -> List[Hashable]:
        """Actions along the best-child path from the root to a leaf."""
        actions = []
        child = self.best_child(tree, tree.root)
        while child is not None:
            actions.append(child.action)
            child = self.best_child(tree, child)
        return actions
