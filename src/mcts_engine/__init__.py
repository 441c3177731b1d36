"""Generic Monte Carlo Tree Search engine.

Each iteration runs the four classic phases:
1. Select: descend with a bandit function until a frontier node
2. Expand: attach one child for an untried action
3. Simulate: roll out to a terminal state and evaluate it
4. Backup: merge the result into every node on the path to the root

Components:
- problem     - SearchProblem, the interface a state space implements
- tree / node - arena-owned tree of TreeNodes
- reward/     - scalar running average and full reward distribution
- ucb         - UCB1 and Pedroso-Rei bandits
- termination - iteration and wall-clock budgets
- search      - MCTSSearch orchestrator
- variants    - pre-wired standard, distribution and Pedroso-Rei searches
"""

__version__ = "0.1.0"

from .config import SearchConfig
from .exceptions import (
    MCTSError,
    ContractViolation,
    DuplicateChildError,
    EmptyTransitionError,
    NoActionSelectedError,
    StuckStateError
)
from .node import TreeNode
from .tree import MCTSTree
from .problem import SearchProblem
from .reward import ScalarReward, Distribution, DistributionReward
from .ucb import UCB1, PedrosoRei, PedrosoReiCoefficients
from .termination import TerminationCriterion, IterationTermination, TimeTermination
from .search import MCTSSearch, iterate
from .variants import standard_mcts, reward_distribution_mcts, pedroso_rei_mcts, build_search
from .utils.logging import setup_logging

__all__ = [
    "SearchConfig",
    "MCTSError",
    "ContractViolation",
    "DuplicateChildError",
    "EmptyTransitionError",
    "NoActionSelectedError",
    "StuckStateError",
    "TreeNode",
    "MCTSTree",
    "SearchProblem",
    "ScalarReward",
    "Distribution",
    "DistributionReward",
    "UCB1",
    "PedrosoRei",
    "PedrosoReiCoefficients",
    "TerminationCriterion",
    "IterationTermination",
    "TimeTermination",
    "MCTSSearch",
    "iterate",
    "standard_mcts",
    "reward_distribution_mcts",
    "pedroso_rei_mcts",
    "build_search",
    "run_search",
    "setup_logging"
]


def run_search(problem: SearchProblem, config: SearchConfig = None, **kwargs):
    """High-level API: search problem and return (best action, tree).

    Args:
        problem: Problem definition
        config: Search configuration; keyword arguments build one if omitted

    Returns:
        (best action at the root, searched tree)
    """
    config = config or SearchConfig(**kwargs)
    if config.log_level is not None:
        setup_logging(config.log_level, config.log_file)
    search = build_search(problem, config)
    tree = search.run()
    return search.best_action(tree), tree
