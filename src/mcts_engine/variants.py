"""Pre-wired search variants.

- standard:     scalar running-average reward + UCB1
- distribution: reward distribution per node + UCB1 on a chosen statistic
- pedroso_rei:  scalar reward + UCB1 on rewards normalized by the run's
                global best/worst simulation results
"""

from typing import Optional

from .config import SearchConfig
from .problem import SearchProblem
from .reward.distribution import DistributionReward
from .reward.scalar import ScalarReward
from .search import MCTSSearch
from .termination import TerminationCriterion
from .ucb import PEDROSO_REI_CP, UCB1, UCB1_EXPLORATION, PedrosoRei, PedrosoReiCoefficients


def standard_mcts(
    problem: SearchProblem,
    exploration_constant: float = UCB1_EXPLORATION,
    termination: Optional[TerminationCriterion] = None,
    seed: Optional[int] = None,
    **kwargs
) -> MCTSSearch:
    """UCB1 search with scalar running-average rewards."""
    reward_rule = ScalarReward()
    return MCTSSearch(
        problem,
        reward_rule=reward_rule,
        bandit=UCB1(reward_rule, exploration_constant),
        termination=termination,
        seed=seed,
        **kwargs
    )


def reward_distribution_mcts(
    problem: SearchProblem,
    exploration_constant: float = UCB1_EXPLORATION,
    statistic: str = "mean",
    confidence: float = 0.95,
    termination: Optional[TerminationCriterion] = None,
    seed: Optional[int] = None,
    **kwargs
) -> MCTSSearch:
    """UCB1 search keeping the full reward distribution at each node."""
    reward_rule = DistributionReward(statistic=statistic, confidence=confidence)
    return MCTSSearch(
        problem,
        reward_rule=reward_rule,
        bandit=UCB1(reward_rule, exploration_constant),
        termination=termination,
        seed=seed,
        **kwargs
    )


def pedroso_rei_mcts(
    problem: SearchProblem,
    objective: str = "maximize",
    cp: float = PEDROSO_REI_CP,
    balance: float = 1.0,
    global_best: Optional[float] = None,
    global_worst: Optional[float] = None,
    termination: Optional[TerminationCriterion] = None,
    seed: Optional[int] = None,
    **kwargs
) -> MCTSSearch:
    """Pedroso-Rei search; works for minimization as well as maximization."""
    reward_rule = ScalarReward()
    coefficients = PedrosoReiCoefficients(
        cp=cp,
        balance=balance,
        objective=objective,
        global_best=global_best,
        global_worst=global_worst
    )
    return MCTSSearch(
        problem,
        reward_rule=reward_rule,
        bandit=PedrosoRei(reward_rule, coefficients),
        termination=termination,
        seed=seed,
        **kwargs
    )


def build_search(problem: SearchProblem, config: Optional[SearchConfig] = None) -> MCTSSearch:
    """Build the search described by config."""
    config = config or SearchConfig()
    common = dict(
        termination=config.build_termination(),
        seed=config.seed,
        random_tie_break=config.random_tie_break,
        max_rollout_steps=config.max_rollout_steps,
        log_every=config.log_every
    )

    if config.variant == "distribution":
        return reward_distribution_mcts(
            problem,
            exploration_constant=config.resolved_exploration_constant(),
            statistic=config.distribution_statistic,
            confidence=config.confidence,
            **common
        )
    if config.variant == "pedroso_rei":
        return pedroso_rei_mcts(
            problem,
            objective=config.objective,
            cp=config.resolved_exploration_constant(),
            balance=config.balance_coefficient,
            global_best=config.global_best,
            global_worst=config.global_worst,
            **common
        )
    return standard_mcts(
        problem,
        exploration_constant=config.resolved_exploration_constant(),
        **common
    )
