"""Configuration for an MCTS search run."""

from dataclasses import asdict, dataclass, fields
from typing import Optional

import yaml

from .reward.distribution import DistributionReward
from .termination import IterationTermination, TerminationCriterion, TimeTermination
from .ucb import OBJECTIVES, PEDROSO_REI_CP, UCB1_EXPLORATION

VARIANTS = ("standard", "distribution", "pedroso_rei")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SearchConfig:
    """Configuration for MCTS search."""
    variant: str = "standard"
    # None picks the variant default: C = 1/sqrt(2) for UCB1, Cp = 1/0.707 for Pedroso-Rei
    exploration_constant: Optional[float] = None
    seed: Optional[int] = None
    max_iterations: int = 1000
    # Wall-clock budget in seconds; takes precedence over max_iterations
    time_budget: Optional[float] = None
    random_tie_break: bool = False
    max_rollout_steps: Optional[int] = None
    log_every: Optional[int] = None
    # Logging setup applied by run_search (None leaves logging untouched)
    log_level: Optional[str] = None
    log_file: Optional[str] = None
    # Pedroso-Rei
    objective: str = "maximize"
    balance_coefficient: float = 1.0
    global_best: Optional[float] = None
    global_worst: Optional[float] = None
    # Reward distribution
    distribution_statistic: str = "mean"
    confidence: float = 0.95

    def __post_init__(self):
        """Validate configuration."""
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {self.variant}")
        if self.objective not in OBJECTIVES:
            raise ValueError(f"Unknown objective: {self.objective}")
        if self.distribution_statistic not in DistributionReward.STATISTICS:
            raise ValueError(f"Unknown distribution statistic: {self.distribution_statistic}")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        if self.time_budget is not None and self.time_budget < 0:
            raise ValueError("time_budget must be non-negative or None")
        if self.exploration_constant is not None and self.exploration_constant < 0:
            raise ValueError("exploration_constant must be non-negative")
        if self.max_rollout_steps is not None and self.max_rollout_steps <= 0:
            raise ValueError("max_rollout_steps must be positive or None")
        if self.log_every is not None and self.log_every <= 0:
            raise ValueError("log_every must be positive or None")
        if not 0.0 < self.confidence < 1.0:
            raise ValueError("confidence must be in (0, 1)")
        if self.log_level is not None and self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "SearchConfig":
        """Create a configuration from a dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in names})

    @classmethod
    def from_yaml(cls, path: str) -> "SearchConfig":
        """Load a configuration file; search keys may sit under a 'search' section."""
        with open(path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls.from_dict(config.get('search', config))

    def to_dict(self) -> dict:
        return asdict(self)

    def resolved_exploration_constant(self) -> float:
        """Configured exploration constant, or the default of the variant."""
        if self.exploration_constant is not None:
            return self.exploration_constant
        return PEDROSO_REI_CP if self.variant == "pedroso_rei" else UCB1_EXPLORATION

    def build_termination(self) -> TerminationCriterion:
        if self.time_budget is not None:
            return TimeTermination(self.time_budget)
        return IterationTermination(self.max_iterations)
