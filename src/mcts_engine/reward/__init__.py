"""Reward representations stored at each tree node.

Two flavours:
- ScalarReward: running average of every update backed up through a node
- DistributionReward: full sample distribution (count, mean, variance, min, max)
"""

from .scalar import ScalarReward
from .distribution import Distribution, DistributionReward
from .normalization import normalize_reward

__all__ = [
    "ScalarReward",
    "Distribution",
    "DistributionReward",
    "normalize_reward"
]
