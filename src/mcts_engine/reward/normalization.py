"""Reward normalization against observed simulation bounds."""

from typing import Optional


def normalize_reward(
    reward: float,
    worst: Optional[float] = None,
    best: Optional[float] = None,
    target_min: float = 0.0,
    target_max: float = 1.0
) -> float:
    """Map reward onto [target_min, target_max], worst -> min, best -> max.

    Works for either objective: when minimizing, best < worst and the
    same formula still sends the best value to target_max.

    Args:
        reward: Raw reward value
        worst: Worst simulation value observed so far
        best: Best simulation value observed so far
        target_min: Value assigned to the worst reward
        target_max: Value assigned to the best reward

    Returns:
        Normalized reward; the midpoint of the target range when no
        bounds or no variation have been observed yet
    """
    if worst is None or best is None or best == worst:
        return (target_min + target_max) / 2.0

    normalized = (reward - worst) / (best - worst)
    return normalized * (target_max - target_min) + target_min
