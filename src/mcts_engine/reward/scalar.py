"""Scalar running-average reward."""


class ScalarReward:
    """Reward rule keeping the running mean of all updates.

    reward <- reward + (update - reward) / visits
    """

    def initial(self) -> float:
        """Reward of a node that has not been backed up yet."""
        return 0.0

    def merge(self, reward: float, update: float, visits: int) -> float:
        """Fold one update into the running mean.

        Args:
            reward: Current mean
            update: New simulation result
            visits: Visit count, already incremented for this update

        Returns:
            Updated mean
        """
        return reward + (float(update) - reward) / visits

    def exploitation(self, reward: float) -> float:
        return reward

    def __repr__(self) -> str:
        return "ScalarReward()"
