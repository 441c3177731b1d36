"""Distribution reward: every update is kept as a sample.

Mean and variance are maintained incrementally with Welford's algorithm,
so a node never stores its sample list:

    delta = x - mean
    mean' = mean + delta / n
    m2'   = m2 + delta * (x - mean')
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from scipy import stats


@dataclass(frozen=True)
class Distribution:
    """Summary statistics of the samples seen at a node.

    An empty distribution (count == 0) has no mean, variance or extremes;
    the corresponding properties return None instead of raising.

    Attributes:
        count: Number of samples
        mean_value: Running mean (meaningless while count == 0)
        m2: Sum of squared deviations from the mean, always >= 0
        min_value: Smallest sample
        max_value: Largest sample
    """
    count: int = 0
    mean_value: float = 0.0
    m2: float = 0.0
    min_value: float = math.inf
    max_value: float = -math.inf

    @classmethod
    def from_samples(cls, samples: Iterable[float]) -> "Distribution":
        """Build a distribution directly from a batch of samples."""
        values = np.asarray(list(samples), dtype=float)
        if values.size == 0:
            return cls()
        mean = float(np.mean(values))
        return cls(
            count=int(values.size),
            mean_value=mean,
            m2=float(np.sum((values - mean) ** 2)),
            min_value=float(np.min(values)),
            max_value=float(np.max(values))
        )

    def add(self, sample: float) -> "Distribution":
        """Return a new distribution with one more sample."""
        x = float(sample)
        count = self.count + 1
        delta = x - self.mean_value
        mean = self.mean_value + delta / count
        m2 = self.m2 + delta * (x - mean)
        return Distribution(
            count=count,
            mean_value=mean,
            m2=max(m2, 0.0),
            min_value=min(self.min_value, x),
            max_value=max(self.max_value, x)
        )

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def mean(self) -> Optional[float]:
        return None if self.is_empty else self.mean_value

    @property
    def variance(self) -> Optional[float]:
        """Population variance (ddof=0)."""
        if self.is_empty:
            return None
        return self.m2 / self.count

    @property
    def sample_variance(self) -> Optional[float]:
        """Unbiased sample variance (ddof=1); None below two samples."""
        if self.count < 2:
            return None
        return self.m2 / (self.count - 1)

    @property
    def standard_deviation(self) -> Optional[float]:
        variance = self.variance
        return None if variance is None else math.sqrt(variance)

    @property
    def min(self) -> Optional[float]:
        return None if self.is_empty else self.min_value

    @property
    def max(self) -> Optional[float]:
        return None if self.is_empty else self.max_value

    def confidence_half_width(self, confidence: float = 0.95) -> float:
        """Half-width of the Student-t confidence interval of the mean.

        Zero below two samples, where the interval is undefined.
        """
        if self.count < 2:
            return 0.0
        t_quantile = stats.t.ppf((1.0 + confidence) / 2.0, self.count - 1)
        return float(t_quantile * math.sqrt(self.sample_variance / self.count))

    def __str__(self) -> str:
        if self.is_empty:
            return "Distribution(empty)"
        return (f"Distribution(n={self.count}, mean={self.mean_value:.4f}, "
                f"var={self.variance:.4f}, min={self.min_value:.4f}, "
                f"max={self.max_value:.4f})")


class DistributionReward:
    """Reward rule storing a Distribution per node.

    The exploitation value is one statistic of the distribution:
    "mean", "max", "min", "upper" (mean + confidence half-width) or
    "lower" (mean - confidence half-width).
    """

    STATISTICS = ("mean", "max", "min", "upper", "lower")

    def __init__(self, statistic: str = "mean", confidence: float = 0.95):
        if statistic not in self.STATISTICS:
            raise ValueError(f"Unknown distribution statistic: {statistic}")
        if not 0.0 < confidence < 1.0:
            raise ValueError("confidence must be in (0, 1)")
        self.statistic = statistic
        self.confidence = confidence

    def initial(self) -> Distribution:
        return Distribution()

    def merge(self, reward: Distribution, update: float, visits: int) -> Distribution:
        return reward.add(update)

    def exploitation(self, reward: Distribution) -> float:
        """Scalar view of a distribution used for scoring.

        Empty distributions score 0.0; the bandit never reaches them since
        unvisited children are scored as infinite.
        """
        if reward.is_empty:
            return 0.0
        if self.statistic == "max":
            return reward.max_value
        if self.statistic == "min":
            return reward.min_value
        if self.statistic == "upper":
            return reward.mean_value + reward.confidence_half_width(self.confidence)
        if self.statistic == "lower":
            return reward.mean_value - reward.confidence_half_width(self.confidence)
        return reward.mean_value

    def __repr__(self) -> str:
        return f"DistributionReward(statistic={self.statistic!r}, confidence={self.confidence})"
