"""Normal distribution helpers on top of scipy."""

from __future__ import annotations

from scipy.special import ndtr
from scipy.stats import norm


class CumulativeNormalDistribution:
    """Cumulative normal distribution N(average, sigma).

    The cdf uses ``scipy.special.ndtr``, which keeps full relative precision
    in the lower tail; the density is ``scipy.stats.norm.pdf``.
    """

    def __init__(self, average: float = 0.0, sigma: float = 1.0):
        if sigma <= 0.0:
            raise ValueError(f"sigma ({sigma}) must be positive")
        self.average = average
        self.sigma = sigma

    def value(self, x: float) -> float:
        return float(ndtr((x - self.average) / self.sigma))

    def derivative(self, x: float) -> float:
        """Density at x."""
        return float(norm.pdf(x, loc=self.average, scale=self.sigma))

    def __call__(self, x: float) -> float:
        return self.value(x)


_STANDARD = CumulativeNormalDistribution()


def cumulative_normal(x: float) -> float:
    """Standard normal cdf."""
    return _STANDARD.value(x)


def normal_density(x: float) -> float:
    """Standard normal pdf."""
    return _STANDARD.derivative(x)
