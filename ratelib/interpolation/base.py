"""
Base classes for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from ratelib.errors import InvalidArgumentError


class Interpolator(ABC):
    """Interpolating function through (time, value) nodes.

    Nodes must be given in strictly increasing time order. Outside the node
    range the function is extended with the rule of the last (or first)
    segment.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        if len(pillars) != len(values):
            raise InvalidArgumentError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise InvalidArgumentError("Need at least 2 points for interpolation")

        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)
        if np.any(np.diff(self.pillars) <= 0.0):
            raise InvalidArgumentError("Pillars must be strictly increasing")

    def _segment(self, t: float) -> int:
        """Index i of the segment [t_i, t_i+1] used for t."""
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        return min(max(i, 0), len(self.pillars) - 2)

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    @abstractmethod
    def primitive(self, t: float) -> float:
        """Integral of the interpolant from the first pillar to t."""

    def interpolate_many(self, times: List[float]) -> List[float]:
        """Interpolate values at multiple times."""
        return [self.interpolate(t) for t in times]

    def __call__(self, t: float) -> float:
        return self.interpolate(t)

    @property
    def x_min(self) -> float:
        return float(self.pillars[0])

    @property
    def x_max(self) -> float:
        return float(self.pillars[-1])


class InterpolationStrategy(ABC):
    """Builds interpolators; selected once per curve.

    ``global_support`` tells whether moving one node changes the interpolant
    away from its neighbouring segments (true for splines).
    ``positive_values_only`` marks strategies that cannot take zero or
    negative node values.
    """

    name = "INTERPOLATION"
    global_support = False
    positive_values_only = False

    @abstractmethod
    def interpolate(
        self, pillars: Sequence[float], values: Sequence[float]
    ) -> Interpolator:
        """Return an interpolator through the given nodes."""

    def value(
        self, pillars: Sequence[float], values: Sequence[float], t: float
    ) -> float:
        """One-off evaluation at t."""
        return self.interpolate(pillars, values)(t)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
