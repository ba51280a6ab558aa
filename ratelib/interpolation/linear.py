"""
Linear-family interpolation methods for yield curves.
"""
import math
from typing import Sequence

import numpy as np

from ratelib.errors import InvalidArgumentError

from .base import InterpolationStrategy, Interpolator


class LinearInterpolator(Interpolator):
    """Piecewise linear; extrapolates along the end segments."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        self.slopes = np.diff(self.values) / np.diff(self.pillars)
        areas = 0.5 * (self.values[:-1] + self.values[1:]) * np.diff(self.pillars)
        self._cumulative = np.concatenate(([0.0], np.cumsum(areas)))

    def interpolate(self, t: float) -> float:
        i = self._segment(t)
        return float(self.values[i] + self.slopes[i] * (t - self.pillars[i]))

    def primitive(self, t: float) -> float:
        i = self._segment(t)
        dt = t - self.pillars[i]
        return float(
            self._cumulative[i] + dt * (self.values[i] + 0.5 * self.slopes[i] * dt)
        )


class LogLinearInterpolator(Interpolator):
    """Linear in the logarithm of the values.

    On discount factors this gives piecewise-constant forward rates.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        if np.any(self.values <= 0.0):
            raise InvalidArgumentError(
                "Log-linear interpolation requires positive values"
            )
        self.log_values = np.log(self.values)
        self.log_slopes = np.diff(self.log_values) / np.diff(self.pillars)
        areas = [
            self._segment_area(i, self.pillars[i + 1] - self.pillars[i])
            for i in range(len(self.pillars) - 1)
        ]
        self._cumulative = np.concatenate(([0.0], np.cumsum(areas)))

    def interpolate(self, t: float) -> float:
        i = self._segment(t)
        return math.exp(self.log_values[i] + self.log_slopes[i] * (t - self.pillars[i]))

    def _segment_area(self, i: int, dt: float) -> float:
        slope = self.log_slopes[i]
        if slope == 0.0:
            return float(self.values[i] * dt)
        return float(self.values[i] * math.expm1(slope * dt) / slope)

    def primitive(self, t: float) -> float:
        i = self._segment(t)
        return float(self._cumulative[i] + self._segment_area(i, t - self.pillars[i]))


class BackwardFlatInterpolator(Interpolator):
    """Step function: on (t_i-1, t_i] the value is the one at t_i."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        areas = self.values[1:] * np.diff(self.pillars)
        self._cumulative = np.concatenate(([0.0], np.cumsum(areas)))

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])
        i = int(np.searchsorted(self.pillars, t, side="left"))
        return float(self.values[i])

    def primitive(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0] * (t - self.pillars[0]))
        if t >= self.pillars[-1]:
            return float(self._cumulative[-1] + self.values[-1] * (t - self.pillars[-1]))
        i = int(np.searchsorted(self.pillars, t, side="left"))
        return float(self._cumulative[i - 1] + self.values[i] * (t - self.pillars[i - 1]))


class Linear(InterpolationStrategy):
    name = "LINEAR"

    def interpolate(self, pillars, values) -> Interpolator:
        return LinearInterpolator(pillars, values)


class LogLinear(InterpolationStrategy):
    name = "LOG_LINEAR"
    positive_values_only = True

    def interpolate(self, pillars, values) -> Interpolator:
        return LogLinearInterpolator(pillars, values)


class BackwardFlat(InterpolationStrategy):
    name = "BACKWARD_FLAT"

    def interpolate(self, pillars, values) -> Interpolator:
        return BackwardFlatInterpolator(pillars, values)
