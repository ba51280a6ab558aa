"""
Natural cubic spline interpolation.
"""
from typing import Sequence

from scipy.interpolate import CubicSpline as _ScipyCubicSpline

from .base import InterpolationStrategy, Interpolator
from .linear import LinearInterpolator


class CubicSplineInterpolator(Interpolator):
    """Natural cubic spline (zero second derivative at both ends)."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        self._spline = _ScipyCubicSpline(
            self.pillars, self.values, bc_type="natural", extrapolate=True
        )

    def interpolate(self, t: float) -> float:
        return float(self._spline(t))

    def primitive(self, t: float) -> float:
        return float(self._spline.integrate(self.pillars[0], t))


class CubicSpline(InterpolationStrategy):
    """Cubic spline strategy; falls back to linear with only two nodes."""

    name = "CUBIC_SPLINE"
    global_support = True

    def interpolate(self, pillars, values) -> Interpolator:
        if len(pillars) < 3:
            return LinearInterpolator(pillars, values)
        return CubicSplineInterpolator(pillars, values)
