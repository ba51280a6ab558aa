"""
Interpolation methods for yield curves.

Curves hold an InterpolationStrategy and rebuild an Interpolator whenever
their nodes change.
"""

from .base import InterpolationStrategy, Interpolator
from .cubic import CubicSpline, CubicSplineInterpolator
from .factory import create_interpolation
from .linear import (
    BackwardFlat,
    BackwardFlatInterpolator,
    Linear,
    LinearInterpolator,
    LogLinear,
    LogLinearInterpolator,
)

__all__ = [
    # Base classes
    'Interpolator',
    'InterpolationStrategy',

    # Strategies
    'Linear',
    'LogLinear',
    'BackwardFlat',
    'CubicSpline',

    # Interpolators
    'LinearInterpolator',
    'LogLinearInterpolator',
    'BackwardFlatInterpolator',
    'CubicSplineInterpolator',

    # Factory
    'create_interpolation',
]
