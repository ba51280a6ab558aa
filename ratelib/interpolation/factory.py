"""
Factory for interpolation strategies.
"""
from typing import Union

from ratelib.errors import InvalidArgumentError

from .base import InterpolationStrategy
from .cubic import CubicSpline
from .linear import BackwardFlat, Linear, LogLinear

_STRATEGIES = {
    "LINEAR": Linear,
    "LOG_LINEAR": LogLinear,
    "LOGLINEAR": LogLinear,
    "BACKWARD_FLAT": BackwardFlat,
    "PIECEWISE_CONSTANT": BackwardFlat,
    "CUBIC_SPLINE": CubicSpline,
    "CUBIC": CubicSpline,
}


def create_interpolation(
    method: Union[str, InterpolationStrategy]
) -> InterpolationStrategy:
    """
    Create an interpolation strategy based on method name.

    Args:
        method: Interpolation method name, or a strategy instance

    Returns:
        Interpolation strategy
    """
    if isinstance(method, InterpolationStrategy):
        return method
    method_upper = method.upper()
    if method_upper not in _STRATEGIES:
        raise InvalidArgumentError(
            f"Unknown interpolation method: {method}. "
            f"Available: {sorted(_STRATEGIES)}"
        )
    return _STRATEGIES[method_upper]()
