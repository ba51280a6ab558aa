"""
Curve traits: what the bootstrapped node values mean.

A trait fixes the seed node at the reference date, the bracket searched for
each new node, and how an interpolated node value turns into a discount
factor.
"""

import math
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple, Union

from ratelib.errors import InvalidArgumentError
from ratelib.interpolation import Interpolator

# Placeholder rate for the seed node of rate-based curves
AVERAGE_RATE = 0.05


class BootstrapTraits(ABC):
    """Semantic family of a piecewise curve."""

    name = "TRAITS"
    # Interpolation used when the caller names none
    default_interpolation = "LINEAR"
    # Whether every node value is strictly positive
    positive_values = False

    @abstractmethod
    def initial_value(self) -> float:
        """Value of the node at the reference date."""

    @abstractmethod
    def discount(self, interpolator: Interpolator, t: float) -> float:
        """Discount factor at t implied by the interpolated nodes."""

    @abstractmethod
    def bounds(
        self, i: int, data: Sequence[float], times: Sequence[float], max_rate: float
    ) -> Tuple[float, float]:
        """Search bracket for node i given the solved nodes 0..i-1."""

    @abstractmethod
    def value_from_discount(
        self, discount: float, previous_discount: float, t: float, t_previous: float
    ) -> float:
        """Node value reproducing ``discount`` at t."""

    def guess(self, i: int, data: Sequence[float], times: Sequence[float]) -> float:
        """Default starting point for node i: the previous node's value."""
        return data[i - 1]

    def update_guess(self, data: List[float], value: float, i: int) -> None:
        data[i] = value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Discount(BootstrapTraits):
    """Nodes are discount factors; the seed is 1 at the reference date."""

    name = "DISCOUNT"
    default_interpolation = "LOG_LINEAR"
    positive_values = True

    def initial_value(self) -> float:
        return 1.0

    def discount(self, interpolator: Interpolator, t: float) -> float:
        return interpolator(t)

    def bounds(self, i, data, times, max_rate):
        dt = times[i] - times[i - 1]
        previous = data[i - 1]
        return previous * math.exp(-max_rate * dt), previous * math.exp(max_rate * dt)

    def value_from_discount(self, discount, previous_discount, t, t_previous):
        return discount


class ZeroYield(BootstrapTraits):
    """Nodes are continuously compounded zero rates."""

    name = "ZERO_YIELD"

    def initial_value(self) -> float:
        return AVERAGE_RATE

    def guess(self, i, data, times):
        return AVERAGE_RATE if i == 1 else data[i - 1]

    def discount(self, interpolator: Interpolator, t: float) -> float:
        return math.exp(-interpolator(t) * t)

    def bounds(self, i, data, times, max_rate):
        return -max_rate, max_rate

    def update_guess(self, data, value, i):
        data[i] = value
        # the seed node follows the first solved rate (flat short end)
        if i == 1:
            data[0] = value

    def value_from_discount(self, discount, previous_discount, t, t_previous):
        return -math.log(discount) / t


class ForwardRate(BootstrapTraits):
    """Nodes are instantaneous forward rates; discounts integrate them."""

    name = "FORWARD_RATE"

    def initial_value(self) -> float:
        return AVERAGE_RATE

    def guess(self, i, data, times):
        return AVERAGE_RATE if i == 1 else data[i - 1]

    def discount(self, interpolator: Interpolator, t: float) -> float:
        return math.exp(-interpolator.primitive(t))

    def bounds(self, i, data, times, max_rate):
        return -max_rate, max_rate

    def update_guess(self, data, value, i):
        data[i] = value
        if i == 1:
            data[0] = value

    def value_from_discount(self, discount, previous_discount, t, t_previous):
        return math.log(previous_discount / discount) / (t - t_previous)


_TRAITS = {
    "DISCOUNT": Discount,
    "ZERO_YIELD": ZeroYield,
    "ZERO": ZeroYield,
    "FORWARD_RATE": ForwardRate,
    "FORWARD": ForwardRate,
}


def create_traits(name: Union[str, BootstrapTraits]) -> BootstrapTraits:
    """Get curve traits by name (instances pass through)."""
    if isinstance(name, BootstrapTraits):
        return name
    key = name.upper()
    if key not in _TRAITS:
        raise InvalidArgumentError(
            f"Unknown curve traits: {name}. Available: {sorted(_TRAITS)}"
        )
    return _TRAITS[key]()
