"""Bachelier (normal) model option formula."""

from __future__ import annotations

from ratelib.errors import InvalidArgumentError, NumericGuardError
from ratelib.utils.distributions import CumulativeNormalDistribution

from .types import OptionType, OptionTypeLike, PlainVanillaPayoff

_PHI = CumulativeNormalDistribution()


def bachelier_black_formula(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
) -> float:
    """Price under normally distributed forwards.

    ``std_dev`` is the absolute (normal) standard deviation of the forward at
    expiry. Strikes and forwards may be negative.
    """
    option_type = OptionType.parse(option_type)
    if std_dev < 0.0:
        raise InvalidArgumentError(f"stdDev ({std_dev}) must be non-negative")
    if discount <= 0.0:
        raise InvalidArgumentError(
            f"positive discount required: {discount} not allowed"
        )

    d = (forward - strike) * option_type.sign
    if std_dev == 0.0:
        return discount * max(d, 0.0)
    h = d / std_dev
    result = discount * (std_dev * _PHI.derivative(h) + d * _PHI(h))
    if result < 0.0:
        raise NumericGuardError(
            f"negative value ({result}) for a {std_dev} stdDev {option_type.name} "
            f"option struck at {strike} on a {forward} forward (Bachelier model)"
        )
    return result


def bachelier_black_formula_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
) -> float:
    return bachelier_black_formula(
        payoff.option_type, payoff.strike, forward, std_dev, discount
    )
