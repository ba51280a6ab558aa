"""Black (shifted lognormal) formula and its implied standard deviation.

All routines work on the total standard deviation ``sigma * sqrt(T)`` rather
than on a volatility, and on forward values, so callers stay in control of
time and discounting conventions.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from ratelib.config import ImpliedVolatilityConfig
from ratelib.errors import InvalidArgumentError, NumericGuardError
from ratelib.utils.distributions import CumulativeNormalDistribution
from ratelib.utils.rootfinding import NewtonSafe

from .types import OptionType, OptionTypeLike, PlainVanillaPayoff

logger = logging.getLogger(__name__)

_SQRT_2PI = math.sqrt(2.0 * math.pi)
_PHI = CumulativeNormalDistribution()


def _check_strike(strike: float) -> None:
    if strike < 0.0:
        raise InvalidArgumentError(f"strike ({strike}) must be non-negative")


def _check_forward(forward: float) -> None:
    if forward <= 0.0:
        raise InvalidArgumentError(f"forward ({forward}) must be positive")


def _check_std_dev(std_dev: float) -> None:
    if std_dev < 0.0:
        raise InvalidArgumentError(f"stdDev ({std_dev}) must be non-negative")


def _check_discount(discount: float) -> None:
    if discount <= 0.0:
        raise InvalidArgumentError(
            f"positive discount required: {discount} not allowed"
        )


def _check_displacement(displacement: float) -> None:
    if displacement < 0.0:
        raise InvalidArgumentError(
            f"displacement ({displacement}) must be non-negative"
        )


def _check_price(black_price: float) -> None:
    if black_price < 0.0:
        raise InvalidArgumentError(
            f"blackPrice ({black_price}) must be non-negative"
        )


def black_formula(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Black price of a European call or put.

    Args:
        option_type: Call or put
        strike: Strike, before displacement
        forward: Forward value of the underlying, before displacement
        std_dev: Total standard deviation of log(forward) at expiry
        discount: Discount factor to the payment date
        displacement: Shift applied to both strike and forward

    Returns:
        Discounted option value (never negative)
    """
    option_type = OptionType.parse(option_type)
    _check_strike(strike)
    _check_forward(forward)
    _check_std_dev(std_dev)
    _check_discount(discount)
    _check_displacement(displacement)

    sign = option_type.sign
    forward = forward + displacement
    strike = strike + displacement
    if std_dev == 0.0:
        return max((forward - strike) * sign, 0.0) * discount
    # strike can only be zero here when displacement is zero
    if strike == 0.0:
        return forward * discount if option_type is OptionType.CALL else 0.0

    d1 = math.log(forward / strike) / std_dev + 0.5 * std_dev
    d2 = d1 - std_dev
    result = discount * sign * (forward * _PHI(sign * d1) - strike * _PHI(sign * d2))
    if result < 0.0:
        raise NumericGuardError(
            f"negative value ({result}) for a {std_dev} stdDev {option_type.name} "
            f"option struck at {strike} on a {forward} forward"
        )
    return result


def black_formula_implied_std_dev_approximation(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Closed-form approximation of the implied standard deviation.

    At the money this is the Brenner-Subrahmanyan (1988) / Feinstein (1988)
    formula; elsewhere the Corrado-Miller extended moneyness approximation,
    whose discriminant is floored at zero where the approximation breaks
    down.
    """
    option_type = OptionType.parse(option_type)
    _check_strike(strike)
    _check_forward(forward)
    _check_price(black_price)
    _check_discount(discount)
    _check_displacement(displacement)

    forward = forward + displacement
    strike = strike + displacement
    if strike == forward:
        std_dev = black_price / discount * _SQRT_2PI / forward
    else:
        moneyness_delta = option_type.sign * (forward - strike)
        temp = black_price / discount - 0.5 * moneyness_delta
        discriminant = temp * temp - moneyness_delta * moneyness_delta / math.pi
        if discriminant < 0.0:
            discriminant = 0.0
        temp += math.sqrt(discriminant)
        temp *= _SQRT_2PI
        std_dev = temp / (forward + strike)

    if std_dev < 0.0:
        raise NumericGuardError(f"stdDev ({std_dev}) must be non-negative")
    return std_dev


class BlackImpliedStdDevHelper:
    """Undiscounted Black price minus a target, as a function of stdDev.

    Strike and forward are taken already displaced. Calling the helper
    returns ``(residual, derivative)`` as expected by :class:`NewtonSafe`.
    """

    def __init__(
        self,
        option_type: OptionTypeLike,
        strike: float,
        forward: float,
        undiscounted_black_price: float,
    ):
        option_type = OptionType.parse(option_type)
        _check_strike(strike)
        _check_forward(forward)
        if undiscounted_black_price < 0.0:
            raise InvalidArgumentError(
                f"undiscounted Black price ({undiscounted_black_price}) "
                "must be non-negative"
            )
        sign = option_type.sign
        self.half_option_type = 0.5 * sign
        self.signed_strike = sign * strike
        self.signed_forward = sign * forward
        self.undiscounted_black_price = undiscounted_black_price
        if strike > 0.0:
            self.signed_moneyness = sign * math.log(forward / strike)
        else:
            self.signed_moneyness = sign * math.inf

    def value(self, std_dev: float) -> float:
        if std_dev == 0.0:
            return (
                max(self.signed_forward - self.signed_strike, 0.0)
                - self.undiscounted_black_price
            )
        temp = self.half_option_type * std_dev
        d = self.signed_moneyness / std_dev
        signed_d1 = d + temp
        signed_d2 = d - temp
        result = self.signed_forward * _PHI(signed_d1) - self.signed_strike * _PHI(
            signed_d2
        )
        # rounding can push deep out-of-the-money values slightly below zero
        return max(0.0, result) - self.undiscounted_black_price

    def derivative(self, std_dev: float) -> float:
        if std_dev == 0.0:
            if self.signed_moneyness == 0.0:
                return self.signed_forward * _PHI.derivative(0.0)
            return 0.0
        signed_d1 = self.signed_moneyness / std_dev + self.half_option_type * std_dev
        return self.signed_forward * _PHI.derivative(signed_d1)

    def __call__(self, std_dev: float) -> Tuple[float, float]:
        return self.value(std_dev), self.derivative(std_dev)


def black_formula_implied_std_dev(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    guess: Optional[float] = None,
    accuracy: Optional[float] = None,
    displacement: float = 0.0,
    max_evaluations: Optional[int] = None,
    config: Optional[ImpliedVolatilityConfig] = None,
) -> float:
    """Standard deviation reproducing ``black_price`` under the Black formula.

    The root is searched with NewtonSafe inside
    [config.min_std_dev, config.max_std_dev], seeded with
    :func:`black_formula_implied_std_dev_approximation` unless a guess is
    given. Raises ConvergenceError if the bracket does not contain the root
    or the evaluation budget runs out.
    """
    config = config or ImpliedVolatilityConfig()
    if accuracy is None:
        accuracy = config.accuracy
    if max_evaluations is None:
        max_evaluations = config.max_evaluations

    option_type = OptionType.parse(option_type)
    _check_strike(strike)
    _check_forward(forward)
    _check_price(black_price)
    _check_discount(discount)
    _check_displacement(displacement)

    if guess is None:
        guess = black_formula_implied_std_dev_approximation(
            option_type, strike, forward, black_price, discount, displacement
        )
        guess = min(max(guess, config.min_std_dev), config.max_std_dev)
    elif guess < 0.0:
        raise InvalidArgumentError(f"stdDev guess ({guess}) must be non-negative")

    helper = BlackImpliedStdDevHelper(
        option_type,
        strike + displacement,
        forward + displacement,
        black_price / discount,
    )
    solver = NewtonSafe(max_evaluations)
    result = solver.solve(
        helper, accuracy, guess, config.min_std_dev, config.max_std_dev
    )
    logger.debug(
        "Implied stdDev %s found after %s evaluations", result.root, result.evaluations
    )
    if result.root < 0.0:
        raise NumericGuardError(f"stdDev ({result.root}) must be non-negative")
    return result.root


def black_formula_cash_itm_probability(
    option_type: OptionTypeLike,
    strike: float,
    forward: float,
    std_dev: float,
    displacement: float = 0.0,
) -> float:
    """Probability that a cash-or-nothing option finishes in the money."""
    sign = OptionType.parse(option_type).sign
    forward = forward + displacement
    strike = strike + displacement
    if std_dev == 0.0:
        return 1.0 if forward * sign > strike * sign else 0.0
    if strike == 0.0:
        return 1.0 if sign > 0 else 0.0
    d1 = math.log(forward / strike) / std_dev + 0.5 * std_dev
    d2 = d1 - std_dev
    return _PHI(sign * d2)


def black_formula_std_dev_derivative(
    strike: float,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    """Sensitivity of the Black price to the standard deviation (vega)."""
    _check_strike(strike)
    _check_forward(forward)
    _check_std_dev(std_dev)
    _check_discount(discount)
    _check_displacement(displacement)

    forward = forward + displacement
    strike = strike + displacement
    if strike == 0.0:
        return 0.0
    if std_dev == 0.0:
        return discount * forward * _PHI.derivative(0.0) if forward == strike else 0.0
    d1 = math.log(forward / strike) / std_dev + 0.5 * std_dev
    return discount * forward * _PHI.derivative(d1)


# ----------------------------------------------------------------------
# Payoff-based variants
# ----------------------------------------------------------------------
def black_formula_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    return black_formula(
        payoff.option_type, payoff.strike, forward, std_dev, discount, displacement
    )


def black_formula_implied_std_dev_approximation_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    return black_formula_implied_std_dev_approximation(
        payoff.option_type, payoff.strike, forward, black_price, discount, displacement
    )


def black_formula_implied_std_dev_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    black_price: float,
    discount: float = 1.0,
    guess: Optional[float] = None,
    accuracy: Optional[float] = None,
    displacement: float = 0.0,
    max_evaluations: Optional[int] = None,
    config: Optional[ImpliedVolatilityConfig] = None,
) -> float:
    return black_formula_implied_std_dev(
        payoff.option_type,
        payoff.strike,
        forward,
        black_price,
        discount,
        guess=guess,
        accuracy=accuracy,
        displacement=displacement,
        max_evaluations=max_evaluations,
        config=config,
    )


def black_formula_cash_itm_probability_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    std_dev: float,
    displacement: float = 0.0,
) -> float:
    return black_formula_cash_itm_probability(
        payoff.option_type, payoff.strike, forward, std_dev, displacement
    )


def black_formula_std_dev_derivative_from_payoff(
    payoff: PlainVanillaPayoff,
    forward: float,
    std_dev: float,
    discount: float = 1.0,
    displacement: float = 0.0,
) -> float:
    return black_formula_std_dev_derivative(
        payoff.strike, forward, std_dev, discount, displacement
    )
