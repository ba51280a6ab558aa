import math

import numpy as np
import pytest

from ratelib.config import ImpliedVolatilityConfig
from ratelib.errors import ConvergenceError, InvalidArgumentError
from ratelib.options import (
    BlackImpliedStdDevHelper,
    OptionType,
    PlainVanillaPayoff,
    black_formula,
    black_formula_cash_itm_probability,
    black_formula_cash_itm_probability_from_payoff,
    black_formula_from_payoff,
    black_formula_implied_std_dev,
    black_formula_implied_std_dev_approximation,
    black_formula_implied_std_dev_from_payoff,
    black_formula_std_dev_derivative,
)

CALL = OptionType.CALL
PUT = OptionType.PUT


def test_atm_call_price():
    price = black_formula(CALL, 100.0, 100.0, 0.2, 1.0)
    assert price == pytest.approx(7.965567455405798, abs=1e-10)


def test_atm_implied_std_dev_round_trip():
    price = black_formula(CALL, 100.0, 100.0, 0.2, 1.0)
    std_dev = black_formula_implied_std_dev(CALL, 100.0, 100.0, price, 1.0)
    assert std_dev == pytest.approx(0.2, abs=1e-8)


def test_zero_std_dev_gives_discounted_intrinsic():
    assert black_formula(CALL, 90.0, 100.0, 0.0, 0.95) == 9.5
    assert black_formula(PUT, 90.0, 100.0, 0.0, 0.95) == 0.0
    assert black_formula(PUT, 110.0, 100.0, 0.0, 0.5) == 5.0


def test_zero_strike():
    assert black_formula(CALL, 0.0, 100.0, 0.3, 0.9) == 100.0 * 0.9
    assert black_formula(PUT, 0.0, 100.0, 0.3, 0.9) == 0.0


def test_displacement_shifts_strike_and_forward():
    shifted = black_formula(CALL, 0.0, 0.02, 0.1, 1.0, displacement=0.01)
    plain = black_formula(CALL, 0.01, 0.03, 0.1, 1.0)
    assert shifted == pytest.approx(plain, rel=1e-14)
    # zero strike no longer hits the degenerate branch once displaced
    assert shifted < 0.02 + 0.01


def test_string_option_types():
    assert black_formula("C", 95.0, 100.0, 0.25) == black_formula(CALL, 95.0, 100.0, 0.25)
    assert black_formula("put", 95.0, 100.0, 0.25) == black_formula(PUT, 95.0, 100.0, 0.25)
    with pytest.raises(InvalidArgumentError):
        black_formula("straddle", 95.0, 100.0, 0.25)


@pytest.mark.parametrize(
    "strike, forward, std_dev, discount, displacement",
    [
        (-1.0, 100.0, 0.2, 1.0, 0.0),
        (100.0, 0.0, 0.2, 1.0, 0.0),
        (100.0, -5.0, 0.2, 1.0, 0.0),
        (100.0, 100.0, -0.1, 1.0, 0.0),
        (100.0, 100.0, 0.2, 0.0, 0.0),
        (100.0, 100.0, 0.2, 1.0, -0.01),
    ],
)
def test_invalid_arguments(strike, forward, std_dev, discount, displacement):
    with pytest.raises(InvalidArgumentError):
        black_formula(CALL, strike, forward, std_dev, discount, displacement)
    with pytest.raises(InvalidArgumentError):
        black_formula_std_dev_derivative(strike, forward, std_dev, discount, displacement)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError, match="strike"):
        black_formula(CALL, -1.0, 100.0, 0.2)


@pytest.mark.parametrize("strike", [60.0, 95.0, 100.0, 130.0])
@pytest.mark.parametrize("std_dev", [0.05, 0.3, 1.2])
def test_put_call_parity(strike, std_dev):
    forward, discount = 100.0, 0.97
    call = black_formula(CALL, strike, forward, std_dev, discount)
    put = black_formula(PUT, strike, forward, std_dev, discount)
    assert call - put == pytest.approx(discount * (forward - strike), abs=1e-10)


def test_price_is_non_negative_for_sampled_inputs():
    rng = np.random.default_rng(7)
    for _ in range(500):
        option_type = CALL if rng.random() < 0.5 else PUT
        strike = float(rng.uniform(0.0, 200.0))
        forward = float(rng.uniform(0.01, 200.0))
        std_dev = float(rng.uniform(0.0, 2.0))
        discount = float(rng.uniform(0.1, 1.0))
        displacement = float(rng.uniform(0.0, 0.05))
        assert black_formula(option_type, strike, forward, std_dev, discount, displacement) >= 0.0


def test_call_is_monotone_in_forward_and_std_dev():
    forwards = np.linspace(50.0, 150.0, 41)
    prices = [black_formula(CALL, 100.0, float(f), 0.25, 0.9) for f in forwards]
    assert all(b >= a for a, b in zip(prices, prices[1:]))

    std_devs = np.linspace(0.0, 2.0, 41)
    prices = [black_formula(CALL, 100.0, 95.0, float(s), 0.9) for s in std_devs]
    assert all(b >= a for a, b in zip(prices, prices[1:]))


def test_implied_std_dev_round_trip_sampled():
    rng = np.random.default_rng(2024)
    for _ in range(200):
        option_type = CALL if rng.random() < 0.5 else PUT
        forward = float(rng.uniform(0.02, 150.0))
        strike = forward * float(rng.uniform(0.8, 1.25))
        std_dev = float(rng.uniform(0.1, 1.0))
        discount = float(rng.uniform(0.5, 1.0))
        displacement = float(rng.uniform(0.0, 0.03))
        price = black_formula(option_type, strike, forward, std_dev, discount, displacement)
        implied = black_formula_implied_std_dev(
            option_type, strike, forward, price, discount, displacement=displacement
        )
        assert implied == pytest.approx(std_dev, abs=1e-8)


def test_implied_std_dev_with_guess():
    price = black_formula(PUT, 105.0, 100.0, 0.35, 0.8)
    implied = black_formula_implied_std_dev(PUT, 105.0, 100.0, price, 0.8, guess=1.0)
    assert implied == pytest.approx(0.35, abs=1e-8)


def test_implied_std_dev_rejects_negative_guess():
    with pytest.raises(InvalidArgumentError):
        black_formula_implied_std_dev(CALL, 100.0, 100.0, 5.0, 1.0, guess=-0.1)


def test_implied_std_dev_rejects_negative_price():
    with pytest.raises(InvalidArgumentError):
        black_formula_implied_std_dev(CALL, 100.0, 100.0, -1.0)


def test_implied_std_dev_unreachable_price_raises():
    # a call can never be worth more than the discounted forward
    with pytest.raises(ConvergenceError):
        black_formula_implied_std_dev(CALL, 100.0, 100.0, 150.0, 1.0)


def test_implied_std_dev_evaluation_budget():
    price = black_formula(CALL, 120.0, 100.0, 0.4, 1.0)
    with pytest.raises(ConvergenceError):
        black_formula_implied_std_dev(
            CALL, 120.0, 100.0, price, 1.0, guess=2.9, max_evaluations=3
        )


def test_implied_std_dev_config():
    price = black_formula(CALL, 100.0, 100.0, 2.5, 1.0)
    config = ImpliedVolatilityConfig(max_std_dev=2.0)
    with pytest.raises(ConvergenceError):
        black_formula_implied_std_dev(CALL, 100.0, 100.0, price, config=config)
    config = ImpliedVolatilityConfig(max_std_dev=5.0)
    implied = black_formula_implied_std_dev(CALL, 100.0, 100.0, price, config=config)
    assert implied == pytest.approx(2.5, abs=1e-8)


def test_approximation_at_the_money():
    price = black_formula(CALL, 100.0, 100.0, 0.2, 0.9)
    approx = black_formula_implied_std_dev_approximation(CALL, 100.0, 100.0, price, 0.9)
    assert approx == pytest.approx(price / 0.9 * math.sqrt(2.0 * math.pi) / 100.0)
    assert approx == pytest.approx(0.2, abs=1e-3)


def test_approximation_close_to_the_money():
    price = black_formula(CALL, 105.0, 100.0, 0.25, 1.0)
    approx = black_formula_implied_std_dev_approximation(CALL, 105.0, 100.0, price, 1.0)
    assert approx == pytest.approx(0.25, abs=5e-3)


def test_approximation_clamps_negative_discriminant():
    # price at intrinsic, deep in the money: the discriminant is negative
    approx = black_formula_implied_std_dev_approximation(CALL, 50.0, 100.0, 50.0, 1.0)
    assert approx == pytest.approx(25.0 * math.sqrt(2.0 * math.pi) / 150.0)
    assert approx >= 0.0


def test_cash_itm_probability():
    assert black_formula_cash_itm_probability(CALL, 90.0, 100.0, 0.0) == 1.0
    assert black_formula_cash_itm_probability(CALL, 110.0, 100.0, 0.0) == 0.0
    assert black_formula_cash_itm_probability(PUT, 110.0, 100.0, 0.0) == 1.0
    assert black_formula_cash_itm_probability(CALL, 0.0, 100.0, 0.2) == 1.0
    assert black_formula_cash_itm_probability(PUT, 0.0, 100.0, 0.2) == 0.0

    call = black_formula_cash_itm_probability(CALL, 105.0, 100.0, 0.3)
    put = black_formula_cash_itm_probability(PUT, 105.0, 100.0, 0.3)
    assert call + put == pytest.approx(1.0, abs=1e-15)
    assert 0.0 < call < 0.5


def test_cash_itm_probability_matches_strike_derivative():
    # -dC/dK = discount * P(F_T > K)
    h = 1e-4
    up = black_formula(CALL, 100.0 + h, 100.0, 0.3)
    down = black_formula(CALL, 100.0 - h, 100.0, 0.3)
    probability = black_formula_cash_itm_probability(CALL, 100.0, 100.0, 0.3)
    assert -(up - down) / (2 * h) == pytest.approx(probability, rel=1e-7)


def test_vega_matches_finite_difference():
    h = 1e-5
    for strike in (80.0, 100.0, 125.0):
        up = black_formula(CALL, strike, 100.0, 0.3 + h, 0.95)
        down = black_formula(CALL, strike, 100.0, 0.3 - h, 0.95)
        vega = black_formula_std_dev_derivative(strike, 100.0, 0.3, 0.95)
        assert vega == pytest.approx((up - down) / (2 * h), rel=1e-6)


def test_vega_degenerate_cases():
    atm = black_formula_std_dev_derivative(100.0, 100.0, 0.0, 0.5)
    assert atm == pytest.approx(0.5 * 100.0 / math.sqrt(2.0 * math.pi))
    assert black_formula_std_dev_derivative(90.0, 100.0, 0.0) == 0.0
    assert black_formula_std_dev_derivative(0.0, 100.0, 0.2) == 0.0


def test_implied_helper_residual_and_derivative():
    helper = BlackImpliedStdDevHelper(CALL, 100.0, 100.0, 5.0)
    value, derivative = helper(0.2)
    assert value == pytest.approx(black_formula(CALL, 100.0, 100.0, 0.2) - 5.0)
    assert derivative == pytest.approx(black_formula_std_dev_derivative(100.0, 100.0, 0.2))
    assert helper.value(0.0) == -5.0


def test_payoff_variants():
    payoff = PlainVanillaPayoff("P", 95.0)
    assert payoff.option_type is PUT
    assert payoff(90.0) == 5.0
    price = black_formula_from_payoff(payoff, 100.0, 0.2, 0.9)
    assert price == black_formula(PUT, 95.0, 100.0, 0.2, 0.9)
    implied = black_formula_implied_std_dev_from_payoff(payoff, 100.0, price, 0.9)
    assert implied == pytest.approx(0.2, abs=1e-8)
    assert black_formula_cash_itm_probability_from_payoff(
        payoff, 100.0, 0.2
    ) == black_formula_cash_itm_probability(PUT, 95.0, 100.0, 0.2)


def test_payoff_variant_forwards_budget_and_config():
    call = PlainVanillaPayoff(CALL, 120.0)
    price = black_formula(CALL, 120.0, 100.0, 0.4, 1.0)
    with pytest.raises(ConvergenceError):
        black_formula_implied_std_dev_from_payoff(
            call, 100.0, price, 1.0, guess=2.9, max_evaluations=3
        )

    atm = PlainVanillaPayoff(CALL, 100.0)
    price = black_formula(CALL, 100.0, 100.0, 2.5, 1.0)
    with pytest.raises(ConvergenceError):
        black_formula_implied_std_dev_from_payoff(
            atm, 100.0, price, config=ImpliedVolatilityConfig(max_std_dev=2.0)
        )
    config = ImpliedVolatilityConfig(max_std_dev=5.0)
    implied = black_formula_implied_std_dev_from_payoff(atm, 100.0, price, config=config)
    assert implied == pytest.approx(2.5, abs=1e-8)
