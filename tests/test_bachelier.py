import math

import pytest

from ratelib.errors import InvalidArgumentError
from ratelib.options import (
    OptionType,
    PlainVanillaPayoff,
    bachelier_black_formula,
    bachelier_black_formula_from_payoff,
)


def test_zero_std_dev_is_discounted_intrinsic():
    assert bachelier_black_formula(OptionType.CALL, 0.01, 0.03, 0.0, 0.9) == pytest.approx(0.018)
    assert bachelier_black_formula(OptionType.PUT, 0.01, 0.03, 0.0, 0.9) == 0.0


def test_at_the_money_value():
    std_dev, discount = 0.0075, 0.96
    expected = discount * std_dev / math.sqrt(2.0 * math.pi)
    for option_type in (OptionType.CALL, OptionType.PUT):
        price = bachelier_black_formula(option_type, 0.02, 0.02, std_dev, discount)
        assert price == pytest.approx(expected, rel=1e-14)


@pytest.mark.parametrize("strike", [-0.01, 0.0, 0.015, 0.05])
def test_put_call_parity(strike):
    forward, std_dev, discount = 0.02, 0.01, 0.93
    call = bachelier_black_formula("C", strike, forward, std_dev, discount)
    put = bachelier_black_formula("P", strike, forward, std_dev, discount)
    assert call - put == pytest.approx(discount * (forward - strike), abs=1e-15)


def test_negative_forward_and_strike():
    price = bachelier_black_formula(OptionType.CALL, -0.005, -0.002, 0.004, 1.0)
    assert price > 0.003
    put = bachelier_black_formula(OptionType.PUT, -0.005, -0.002, 0.004, 1.0)
    assert price - put == pytest.approx(0.003, abs=1e-15)


def test_price_increases_with_std_dev():
    prices = [
        bachelier_black_formula(OptionType.PUT, 0.02, 0.025, s, 1.0)
        for s in (0.0, 0.001, 0.005, 0.01, 0.05)
    ]
    assert all(b > a for a, b in zip(prices, prices[1:]))


@pytest.mark.parametrize("std_dev, discount", [(-0.01, 1.0), (0.01, 0.0), (0.01, -0.5)])
def test_invalid_arguments(std_dev, discount):
    with pytest.raises(InvalidArgumentError):
        bachelier_black_formula(OptionType.CALL, 0.02, 0.02, std_dev, discount)


def test_payoff_variant():
    payoff = PlainVanillaPayoff(OptionType.CALL, 0.015)
    assert bachelier_black_formula_from_payoff(payoff, 0.02, 0.01, 0.9) == (
        bachelier_black_formula(OptionType.CALL, 0.015, 0.02, 0.01, 0.9)
    )
