"""Closed-form option pricing: Black (shifted lognormal) and Bachelier."""

from .bachelier import bachelier_black_formula, bachelier_black_formula_from_payoff
from .black import (
    BlackImpliedStdDevHelper,
    black_formula,
    black_formula_cash_itm_probability,
    black_formula_cash_itm_probability_from_payoff,
    black_formula_from_payoff,
    black_formula_implied_std_dev,
    black_formula_implied_std_dev_approximation,
    black_formula_implied_std_dev_approximation_from_payoff,
    black_formula_implied_std_dev_from_payoff,
    black_formula_std_dev_derivative,
    black_formula_std_dev_derivative_from_payoff,
)
from .types import OptionType, PlainVanillaPayoff

__all__ = [
    "OptionType",
    "PlainVanillaPayoff",
    # Black
    "BlackImpliedStdDevHelper",
    "black_formula",
    "black_formula_implied_std_dev_approximation",
    "black_formula_implied_std_dev",
    "black_formula_cash_itm_probability",
    "black_formula_std_dev_derivative",
    "black_formula_from_payoff",
    "black_formula_implied_std_dev_approximation_from_payoff",
    "black_formula_implied_std_dev_from_payoff",
    "black_formula_cash_itm_probability_from_payoff",
    "black_formula_std_dev_derivative_from_payoff",
    # Bachelier
    "bachelier_black_formula",
    "bachelier_black_formula_from_payoff",
]
