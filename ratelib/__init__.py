"""Black/Bachelier option formulas and piecewise yield curve bootstrapping.

Key modules:
- options: Black and Bachelier closed forms, implied standard deviation
- curves: piecewise yield curves bootstrapped from rate helpers
- interpolation: pluggable interpolation strategies
- conventions: QuantLib-backed day counts and calendars
- utils: normal distribution, root finders, change notification
"""

__version__ = "1.0.0"

from .config import BootstrapConfig, ImpliedVolatilityConfig
from .curves import (
    DepositRateHelper,
    FraRateHelper,
    IterativeBootstrap,
    PiecewiseYieldCurve,
    SimpleQuote,
    SwapRateHelper,
)
from .errors import (
    BootstrapConvergenceError,
    ConvergenceError,
    DuplicateMaturityError,
    InvalidArgumentError,
    NumericGuardError,
    RateLibError,
)
from .options import (
    OptionType,
    PlainVanillaPayoff,
    bachelier_black_formula,
    black_formula,
    black_formula_cash_itm_probability,
    black_formula_implied_std_dev,
    black_formula_implied_std_dev_approximation,
    black_formula_std_dev_derivative,
)

__all__ = [
    "__version__",
    # Config
    "BootstrapConfig",
    "ImpliedVolatilityConfig",
    # Errors
    "RateLibError",
    "InvalidArgumentError",
    "NumericGuardError",
    "ConvergenceError",
    "DuplicateMaturityError",
    "BootstrapConvergenceError",
    # Options
    "OptionType",
    "PlainVanillaPayoff",
    "black_formula",
    "black_formula_implied_std_dev_approximation",
    "black_formula_implied_std_dev",
    "black_formula_cash_itm_probability",
    "black_formula_std_dev_derivative",
    "bachelier_black_formula",
    # Curves
    "PiecewiseYieldCurve",
    "IterativeBootstrap",
    "SimpleQuote",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
]
