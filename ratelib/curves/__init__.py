"""
Curves package - piecewise yield curve construction.

Main APIs:
---------
    - PiecewiseYieldCurve: lazily bootstrapped curve
    - IterativeBootstrap: sequential node-by-node solver
    - DepositRateHelper, FraRateHelper, SwapRateHelper: bootstrap instruments
    - Discount, ZeroYield, ForwardRate: curve traits
"""

from .base import YieldTermStructure
from .bootstrap import BootstrapResult, IterativeBootstrap
from .helpers import DepositRateHelper, FraRateHelper, RateHelper, SwapRateHelper
from .piecewise import CurveState, PiecewiseYieldCurve
from .quotes import SimpleQuote
from .traits import BootstrapTraits, Discount, ForwardRate, ZeroYield, create_traits

__all__ = [
    # Curves
    "YieldTermStructure",
    "PiecewiseYieldCurve",
    "CurveState",
    # Bootstrap
    "IterativeBootstrap",
    "BootstrapResult",
    # Instruments
    "RateHelper",
    "DepositRateHelper",
    "FraRateHelper",
    "SwapRateHelper",
    "SimpleQuote",
    # Traits
    "BootstrapTraits",
    "Discount",
    "ZeroYield",
    "ForwardRate",
    "create_traits",
]
