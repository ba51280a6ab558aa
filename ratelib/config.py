"""Configuration objects for the bootstrap and the implied-volatility solver."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_BOOTSTRAP_ACCURACY = 1.0e-12
DEFAULT_IMPLIED_VOL_ACCURACY = 1.0e-12
DEFAULT_MAX_EVALUATIONS = 100


@dataclass
class BootstrapConfig:
    """Configuration for the piecewise curve bootstrap."""

    accuracy: float = DEFAULT_BOOTSTRAP_ACCURACY
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS
    # None picks the traits' own default (LOG_LINEAR for discount factors)
    interpolation_method: Optional[str] = None
    traits: str = "DISCOUNT"
    day_count_convention: str = "ACT/365F"
    calendar: str = "TARGET"
    solver: str = "BRENT"
    # Absolute bound on rates explored while bracketing a node
    max_rate: float = 1.0
    allow_extrapolation: bool = False
    verbose: bool = False


@dataclass
class ImpliedVolatilityConfig:
    """Configuration knobs for the Black implied standard deviation solve."""

    accuracy: float = DEFAULT_IMPLIED_VOL_ACCURACY
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS
    min_std_dev: float = 0.0
    max_std_dev: float = 3.0
