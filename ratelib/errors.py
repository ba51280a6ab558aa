"""Exception types raised by the pricing and curve-building code."""

from __future__ import annotations

from datetime import date
from typing import Optional


class RateLibError(Exception):
    """Base class for all library errors."""


class InvalidArgumentError(RateLibError, ValueError):
    """An input lies outside the domain of the called routine."""


class NumericGuardError(RateLibError, ArithmeticError):
    """A post-condition of a closed-form formula was violated."""


class ConvergenceError(RateLibError, RuntimeError):
    """Raised when root-finding fails to bracket or converge."""


class DuplicateMaturityError(RateLibError, ValueError):
    """Two bootstrap instruments share the same pillar."""


class BootstrapConvergenceError(ConvergenceError):
    """The node for one instrument could not be solved."""

    def __init__(self, message: str, index: int, maturity: Optional[date] = None):
        super().__init__(message)
        self.index = index
        self.maturity = maturity
