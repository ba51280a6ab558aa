"""Root-finding utilities (safeguarded Newton, Brent and bisection)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Tuple

from scipy.optimize import brentq

from ratelib.errors import ConvergenceError, InvalidArgumentError

logger = logging.getLogger(__name__)

FuncDeriv = Callable[[float], Tuple[float, float]]
Func = Callable[[float], float]

_EPSILON = sys.float_info.epsilon


@dataclass
class RootResult:
    root: float
    evaluations: int
    converged: bool
    method: str


class Solver1D:
    """Common bracket handling for the one-dimensional solvers.

    Subclasses implement ``_solve_impl`` once the bracket [x_min, x_max] has
    been checked for a sign change. Every call to the objective counts
    against ``max_evaluations``.
    """

    method = "solver"

    def __init__(self, max_evaluations: int = 100):
        if max_evaluations < 1:
            raise InvalidArgumentError(
                f"max_evaluations ({max_evaluations}) must be positive"
            )
        self.max_evaluations = max_evaluations

    def solve(
        self, func, accuracy: float, guess: float, x_min: float, x_max: float
    ) -> RootResult:
        if x_min >= x_max:
            raise InvalidArgumentError(
                f"invalid range: x_min ({x_min}) >= x_max ({x_max})"
            )
        if not x_min <= guess <= x_max:
            raise InvalidArgumentError(
                f"guess ({guess}) outside the bracket [{x_min}, {x_max}]"
            )
        accuracy = max(accuracy, _EPSILON)

        f_min = self._value(func, x_min)
        if f_min == 0.0:
            return RootResult(x_min, 1, True, self.method)
        f_max = self._value(func, x_max)
        if f_max == 0.0:
            return RootResult(x_max, 2, True, self.method)
        if f_min * f_max > 0.0:
            raise ConvergenceError(
                f"root not bracketed: f[{x_min}, {x_max}] -> [{f_min}, {f_max}]"
            )
        return self._solve_impl(func, accuracy, guess, x_min, x_max, f_min, f_max)

    def _value(self, func, x: float) -> float:
        return func(x)

    def _solve_impl(self, func, accuracy, guess, x_min, x_max, f_min, f_max):
        raise NotImplementedError

    def _exhausted(self, x: float) -> ConvergenceError:
        return ConvergenceError(
            f"{self.method} exceeded {self.max_evaluations} function evaluations "
            f"(last x={x})"
        )


class NewtonSafe(Solver1D):
    """Newton-Raphson kept inside a bracket, with a bisection fallback.

    ``func`` returns ``(value, derivative)`` at a given point. A Newton step
    is taken when it stays inside the current bracket and halves the error
    faster than bisection would; otherwise the bracket is bisected.
    """

    method = "newton_safe"

    def _value(self, func: FuncDeriv, x: float) -> float:
        return func(x)[0]

    def _solve_impl(self, func, accuracy, guess, x_min, x_max, f_min, f_max):
        # Orient the search so that f(x_low) < 0
        if f_min < 0.0:
            x_low, x_high = x_min, x_max
        else:
            x_low, x_high = x_max, x_min

        dx_old = x_max - x_min
        dx = dx_old
        root = guess
        value, deriv = func(root)
        evaluations = 3

        while evaluations <= self.max_evaluations:
            if value == 0.0:
                return RootResult(root, evaluations, True, self.method)
            out_of_range = (
                ((root - x_high) * deriv - value) * ((root - x_low) * deriv - value)
                > 0.0
            )
            if out_of_range or abs(2.0 * value) > abs(dx_old * deriv):
                dx_old = dx
                dx = 0.5 * (x_high - x_low)
                root = x_low + dx
            else:
                dx_old = dx
                dx = value / deriv
                root -= dx
            if abs(dx) < accuracy:
                return RootResult(root, evaluations, True, self.method)

            value, deriv = func(root)
            evaluations += 1
            logger.debug(
                "NewtonSafe eval %s: x=%s value=%s deriv=%s",
                evaluations, root, value, deriv,
            )
            if value < 0.0:
                x_low = root
            else:
                x_high = root

        raise self._exhausted(root)


class Brent(Solver1D):
    """Brent's method via :func:`scipy.optimize.brentq`.

    The guess is only checked against the bracket; brentq starts from the
    bracket end points.
    """

    method = "brent"

    def _solve_impl(self, func, accuracy, guess, x_min, x_max, f_min, f_max):
        # Two evaluations spent on the bracket check, two more by brentq on the ends
        budget = self.max_evaluations - 4
        if budget < 1:
            raise self._exhausted(guess)
        root, info = brentq(
            func,
            x_min,
            x_max,
            xtol=accuracy,
            maxiter=budget,
            full_output=True,
            disp=False,
        )
        evaluations = 2 + info.function_calls
        if not info.converged:
            raise self._exhausted(root)
        logger.debug("Brent converged to %s after %s evaluations", root, evaluations)
        return RootResult(root, evaluations, True, self.method)


class Bisection(Solver1D):
    """Plain interval halving."""

    method = "bisect"

    def _solve_impl(self, func, accuracy, guess, x_min, x_max, f_min, f_max):
        lower, upper, f_lower = x_min, x_max, f_min
        evaluations = 2
        while evaluations < self.max_evaluations:
            mid = 0.5 * (lower + upper)
            f_mid = func(mid)
            evaluations += 1
            if f_mid == 0.0 or 0.5 * (upper - lower) < accuracy:
                return RootResult(mid, evaluations, True, self.method)
            if f_lower * f_mid < 0.0:
                upper = mid
            else:
                lower, f_lower = mid, f_mid
        raise self._exhausted(0.5 * (lower + upper))


_SOLVERS = {
    "BRENT": Brent,
    "BISECTION": Bisection,
    "BISECT": Bisection,
}


def create_solver(name: str, max_evaluations: int = 100) -> Solver1D:
    """Create a derivative-free solver by name."""
    key = name.upper()
    if key not in _SOLVERS:
        raise InvalidArgumentError(
            f"Unknown solver: {name}. Available: {sorted(_SOLVERS)}"
        )
    return _SOLVERS[key](max_evaluations)
