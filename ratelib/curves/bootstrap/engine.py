"""Sequential (iterative) bootstrap of piecewise curves."""

from __future__ import annotations

import logging
import math
import weakref
from typing import List, Optional

from ratelib.config import BootstrapConfig
from ratelib.errors import (
    BootstrapConvergenceError,
    ConvergenceError,
    DuplicateMaturityError,
    InvalidArgumentError,
)
from ratelib.utils.rootfinding import Solver1D, create_solver

from .results import BootstrapResult

logger = logging.getLogger(__name__)


class IterativeBootstrap:
    """Solves one curve node per instrument, shortest maturity first.

    Node i is the value that makes instrument i reprice to its market quote
    on the curve made of the committed nodes 0..i-1 plus node i. Committed
    nodes are never revisited, so with interpolations of global support the
    earlier instruments may not reprice exactly once later nodes are added.

    The engine keeps only a weak reference to its curve and writes nodes
    through the curve's ``reserve``/``commit_node`` interface.
    """

    def __init__(
        self,
        solver: Optional[Solver1D] = None,
        config: Optional[BootstrapConfig] = None,
    ):
        self.config = config or BootstrapConfig()
        self.solver = solver or create_solver(
            self.config.solver, self.config.max_evaluations
        )
        self._curve_ref = None
        self._results: List[BootstrapResult] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def setup(self, curve) -> None:
        self._curve_ref = weakref.ref(curve)

    @property
    def curve(self):
        curve = self._curve_ref() if self._curve_ref is not None else None
        if curve is None:
            raise InvalidArgumentError("bootstrap is not attached to a live curve")
        return curve

    @property
    def results(self) -> List[BootstrapResult]:
        return list(self._results)

    def reset(self) -> None:
        self._results = []

    def calculate(self) -> None:
        """Run the full bootstrap, replacing every node of the curve."""
        curve = self.curve
        self._results = []

        helpers = sorted(curve.instruments, key=lambda h: h.pillar_date)
        dates = [curve.reference_date] + [h.pillar_date for h in helpers]
        times = [0.0] + [curve.time_from_reference(d) for d in dates[1:]]
        self._validate_pillars(helpers, times)

        logger.info(
            "Bootstrapping %s instruments (%s, %s)",
            len(helpers),
            curve.traits.name,
            curve.interpolation.name,
        )
        curve.reserve(dates, times)

        for i, helper in enumerate(helpers, start=1):
            result = self._solve_node(curve, helper, i, times)
            self._results.append(result)
            if self.config.verbose:
                logger.info(
                    "   %s: t=%.6f value=%.10f df=%.10f",
                    result.pillar_date, result.time, result.value, result.discount_factor,
                )
            else:
                logger.debug(
                    "Node %s (%s): t=%s value=%s evaluations=%s",
                    i, result.pillar_date, result.time, result.value, result.evaluations,
                )

        logger.info("Bootstrap completed: %s nodes", len(helpers))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _validate_pillars(helpers, times: List[float]) -> None:
        if not helpers:
            raise InvalidArgumentError("Need at least one instrument to bootstrap")
        if times[1] <= 0.0:
            raise InvalidArgumentError(
                f"instrument pillar {helpers[0].pillar_date} is not after the "
                "curve reference date"
            )
        for i in range(1, len(helpers)):
            if times[i + 1] == times[i]:
                raise DuplicateMaturityError(
                    f"more than one instrument with pillar {helpers[i].pillar_date} "
                    f"(instruments {i - 1} and {i})"
                )

    def _solve_node(self, curve, helper, i: int, times: List[float]) -> BootstrapResult:
        traits = curve.traits
        accuracy = curve.accuracy

        def objective(x: float) -> float:
            curve.commit_node(i, x)
            return helper.quote_error(curve)

        data = curve.data_view()
        lower, upper = traits.bounds(i, data, times, self.config.max_rate)
        guess = traits.guess(i, data, times)
        curve.commit_node(i, guess)
        guess = self._helper_guess(curve, helper, i, times, guess)
        guess = min(max(guess, lower), upper)

        try:
            solved = self.solver.solve(objective, accuracy, guess, lower, upper)
        except ConvergenceError as exc:
            logger.error(
                "Failed to solve node for instrument %s (pillar %s, quote %s): %s",
                i - 1, helper.pillar_date, helper.market_quote(), exc,
            )
            raise BootstrapConvergenceError(
                f"{i - 1}. instrument (pillar {helper.pillar_date}, quote "
                f"{helper.market_quote()}): bootstrap failure: {exc}",
                index=i - 1,
                maturity=helper.pillar_date,
            ) from exc

        curve.commit_node(i, solved.root)
        discount = curve.discount(times[i])
        return BootstrapResult(
            index=i - 1,
            pillar_date=helper.pillar_date,
            time=times[i],
            value=solved.root,
            discount_factor=discount,
            zero_rate=-math.log(discount) / times[i],
            market_quote=helper.market_quote(),
            implied_quote=helper.implied_quote(curve),
            evaluations=solved.evaluations,
        )

    @staticmethod
    def _helper_guess(curve, helper, i: int, times: List[float], default: float) -> float:
        discount_guess = helper.initial_guess(curve)
        if discount_guess is None or discount_guess <= 0.0:
            return default
        previous_discount = curve.discount(times[i - 1])
        return curve.traits.value_from_discount(
            discount_guess, previous_discount, times[i], times[i - 1]
        )
