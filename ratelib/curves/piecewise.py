"""
Piecewise yield curve bootstrapped from rate helpers.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from ratelib.config import BootstrapConfig
from ratelib.conventions.calendars import Calendar, get_calendar
from ratelib.conventions.daycount import DayCountConvention
from ratelib.errors import InvalidArgumentError
from ratelib.interpolation import InterpolationStrategy, Interpolator, create_interpolation
from ratelib.utils.observable import Observable

from .base import YieldTermStructure
from .bootstrap import BootstrapResult, IterativeBootstrap
from .helpers import RateHelper
from .traits import BootstrapTraits, create_traits

logger = logging.getLogger(__name__)


class CurveState(Enum):
    CLEAN = "CLEAN"
    DIRTY = "DIRTY"


class PiecewiseYieldCurve(YieldTermStructure, Observable):
    """
    Yield curve whose nodes are bootstrapped from market instruments.

    The instruments' pillar dates mark the ends of the interpolated
    segments; each segment is solved so that the instrument ending it
    reprices to its quote. Nodes are computed lazily: every accessor calls
    :meth:`ensure_fresh`, which reruns the whole bootstrap when the curve is
    dirty. A change in any instrument quote, or a call to :meth:`update`,
    makes the curve dirty again.

    If the bootstrap fails, no nodes are kept and the curve stays dirty, so
    the next query retries and raises the same error.

    Args:
        reference_date: Date at which discount factors equal one
        instruments: Rate helpers, in any order
        day_count: Convention turning dates into curve times
        accuracy: Solver accuracy on node values
        interpolation: Interpolation strategy or its name; defaults to the
            traits' choice (LOG_LINEAR for DISCOUNT, LINEAR for rate traits)
        traits: Curve traits (DISCOUNT, ZERO_YIELD, FORWARD_RATE) or instance
        bootstrap: Bootstrap engine; a fresh IterativeBootstrap by default
        config: Defaults for every argument not given explicitly
        allow_extrapolation: Allow queries past the last pillar
        name: Optional curve name
    """

    def __init__(
        self,
        reference_date: date,
        instruments: Sequence[RateHelper],
        day_count: Union[str, DayCountConvention, None] = None,
        accuracy: Optional[float] = None,
        interpolation: Union[str, InterpolationStrategy, None] = None,
        traits: Union[str, BootstrapTraits, None] = None,
        bootstrap: Optional[IterativeBootstrap] = None,
        config: Optional[BootstrapConfig] = None,
        allow_extrapolation: Optional[bool] = None,
        name: str = "",
    ):
        config = config or BootstrapConfig()
        super().__init__(
            reference_date,
            day_count or config.day_count_convention,
            config.allow_extrapolation if allow_extrapolation is None else allow_extrapolation,
            name,
        )
        Observable.__init__(self)

        if not instruments:
            raise InvalidArgumentError("Need at least one instrument to bootstrap")

        self.config = config
        self.accuracy = config.accuracy if accuracy is None else accuracy
        self.traits = create_traits(traits or config.traits)
        self.interpolation = create_interpolation(
            interpolation
            or config.interpolation_method
            or self.traits.default_interpolation
        )
        if self.interpolation.positive_values_only and not self.traits.positive_values:
            raise InvalidArgumentError(
                f"{self.interpolation.name} interpolation needs positive node values; "
                f"{self.traits.name} nodes can be zero or negative"
            )

        self._instruments: List[RateHelper] = list(instruments)
        for helper in self._instruments:
            helper.register_observer(self.update)

        self._state = CurveState.DIRTY
        self._calculating = False
        self._dates: List[date] = []
        self._times: List[float] = []
        self._data: List[float] = []
        self._active_nodes = 0
        self._interpolator: Optional[Interpolator] = None

        self._bootstrap = bootstrap or IterativeBootstrap(config=config)
        self._bootstrap.setup(self)

    @classmethod
    def from_settlement_days(
        cls,
        settlement_days: int,
        calendar: Union[str, Calendar],
        instruments: Sequence[RateHelper],
        evaluation_date: date,
        **kwargs,
    ) -> "PiecewiseYieldCurve":
        """Curve whose reference date is ``settlement_days`` business days after
        ``evaluation_date``."""
        reference_date = get_calendar(calendar).add_business_days(
            evaluation_date, settlement_days
        )
        return cls(reference_date, instruments, **kwargs)

    # ------------------------------------------------------------------
    # Lazy recalculation
    # ------------------------------------------------------------------
    @property
    def state(self) -> CurveState:
        return self._state

    @property
    def instruments(self) -> List[RateHelper]:
        return list(self._instruments)

    def update(self) -> None:
        """Mark the curve dirty; dependents hear about it on the first change only."""
        was_clean = self._state is CurveState.CLEAN
        self._state = CurveState.DIRTY
        if was_clean:
            logger.debug("Curve %s invalidated", self)
            self.notify_observers()

    def ensure_fresh(self) -> None:
        """Rerun the bootstrap if the curve is dirty."""
        if self._state is CurveState.CLEAN or self._calculating:
            return
        self._calculating = True
        try:
            self._bootstrap.calculate()
        except Exception:
            self._discard_nodes()
            raise
        else:
            self._state = CurveState.CLEAN
        finally:
            self._calculating = False

    # ------------------------------------------------------------------
    # Node interface used by the bootstrap engine
    # ------------------------------------------------------------------
    def reserve(self, dates: Sequence[date], times: Sequence[float]) -> None:
        """Allocate nodes; node 0 is the seed at the reference date."""
        if len(dates) != len(times):
            raise InvalidArgumentError("dates and times must have same length")
        self._dates = list(dates)
        self._times = list(times)
        self._data = [self.traits.initial_value()] * len(times)
        self._active_nodes = 1
        self._interpolator = None

    def commit_node(self, index: int, value: float) -> None:
        """Write node ``index`` and interpolate over nodes 0..index."""
        if not 1 <= index < len(self._data):
            raise InvalidArgumentError(
                f"node index ({index}) outside [1, {len(self._data) - 1}]"
            )
        self.traits.update_guess(self._data, value, index)
        self._active_nodes = index + 1
        self._interpolator = self.interpolation.interpolate(
            self._times[: index + 1], self._data[: index + 1]
        )

    def data_view(self) -> List[float]:
        """Copy of the node values as currently written."""
        return list(self._data)

    @property
    def node_count(self) -> int:
        return len(self._data)

    def _discard_nodes(self) -> None:
        self._dates = []
        self._times = []
        self._data = []
        self._active_nodes = 0
        self._interpolator = None
        self._bootstrap.reset()

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------
    def max_date(self) -> date:
        self.ensure_fresh()
        return self._dates[self._active_nodes - 1]

    def max_time(self) -> float:
        self.ensure_fresh()
        return self._times[self._active_nodes - 1]

    def times(self) -> List[float]:
        self.ensure_fresh()
        return list(self._times)

    def dates(self) -> List[date]:
        self.ensure_fresh()
        return list(self._dates)

    def data(self) -> List[float]:
        self.ensure_fresh()
        return list(self._data)

    values = data

    def nodes(self) -> List[Tuple[date, float]]:
        self.ensure_fresh()
        return list(zip(self._dates, self._data))

    def bootstrap_results(self) -> List[BootstrapResult]:
        self.ensure_fresh()
        return self._bootstrap.results

    def to_frame(self) -> pd.DataFrame:
        """Nodes with their discount factors and zero rates."""
        self.ensure_fresh()
        discounts = [self.discount(t) for t in self._times]
        zero_rates = [
            -math.log(df) / t if t > 0.0 else float("nan")
            for t, df in zip(self._times, discounts)
        ]
        return pd.DataFrame(
            {
                "date": self._dates,
                "time": self._times,
                "value": self._data,
                "discount": discounts,
                "zero_rate": zero_rates,
            }
        )

    # ------------------------------------------------------------------
    # YieldTermStructure interface
    # ------------------------------------------------------------------
    def _discount_impl(self, t: float) -> float:
        self.ensure_fresh()
        return self.traits.discount(self._interpolator, t)

    def __repr__(self) -> str:
        return (
            f"PiecewiseYieldCurve(reference_date={self.reference_date}, "
            f"instruments={len(self._instruments)}, traits={self.traits.name}, "
            f"interpolation={self.interpolation.name}, state={self._state.value})"
        )
