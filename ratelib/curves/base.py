"""
Base yield term structure.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

from ratelib.conventions.daycount import (
    DayCountConvention,
    get_day_count_convention,
)
from ratelib.errors import InvalidArgumentError

TimeLike = Union[datetime, date, float]


class YieldTermStructure(ABC):
    """Discount-factor based curve queried by date or by time.

    Subclasses implement ``_discount_impl`` on the time axis; dates are
    converted with the curve's day count from ``reference_date``.
    """

    def __init__(
        self,
        reference_date: date,
        day_count: Union[str, DayCountConvention] = "ACT/365F",
        allow_extrapolation: bool = False,
        name: str = "",
    ):
        self.reference_date = reference_date
        self.day_count = get_day_count_convention(day_count)
        self.allow_extrapolation = allow_extrapolation
        self.name = name

    def time_from_reference(self, dt: TimeLike) -> float:
        """Convert a date to the curve's year fraction basis (floats pass through)."""
        if isinstance(dt, (int, float)):
            return float(dt)
        if isinstance(dt, datetime):
            dt = dt.date()
        return self.day_count.year_fraction(self.reference_date, dt)

    @abstractmethod
    def max_time(self) -> float:
        """Latest time for which the curve can return values."""

    def _check_range(self, t: float) -> None:
        if t < 0.0:
            raise InvalidArgumentError(f"negative time ({t}) given")
        if not self.allow_extrapolation and t > self.max_time():
            raise InvalidArgumentError(
                f"time ({t}) is past max curve time ({self.max_time()})"
            )

    @abstractmethod
    def _discount_impl(self, t: float) -> float:
        """Discount factor at time t, range already checked."""

    def discount(self, t: TimeLike) -> float:
        """Discount factor at a date or time."""
        time_frac = self.time_from_reference(t)
        self._check_range(time_frac)
        if time_frac == 0.0:
            return 1.0
        return self._discount_impl(time_frac)

    def zero_rate(self, t: TimeLike) -> float:
        """Continuously compounded zero rate at a date or time."""
        time_frac = self.time_from_reference(t)
        if time_frac == 0.0:
            # Short-end limit
            time_frac = 1.0e-4
        df_val = self.discount(time_frac)
        if df_val <= 0.0:
            raise InvalidArgumentError(f"Non-positive discount factor: {df_val}")
        return -math.log(df_val) / time_frac

    def forward_rate(self, u: TimeLike, v: TimeLike) -> float:
        """Continuously compounded forward rate between u and v."""
        t1 = self.time_from_reference(u)
        t2 = self.time_from_reference(v)
        if t2 <= t1:
            raise InvalidArgumentError(
                f"Forward period must be positive: [{t1}, {t2}]"
            )
        return math.log(self.discount(t1) / self.discount(t2)) / (t2 - t1)

    def simple_forward_rate(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
        day_count: Union[str, DayCountConvention],
    ) -> float:
        """Simply compounded forward rate accruing with ``day_count``."""
        alpha = get_day_count_convention(day_count).year_fraction(start, end)
        if alpha <= 0:
            raise InvalidArgumentError("Forward period must be positive")
        return (self.discount(start) / self.discount(end) - 1.0) / alpha

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
