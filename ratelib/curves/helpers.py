"""Rate helpers: market instruments used to bootstrap a curve."""

from __future__ import annotations

import math
from datetime import date
from typing import List, Optional, Union

from ratelib.conventions.calendars import (
    BusinessDayAdjustment,
    Calendar,
    get_calendar,
    tenor_to_months,
)
from ratelib.conventions.daycount import DayCountConvention, get_day_count_convention
from ratelib.errors import InvalidArgumentError
from ratelib.utils.observable import Observable

from .quotes import SimpleQuote

QuoteLike = Union[float, SimpleQuote]


class RateHelper(Observable):
    """Common interface for bootstrap instruments.

    A helper exposes the date its node sits on (``pillar_date``), its market
    quote, and the quote implied by a candidate curve. Helpers observe their
    quote and forward its change notifications.
    """

    def __init__(self, quote: QuoteLike):
        super().__init__()
        self.quote = quote if isinstance(quote, SimpleQuote) else SimpleQuote(quote)
        self.quote.register_observer(self.notify_observers)
        self.earliest_date: Optional[date] = None
        self.maturity_date: Optional[date] = None

    @property
    def pillar_date(self) -> date:
        return self.maturity_date

    def market_quote(self) -> float:
        return self.quote.value

    def implied_quote(self, curve) -> float:  # pragma: no cover - interface
        raise NotImplementedError

    def quote_error(self, curve) -> float:
        """Model value minus market quote."""
        return self.implied_quote(curve) - self.market_quote()

    def initial_guess(self, curve) -> Optional[float]:
        """Analytic guess of the discount factor at the pillar, if any."""
        return None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(quote={self.quote._value}, "
            f"pillar={self.pillar_date})"
        )


class DepositRateHelper(RateHelper):
    """Money-market deposit quoted as a simple rate."""

    def __init__(
        self,
        rate: QuoteLike,
        tenor: str,
        reference_date: date,
        settlement_days: int = 0,
        calendar: Union[str, Calendar] = "TARGET",
        day_count: Union[str, DayCountConvention] = "ACT/360",
        business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        self.tenor = tenor.upper().strip()
        self.calendar = get_calendar(calendar)
        self.day_count = get_day_count_convention(day_count)

        self.earliest_date = self.calendar.add_business_days(
            reference_date, settlement_days
        )
        self.maturity_date = self.calendar.advance(
            self.earliest_date, self.tenor, business_day_adjustment
        )
        self.year_fraction = self.day_count.year_fraction(
            self.earliest_date, self.maturity_date
        )

    def implied_quote(self, curve) -> float:
        df_start = curve.discount(self.earliest_date)
        df_end = curve.discount(self.maturity_date)
        return (df_start / df_end - 1.0) / self.year_fraction

    def initial_guess(self, curve) -> Optional[float]:
        return curve.discount(self.earliest_date) / (
            1.0 + self.market_quote() * self.year_fraction
        )


class FraRateHelper(RateHelper):
    """Forward rate agreement between two month offsets from spot."""

    def __init__(
        self,
        rate: QuoteLike,
        months_to_start: int,
        months_to_end: int,
        reference_date: date,
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        day_count: Union[str, DayCountConvention] = "ACT/360",
        business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        if months_to_end <= months_to_start:
            raise InvalidArgumentError(
                f"FRA end ({months_to_end}M) must be after start ({months_to_start}M)"
            )
        self.calendar = get_calendar(calendar)
        self.day_count = get_day_count_convention(day_count)

        spot = self.calendar.add_business_days(reference_date, settlement_days)
        self.earliest_date = self.calendar.advance(
            spot, f"{months_to_start}M", business_day_adjustment
        )
        self.maturity_date = self.calendar.advance(
            spot, f"{months_to_end}M", business_day_adjustment
        )
        self.year_fraction = self.day_count.year_fraction(
            self.earliest_date, self.maturity_date
        )

    def implied_quote(self, curve) -> float:
        df_start = curve.discount(self.earliest_date)
        df_end = curve.discount(self.maturity_date)
        return (df_start / df_end - 1.0) / self.year_fraction

    def initial_guess(self, curve) -> Optional[float]:
        return curve.discount(self.earliest_date) / (
            1.0 + self.market_quote() * self.year_fraction
        )


class SwapRateHelper(RateHelper):
    """Spot-starting par swap, discounted and projected on the same curve.

    The floating leg is worth DF(spot) - DF(maturity), so the par rate is
    that difference over the fixed-leg annuity.
    """

    def __init__(
        self,
        rate: QuoteLike,
        tenor: str,
        reference_date: date,
        settlement_days: int = 2,
        calendar: Union[str, Calendar] = "TARGET",
        fixed_frequency: str = "1Y",
        fixed_day_count: Union[str, DayCountConvention] = "30E/360",
        business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ):
        super().__init__(rate)
        self.tenor = tenor.upper().strip()
        self.calendar = get_calendar(calendar)
        self.fixed_day_count = get_day_count_convention(fixed_day_count)

        self.earliest_date = self.calendar.add_business_days(
            reference_date, settlement_days
        )
        self.maturity_date = self.calendar.advance(
            self.earliest_date, self.tenor, business_day_adjustment
        )
        self.fixed_schedule = self._build_fixed_schedule(
            tenor_to_months(self.tenor),
            tenor_to_months(fixed_frequency),
            business_day_adjustment,
        )
        self.accruals = [
            self.fixed_day_count.year_fraction(start, end)
            for start, end in zip(self.fixed_schedule[:-1], self.fixed_schedule[1:])
        ]

    def _build_fixed_schedule(
        self,
        total_months: int,
        step_months: int,
        adjustment: BusinessDayAdjustment,
    ) -> List[date]:
        dates = [self.earliest_date]
        months = step_months
        while months < total_months:
            dates.append(
                self.calendar.advance(self.earliest_date, f"{months}M", adjustment)
            )
            months += step_months
        dates.append(self.maturity_date)
        return dates

    def annuity(self, curve) -> float:
        return math.fsum(
            alpha * curve.discount(end)
            for alpha, end in zip(self.accruals, self.fixed_schedule[1:])
        )

    def implied_quote(self, curve) -> float:
        floating_pv = curve.discount(self.earliest_date) - curve.discount(
            self.maturity_date
        )
        return floating_pv / self.annuity(curve)
