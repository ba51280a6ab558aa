"""
QuantLib-backed business calendars and tenor arithmetic.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Union

import QuantLib as ql
from dateutil.relativedelta import relativedelta

from ratelib.errors import InvalidArgumentError

from .daycount import to_date, to_ql_date, to_py_date


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = ql.Unadjusted
    FOLLOWING = ql.Following
    MODIFIED_FOLLOWING = ql.ModifiedFollowing
    PRECEDING = ql.Preceding
    MODIFIED_PRECEDING = ql.ModifiedPreceding


class Calendar:
    """Business day calendar wrapping a QuantLib calendar."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isHoliday(to_ql_date(dt))

    def adjust(
        self,
        dt: Union[date, datetime],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> date:
        """Roll a date onto a business day."""
        return to_py_date(self._ql_calendar.adjust(to_ql_date(dt), adjustment.value))

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        """Add business days to a date."""
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return to_py_date(ql_result)

    def advance(
        self,
        start_date: Union[date, datetime],
        tenor: str,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
    ) -> date:
        """Move ``start_date`` forward by a tenor such as '1W', '6M' or '10Y'.

        Day and week tenors use calendar days; month and year tenors use month
        arithmetic. The result is adjusted with ``adjustment``.
        """
        start = to_date(start_date)
        unit, count = parse_tenor(tenor)
        if unit == "D":
            unadjusted = start + timedelta(days=count)
        elif unit == "W":
            unadjusted = start + timedelta(weeks=count)
        else:
            months = count * 12 if unit == "Y" else count
            unadjusted = start + relativedelta(months=months)
            if end_of_month and _is_end_of_month(start):
                unadjusted = unadjusted + relativedelta(day=31)
        return self.adjust(unadjusted, adjustment)

    def __str__(self) -> str:
        return self.name


def _is_end_of_month(dt: date) -> bool:
    return (dt + timedelta(days=1)).month != dt.month


def parse_tenor(tenor: str) -> tuple:
    """Split '3M' into ('M', 3)."""
    t = tenor.upper().strip()
    if len(t) < 2 or t[-1] not in "DWMY":
        raise InvalidArgumentError(f"Unsupported tenor: {tenor}")
    try:
        count = int(t[:-1])
    except ValueError as exc:
        raise InvalidArgumentError(f"Unsupported tenor: {tenor}") from exc
    return t[-1], count


def tenor_to_months(tenor: str) -> int:
    """Convert tenor string (e.g., '3M', '2Y') to number of months."""
    unit, count = parse_tenor(tenor)
    if unit == "M":
        return count
    if unit == "Y":
        return count * 12
    raise InvalidArgumentError(f"Tenor {tenor} is not a whole number of months")


class TargetCalendar(Calendar):
    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


class WeekendsOnlyCalendar(Calendar):
    def __init__(self):
        super().__init__("WEEKEND", ql.WeekendsOnly())


class UnitedStatesCalendar(Calendar):
    def __init__(self):
        super().__init__("USNY", ql.UnitedStates(ql.UnitedStates.FederalReserve))


class UnitedKingdomCalendar(Calendar):
    def __init__(self):
        super().__init__("UK", ql.UnitedKingdom())


class NullCalendar(Calendar):
    """Every day is a business day."""

    def __init__(self):
        super().__init__("NULL", ql.NullCalendar())


_CALENDARS = {
    "TARGET": TargetCalendar,
    "WEEKEND": WeekendsOnlyCalendar,
    "USNY": UnitedStatesCalendar,
    "UK": UnitedKingdomCalendar,
    "NULL": NullCalendar,
}


def get_calendar(name: Union[str, Calendar]) -> Calendar:
    """Get a calendar by name (instances pass through)."""
    if isinstance(name, Calendar):
        return name
    key = name.upper()
    if key not in _CALENDARS:
        raise InvalidArgumentError(
            f"Unknown calendar: {name}. Available: {list(_CALENDARS.keys())}"
        )
    return _CALENDARS[key]()
