"""
Day counters used to put dates on a curve's time axis.

Each convention delegates to a QuantLib ``DayCounter``; the registry below
maps the market names accepted throughout the package onto shared
instances.
"""

from datetime import date, datetime
from typing import Callable, Dict, Union

import QuantLib as ql

from ratelib.errors import InvalidArgumentError

DateLike = Union[date, datetime]


def to_date(dt: DateLike) -> date:
    """Drop the time part of a datetime."""
    return dt.date() if isinstance(dt, datetime) else dt


def to_ql_date(dt: DateLike) -> ql.Date:
    d = to_date(dt)
    return ql.Date(d.day, d.month, d.year)


def to_py_date(ql_date: ql.Date) -> date:
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class DayCountConvention:
    """A named year-fraction rule.

    Args:
        name: Canonical market name, e.g. "ACT/365F"
        factory: Zero-argument callable building the QuantLib day counter
    """

    def __init__(self, name: str, factory: Callable[[], ql.DayCounter]):
        self.name = name
        self._day_counter = factory()

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Accrual between two dates; negative when ``end`` precedes ``start``."""
        return self._day_counter.yearFraction(to_ql_date(start), to_ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        return self._day_counter.dayCount(to_ql_date(start), to_ql_date(end))

    def __eq__(self, other) -> bool:
        return isinstance(other, DayCountConvention) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name!r})"


ACT_360 = DayCountConvention("ACT/360", ql.Actual360)
ACT_365F = DayCountConvention("ACT/365F", ql.Actual365Fixed)
THIRTY_360E = DayCountConvention(
    "30E/360", lambda: ql.Thirty360(ql.Thirty360.European)
)
THIRTY_360U = DayCountConvention(
    "30U/360", lambda: ql.Thirty360(ql.Thirty360.BondBasis)
)
ACT_ACT = DayCountConvention(
    "ACT/ACT", lambda: ql.ActualActual(ql.ActualActual.ISDA)
)

# Aliases seen in quote files and term sheets
_ALIASES: Dict[str, DayCountConvention] = {
    "ACT/360": ACT_360,
    "A360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "A365F": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "30E/360": THIRTY_360E,
    "30/360E": THIRTY_360E,
    "30U/360": THIRTY_360U,
    "30/360": THIRTY_360U,
    "ACT/ACT": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
}


def get_day_count_convention(
    name: Union[str, DayCountConvention]
) -> DayCountConvention:
    """Look up a convention by market name; instances are returned as is."""
    if isinstance(name, DayCountConvention):
        return name
    try:
        return _ALIASES[name.strip().upper()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown day count convention: {name}. Known: {sorted(_ALIASES)}"
        ) from None
