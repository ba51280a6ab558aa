"""Market conventions: day counts and business calendars."""

from .calendars import (
    BusinessDayAdjustment,
    Calendar,
    get_calendar,
    parse_tenor,
    tenor_to_months,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
)

__all__ = [
    "BusinessDayAdjustment",
    "Calendar",
    "get_calendar",
    "parse_tenor",
    "tenor_to_months",
    "DayCountConvention",
    "get_day_count_convention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
]
