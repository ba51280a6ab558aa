"""
Market quotes whose changes are pushed to subscribers.
"""

import math
from typing import Optional

from ratelib.errors import InvalidArgumentError
from ratelib.utils.observable import Observable


class SimpleQuote(Observable):
    """A market value that notifies its observers when it changes."""

    def __init__(self, value: Optional[float] = None):
        super().__init__()
        self._value = value

    @property
    def value(self) -> float:
        if self._value is None:
            raise InvalidArgumentError("invalid SimpleQuote: no value set")
        return self._value

    def is_valid(self) -> bool:
        return self._value is not None and not math.isnan(self._value)

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value; returns the change. Observers hear about real changes only."""
        previous = self._value
        self._value = value
        if previous != value:
            self.notify_observers()
        if previous is None or value is None:
            return 0.0
        return value - previous

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value})"
