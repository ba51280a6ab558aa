"""Result records for the piecewise bootstrap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BootstrapResult:
    """Single node solved during the bootstrap."""

    index: int
    pillar_date: date
    time: float
    value: float
    discount_factor: float
    zero_rate: float
    market_quote: float
    implied_quote: float
    evaluations: int

    @property
    def residual(self) -> float:
        return self.implied_quote - self.market_quote
