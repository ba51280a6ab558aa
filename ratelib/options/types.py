"""Option type and payoff definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ratelib.errors import InvalidArgumentError


class OptionType(Enum):
    """Option side; the value is the sign used in the pricing formulas."""

    CALL = 1
    PUT = -1

    @property
    def sign(self) -> int:
        return self.value

    @classmethod
    def parse(cls, value: Union["OptionType", str, int]) -> "OptionType":
        """Accept an OptionType, 'C'/'P'/'CALL'/'PUT', or +1/-1."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in ("C", "CALL"):
                return cls.CALL
            if key in ("P", "PUT"):
                return cls.PUT
        elif value in (1, -1):
            return cls(value)
        raise InvalidArgumentError(f"Unknown option type: {value!r}")


OptionTypeLike = Union[OptionType, str, int]


@dataclass(frozen=True)
class PlainVanillaPayoff:
    """Call or put paying max(sign*(S - K), 0) at expiry."""

    option_type: OptionType
    strike: float

    def __post_init__(self):
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))

    def __call__(self, price: float) -> float:
        return max(self.option_type.sign * (price - self.strike), 0.0)
