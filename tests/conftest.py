from datetime import date

import pytest

from ratelib.curves import DepositRateHelper, SimpleQuote, SwapRateHelper

CURVE_DATE = date(2024, 1, 2)

DEPOSIT_QUOTES = [("1M", 0.0390), ("3M", 0.0395), ("6M", 0.0392)]
SWAP_QUOTES = [("2Y", 0.0340), ("3Y", 0.0320), ("5Y", 0.0300)]


@pytest.fixture
def curve_date():
    return CURVE_DATE


@pytest.fixture
def quotes():
    """Quote handles keyed by tenor, shared with the helpers."""
    return {tenor: SimpleQuote(rate) for tenor, rate in DEPOSIT_QUOTES + SWAP_QUOTES}


@pytest.fixture
def helpers(quotes):
    deposits = [
        DepositRateHelper(quotes[tenor], tenor, CURVE_DATE)
        for tenor, _ in DEPOSIT_QUOTES
    ]
    swaps = [
        SwapRateHelper(quotes[tenor], tenor, CURVE_DATE)
        for tenor, _ in SWAP_QUOTES
    ]
    # Deliberately unsorted: the bootstrap orders by maturity
    return swaps[::-1] + deposits
