"""Odds format conversion tests."""

import math

import pytest

from predpricer.pricing.formats import convert_odds, format_moneyline, format_outcome_price


@pytest.mark.parametrize(
    "probability,fmt,expected",
    [
        (0.5, "EU", "2.00"),
        (0.4, "EU", "2.50"),
        (0.5, "US", "-100"),
        (0.75, "US", "-300"),
        (0.25, "US", "+300"),
        (0.4, "UK", "3/2"),
        (0.5, "UK", "1/1"),
        (0.2, "UK", "4/1"),
        (0.75, "UK", "1/3"),
    ],
)
def test_convert_odds(probability, fmt, expected):
    assert convert_odds(probability, fmt) == expected


@pytest.mark.parametrize("probability", [0, 1, -0.2, 1.5, math.nan, math.inf])
def test_out_of_range_sentinels(probability):
    assert convert_odds(probability, "EU") == "∞"
    assert convert_odds(probability, "UK") == "∞"
    assert convert_odds(probability, "US") == "-"


def test_format_outcome_price_by_region():
    assert format_outcome_price(0.5, "US") == "50¢"
    assert format_outcome_price(0.5, "EU") == "2.00"
    assert format_outcome_price(0, "EU") == "--"
    assert format_outcome_price(math.nan, "US", fallback="n/a") == "n/a"


def test_format_moneyline():
    assert format_moneyline(0.25) == "+300"
    assert format_moneyline(1.0) is None
    assert format_moneyline(0) is None
