"""Inverse-pool odds tests."""

from types import SimpleNamespace

import pytest

from predpricer.pricing.odds import (
    calculate_buy_price,
    calculate_odds,
    calculate_sell_price,
    calculate_single_price,
    format_price,
)
from predpricer.pricing.rounding import fixed, left_sum, round_half_up, round_int
from helpers import make_outcome


def test_lower_pool_gets_higher_price(two_outcomes):
    priced = calculate_odds(two_outcomes)
    assert [p.id for p in priced] == ["a", "b"]
    assert priced[0].price == 0.75
    assert priced[1].price == 0.25
    assert priced[0].price_display == "75¢"
    assert priced[0].probability == "75.0%"
    assert priced[1].probability == "25.0%"


def test_empty_input():
    assert calculate_odds([]) == []


def test_zero_and_negative_pools_are_clamped():
    priced = calculate_odds([make_outcome("a", 0), make_outcome("b", -5)])
    assert [p.price for p in priced] == [0.5, 0.5]


def test_zero_total_weight_falls_back_to_uniform():
    outcomes = [
        SimpleNamespace(id=oid, label=oid, pool=float("inf"), outcome_slug=None) for oid in ("a", "b", "c")
    ]
    priced = calculate_odds(outcomes)
    assert all(p.price == pytest.approx(1 / 3) for p in priced)
    assert all(p.price_display == "33¢" for p in priced)
    assert all(p.probability == "33.3%" for p in priced)
    assert all(p.pool == 0.0 for p in priced)


def test_prices_sum_to_one_within_rounding():
    outcomes = [make_outcome(str(i), pool) for i, pool in enumerate([120, 75, 310, 42, 999])]
    priced = calculate_odds(outcomes)
    assert abs(sum(p.price for p in priced) - 1) <= 0.005 * len(priced)
    assert all(0 <= p.price <= 1 for p in priced)


def test_single_price_and_markups(two_outcomes):
    assert calculate_single_price(two_outcomes[0], two_outcomes) == 0.75
    assert calculate_single_price(make_outcome("z", 10), two_outcomes) == 0.0
    assert calculate_buy_price(0.5) == pytest.approx(0.505)
    assert calculate_sell_price(0.5) == pytest.approx(0.495)


def test_format_price_floors_cents():
    assert format_price(0.756) == ("75¢", "75.6%")


def test_rounding_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.125, 2) == 0.13
    assert round_int(0.5) == 1
    assert fixed(2.5, 0) == "3"
    assert fixed(1.005, 2) == "1.00"
    assert left_sum([0.1, 0.2, 0.3]) == (0.1 + 0.2) + 0.3
