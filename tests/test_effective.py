"""Effective (fee-inclusive) pricing tests."""

import pytest

from helpers import make_outcome
from predpricer.pricing.effective import build_effective_outcome_pricing


def test_fee_marks_up_normalized_price():
    outcomes = [make_outcome("a", 100, fee=0.05), make_outcome("b", 300)]
    pricing = build_effective_outcome_pricing(outcomes)
    a = pricing.effective_outcomes[0]
    assert a.normalized_price == pytest.approx(0.75)
    assert a.effective_price == pytest.approx(0.75 * 1.05)
    assert a.fee_rate == 0.05
    assert pricing.effective_by_id["b"] == pytest.approx(0.25)
    assert pricing.total_effective == pytest.approx(1.0375)


def test_normalized_prices_sum_to_one():
    outcomes = [make_outcome(c, pool) for c, pool in zip("abc", (100, 100, 100))]
    pricing = build_effective_outcome_pricing(outcomes)
    assert [o.price for o in pricing.priced_outcomes] == [0.33, 0.33, 0.33]
    assert sum(pricing.normalized_by_id.values()) == pytest.approx(1.0)


def test_binary_no_is_plain_complement(two_outcomes):
    pricing = build_effective_outcome_pricing(two_outcomes)
    sides = pricing.side_prices("a")
    assert sides.yes == pytest.approx(0.75)
    assert sides.no == pytest.approx(0.25)


def test_multi_outcome_no_includes_fees_of_other_outcomes():
    outcomes = [make_outcome(c, 100, fee=0.1) for c in "abc"]
    pricing = build_effective_outcome_pricing(outcomes)
    sides = pricing.side_prices("a")
    assert sides.yes == pytest.approx(1.1 / 3)
    assert sides.no == pytest.approx(1.1 - 1.1 / 3)
    assert [o.id for o in pricing.other_outcomes("a")] == ["b", "c"]


def test_empty_set_uses_default_price():
    pricing = build_effective_outcome_pricing([])
    assert pricing.priced_outcomes == []
    assert pricing.total_effective == 0.0
    sides = pricing.side_prices("missing")
    assert sides.yes == pytest.approx(0.33)
    assert sides.no == pytest.approx(0.67)


def test_unknown_outcome_falls_back_to_uniform(two_outcomes):
    pricing = build_effective_outcome_pricing(two_outcomes)
    assert pricing.side_prices("zzz").yes == pytest.approx(0.5)


def test_estimate_proceeds(two_outcomes):
    pricing = build_effective_outcome_pricing(two_outcomes)
    assert pricing.estimate_proceeds({"b": 10}) == pytest.approx(2.5)
    assert pricing.estimate_proceeds({}) == 0.0
