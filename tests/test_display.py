"""Market display shaping tests."""

import pytest

from helpers import make_outcome
from predpricer.markets.display import (
    LegPrice,
    default_outcome_id,
    match_prices,
    outcome_display_name,
    outcome_summaries,
    resolve_market_type,
    sort_multi_outcomes,
    team_names,
)


def test_market_type_from_type_string_or_slugs():
    assert resolve_market_type("football_1x2", []) == "1X2"
    assert resolve_market_type("Multi", []) == "MULTI"
    three = [make_outcome("h", 1, "home"), make_outcome("d", 1, "draw"), make_outcome("a", 1, "away")]
    assert resolve_market_type(None, three) == "1X2"
    assert resolve_market_type("", [make_outcome("x", 1), make_outcome("y", 1)]) == "BINARY"
    assert resolve_market_type(None, [make_outcome(str(i), 1) for i in range(4)]) == "MULTI"
    assert resolve_market_type(None, []) == "BINARY"


def test_match_prices_pick_legs_by_slug():
    outcomes = [make_outcome("x", 300, "away"), make_outcome("y", 100, "home"), make_outcome("z", 300, "draw")]
    prices = match_prices(outcomes)
    assert prices.home == LegPrice(yes=60, no=40)
    assert prices.draw == LegPrice(yes=20, no=80)
    assert prices.away == LegPrice(yes=20, no=80)


def test_match_prices_include_fees():
    outcomes = [make_outcome("h", 100, "home", fee=0.1), make_outcome("d", 300, "draw"), make_outcome("a", 300, "away")]
    assert match_prices(outcomes).home.yes == 66


def test_two_outcome_match_prices_have_no_draw():
    prices = match_prices([make_outcome("a", 100), make_outcome("b", 300)])
    assert prices.home.yes == 75
    assert prices.away.yes == 25
    assert prices.draw == LegPrice(yes=0, no=100)


def test_match_prices_default_without_enough_outcomes():
    for outcomes in ([], [make_outcome("a", 100)]):
        prices = match_prices(outcomes)
        assert prices.home == prices.draw == prices.away == LegPrice(yes=33, no=67)


def test_default_outcome_selection():
    multi = [make_outcome("first", 500), make_outcome("thin", 10), make_outcome("c", 300)]
    assert default_outcome_id("MULTI", multi) == "first"
    match = [make_outcome("x", 1, "away"), make_outcome("y", 1, "home"), make_outcome("z", 1, "draw")]
    assert default_outcome_id("1X2", match) == "y"
    assert default_outcome_id("1X2", [make_outcome("p", 1, "yes"), make_outcome("q", 1, "home")]) == "q"
    assert default_outcome_id("BINARY", [make_outcome("n", 1, "no"), make_outcome("s", 1, "yes")]) == "s"
    assert default_outcome_id("BINARY", [make_outcome("h", 1, "away"), make_outcome("w", 1, "home")]) == "h"
    assert default_outcome_id("BINARY", [make_outcome("p", 1), make_outcome("q", 1)]) == "p"
    assert default_outcome_id("MULTI", [make_outcome("m", 1, "yes"), make_outcome("k", 1, "home")]) == "m"
    assert default_outcome_id("MULTI", []) is None


def test_outcome_display_name():
    assert outcome_display_name(make_outcome("h", 1, "home"), home_name="Arsenal") == "Arsenal"
    assert outcome_display_name(make_outcome("a", 1, "away")) == "A"
    assert outcome_display_name(make_outcome("d", 1, "draw", label="Tie")) == "Draw"
    assert outcome_display_name(make_outcome("m", 1, "maybe", label="")) == "maybe"
    assert outcome_display_name(make_outcome("m", 1, label="")) == "Outcome"
    assert outcome_display_name(None) == "Outcome"


def test_outcome_summaries_and_sorting():
    outcomes = [make_outcome("a", 100), make_outcome("b", 300), make_outcome("c", 300)]
    summaries = outcome_summaries(outcomes, positions=["c"])
    assert [s.position for s in summaries] == [None, None, 1]
    assert summaries[0].price == pytest.approx(0.6)
    assert [s.id for s in sort_multi_outcomes(summaries)] == ["c", "a", "b"]


def test_team_names():
    assert team_names("Arsenal vs Chelsea") == ("Arsenal", "Chelsea")
    assert team_names("Final", away_team="Chelsea") == ("Final", "Chelsea")
    assert team_names("Ignored vs Title", "Real", "Barca") == ("Real", "Barca")
    assert team_names("") == ("Home", "Away")
