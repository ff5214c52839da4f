"""Shared fixtures."""

import pytest

from helpers import make_outcome
from predpricer.ingestion.feed import InMemoryChangeFeed
from predpricer.models.market import Outcome


@pytest.fixture
def two_outcomes() -> list[Outcome]:
    return [make_outcome("a", 100, "yes"), make_outcome("b", 300, "no")]


@pytest.fixture
def feed():
    f = InMemoryChangeFeed()
    f.open()
    yield f
    f.close()
