"""Shared fixtures: deterministic ids, seeded shuffles and player pools."""

import itertools
import random

import pytest

from fut_evolucao.models.team import Player
from fut_evolucao.utils.shuffler import Shuffler


def _make_players(count: int, prefix: str = "p") -> list[Player]:
    return [Player(id=f"{prefix}{i}", name=f"Player{i}") for i in range(count)]


@pytest.fixture
def make_players():
    """Factory for pools of players with ids p0, p1, ..."""
    return _make_players


@pytest.fixture
def shuffler():
    return Shuffler(rng=random.Random(1234))


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def clock():
    return lambda: 1_700_000_000_000
