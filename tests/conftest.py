"""Shared fixtures for PokeArena tests."""

import random

import pytest
from typer.testing import CliRunner

from pokearena.core.moves import MoveCategory
from pokearena.core.session import Difficulty
from pokearena.utils import config as config_module
from tests.factories import make_combatant, make_move, make_session, make_status_move


@pytest.fixture(autouse=True)
def _seeded_random():
    """Every test starts from the same random state."""
    random.seed(42)


@pytest.fixture
def thunderbolt():
    return make_move("Thunderbolt", "electric", 90, None, 15, MoveCategory.SPECIAL)


@pytest.fixture
def thunder_wave():
    return make_status_move()


@pytest.fixture
def pikachu(thunderbolt):
    """Fast electric attacker."""
    return make_combatant(moves=[make_move(), thunderbolt], speed=110)


@pytest.fixture
def squirtle():
    """Slow water defender with a single weak move."""
    return make_combatant(
        name="Squirtle",
        types=("water",),
        speed=40,
        species_id=7,
        moves=[make_move("Bubble", "water", 20, None, 30, MoveCategory.SPECIAL)],
    )


@pytest.fixture
def session(pikachu, squirtle):
    return make_session(pikachu, squirtle)


@pytest.fixture
def hard_session(pikachu, squirtle):
    return make_session(pikachu, squirtle, difficulty=Difficulty.HARD)


@pytest.fixture
def engine_config(monkeypatch):
    """Patch engine settings for a single test."""

    def _set(**values):
        for name, value in values.items():
            monkeypatch.setattr(config_module.config, name, value)
        return config_module.config

    return _set


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI runner for command tests."""
    return CliRunner()
