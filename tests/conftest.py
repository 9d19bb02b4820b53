"""Shared test fixtures for the Monopoly ledger tests."""

import random

import pytest

from monopoly_ledger.config import GameSettings, get_engine_settings
from monopoly_ledger.game import create_game
from monopoly_ledger.rules import apply_action
from monopoly_ledger.schemas import ACTION_PARAMS, Action


@pytest.fixture
def game_settings():
    """Default game settings with fixed seed for reproducibility."""
    return GameSettings(seed=42)


@pytest.fixture
def rng():
    """Seeded randomness source."""
    return random.Random(42)


@pytest.fixture
def basic_game(game_settings):
    """Basic game with two players (p1 Alice, p2 Bob) and fixed seed."""
    return create_game(["Alice", "Bob"], game_settings)


@pytest.fixture
def three_player_game(game_settings):
    """Game with three players and fixed seed."""
    return create_game(["Alice", "Bob", "Charlie"], game_settings)


@pytest.fixture
def act(rng):
    """Apply an action that is expected to succeed and return the new state."""

    def _act(state, action_type, player_id=None, **params):
        if player_id is not None and "player_id" in ACTION_PARAMS[action_type].model_fields:
            params["player_id"] = player_id
        result = apply_action(state, Action(action_type, **params), player_id=player_id, rng=rng)
        assert result.ok, f"{action_type} failed: {result.error_kind} {result.message}"
        return result.state

    return _act


@pytest.fixture
def give():
    """Assign properties directly in a state, bypassing the engine."""

    def _give(state, player_id, *property_ids, **improvements):
        player = state.get_player(player_id)
        for property_id in property_ids:
            prop = state.property_states[property_id]
            prop.owner_id = player_id
            for key, value in improvements.items():
                setattr(prop, key, value)
            player.add_property(property_id)
        return state

    return _give


@pytest.fixture
def engine_settings(monkeypatch):
    """Override engine settings through the environment."""

    def _configure(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"MONOPOLY_ENGINE_{key.upper()}", str(value))
        get_engine_settings.cache_clear()
        return get_engine_settings()

    yield _configure
    get_engine_settings.cache_clear()
