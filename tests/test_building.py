"""
Tests for building and selling houses and hotels.
"""

import pytest

from monopoly_ledger.config import GameSettings
from monopoly_ledger.exceptions import ErrorKind
from monopoly_ledger.game import ActionType, create_game
from monopoly_ledger.rules import apply_action
from monopoly_ledger.schemas import Action


@pytest.fixture
def brown_monopoly(basic_game, give):
    """Alice owns both brown properties."""
    return give(basic_game, "p1", "mediterranean", "baltic")


def error(state, action_type, property_id):
    return apply_action(state, Action(action_type, property_id=property_id)).error_kind


def test_cannot_build_without_monopoly(basic_game, give):
    give(basic_game, "p1", "mediterranean")
    assert error(basic_game, ActionType.BUY_HOUSE, "mediterranean") == ErrorKind.BUILD_NOT_ALLOWED


def test_build_house(brown_monopoly, act):
    state = act(brown_monopoly, ActionType.BUY_HOUSE, property_id="mediterranean")

    assert state.property_states["mediterranean"].houses == 1
    assert state.get_player("p1").balance == 1450


def test_cannot_build_on_railroad(basic_game, give):
    give(basic_game, "p1", "reading-railroad", "pennsylvania-railroad", "bno-railroad", "short-line")
    assert error(basic_game, ActionType.BUY_HOUSE, "reading-railroad") == ErrorKind.BUILD_NOT_ALLOWED


def test_cannot_build_on_mortgaged_property(brown_monopoly):
    brown_monopoly.property_states["baltic"].mortgaged = True
    assert error(brown_monopoly, ActionType.BUY_HOUSE, "baltic") == ErrorKind.ALREADY_MORTGAGED


def test_cannot_build_on_others_property(brown_monopoly):
    result = apply_action(brown_monopoly, Action(ActionType.BUY_HOUSE, property_id="baltic"), player_id="p2")
    assert result.error_kind == ErrorKind.NOT_OWNER


def test_house_limit(brown_monopoly):
    brown_monopoly.property_states["mediterranean"].houses = 4
    assert error(brown_monopoly, ActionType.BUY_HOUSE, "mediterranean") == ErrorKind.MAX_IMPROVEMENT_REACHED


def test_build_house_insufficient_funds(brown_monopoly):
    brown_monopoly.get_player("p1").balance = 40
    assert error(brown_monopoly, ActionType.BUY_HOUSE, "mediterranean") == ErrorKind.INSUFFICIENT_FUNDS


def test_even_building_enforced(give, act):
    game = create_game(["Alice", "Bob"], GameSettings(seed=42, enforce_even_building=True))
    give(game, "p1", "mediterranean", "baltic")

    state = act(game, ActionType.BUY_HOUSE, property_id="mediterranean")
    assert error(state, ActionType.BUY_HOUSE, "mediterranean") == ErrorKind.BUILD_NOT_ALLOWED

    state = act(state, ActionType.BUY_HOUSE, property_id="baltic")
    state = act(state, ActionType.BUY_HOUSE, property_id="mediterranean")
    assert state.property_states["mediterranean"].houses == 2


def test_build_hotel(brown_monopoly, act):
    brown_monopoly.property_states["mediterranean"].houses = 4
    state = act(brown_monopoly, ActionType.BUY_HOTEL, property_id="mediterranean")

    prop = state.property_states["mediterranean"]
    assert prop.hotel
    assert prop.houses == 0
    assert state.get_player("p1").balance == 1450
    assert error(state, ActionType.BUY_HOTEL, "mediterranean") == ErrorKind.MAX_IMPROVEMENT_REACHED
    assert error(state, ActionType.BUY_HOUSE, "mediterranean") == ErrorKind.MAX_IMPROVEMENT_REACHED


def test_hotel_needs_four_houses(brown_monopoly):
    brown_monopoly.property_states["mediterranean"].houses = 3
    assert error(brown_monopoly, ActionType.BUY_HOTEL, "mediterranean") == ErrorKind.BUILD_NOT_ALLOWED


def test_sell_house_refunds_half(brown_monopoly, act):
    brown_monopoly.property_states["mediterranean"].houses = 2
    state = act(brown_monopoly, ActionType.SELL_HOUSE, property_id="mediterranean")

    assert state.property_states["mediterranean"].houses == 1
    assert state.get_player("p1").balance == 1525


def test_sell_house_errors(brown_monopoly):
    assert error(brown_monopoly, ActionType.SELL_HOUSE, "mediterranean") == ErrorKind.NO_IMPROVEMENTS

    brown_monopoly.property_states["mediterranean"].hotel = True
    assert error(brown_monopoly, ActionType.SELL_HOUSE, "mediterranean") == ErrorKind.BUILD_NOT_ALLOWED


def test_sell_hotel_leaves_four_houses(brown_monopoly, act):
    brown_monopoly.property_states["baltic"].hotel = True
    state = act(brown_monopoly, ActionType.SELL_HOTEL, property_id="baltic")

    prop = state.property_states["baltic"]
    assert not prop.hotel
    assert prop.houses == 4
    assert state.get_player("p1").balance == 1525


def test_sell_hotel_without_hotel(brown_monopoly):
    assert error(brown_monopoly, ActionType.SELL_HOTEL, "baltic") == ErrorKind.NO_IMPROVEMENTS
