"""
Tests for the phase state machine and legal action listing.
"""

import pytest

from monopoly_ledger.cards import DeckType
from monopoly_ledger.game import ActionType, GamePhase
from monopoly_ledger.phases import PHASE_ACTIONS, get_legal_actions, is_action_allowed
from monopoly_ledger.schemas import Action


def legal_types(state, player_id=None):
    return {action.kind for action in get_legal_actions(state, player_id)}


@pytest.mark.parametrize("phase", list(GamePhase))
def test_undo_and_end_turn_always_allowed(phase):
    assert is_action_allowed(phase, ActionType.UNDO)
    assert is_action_allowed(phase, ActionType.END_TURN)


def test_every_phase_has_an_entry():
    assert set(PHASE_ACTIONS) == set(GamePhase)


@pytest.mark.parametrize(
    "phase,action_type,allowed",
    [
        (GamePhase.NORMAL, ActionType.ROLL_DICE, True),
        (GamePhase.NORMAL, ActionType.TRADE_CANCEL, False),
        (GamePhase.IN_JAIL_DECISION, ActionType.PAY_JAIL_FINE, True),
        (GamePhase.IN_JAIL_DECISION, ActionType.BUY_PROPERTY, False),
        (GamePhase.CARD_DRAW, ActionType.APPLY_CARD_EFFECT, True),
        (GamePhase.CARD_DRAW, ActionType.ROLL_DICE, False),
        (GamePhase.TRADE, ActionType.TRADE_EXECUTE, True),
        (GamePhase.TRADE, ActionType.BUY_HOUSE, False),
        (GamePhase.BANKRUPTCY_RESOLUTION, ActionType.MORTGAGE_PROPERTY, True),
        (GamePhase.BANKRUPTCY_RESOLUTION, ActionType.DECLARE_BANKRUPTCY, True),
        (GamePhase.BANKRUPTCY_RESOLUTION, ActionType.BUY_PROPERTY, False),
    ],
)
def test_phase_table(phase, action_type, allowed):
    assert is_action_allowed(phase, action_type) == allowed


def test_legal_actions_at_start(basic_game):
    types = legal_types(basic_game)

    assert ActionType.ROLL_DICE in types
    assert ActionType.END_TURN in types
    assert ActionType.TRADE_START in types
    assert ActionType.UNDO not in types
    assert ActionType.PAY_JAIL_FINE not in types
    assert ActionType.DECLARE_BANKRUPTCY not in types
    assert Action(ActionType.DRAW_CARD, deck=DeckType.CHANCE) in get_legal_actions(basic_game)


def test_legal_actions_offer_purchase(basic_game, act):
    state = act(basic_game, ActionType.ROLL_DICE, dice=(2, 4))
    actions = get_legal_actions(state)

    assert Action(ActionType.BUY_PROPERTY, property_id="oriental") in actions
    assert ActionType.ROLL_DICE not in {a.kind for a in actions}
    assert ActionType.UNDO in {a.kind for a in actions}


def test_legal_actions_offer_rent(basic_game, act, give):
    give(basic_game, "p2", "oriental")
    state = act(basic_game, ActionType.ROLL_DICE, dice=(2, 4))

    assert Action(ActionType.PAY_RENT, property_id="oriental") in get_legal_actions(state)


def test_legal_actions_in_jail(basic_game, act):
    basic_game.get_player("p1").jail_card_chest = True
    state = act(basic_game, ActionType.GO_TO_JAIL)
    actions = get_legal_actions(state)
    types = {a.kind for a in actions}

    assert ActionType.ROLL_DICE in types
    assert ActionType.PAY_JAIL_FINE in types
    assert Action(ActionType.USE_JAIL_CARD, deck=DeckType.COMMUNITY_CHEST) in actions
    assert ActionType.TRADE_START not in types


def test_legal_actions_with_pending_card(basic_game, act):
    state = act(basic_game, ActionType.DRAW_CARD, deck=DeckType.CHANCE)
    types = legal_types(state)

    assert ActionType.APPLY_CARD_EFFECT in types
    assert ActionType.DRAW_CARD not in types
    assert ActionType.ROLL_DICE not in types


def test_legal_actions_with_pending_train(basic_game, act):
    state = act(basic_game, ActionType.TRAIN_EVENT_TRIGGER)
    types = legal_types(state)

    assert {ActionType.TRAIN_EVENT_BUY, ActionType.TRAIN_EVENT_SKIP} <= types
    assert ActionType.TRAIN_EVENT_TRIGGER not in types


def test_legal_property_management(basic_game, give):
    give(basic_game, "p1", "mediterranean", "baltic")
    actions = get_legal_actions(basic_game)

    assert Action(ActionType.BUY_HOUSE, property_id="mediterranean") in actions
    assert Action(ActionType.MORTGAGE_PROPERTY, property_id="baltic") in actions
    assert Action(ActionType.UNMORTGAGE_PROPERTY, property_id="baltic") not in actions


def test_legal_actions_in_bankruptcy_resolution(basic_game, act, give):
    give(basic_game, "p1", "boardwalk")
    state = act(basic_game, ActionType.ADJUST_BALANCE, player_id="p1", amount=-1600)
    types = legal_types(state)

    assert ActionType.DECLARE_BANKRUPTCY in types
    assert ActionType.MORTGAGE_PROPERTY in types
    assert ActionType.ROLL_DICE not in types


def test_legal_actions_for_bankrupt_player(basic_game, act):
    state = act(basic_game, ActionType.DECLARE_BANKRUPTCY)
    assert get_legal_actions(state, "p1") == []
    assert get_legal_actions(state, "nobody") == []
