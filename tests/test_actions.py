"""
Tests for the action reducer: purchases, rent, mortgages, undo and errors.
"""

import copy

from monopoly_ledger import rules
from monopoly_ledger.exceptions import ErrorKind
from monopoly_ledger.game import ActionType, GamePhase
from monopoly_ledger.money import BANK, TransactionType
from monopoly_ledger.rules import apply_action, replay
from monopoly_ledger.schemas import Action, parse_action


def test_buy_property(basic_game, act):
    """Buying debits the price and records exactly one new holding."""
    state = act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")

    alice = state.get_player("p1")
    assert alice.balance == 1440
    assert alice.owned_property_ids == ["mediterranean"]
    assert state.property_states["mediterranean"].owner_id == "p1"

    entry = state.log[-1]
    assert entry.transaction_type == TransactionType.BUY_PROPERTY
    assert entry.amount == -60
    assert entry.from_player_id == "p1"
    assert entry.to_player_id == BANK


def test_buy_property_at_current_position(basic_game, act):
    state = act(basic_game, ActionType.MANUAL_POSITION, position=39)
    state = act(state, ActionType.BUY_PROPERTY)

    assert state.property_states["boardwalk"].owner_id == "p1"
    assert state.get_player("p1").balance == 1100


def test_buy_property_on_non_property_space(basic_game):
    result = apply_action(basic_game, Action(ActionType.BUY_PROPERTY))

    assert not result.ok
    assert result.error_kind == ErrorKind.PROPERTY_NOT_FOUND


def test_buy_already_owned_property_leaves_state_unchanged(basic_game, act):
    state = act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")
    before = copy.deepcopy(state)

    result = apply_action(state, Action(ActionType.BUY_PROPERTY, property_id="mediterranean"), player_id="p2")

    assert not result.ok
    assert result.error_kind == ErrorKind.PROPERTY_ALREADY_OWNED
    assert result.state is None
    assert state == before


def test_buy_property_insufficient_funds(basic_game):
    basic_game.get_player("p1").balance = 100
    result = apply_action(basic_game, Action(ActionType.BUY_PROPERTY, property_id="boardwalk"))

    assert result.error_kind == ErrorKind.INSUFFICIENT_FUNDS
    assert basic_game.property_states["boardwalk"].owner_id is None


def test_buy_property_at_negotiated_price(basic_game, act):
    state = act(basic_game, ActionType.BUY_PROPERTY, property_id="boardwalk", price=300)

    assert state.get_player("p1").balance == 1200
    assert state.property_data["boardwalk"].price == 300
    assert state.property_data["boardwalk"].mortgage_value == 150
    # The shared board keeps its printed price
    assert basic_game.property_data["boardwalk"].price == 400


def test_apply_action_never_mutates_input(basic_game, act):
    before = copy.deepcopy(basic_game)
    act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")
    act(basic_game, ActionType.ROLL_DICE, dice=(2, 3))

    assert basic_game == before


def test_pay_rent(basic_game, act, give):
    give(basic_game, "p2", "baltic")
    state = act(basic_game, ActionType.MANUAL_POSITION, position=3)
    state = act(state, ActionType.PAY_RENT)

    assert state.get_player("p1").balance == 1496
    assert state.get_player("p2").balance == 1504
    assert state.log[-1].transaction_type == TransactionType.PAY_RENT
    assert state.log[-1].amount == 4


def test_pay_rent_on_utility_requires_roll(basic_game, act, give):
    give(basic_game, "p2", "electric-company")
    state = act(basic_game, ActionType.MANUAL_POSITION, position=12)

    result = apply_action(state, Action(ActionType.PAY_RENT))
    assert result.error_kind == ErrorKind.ROLL_REQUIRED

    state = act(state, ActionType.PAY_RENT, dice=(4, 5))
    assert state.get_player("p1").balance == 1500 - 36


def test_pay_rent_errors(basic_game, act, give):
    give(basic_game, "p1", "mediterranean")
    give(basic_game, "p2", "baltic", mortgaged=True)

    own = apply_action(basic_game, Action(ActionType.PAY_RENT, property_id="mediterranean"))
    unowned = apply_action(basic_game, Action(ActionType.PAY_RENT, property_id="boardwalk"))
    mortgaged = apply_action(basic_game, Action(ActionType.PAY_RENT, property_id="baltic"))

    assert own.error_kind == ErrorKind.INVALID_ACTION
    assert unowned.error_kind == ErrorKind.PROPERTY_NOT_OWNED
    assert mortgaged.error_kind == ErrorKind.ALREADY_MORTGAGED


def test_collect_rent(basic_game, act):
    state = act(
        basic_game,
        ActionType.COLLECT_RENT,
        payer_id="p2",
        payee_id="p1",
        amount=75,
        property_id="boardwalk",
    )

    assert state.get_player("p1").balance == 1575
    assert state.get_player("p2").balance == 1425
    assert state.log[-1].property_id == "boardwalk"


def test_mortgage_and_unmortgage(basic_game, act, give):
    """Mortgage pays the mortgage value; unmortgaging costs it plus 10%."""
    give(basic_game, "p1", "mediterranean")

    state = act(basic_game, ActionType.MORTGAGE_PROPERTY, property_id="mediterranean")
    assert state.get_player("p1").balance == 1530
    assert state.property_states["mediterranean"].mortgaged

    state = act(state, ActionType.UNMORTGAGE_PROPERTY, property_id="mediterranean")
    assert state.get_player("p1").balance == 1497
    assert not state.property_states["mediterranean"].mortgaged


def test_mortgage_errors(basic_game, give):
    give(basic_game, "p1", "mediterranean", "baltic")
    give(basic_game, "p2", "boardwalk")
    basic_game.property_states["baltic"].houses = 1

    def error(action_type, property_id):
        return apply_action(basic_game, Action(action_type, property_id=property_id)).error_kind

    assert error(ActionType.MORTGAGE_PROPERTY, "boardwalk") == ErrorKind.NOT_OWNER
    assert error(ActionType.MORTGAGE_PROPERTY, "park-place") == ErrorKind.PROPERTY_NOT_OWNED
    assert error(ActionType.MORTGAGE_PROPERTY, "atlantis") == ErrorKind.PROPERTY_NOT_FOUND
    assert error(ActionType.MORTGAGE_PROPERTY, "baltic") == ErrorKind.HAS_IMPROVEMENTS
    assert error(ActionType.UNMORTGAGE_PROPERTY, "mediterranean") == ErrorKind.NOT_MORTGAGED

    basic_game.property_states["mediterranean"].mortgaged = True
    assert error(ActionType.MORTGAGE_PROPERTY, "mediterranean") == ErrorKind.ALREADY_MORTGAGED


def test_passing_go_collects_salary(basic_game, act):
    """From position 35 a roll of 3 + 2 lands on GO and pays the salary."""
    state = act(basic_game, ActionType.MANUAL_POSITION, position=35)
    state = act(state, ActionType.ROLL_DICE, dice=(3, 2))

    alice = state.get_player("p1")
    assert alice.position == 0
    assert alice.balance == 1700
    assert state.last_dice_roll == (3, 2)
    assert TransactionType.PASS_GO in [t.transaction_type for t in state.log]


def test_landing_on_tax(basic_game, act):
    state = act(basic_game, ActionType.ROLL_DICE, dice=(1, 3))

    assert state.get_player("p1").position == 4
    assert state.get_player("p1").balance == 1300
    assert state.free_parking_pot == 0


def test_rolling_onto_property_does_not_charge_rent(basic_game, act, give):
    give(basic_game, "p2", "oriental")
    state = act(basic_game, ActionType.ROLL_DICE, dice=(2, 4))

    assert state.get_player("p1").position == 6
    assert state.get_player("p1").balance == 1500


def test_full_turn_sequence(basic_game, act):
    """
    A buys Mediterranean, B lands on it and pays rent, then A mortgages and
    unmortgages it.
    """
    state = act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")
    assert state.get_player("p1").balance == 1440

    state = act(state, ActionType.MANUAL_POSITION, player_id="p2", position=1)
    state = act(state, ActionType.PAY_RENT, player_id="p2")
    assert state.get_player("p2").balance == 1498
    assert state.get_player("p1").balance == 1442

    state = act(state, ActionType.MORTGAGE_PROPERTY, player_id="p1", property_id="mediterranean")
    assert state.get_player("p1").balance == 1472

    state = act(state, ActionType.UNMORTGAGE_PROPERTY, player_id="p1", property_id="mediterranean")
    assert state.get_player("p1").balance == 1439
    assert len(state.history) == 5


class TestUndo:
    """Undo restores the pre-action state."""

    def test_undo_restores_previous_state(self, basic_game, act):
        state = act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")
        assert len(state.history) == 1

        restored = act(state, ActionType.UNDO)

        assert restored.get_player("p1").balance == 1500
        assert restored.property_states["mediterranean"].owner_id is None
        assert restored.history == []
        assert restored.log == basic_game.log

    def test_undo_twice(self, basic_game, act):
        state = act(basic_game, ActionType.BUY_PROPERTY, property_id="mediterranean")
        state = act(state, ActionType.BUY_PROPERTY, property_id="baltic")

        state = act(state, ActionType.UNDO)
        assert state.get_player("p1").owned_property_ids == ["mediterranean"]
        assert len(state.history) == 1

        state = act(state, ActionType.UNDO)
        assert state.get_player("p1").owned_property_ids == []

    def test_undo_without_history(self, basic_game):
        result = apply_action(basic_game, Action(ActionType.UNDO))

        assert not result.ok
        assert result.error_kind == ErrorKind.NO_HISTORY_TO_UNDO

    def test_undo_is_allowed_in_every_phase(self, basic_game, act):
        state = act(basic_game, ActionType.GO_TO_JAIL)
        assert state.phase == GamePhase.IN_JAIL_DECISION

        state = act(state, ActionType.UNDO)
        assert state.phase == GamePhase.NORMAL
        assert not state.get_player("p1").in_jail


class TestActionValidation:
    """Unknown kinds and malformed parameters."""

    def test_unknown_action(self, basic_game):
        result = apply_action(basic_game, Action("TELEPORT_HOME"))

        assert not result.ok
        assert result.error_kind == ErrorKind.UNKNOWN_ACTION

    def test_unexpected_parameter(self, basic_game):
        result = apply_action(basic_game, Action(ActionType.END_TURN, player="p2"))
        assert result.error_kind == ErrorKind.INVALID_ACTION

    def test_missing_parameter(self, basic_game):
        result = apply_action(basic_game, Action(ActionType.DRAW_CARD))
        assert result.error_kind == ErrorKind.INVALID_ACTION

    def test_out_of_range_parameter(self, basic_game):
        position = apply_action(basic_game, Action(ActionType.MANUAL_POSITION, position=40))
        dice = apply_action(basic_game, Action(ActionType.ROLL_DICE, dice=(0, 7)))

        assert position.error_kind == ErrorKind.INVALID_ACTION
        assert dice.error_kind == ErrorKind.INVALID_ACTION

    def test_unknown_player(self, basic_game):
        result = apply_action(basic_game, Action(ActionType.PASS_GO), player_id="p9")
        assert result.error_kind == ErrorKind.PLAYER_NOT_FOUND

    def test_raw_mapping_actions(self, basic_game):
        result = apply_action(basic_game, {"type": "BUY_PROPERTY", "property_id": "baltic"})

        assert result.ok
        assert result.state.property_states["baltic"].owner_id == "p1"

    def test_mapping_without_type(self, basic_game):
        result = apply_action(basic_game, {"property_id": "baltic"})
        assert result.error_kind == ErrorKind.INVALID_ACTION

    def test_parse_action(self):
        action = parse_action({"type": "BUY_PROPERTY", "property_id": "baltic"})

        assert action.kind == ActionType.BUY_PROPERTY
        assert action == Action(ActionType.BUY_PROPERTY, property_id="baltic")
        assert action.to_dict() == {"type": "BUY_PROPERTY", "property_id": "baltic"}
        assert parse_action({"type": "NOPE"}).kind is None

    def test_unexpected_exception_becomes_engine_error(self, basic_game, monkeypatch):
        def explode(ctx):
            raise RuntimeError("boom")

        monkeypatch.setitem(rules._HANDLERS, ActionType.PASS_GO, explode)
        result = apply_action(basic_game, Action(ActionType.PASS_GO))

        assert not result.ok
        assert result.error_kind == ErrorKind.ENGINE_ERROR
        assert "boom" in result.message


def test_replay_stops_at_first_failure(basic_game, rng):
    actions = [
        {"type": "BUY_PROPERTY", "property_id": "mediterranean"},
        {"type": "BUY_PROPERTY", "property_id": "mediterranean"},
        {"type": "BUY_PROPERTY", "property_id": "baltic"},
    ]
    result = replay(basic_game, actions, rng=rng)

    assert not result.ok
    assert result.error_kind == ErrorKind.PROPERTY_ALREADY_OWNED


def test_replay_applies_in_order(basic_game, rng):
    actions = [
        Action(ActionType.BUY_PROPERTY, property_id="mediterranean"),
        Action(ActionType.END_TURN),
        Action(ActionType.BUY_PROPERTY, property_id="baltic"),
    ]
    result = replay(basic_game, actions, rng=rng)

    assert result.ok
    assert result.state.property_states["baltic"].owner_id == "p2"
    assert len(result.state.history) == 3


def test_adjust_balance_and_transfer(basic_game, act):
    state = act(basic_game, ActionType.ADJUST_BALANCE, player_id="p1", amount=-100, reason="Fine")
    assert state.get_player("p1").balance == 1400
    assert state.log[-1].amount == -100
    assert state.log[-1].note == "Fine"

    state = act(state, ActionType.TRANSFER_CASH, from_player_id="p2", to_player_id="p1", amount=250)
    assert state.get_player("p1").balance == 1650
    assert state.get_player("p2").balance == 1250


def test_transfer_cash_insufficient_funds(basic_game):
    action = Action(ActionType.TRANSFER_CASH, from_player_id="p2", to_player_id="p1", amount=5000)
    result = apply_action(basic_game, action)

    assert result.error_kind == ErrorKind.INSUFFICIENT_FUNDS


def test_manual_ownership(basic_game, act):
    state = act(basic_game, ActionType.MANUAL_OWNERSHIP, property_id="boardwalk", owner_id="p2")
    assert state.property_states["boardwalk"].owner_id == "p2"
    assert state.get_player("p2").owned_property_ids == ["boardwalk"]

    state = act(state, ActionType.MANUAL_OWNERSHIP, property_id="boardwalk", owner_id="p1")
    assert state.get_player("p2").owned_property_ids == []
    assert state.get_player("p1").owned_property_ids == ["boardwalk"]

    state = act(state, ActionType.MANUAL_OWNERSHIP, property_id="boardwalk")
    assert state.property_states["boardwalk"].owner_id is None
    assert state.get_player("p1").owned_property_ids == []
