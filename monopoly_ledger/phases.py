"""
Phase state machine.

Each phase admits a fixed set of action kinds. get_legal_actions narrows
that set further using the state itself (jail status, funds, pending
events, undo history) and is the interface controllers use to offer moves.
"""

from typing import Dict, FrozenSet, List, Optional

from monopoly_ledger.cards import DeckType
from monopoly_ledger.game import ActionType, GamePhase, GameState, PendingEventKind
from monopoly_ledger.rent import (
    can_build_hotel,
    can_build_house,
    can_sell_hotel,
    can_sell_house,
    unmortgage_cost,
)
from monopoly_ledger.schemas import Action

# Legal in every phase.
ALWAYS_ALLOWED: FrozenSet[ActionType] = frozenset({ActionType.UNDO, ActionType.END_TURN})

_MANUAL = {
    ActionType.ADJUST_BALANCE,
    ActionType.TRANSFER_CASH,
    ActionType.MANUAL_POSITION,
    ActionType.MANUAL_OWNERSHIP,
}

PHASE_ACTIONS: Dict[GamePhase, FrozenSet[ActionType]] = {
    GamePhase.NORMAL: frozenset(set(ActionType) - {ActionType.TRADE_CANCEL}),
    GamePhase.IN_JAIL_DECISION: frozenset(
        {
            ActionType.ROLL_DICE,
            ActionType.PAY_JAIL_FINE,
            ActionType.USE_JAIL_CARD,
            ActionType.MORTGAGE_PROPERTY,
            ActionType.SELL_HOUSE,
            ActionType.SELL_HOTEL,
            ActionType.TRADE_EXECUTE,
            ActionType.DECLARE_BANKRUPTCY,
        }
        | _MANUAL
        | ALWAYS_ALLOWED
    ),
    GamePhase.CARD_DRAW: frozenset(
        {
            ActionType.APPLY_CARD_EFFECT,
            ActionType.MORTGAGE_PROPERTY,
            ActionType.SELL_HOUSE,
            ActionType.SELL_HOTEL,
            ActionType.DECLARE_BANKRUPTCY,
            ActionType.ADJUST_BALANCE,
            ActionType.TRANSFER_CASH,
        }
        | ALWAYS_ALLOWED
    ),
    GamePhase.TRADE: frozenset({ActionType.TRADE_EXECUTE, ActionType.TRADE_CANCEL} | ALWAYS_ALLOWED),
    GamePhase.BANKRUPTCY_RESOLUTION: frozenset(
        {
            ActionType.MORTGAGE_PROPERTY,
            ActionType.SELL_HOUSE,
            ActionType.SELL_HOTEL,
            ActionType.TRADE_EXECUTE,
            ActionType.TRANSFER_CASH,
            ActionType.ADJUST_BALANCE,
            ActionType.DECLARE_BANKRUPTCY,
        }
        | ALWAYS_ALLOWED
    ),
}

_PENDING_EVENT_ACTIONS: Dict[PendingEventKind, FrozenSet[ActionType]] = {
    PendingEventKind.CARD: frozenset({ActionType.APPLY_CARD_EFFECT}),
    PendingEventKind.TRAIN: frozenset(
        {
            ActionType.TRAIN_EVENT_STOP,
            ActionType.TRAIN_EVENT_BUY,
            ActionType.TRAIN_EVENT_SKIP,
            ActionType.TRAIN_EVENT_PAY_RENT,
        }
    ),
    PendingEventKind.CHANCE: frozenset({ActionType.CHANCE_EVENT_APPLY}),
    PendingEventKind.FREE_PARKING: frozenset(
        {ActionType.FREE_PARKING_EVENT_ACCEPT, ActionType.FREE_PARKING_EVENT_DECLINE}
    ),
}

EVENT_TRIGGERS = {
    ActionType.TRAIN_EVENT_TRIGGER,
    ActionType.CHANCE_EVENT_TRIGGER,
    ActionType.FREE_PARKING_EVENT_TRIGGER,
}

# Blocked while a pending event waits for its follow-up.
NEEDS_NO_PENDING_EVENT = frozenset(EVENT_TRIGGERS | {ActionType.DRAW_CARD, ActionType.ROLL_DICE})


def is_action_allowed(phase: GamePhase, action_type: ActionType) -> bool:
    """Check whether an action kind may be applied in the given phase."""
    return action_type in PHASE_ACTIONS[phase]


def pending_event_allows(state: GameState, action_type: ActionType) -> bool:
    """
    Check an action kind against the pending event marker.

    Follow-up actions need a pending event of their kind; triggers need
    no event to be pending.
    """
    pending = state.pending_event
    for kind, follow_ups in _PENDING_EVENT_ACTIONS.items():
        if action_type in follow_ups:
            return pending is not None and pending.kind == kind
    if action_type in NEEDS_NO_PENDING_EVENT:
        return pending is None
    return True


def get_legal_actions(state: GameState, player_id: Optional[str] = None) -> List[Action]:
    """
    Get the actions currently available to a player.

    Manual bookkeeping actions (balance adjustments, transfers, manual
    position/ownership) are always possible in their phases and are not
    listed, since they need caller-chosen parameters.

    Args:
        state: Current game state
        player_id: Player to get actions for, defaults to the current player

    Returns:
        List of legal Action objects
    """
    player = state.get_player(player_id) if player_id is not None else state.get_current_player()
    if player is None or player.is_bankrupt:
        return []

    allowed = PHASE_ACTIONS[state.phase]
    actions: List[Action] = []

    def offer(action_type: ActionType, **params) -> None:
        if action_type in allowed and pending_event_allows(state, action_type):
            actions.append(Action(action_type, **params))

    if state.pending_event is not None:
        for action_type in sorted(_PENDING_EVENT_ACTIONS[state.pending_event.kind], key=lambda t: t.value):
            if action_type == ActionType.TRAIN_EVENT_STOP:
                continue  # needs a caller-chosen property
            offer(action_type)

    # Jail
    if player.in_jail:
        offer(ActionType.ROLL_DICE)
        if player.balance >= state.settings.jail_fine:
            offer(ActionType.PAY_JAIL_FINE)
        for deck in player.held_jail_cards():
            offer(ActionType.USE_JAIL_CARD, deck=deck)
    elif state.last_dice_roll is None:
        offer(ActionType.ROLL_DICE)

    # Purchase of the space the player stands on
    space = state.board.get_space(player.position)
    if space.is_purchasable:
        prop = state.property_states[space.property_id]
        if not prop.is_owned() and player.balance >= state.property_data[space.property_id].price:
            offer(ActionType.BUY_PROPERTY, property_id=space.property_id)
        elif prop.is_owned() and prop.owner_id != player.player_id and not prop.mortgaged:
            offer(ActionType.PAY_RENT, property_id=space.property_id)

    actions.extend(_property_management_actions(state, player.player_id, allowed))

    if state.phase == GamePhase.NORMAL:
        offer(ActionType.DRAW_CARD, deck=DeckType.CHANCE)
        offer(ActionType.DRAW_CARD, deck=DeckType.COMMUNITY_CHEST)
        offer(ActionType.TRADE_START)
        for trigger in sorted(EVENT_TRIGGERS, key=lambda t: t.value):
            offer(trigger)
    elif state.phase == GamePhase.TRADE:
        offer(ActionType.TRADE_CANCEL)

    if player.balance < 0 or state.phase == GamePhase.BANKRUPTCY_RESOLUTION:
        offer(ActionType.DECLARE_BANKRUPTCY, player_id=player.player_id)

    offer(ActionType.END_TURN)
    if state.history:
        offer(ActionType.UNDO)

    return actions


def _property_management_actions(
    state: GameState, player_id: str, allowed: FrozenSet[ActionType]
) -> List[Action]:
    """Get actions related to building and mortgaging."""
    actions: List[Action] = []
    player = state.get_player(player_id)

    for property_id in player.owned_property_ids:
        prop = state.property_states[property_id]
        data = state.property_data[property_id]
        candidates = []

        if can_build_house(state, property_id, player_id) and player.balance >= data.house_cost:
            candidates.append(ActionType.BUY_HOUSE)
        if can_build_hotel(state, property_id, player_id) and player.balance >= data.hotel_cost:
            candidates.append(ActionType.BUY_HOTEL)
        if can_sell_house(state, property_id, player_id):
            candidates.append(ActionType.SELL_HOUSE)
        if can_sell_hotel(state, property_id, player_id):
            candidates.append(ActionType.SELL_HOTEL)

        if not prop.mortgaged and not prop.has_improvements:
            candidates.append(ActionType.MORTGAGE_PROPERTY)
        if prop.mortgaged and player.balance >= unmortgage_cost(state, property_id):
            candidates.append(ActionType.UNMORTGAGE_PROPERTY)

        actions.extend(Action(t, property_id=property_id) for t in candidates if t in allowed)

    return actions
