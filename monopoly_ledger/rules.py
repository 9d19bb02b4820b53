"""
High-level rules API for applying actions to a game.

apply_action is a reducer: it never mutates the state it is given. Each call
either returns a new GameState (with the pre-action state pushed onto the
undo history and the produced transactions appended to the log) or a failed
ActionResult carrying an ErrorKind, in which case the caller keeps its state.
"""

import copy
import logging
import random
from dataclasses import dataclass, field, replace
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from monopoly_ledger.board import BOARD_SIZE, JAIL_POSITION
from monopoly_ledger.cards import (
    CHANCE_OUTCOMES,
    TAX_AUDIT_RATE,
    Card,
    CardEffectType,
    DeckType,
    OutcomeAction,
    get_card,
    get_outcome,
    jail_card_id,
)
from monopoly_ledger.config import get_engine_settings
from monopoly_ledger.exceptions import (
    ActionError,
    AlreadyMortgagedError,
    BankruptPlayerError,
    BuildNotAllowedError,
    ErrorKind,
    EventAlreadyPendingError,
    HasImprovementsError,
    InsufficientFundsError,
    InvalidActionError,
    InvalidPhaseError,
    MaxImprovementReachedError,
    NoHistoryError,
    NoImprovementsError,
    NoJailCardError,
    NoPendingEventError,
    NotInJailError,
    NotMortgagedError,
    NotOwnerError,
    PlayerNotFoundError,
    PropertyAlreadyOwnedError,
    PropertyNotFoundError,
    PropertyNotOwnedError,
    RollRequiredError,
    UnknownActionError,
)
from monopoly_ledger.game import (
    ActionType,
    GamePhase,
    GameState,
    PendingEvent,
    PendingEventKind,
)
from monopoly_ledger.money import BANK, Transaction, TransactionType, append_transactions, create_transaction
from monopoly_ledger.phases import NEEDS_NO_PENDING_EVENT, is_action_allowed, pending_event_allows
from monopoly_ledger.player import PlayerState, PropertyState
from monopoly_ledger.random_events import (
    PROPERTY_PRIZE_CASH_EQUIVALENT,
    PrizeKind,
    draw_card,
    draw_prize,
    is_doubles,
    roll_dice,
    select_roulette_property,
)
from monopoly_ledger.rent import (
    MAX_HOUSES,
    can_build_hotel,
    can_build_house,
    can_sell_house,
    rent_due,
    unmortgage_cost,
)
from monopoly_ledger.schemas import Action, ActionParams, parse_action, validate_params
from monopoly_ledger.spaces import RAILROAD_GROUP, UTILITY_GROUP, PropertyData, SpaceType

logger = logging.getLogger(__name__)

MAX_JAIL_ATTEMPTS = 3

# Actions naming their own players; the acting player's bankruptcy does not block them.
_ACTOR_NOT_CHECKED = {
    ActionType.END_TURN,
    ActionType.ADJUST_BALANCE,
    ActionType.TRANSFER_CASH,
    ActionType.COLLECT_RENT,
    ActionType.TRADE_EXECUTE,
    ActionType.DECLARE_BANKRUPTCY,
    ActionType.MANUAL_OWNERSHIP,
}


@dataclass
class ActionResult:
    """Outcome of apply_action. A failed result never carries a state."""

    ok: bool
    state: Optional[GameState] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, state: GameState) -> "ActionResult":
        return cls(ok=True, state=state)

    @classmethod
    def failure(cls, error_kind: ErrorKind, message: str) -> "ActionResult":
        return cls(ok=False, error_kind=error_kind, message=message)


@dataclass
class ActionContext:
    """Working data handed to an action handler."""

    state: GameState
    actor: PlayerState
    params: ActionParams
    rng: random.Random
    transactions: List[Transaction] = field(default_factory=list)

    def record(self, transaction_type: TransactionType, note: str, **details: Any) -> None:
        self.transactions.append(create_transaction(transaction_type, note, **details))


def apply_action(
    game_state: GameState,
    action: Union[Action, Mapping[str, Any]],
    player_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> ActionResult:
    """
    Apply an action to the game state.

    Args:
        game_state: Current game state (never modified)
        action: Action to apply, or a raw mapping with a "type" key
        player_id: Acting player, defaults to the current player
        rng: Randomness source for dice, cards and events

    Returns:
        ActionResult with the new state on success, or the error kind and
        message on failure
    """
    if isinstance(action, Mapping):
        try:
            action = parse_action(action)
        except ActionError as e:
            return ActionResult.failure(e.kind, str(e))

    action_type = action.kind
    name = action_type.value if action_type is not None else repr(action.action_type)

    try:
        if action_type is None:
            raise UnknownActionError(f"Unknown action type: {name}")
        params = validate_params(action_type, action.params)

        if action_type == ActionType.UNDO:
            return ActionResult.success(_undo(game_state))

        _check_allowed(game_state, action_type)

        settings = get_engine_settings()
        working = game_state.copy()
        working.history.append(working.snapshot())
        if len(working.history) > settings.history_limit:
            del working.history[: len(working.history) - settings.history_limit]
        working.action_count += 1

        actor = _resolve_actor(working, player_id, action_type)
        ctx = ActionContext(state=working, actor=actor, params=params, rng=rng or _action_rng(working))
        _HANDLERS[action_type](ctx)

        append_transactions(working.log, ctx.transactions, settings.log_limit)
        _leave_bankruptcy_resolution(working)

        logger.debug(f"Applied {name} for {actor.name}")
        return ActionResult.success(working)

    except ActionError as e:
        logger.debug(f"Rejected {name}: {e}")
        return ActionResult.failure(e.kind, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error applying {name}")
        return ActionResult.failure(ErrorKind.ENGINE_ERROR, f"Internal error applying {name}: {e}")


def replay(
    game_state: GameState,
    actions: Iterable[Union[Action, Mapping[str, Any]]],
    rng: Optional[random.Random] = None,
) -> ActionResult:
    """
    Apply a sequence of actions in order.

    Stops at the first failure and returns that result.
    """
    result = ActionResult.success(game_state)
    for action in actions:
        result = apply_action(result.state, action, rng=rng)
        if not result.ok:
            return result
    return result


def _action_rng(game_state: GameState) -> random.Random:
    """Derive the randomness for one action from the game seed and action counter."""
    seed = game_state.settings.seed
    if seed is None:
        return random.Random()
    return random.Random(f"{game_state.game_id}:{seed}:{game_state.action_count}")


def _undo(game_state: GameState) -> GameState:
    """Restore the newest snapshot, keeping the older ones as its history."""
    if not game_state.history:
        raise NoHistoryError("No history to undo")
    restored = copy.deepcopy(game_state.history[-1].state)
    restored.history = copy.deepcopy(game_state.history[:-1])
    return restored


def _check_allowed(game_state: GameState, action_type: ActionType) -> None:
    if not is_action_allowed(game_state.phase, action_type):
        raise InvalidPhaseError(f"{action_type.value} is not allowed during {game_state.phase.value}")
    if not pending_event_allows(game_state, action_type):
        if action_type in NEEDS_NO_PENDING_EVENT:
            raise EventAlreadyPendingError(
                f"Resolve the pending {game_state.pending_event.kind.value} event before {action_type.value}"
            )
        raise NoPendingEventError(f"{action_type.value} has no matching pending event")


def _resolve_actor(game_state: GameState, player_id: Optional[str], action_type: ActionType) -> PlayerState:
    actor = game_state.get_current_player() if player_id is None else _require_player(game_state, player_id)
    if actor.is_bankrupt and action_type not in _ACTOR_NOT_CHECKED:
        raise BankruptPlayerError(f"{actor.name} is bankrupt")
    return actor


def _leave_bankruptcy_resolution(game_state: GameState) -> None:
    """Return to normal play once no active player owes money."""
    if game_state.phase != GamePhase.BANKRUPTCY_RESOLUTION:
        return
    if any(p.balance < 0 for p in game_state.get_active_players()):
        return
    game_state.phase = _resumed_phase(game_state)


def _resumed_phase(game_state: GameState) -> GamePhase:
    pending = game_state.pending_event
    if pending is not None and pending.kind == PendingEventKind.CARD:
        return GamePhase.CARD_DRAW
    return GamePhase.NORMAL


# Lookups


def _require_player(game_state: GameState, player_id: Optional[str]) -> PlayerState:
    player = game_state.get_player(player_id)
    if player is None:
        raise PlayerNotFoundError(f"Player {player_id!r} not found")
    return player


def _require_active_player(game_state: GameState, player_id: Optional[str]) -> PlayerState:
    player = _require_player(game_state, player_id)
    if player.is_bankrupt:
        raise BankruptPlayerError(f"{player.name} is bankrupt")
    return player


def _require_property(game_state: GameState, property_id: Optional[str]) -> Tuple[PropertyData, PropertyState]:
    data = game_state.get_property_data(property_id)
    prop = game_state.get_property_state(property_id)
    if data is None or prop is None:
        raise PropertyNotFoundError(f"Property {property_id!r} not found")
    return data, prop


def _require_owned_by(
    game_state: GameState, property_id: str, player: PlayerState
) -> Tuple[PropertyData, PropertyState]:
    data, prop = _require_property(game_state, property_id)
    if not prop.is_owned():
        raise PropertyNotOwnedError(f"{data.name} is not owned")
    if prop.owner_id != player.player_id:
        raise NotOwnerError(f"{player.name} does not own {data.name}")
    return data, prop


def _property_at_position(game_state: GameState, player: PlayerState) -> str:
    space = game_state.board.get_space(player.position)
    if not space.is_purchasable:
        raise PropertyNotFoundError(f"{space.name} (position {player.position}) is not a property")
    return space.property_id


def _pending_player(ctx: ActionContext) -> PlayerState:
    return _require_player(ctx.state, ctx.state.pending_event.player_id)


# Money movement


def _check_solvency(game_state: GameState, player: PlayerState) -> None:
    if player.balance < 0 and not player.is_bankrupt:
        game_state.phase = GamePhase.BANKRUPTCY_RESOLUTION


def _credit(
    ctx: ActionContext,
    player: PlayerState,
    amount: int,
    transaction_type: TransactionType,
    note: str,
    **details: Any,
) -> None:
    """Pay money from the bank to a player."""
    player.balance += amount
    ctx.record(
        transaction_type,
        note,
        amount=amount,
        from_player_id=BANK,
        to_player_id=player.player_id,
        **details,
    )


def _charge(
    ctx: ActionContext,
    player: PlayerState,
    amount: int,
    transaction_type: TransactionType,
    note: str,
    **details: Any,
) -> None:
    """Take money from a player for the bank. The balance may go negative."""
    player.balance -= amount
    ctx.record(
        transaction_type,
        note,
        amount=-amount,
        from_player_id=player.player_id,
        to_player_id=BANK,
        **details,
    )
    _check_solvency(ctx.state, player)


def _pay_fee(
    ctx: ActionContext, player: PlayerState, amount: int, transaction_type: TransactionType, note: str
) -> None:
    """Charge a tax or fine, feeding the free-parking pot when that rule is on."""
    _charge(ctx, player, amount, transaction_type, note)
    if ctx.state.settings.free_parking_pot:
        ctx.state.free_parking_pot += amount


def _transfer(
    ctx: ActionContext,
    payer: PlayerState,
    payee: PlayerState,
    amount: int,
    transaction_type: TransactionType,
    note: str,
    **details: Any,
) -> None:
    """Move money between players. The payer must be able to afford it."""
    if payer.balance < amount:
        raise InsufficientFundsError(f"{payer.name} has {payer.balance}, needs {amount}")
    payer.balance -= amount
    payee.balance += amount
    ctx.record(
        transaction_type,
        note,
        amount=amount,
        from_player_id=payer.player_id,
        to_player_id=payee.player_id,
        **details,
    )


def _validate_player_payments(
    ctx: ActionContext, player: PlayerState, payments: Optional[Mapping[str, int]], what: str
) -> List[Tuple[PlayerState, int]]:
    """Resolve caller-supplied per-player amounts for 'each other player' effects."""
    if payments is None:
        raise InvalidActionError(f"{what} needs per-player amounts (player_payments)")
    resolved = []
    for other_id, amount in payments.items():
        if other_id == player.player_id:
            raise InvalidActionError(f"{player.name} cannot pay themselves")
        resolved.append((_require_active_player(ctx.state, other_id), amount))
    return resolved


def _collect_from_players(
    ctx: ActionContext,
    player: PlayerState,
    payments: Optional[Mapping[str, int]],
    transaction_type: TransactionType,
    what: str,
    **details: Any,
) -> None:
    resolved = _validate_player_payments(ctx, player, payments, what)
    for other, amount in resolved:
        if other.balance < amount:
            raise InsufficientFundsError(f"{other.name} has {other.balance}, needs {amount}")
    for other, amount in resolved:
        if amount:
            _transfer(
                ctx,
                other,
                player,
                amount,
                transaction_type,
                f"{other.name} paid {player.name} ({what})",
                **details,
            )


def _pay_players(
    ctx: ActionContext,
    player: PlayerState,
    payments: Optional[Mapping[str, int]],
    transaction_type: TransactionType,
    what: str,
    **details: Any,
) -> None:
    resolved = _validate_player_payments(ctx, player, payments, what)
    total = sum(amount for _, amount in resolved)
    if player.balance < total:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, needs {total}")
    for other, amount in resolved:
        if amount:
            _transfer(
                ctx,
                player,
                other,
                amount,
                transaction_type,
                f"{player.name} paid {other.name} ({what})",
                **details,
            )


# Movement and landing


def _move_by(ctx: ActionContext, player: PlayerState, steps: int) -> None:
    """Move a player, collecting the GO salary on a forward wrap, then resolve the landing."""
    old_position = player.position
    player.position = (old_position + steps) % BOARD_SIZE
    ctx.record(
        TransactionType.MOVE_PLAYER,
        f"{player.name} moved from {old_position} to {player.position}",
        from_player_id=player.player_id,
    )
    if steps > 0 and player.position < old_position:
        _pass_go(ctx, player)
    _resolve_landing(ctx, player)


def _move_to(ctx: ActionContext, player: PlayerState, position: int) -> None:
    """Advance a player forward to a position."""
    steps = (position - player.position) % BOARD_SIZE
    _move_by(ctx, player, steps)


def _teleport(ctx: ActionContext, player: PlayerState, position: int) -> None:
    """Place a player on a space without salary or landing effects."""
    old_position = player.position
    player.position = position
    ctx.record(
        TransactionType.MOVE_PLAYER,
        f"{player.name} moved from {old_position} to {position}",
        from_player_id=player.player_id,
    )


def _pass_go(ctx: ActionContext, player: PlayerState) -> None:
    _credit(ctx, player, ctx.state.settings.pass_go_amount, TransactionType.PASS_GO, f"{player.name} passed GO")


def _resolve_landing(ctx: ActionContext, player: PlayerState) -> None:
    """
    Resolve the automatic effects of the space a player landed on.

    Rent is never charged here; it is paid with an explicit PAY_RENT.
    """
    state = ctx.state
    space = state.board.get_space(player.position)

    if space.space_type == SpaceType.GO_TO_JAIL:
        _send_to_jail(ctx, player)

    elif space.space_type == SpaceType.CHANCE:
        _draw(ctx, player, DeckType.CHANCE)

    elif space.space_type == SpaceType.COMMUNITY_CHEST:
        _draw(ctx, player, DeckType.COMMUNITY_CHEST)

    elif space.space_type == SpaceType.TAX:
        _pay_fee(ctx, player, space.tax_amount, TransactionType.PAY_TAX, f"{player.name} paid {space.name}")

    elif space.space_type == SpaceType.FREE_PARKING:
        if state.settings.free_parking_pot and state.free_parking_pot > 0:
            pot, state.free_parking_pot = state.free_parking_pot, 0
            _credit(
                ctx,
                player,
                pot,
                TransactionType.FREE_PARKING_POT,
                f"{player.name} collected the Free Parking pot",
            )


def _send_to_jail(ctx: ActionContext, player: PlayerState) -> None:
    player.position = JAIL_POSITION
    player.in_jail = True
    player.jail_attempts = 0
    ctx.state.phase = GamePhase.IN_JAIL_DECISION
    ctx.record(TransactionType.GO_TO_JAIL, f"{player.name} was sent to jail", from_player_id=player.player_id)


def _release_from_jail(ctx: ActionContext, player: PlayerState) -> None:
    player.in_jail = False
    player.jail_attempts = 0
    ctx.state.phase = GamePhase.NORMAL


def _draw(ctx: ActionContext, player: PlayerState, deck: DeckType) -> None:
    state = ctx.state
    deck_list, discard = state.deck_lists(deck)
    try:
        card_id = draw_card(deck_list, discard, ctx.rng)
    except ValueError as e:
        raise InvalidActionError(str(e)) from e
    state.pending_event = PendingEvent(PendingEventKind.CARD, player.player_id, card_id=card_id, deck=deck)
    state.phase = GamePhase.CARD_DRAW
    ctx.record(
        TransactionType.DRAW_CARD,
        f"{player.name} drew: {get_card(card_id).text}",
        from_player_id=player.player_id,
        card_id=card_id,
    )


# Turn flow


def _handle_roll_dice(ctx: ActionContext) -> None:
    player = ctx.actor
    dice = tuple(ctx.params.dice) if ctx.params.dice else roll_dice(ctx.rng)
    ctx.state.last_dice_roll = dice
    ctx.record(
        TransactionType.ROLL_DICE,
        f"{player.name} rolled {dice[0]} + {dice[1]}",
        from_player_id=player.player_id,
    )

    if player.in_jail:
        _roll_in_jail(ctx, player, dice)
        return

    _move_by(ctx, player, sum(dice))


def _roll_in_jail(ctx: ActionContext, player: PlayerState, dice: Tuple[int, int]) -> None:
    """Doubles free the player; a third miss forces the fine."""
    player.jail_attempts += 1

    if is_doubles(dice):
        _release_from_jail(ctx, player)
        ctx.record(
            TransactionType.JAIL_ROLL_ATTEMPT,
            f"{player.name} rolled doubles and left jail",
            from_player_id=player.player_id,
        )
        _move_by(ctx, player, sum(dice))
        return

    if player.jail_attempts >= MAX_JAIL_ATTEMPTS:
        fine = ctx.state.settings.jail_fine
        if player.balance < fine:
            raise InsufficientFundsError(f"{player.name} cannot afford the {fine} jail fine")
        _pay_fee(
            ctx,
            player,
            fine,
            TransactionType.JAIL_PAY_FINE,
            f"{player.name} paid the jail fine after three attempts",
        )
        _release_from_jail(ctx, player)
        _move_by(ctx, player, sum(dice))
        return

    ctx.state.phase = GamePhase.IN_JAIL_DECISION
    ctx.record(
        TransactionType.JAIL_ROLL_ATTEMPT,
        f"{player.name} failed to roll doubles ({player.jail_attempts}/{MAX_JAIL_ATTEMPTS})",
        from_player_id=player.player_id,
    )


def _handle_pass_go(ctx: ActionContext) -> None:
    _pass_go(ctx, ctx.actor)


def _handle_go_to_jail(ctx: ActionContext) -> None:
    _send_to_jail(ctx, ctx.actor)


def _handle_pay_jail_fine(ctx: ActionContext) -> None:
    player = ctx.actor
    fine = ctx.state.settings.jail_fine
    if not player.in_jail:
        raise NotInJailError(f"{player.name} is not in jail")
    if player.balance < fine:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, the fine is {fine}")
    _pay_fee(ctx, player, fine, TransactionType.JAIL_PAY_FINE, f"{player.name} paid the jail fine")
    _release_from_jail(ctx, player)


def _handle_use_jail_card(ctx: ActionContext) -> None:
    player = ctx.actor
    if not player.in_jail:
        raise NotInJailError(f"{player.name} is not in jail")

    deck = ctx.params.deck
    if deck is None:
        held = player.held_jail_cards()
        if not held:
            raise NoJailCardError(f"{player.name} has no Get Out of Jail Free card")
        deck = held[0]
    elif not player.has_jail_card(deck):
        raise NoJailCardError(f"{player.name} has no {deck.value} Get Out of Jail Free card")

    player.set_jail_card(deck, False)
    card_id = jail_card_id(deck)
    ctx.state.deck_lists(deck)[1].append(card_id)
    _release_from_jail(ctx, player)
    ctx.record(
        TransactionType.JAIL_USE_CARD,
        f"{player.name} used a Get Out of Jail Free card",
        from_player_id=player.player_id,
        card_id=card_id,
    )


def _handle_end_turn(ctx: ActionContext) -> None:
    state = ctx.state
    previous = state.get_current_player()
    old_index = state.current_turn_index
    count = len(state.players)

    new_index = old_index
    for offset in range(1, count + 1):
        candidate = (old_index + offset) % count
        if not state.players[candidate].is_bankrupt:
            new_index = candidate
            break

    if new_index <= old_index:
        state.turn_number += 1
    state.current_turn_index = new_index
    state.phase = GamePhase.NORMAL
    state.last_dice_roll = None
    state.pending_event = None

    upcoming = state.get_current_player()
    ctx.record(
        TransactionType.END_TURN,
        f"{previous.name} ended their turn; {upcoming.name} is up (turn {state.turn_number})",
        from_player_id=previous.player_id,
        to_player_id=upcoming.player_id,
    )


# Property


def _buy_property(ctx: ActionContext, player: PlayerState, property_id: str, price: Optional[int]) -> None:
    state = ctx.state
    data, prop = _require_property(state, property_id)
    if prop.is_owned():
        raise PropertyAlreadyOwnedError(f"{data.name} is already owned")

    if price is not None:
        data = replace(data, price=price, mortgage_value=price // 2)
    if player.balance < data.price:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, {data.name} costs {data.price}")

    state.property_data[property_id] = data
    prop.owner_id = player.player_id
    player.add_property(property_id)
    _charge(
        ctx,
        player,
        data.price,
        TransactionType.BUY_PROPERTY,
        f"{player.name} bought {data.name}",
        property_id=property_id,
    )


def _handle_buy_property(ctx: ActionContext) -> None:
    property_id = ctx.params.property_id or _property_at_position(ctx.state, ctx.actor)
    _buy_property(ctx, ctx.actor, property_id, ctx.params.price)


def _pay_rent(
    ctx: ActionContext,
    payer: PlayerState,
    property_id: str,
    dice: Optional[Tuple[int, int]],
    amount: Optional[int] = None,
) -> None:
    """Pay the owner of a property, computing the rent unless an amount is given."""
    state = ctx.state
    data, prop = _require_property(state, property_id)
    if not prop.is_owned():
        raise PropertyNotOwnedError(f"{data.name} is not owned")
    if prop.owner_id == payer.player_id:
        raise InvalidActionError(f"{payer.name} owns {data.name}; no rent is due")
    owner = _require_active_player(state, prop.owner_id)

    if amount is None:
        if prop.mortgaged:
            raise AlreadyMortgagedError(f"{data.name} is mortgaged; no rent is due")
        amount = rent_due(state, property_id, dice or state.last_dice_roll)
        if amount is None:
            raise RollRequiredError(f"Rent on {data.name} depends on a dice roll")

    _transfer(
        ctx,
        payer,
        owner,
        amount,
        TransactionType.PAY_RENT,
        f"{payer.name} paid rent on {data.name} to {owner.name}",
        property_id=property_id,
    )


def _handle_pay_rent(ctx: ActionContext) -> None:
    property_id = ctx.params.property_id or _property_at_position(ctx.state, ctx.actor)
    _pay_rent(ctx, ctx.actor, property_id, ctx.params.dice)


def _handle_collect_rent(ctx: ActionContext) -> None:
    params = ctx.params
    payer = _require_active_player(ctx.state, params.payer_id)
    payee = _require_active_player(ctx.state, params.payee_id)
    if payer.player_id == payee.player_id:
        raise InvalidActionError("Payer and payee must differ")
    details = {}
    note = f"{payer.name} paid rent to {payee.name}"
    if params.property_id is not None:
        data, _ = _require_property(ctx.state, params.property_id)
        details["property_id"] = params.property_id
        note += f" for {data.name}"
    _transfer(ctx, payer, payee, params.amount, TransactionType.PAY_RENT, note, **details)


def _handle_mortgage(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_owned_by(ctx.state, ctx.params.property_id, player)
    if prop.mortgaged:
        raise AlreadyMortgagedError(f"{data.name} is already mortgaged")
    if prop.has_improvements:
        raise HasImprovementsError(f"Sell the buildings on {data.name} before mortgaging it")

    prop.mortgaged = True
    _credit(
        ctx,
        player,
        data.mortgage_value,
        TransactionType.MORTGAGE_PROPERTY,
        f"{player.name} mortgaged {data.name}",
        property_id=data.property_id,
    )


def _handle_unmortgage(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_owned_by(ctx.state, ctx.params.property_id, player)
    if not prop.mortgaged:
        raise NotMortgagedError(f"{data.name} is not mortgaged")

    cost = unmortgage_cost(ctx.state, data.property_id)
    if player.balance < cost:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, unmortgaging costs {cost}")

    prop.mortgaged = False
    _charge(
        ctx,
        player,
        cost,
        TransactionType.UNMORTGAGE_PROPERTY,
        f"{player.name} unmortgaged {data.name}",
        property_id=data.property_id,
    )


# Buildings


def _require_street(ctx: ActionContext) -> Tuple[PropertyData, PropertyState]:
    data, prop = _require_owned_by(ctx.state, ctx.params.property_id, ctx.actor)
    if not data.is_street:
        raise BuildNotAllowedError(f"{data.name} cannot carry buildings")
    return data, prop


def _handle_buy_house(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_street(ctx)
    if prop.hotel or prop.houses >= MAX_HOUSES:
        raise MaxImprovementReachedError(f"{data.name} cannot take more houses")
    if prop.mortgaged:
        raise AlreadyMortgagedError(f"{data.name} is mortgaged")
    if not can_build_house(ctx.state, data.property_id, player.player_id):
        raise BuildNotAllowedError(f"{player.name} cannot build on {data.name} (monopoly or even building)")
    if player.balance < data.house_cost:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, a house costs {data.house_cost}")

    prop.houses += 1
    _charge(
        ctx,
        player,
        data.house_cost,
        TransactionType.BUY_HOUSE,
        f"{player.name} built a house on {data.name}",
        property_id=data.property_id,
    )


def _handle_buy_hotel(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_street(ctx)
    if prop.hotel:
        raise MaxImprovementReachedError(f"{data.name} already has a hotel")
    if prop.houses != MAX_HOUSES:
        raise BuildNotAllowedError(f"{data.name} needs {MAX_HOUSES} houses before a hotel")
    if not can_build_hotel(ctx.state, data.property_id, player.player_id):
        raise BuildNotAllowedError(f"{player.name} cannot build a hotel on {data.name}")
    if player.balance < data.hotel_cost:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, a hotel costs {data.hotel_cost}")

    prop.houses = 0
    prop.hotel = True
    _charge(
        ctx,
        player,
        data.hotel_cost,
        TransactionType.BUY_HOTEL,
        f"{player.name} built a hotel on {data.name}",
        property_id=data.property_id,
    )


def _handle_sell_house(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_street(ctx)
    if prop.hotel:
        raise BuildNotAllowedError(f"Sell the hotel on {data.name} before its houses")
    if prop.houses == 0:
        raise NoImprovementsError(f"{data.name} has no houses")
    if not can_sell_house(ctx.state, data.property_id, player.player_id):
        raise BuildNotAllowedError(f"Selling a house on {data.name} would break even building")

    prop.houses -= 1
    _credit(
        ctx,
        player,
        data.house_cost // 2,
        TransactionType.SELL_HOUSE,
        f"{player.name} sold a house on {data.name}",
        property_id=data.property_id,
    )


def _handle_sell_hotel(ctx: ActionContext) -> None:
    player = ctx.actor
    data, prop = _require_street(ctx)
    if not prop.hotel:
        raise NoImprovementsError(f"{data.name} has no hotel")

    prop.hotel = False
    prop.houses = MAX_HOUSES
    _credit(
        ctx,
        player,
        data.hotel_cost // 2,
        TransactionType.SELL_HOTEL,
        f"{player.name} sold the hotel on {data.name}",
        property_id=data.property_id,
    )


# Cards


def _handle_draw_card(ctx: ActionContext) -> None:
    _draw(ctx, ctx.actor, ctx.params.deck)


def _handle_apply_card_effect(ctx: ActionContext) -> None:
    state = ctx.state
    pending = state.pending_event
    player = _pending_player(ctx)
    card = get_card(pending.card_id)

    state.pending_event = None
    state.phase = GamePhase.NORMAL

    if not ctx.params.accept:
        ctx.record(
            TransactionType.APPLY_CARD_EFFECT,
            f"{player.name} declined: {card.text}",
            from_player_id=player.player_id,
            card_id=card.card_id,
        )
        return

    _apply_card(ctx, player, card)


_MOVEMENT_EFFECTS = {
    CardEffectType.MOVE,
    CardEffectType.MOVE_TO,
    CardEffectType.ADVANCE_TO_RAILROAD,
    CardEffectType.ADVANCE_TO_UTILITY,
    CardEffectType.GO_TO_JAIL,
}


def _apply_card(ctx: ActionContext, player: PlayerState, card: Card) -> None:
    """Carry out the effect printed on a card."""
    state = ctx.state
    effect = card.effect
    details = {"card_id": card.card_id}

    # Movement effects log the card before the moves they cause.
    if effect in _MOVEMENT_EFFECTS:
        ctx.record(TransactionType.APPLY_CARD_EFFECT, card.text, from_player_id=player.player_id, **details)

    if effect == CardEffectType.MONEY:
        if card.amount >= 0:
            _credit(ctx, player, card.amount, TransactionType.APPLY_CARD_EFFECT, card.text, **details)
        else:
            _charge(ctx, player, -card.amount, TransactionType.APPLY_CARD_EFFECT, card.text, **details)

    elif effect == CardEffectType.MOVE:
        _move_by(ctx, player, card.move_spaces)

    elif effect == CardEffectType.MOVE_TO:
        _move_to(ctx, player, card.target_position)

    elif effect == CardEffectType.ADVANCE_TO_RAILROAD:
        _move_to(ctx, player, state.board.find_nearest(player.position, RAILROAD_GROUP))

    elif effect == CardEffectType.ADVANCE_TO_UTILITY:
        _move_to(ctx, player, state.board.find_nearest(player.position, UTILITY_GROUP))

    elif effect == CardEffectType.GO_TO_JAIL:
        _send_to_jail(ctx, player)

    elif effect == CardEffectType.GET_OUT_OF_JAIL:
        player.set_jail_card(card.deck, True)
        discard = state.deck_lists(card.deck)[1]
        if card.card_id in discard:
            discard.remove(card.card_id)
        ctx.record(
            TransactionType.APPLY_CARD_EFFECT,
            f"{player.name} kept a Get Out of Jail Free card",
            from_player_id=player.player_id,
            **details,
        )

    elif effect == CardEffectType.REPAIRS:
        houses = sum(state.property_states[pid].houses for pid in player.owned_property_ids)
        hotels = sum(1 for pid in player.owned_property_ids if state.property_states[pid].hotel)
        cost = houses * card.per_house + hotels * card.per_hotel
        _charge(
            ctx,
            player,
            cost,
            TransactionType.APPLY_CARD_EFFECT,
            f"{card.text} ({houses} houses, {hotels} hotels)",
            **details,
        )

    elif effect == CardEffectType.PAY_EACH_PLAYER:
        _pay_players(
            ctx, player, ctx.params.player_payments, TransactionType.APPLY_CARD_EFFECT, card.text, **details
        )

    elif effect == CardEffectType.COLLECT_FROM_EACH_PLAYER:
        _collect_from_players(
            ctx, player, ctx.params.player_payments, TransactionType.APPLY_CARD_EFFECT, card.text, **details
        )


# Trading


def _handle_trade_start(ctx: ActionContext) -> None:
    ctx.state.phase = GamePhase.TRADE
    ctx.record(
        TransactionType.TRADE_START,
        f"{ctx.actor.name} started a trade",
        from_player_id=ctx.actor.player_id,
    )


def _handle_trade_cancel(ctx: ActionContext) -> None:
    ctx.state.phase = GamePhase.NORMAL
    ctx.record(
        TransactionType.TRADE_CANCEL,
        f"{ctx.actor.name} cancelled the trade",
        from_player_id=ctx.actor.player_id,
    )


def _validate_trade_side(
    ctx: ActionContext, player: PlayerState, cash: int, property_ids: List[str], jail_cards: List[DeckType]
) -> None:
    if player.is_bankrupt:
        raise BankruptPlayerError(f"{player.name} is bankrupt")
    if player.balance < 0:
        raise InsufficientFundsError(f"{player.name} must be solvent to trade")
    if cash > player.balance:
        raise InsufficientFundsError(f"{player.name} has {player.balance}, offered {cash}")
    if len(set(property_ids)) != len(property_ids):
        raise InvalidActionError(f"Duplicate properties offered by {player.name}")
    for property_id in property_ids:
        data, prop = _require_owned_by(ctx.state, property_id, player)
        if prop.has_improvements:
            raise HasImprovementsError(f"Sell the buildings on {data.name} before trading it")
    if len(set(jail_cards)) != len(jail_cards):
        raise InvalidActionError(f"Duplicate jail cards offered by {player.name}")
    for deck in jail_cards:
        if not player.has_jail_card(deck):
            raise NoJailCardError(f"{player.name} has no {deck.value} Get Out of Jail Free card")


def _handle_trade_execute(ctx: ActionContext) -> None:
    """
    Execute a trade atomically.

    Everything is validated before anything moves, so a rejected trade
    leaves no partial effect.
    """
    state = ctx.state
    params = ctx.params
    giver = _require_player(state, params.from_player_id)
    receiver = _require_player(state, params.to_player_id)
    if giver.player_id == receiver.player_id:
        raise InvalidActionError("A player cannot trade with themselves")

    _validate_trade_side(ctx, giver, params.cash_from, params.properties_from, params.jail_cards_from)
    _validate_trade_side(ctx, receiver, params.cash_to, params.properties_to, params.jail_cards_to)

    giver.balance += params.cash_to - params.cash_from
    receiver.balance += params.cash_from - params.cash_to

    for property_id in params.properties_from:
        _change_owner(state, property_id, giver, receiver)
    for property_id in params.properties_to:
        _change_owner(state, property_id, receiver, giver)

    for deck in params.jail_cards_from:
        giver.set_jail_card(deck, False)
        receiver.set_jail_card(deck, True)
    for deck in params.jail_cards_to:
        receiver.set_jail_card(deck, False)
        giver.set_jail_card(deck, True)

    state.phase = GamePhase.NORMAL
    offered = _describe_trade_side(params.cash_from, params.properties_from, params.jail_cards_from)
    requested = _describe_trade_side(params.cash_to, params.properties_to, params.jail_cards_to)
    ctx.record(
        TransactionType.TRADE_EXECUTE,
        f"{giver.name} traded {offered} to {receiver.name} for {requested}",
        amount=params.cash_from - params.cash_to,
        from_player_id=giver.player_id,
        to_player_id=receiver.player_id,
    )


def _describe_trade_side(cash: int, property_ids: List[str], jail_cards: List[DeckType]) -> str:
    parts = []
    if cash:
        parts.append(f"{cash} cash")
    parts.extend(property_ids)
    parts.extend(f"{deck.value} jail card" for deck in jail_cards)
    return ", ".join(parts) or "nothing"


def _change_owner(game_state: GameState, property_id: str, old_owner: PlayerState, new_owner: PlayerState) -> None:
    old_owner.remove_property(property_id)
    new_owner.add_property(property_id)
    game_state.property_states[property_id].owner_id = new_owner.player_id


# Manual bookkeeping


def _handle_adjust_balance(ctx: ActionContext) -> None:
    params = ctx.params
    player = _require_active_player(ctx.state, params.player_id)
    if params.amount >= 0:
        _credit(ctx, player, params.amount, TransactionType.ADJUST_BALANCE, params.reason)
    else:
        _charge(ctx, player, -params.amount, TransactionType.ADJUST_BALANCE, params.reason)


def _handle_transfer_cash(ctx: ActionContext) -> None:
    params = ctx.params
    payer = _require_active_player(ctx.state, params.from_player_id)
    payee = _require_active_player(ctx.state, params.to_player_id)
    if payer.player_id == payee.player_id:
        raise InvalidActionError("A player cannot transfer cash to themselves")
    _transfer(ctx, payer, payee, params.amount, TransactionType.TRANSFER_CASH, params.reason)


def _handle_manual_position(ctx: ActionContext) -> None:
    player = ctx.actor
    old_position = player.position
    player.position = ctx.params.position
    ctx.record(
        TransactionType.MANUAL_POSITION,
        f"{player.name} placed on {ctx.state.board.get_space(player.position).name} (was {old_position})",
        from_player_id=player.player_id,
    )


def _handle_manual_ownership(ctx: ActionContext) -> None:
    state = ctx.state
    data, prop = _require_property(state, ctx.params.property_id)
    new_owner = None
    if ctx.params.owner_id is not None:
        new_owner = _require_active_player(state, ctx.params.owner_id)

    old_owner = state.get_player(prop.owner_id)
    if old_owner is not None:
        old_owner.remove_property(data.property_id)

    if new_owner is None:
        prop.clear()
        note = f"{data.name} returned to the bank"
    else:
        prop.owner_id = new_owner.player_id
        new_owner.add_property(data.property_id)
        note = f"{data.name} assigned to {new_owner.name}"

    ctx.record(
        TransactionType.MANUAL_OWNERSHIP,
        note,
        from_player_id=old_owner.player_id if old_owner else BANK,
        to_player_id=new_owner.player_id if new_owner else BANK,
        property_id=data.property_id,
    )


# Bankruptcy


def _handle_declare_bankruptcy(ctx: ActionContext) -> None:
    """
    Declare a player bankrupt.

    To the bank: every property returns unowned, unmortgaged and unimproved,
    and held jail cards go back to their decks. To a player: remaining cash,
    properties (as they stand) and jail cards pass to the creditor.
    """
    state = ctx.state
    params = ctx.params
    debtor = _require_player(state, params.player_id) if params.player_id is not None else ctx.actor
    if debtor.is_bankrupt:
        raise BankruptPlayerError(f"{debtor.name} is already bankrupt")

    creditor = None
    if params.creditor_id != BANK:
        creditor = _require_active_player(state, params.creditor_id)
        if creditor.player_id == debtor.player_id:
            raise InvalidActionError("A player cannot be their own creditor")

    property_ids = list(debtor.owned_property_ids)
    if creditor is None:
        for property_id in property_ids:
            state.property_states[property_id].clear()
        for deck in debtor.held_jail_cards():
            debtor.set_jail_card(deck, False)
            state.deck_lists(deck)[1].append(jail_card_id(deck))
        debtor.owned_property_ids = []
        note = f"{debtor.name} went bankrupt to the bank"
        amount = None
    else:
        amount = max(debtor.balance, 0)
        creditor.balance += amount
        for property_id in property_ids:
            _change_owner(state, property_id, debtor, creditor)
        for deck in debtor.held_jail_cards():
            debtor.set_jail_card(deck, False)
            creditor.set_jail_card(deck, True)
        note = f"{debtor.name} went bankrupt to {creditor.name}"

    debtor.balance = 0
    debtor.is_bankrupt = True
    debtor.in_jail = False
    debtor.jail_attempts = 0
    if state.pending_event is not None and state.pending_event.player_id == debtor.player_id:
        state.pending_event = None
    if state.phase != GamePhase.BANKRUPTCY_RESOLUTION:
        state.phase = _resumed_phase(state)

    ctx.record(
        TransactionType.DECLARE_BANKRUPTCY,
        note,
        amount=amount,
        from_player_id=debtor.player_id,
        to_player_id=creditor.player_id if creditor else BANK,
    )
    logger.info(f"{note} ({len(property_ids)} properties)")


# Train event (property roulette)


def _handle_train_trigger(ctx: ActionContext) -> None:
    state = ctx.state
    player = ctx.actor
    property_id = select_roulette_property(state.board.property_ids(), ctx.rng)
    data = state.property_data[property_id]
    state.pending_event = PendingEvent(PendingEventKind.TRAIN, player.player_id, property_id=property_id)
    _teleport(ctx, player, data.position)
    ctx.record(
        TransactionType.TRAIN_EVENT,
        f"The train took {player.name} to {data.name}",
        from_player_id=player.player_id,
        property_id=property_id,
    )


def _handle_train_stop(ctx: ActionContext) -> None:
    state = ctx.state
    data, _ = _require_property(state, ctx.params.property_id)
    player = _pending_player(ctx)
    state.pending_event.property_id = data.property_id
    _teleport(ctx, player, data.position)
    ctx.record(
        TransactionType.TRAIN_EVENT,
        f"The train stopped at {data.name}",
        from_player_id=player.player_id,
        property_id=data.property_id,
    )


def _handle_train_buy(ctx: ActionContext) -> None:
    player = _pending_player(ctx)
    _buy_property(ctx, player, ctx.state.pending_event.property_id, ctx.params.price)
    ctx.state.pending_event = None


def _handle_train_skip(ctx: ActionContext) -> None:
    pending = ctx.state.pending_event
    ctx.state.pending_event = None
    ctx.record(
        TransactionType.TRAIN_EVENT,
        "Train stop skipped",
        from_player_id=pending.player_id,
        property_id=pending.property_id,
    )


def _handle_train_pay_rent(ctx: ActionContext) -> None:
    player = _pending_player(ctx)
    _pay_rent(ctx, player, ctx.state.pending_event.property_id, ctx.params.dice, amount=ctx.params.amount)
    ctx.state.pending_event = None


# Chance event


def _handle_chance_trigger(ctx: ActionContext) -> None:
    outcome = ctx.rng.choice(CHANCE_OUTCOMES)
    ctx.state.pending_event = PendingEvent(
        PendingEventKind.CHANCE,
        ctx.actor.player_id,
        outcome_id=outcome.outcome_id,
    )
    ctx.record(
        TransactionType.CHANCE_EVENT,
        f"{ctx.actor.name} drew chance event: {outcome.name}",
        from_player_id=ctx.actor.player_id,
    )


def _handle_chance_apply(ctx: ActionContext) -> None:
    state = ctx.state
    params = ctx.params
    player = _pending_player(ctx)
    outcome = get_outcome(state.pending_event.outcome_id)
    amount = params.amount if params.amount is not None else outcome.amount
    action = outcome.action
    note = f"{outcome.name}: {outcome.description}"

    property_id = None
    if outcome.needs_property:
        if params.property_id is None:
            raise InvalidActionError(f"{outcome.name} needs a property_id")
        _require_owned_by(state, params.property_id, player)
        property_id = params.property_id
    details = {"property_id": property_id} if property_id else {}

    if action in (OutcomeAction.RECEIVE, OutcomeAction.LUCKY_INVESTMENT):
        _credit(ctx, player, amount, TransactionType.CHANCE_EVENT, note)

    elif action == OutcomeAction.RENT_REIMBURSEMENT:
        if params.amount is None:
            raise InvalidActionError(f"{outcome.name} needs the reimbursed amount")
        _credit(ctx, player, amount, TransactionType.CHANCE_EVENT, note)

    elif action in (OutcomeAction.PAY, OutcomeAction.PAY_PROPERTY_REPAIR):
        _charge(ctx, player, amount, TransactionType.CHANCE_EVENT, note, **details)

    elif action == OutcomeAction.TAX_AUDIT:
        if params.amount is None:
            audit = Decimal(max(player.balance, 0)) * Decimal(str(TAX_AUDIT_RATE))
            amount = int(audit.to_integral_value(rounding=ROUND_FLOOR))
        _charge(ctx, player, amount, TransactionType.CHANCE_EVENT, note)

    elif action in (OutcomeAction.RECEIVE_PER_PLAYER, OutcomeAction.RECEIVE_PROPERTY_UPGRADE):
        _collect_from_players(
            ctx, player, params.player_payments, TransactionType.CHANCE_EVENT, outcome.name, **details
        )
        ctx.record(TransactionType.CHANCE_EVENT, note, from_player_id=player.player_id, **details)

    elif action == OutcomeAction.PAY_PER_PLAYER:
        _pay_players(ctx, player, params.player_payments, TransactionType.CHANCE_EVENT, outcome.name)
        ctx.record(TransactionType.CHANCE_EVENT, note, from_player_id=player.player_id)

    state.pending_event = None


# Free-parking prize lottery


def _handle_free_parking_trigger(ctx: ActionContext) -> None:
    state = ctx.state
    prize = draw_prize(ctx.rng, state.board.property_ids(), roll=ctx.params.roll)
    state.pending_event = PendingEvent(PendingEventKind.FREE_PARKING, ctx.actor.player_id, prize=prize)
    if prize.kind == PrizeKind.CASH:
        note = f"{ctx.actor.name} drew a free-parking prize of {prize.amount} (roll {prize.roll})"
    else:
        prize_name = state.property_data[prize.property_id].name
        note = f"{ctx.actor.name} drew a free-parking prize: {prize_name} (roll {prize.roll})"
    ctx.record(
        TransactionType.FREE_PARKING_EVENT,
        note,
        from_player_id=ctx.actor.player_id,
        property_id=prize.property_id,
    )


def _handle_free_parking_accept(ctx: ActionContext) -> None:
    state = ctx.state
    player = _pending_player(ctx)
    prize = state.pending_event.prize
    state.pending_event = None

    if prize.kind == PrizeKind.CASH:
        _credit(ctx, player, prize.amount, TransactionType.FREE_PARKING_EVENT, f"{player.name} won {prize.amount}")
        return

    data, prop = _require_property(state, prize.property_id)
    if prop.is_owned():
        _credit(
            ctx,
            player,
            PROPERTY_PRIZE_CASH_EQUIVALENT,
            TransactionType.FREE_PARKING_EVENT,
            f"{data.name} is already owned; {player.name} won {PROPERTY_PRIZE_CASH_EQUIVALENT} instead",
            property_id=data.property_id,
        )
        return

    prop.owner_id = player.player_id
    player.add_property(data.property_id)
    ctx.record(
        TransactionType.FREE_PARKING_EVENT,
        f"{player.name} won {data.name}",
        from_player_id=BANK,
        to_player_id=player.player_id,
        property_id=data.property_id,
    )


def _handle_free_parking_decline(ctx: ActionContext) -> None:
    pending = ctx.state.pending_event
    ctx.state.pending_event = None
    ctx.record(TransactionType.FREE_PARKING_EVENT, "Free-parking prize declined", from_player_id=pending.player_id)


_HANDLERS: Dict[ActionType, Callable[[ActionContext], None]] = {
    ActionType.ROLL_DICE: _handle_roll_dice,
    ActionType.PASS_GO: _handle_pass_go,
    ActionType.GO_TO_JAIL: _handle_go_to_jail,
    ActionType.PAY_JAIL_FINE: _handle_pay_jail_fine,
    ActionType.USE_JAIL_CARD: _handle_use_jail_card,
    ActionType.BUY_PROPERTY: _handle_buy_property,
    ActionType.PAY_RENT: _handle_pay_rent,
    ActionType.COLLECT_RENT: _handle_collect_rent,
    ActionType.DRAW_CARD: _handle_draw_card,
    ActionType.APPLY_CARD_EFFECT: _handle_apply_card_effect,
    ActionType.MORTGAGE_PROPERTY: _handle_mortgage,
    ActionType.UNMORTGAGE_PROPERTY: _handle_unmortgage,
    ActionType.BUY_HOUSE: _handle_buy_house,
    ActionType.SELL_HOUSE: _handle_sell_house,
    ActionType.BUY_HOTEL: _handle_buy_hotel,
    ActionType.SELL_HOTEL: _handle_sell_hotel,
    ActionType.TRADE_START: _handle_trade_start,
    ActionType.TRADE_CANCEL: _handle_trade_cancel,
    ActionType.TRADE_EXECUTE: _handle_trade_execute,
    ActionType.ADJUST_BALANCE: _handle_adjust_balance,
    ActionType.TRANSFER_CASH: _handle_transfer_cash,
    ActionType.DECLARE_BANKRUPTCY: _handle_declare_bankruptcy,
    ActionType.END_TURN: _handle_end_turn,
    ActionType.MANUAL_POSITION: _handle_manual_position,
    ActionType.MANUAL_OWNERSHIP: _handle_manual_ownership,
    ActionType.TRAIN_EVENT_TRIGGER: _handle_train_trigger,
    ActionType.TRAIN_EVENT_STOP: _handle_train_stop,
    ActionType.TRAIN_EVENT_BUY: _handle_train_buy,
    ActionType.TRAIN_EVENT_SKIP: _handle_train_skip,
    ActionType.TRAIN_EVENT_PAY_RENT: _handle_train_pay_rent,
    ActionType.CHANCE_EVENT_TRIGGER: _handle_chance_trigger,
    ActionType.CHANCE_EVENT_APPLY: _handle_chance_apply,
    ActionType.FREE_PARKING_EVENT_TRIGGER: _handle_free_parking_trigger,
    ActionType.FREE_PARKING_EVENT_ACCEPT: _handle_free_parking_accept,
    ActionType.FREE_PARKING_EVENT_DECLINE: _handle_free_parking_decline,
}
