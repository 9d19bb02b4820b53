"""
Parameter schemas for every action kind.

Each action kind carries only the fields relevant to it; extra or missing
fields are rejected before any handler runs.
"""

from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from monopoly_ledger.board import BOARD_SIZE
from monopoly_ledger.cards import DeckType
from monopoly_ledger.exceptions import InvalidActionError
from monopoly_ledger.game import ActionType
from monopoly_ledger.money import BANK

Die = Annotated[int, Field(ge=1, le=6)]
Dice = Tuple[Die, Die]
PositiveInt = Annotated[int, Field(gt=0)]
NonNegativeInt = Annotated[int, Field(ge=0)]


class ActionParams(BaseModel):
    """Base for action parameter models."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class NoParams(ActionParams):
    pass


class RollDiceParams(ActionParams):
    dice: Optional[Dice] = Field(default=None, description="Fixed dice instead of a random roll.")


class UseJailCardParams(ActionParams):
    deck: Optional[DeckType] = Field(default=None, description="Which entitlement to use; Chance first if omitted.")


class BuyPropertyParams(ActionParams):
    property_id: Optional[str] = Field(default=None, description="Defaults to the space the buyer stands on.")
    price: Optional[PositiveInt] = Field(default=None, description="Negotiated price; amends the deed's price.")


class PayRentParams(ActionParams):
    property_id: Optional[str] = None
    dice: Optional[Dice] = None


class CollectRentParams(ActionParams):
    payer_id: str
    payee_id: str
    amount: PositiveInt
    property_id: Optional[str] = None


class DrawCardParams(ActionParams):
    deck: DeckType


class ApplyCardEffectParams(ActionParams):
    accept: bool = True
    player_payments: Optional[Dict[str, NonNegativeInt]] = Field(
        default=None,
        description="Per-player amounts for 'each player' cards, keyed by player id.",
    )


class PropertyParams(ActionParams):
    property_id: str


class TradeExecuteParams(ActionParams):
    from_player_id: str
    to_player_id: str
    cash_from: NonNegativeInt = 0
    cash_to: NonNegativeInt = 0
    properties_from: List[str] = Field(default_factory=list)
    properties_to: List[str] = Field(default_factory=list)
    jail_cards_from: List[DeckType] = Field(default_factory=list)
    jail_cards_to: List[DeckType] = Field(default_factory=list)


class AdjustBalanceParams(ActionParams):
    player_id: str
    amount: int
    reason: str = "Manual balance adjustment"


class TransferCashParams(ActionParams):
    from_player_id: str
    to_player_id: str
    amount: PositiveInt
    reason: str = "Cash transfer"


class DeclareBankruptcyParams(ActionParams):
    player_id: Optional[str] = None
    creditor_id: str = BANK


class ManualPositionParams(ActionParams):
    position: Annotated[int, Field(ge=0, lt=BOARD_SIZE)]


class ManualOwnershipParams(ActionParams):
    property_id: str
    owner_id: Optional[str] = None


class TrainStopParams(ActionParams):
    property_id: str


class TrainBuyParams(ActionParams):
    price: Optional[PositiveInt] = None


class TrainPayRentParams(ActionParams):
    amount: Optional[PositiveInt] = Field(default=None, description="Rent override; computed when omitted.")
    dice: Optional[Dice] = None


class ChanceApplyParams(ActionParams):
    amount: Optional[NonNegativeInt] = None
    property_id: Optional[str] = None
    player_payments: Optional[Dict[str, NonNegativeInt]] = None


class FreeParkingTriggerParams(ActionParams):
    roll: Optional[Annotated[int, Field(ge=1, le=100)]] = Field(
        default=None, description="Fixed lottery draw instead of a random one."
    )


ACTION_PARAMS: Dict[ActionType, Type[ActionParams]] = {
    ActionType.ROLL_DICE: RollDiceParams,
    ActionType.PASS_GO: NoParams,
    ActionType.GO_TO_JAIL: NoParams,
    ActionType.PAY_JAIL_FINE: NoParams,
    ActionType.USE_JAIL_CARD: UseJailCardParams,
    ActionType.BUY_PROPERTY: BuyPropertyParams,
    ActionType.PAY_RENT: PayRentParams,
    ActionType.COLLECT_RENT: CollectRentParams,
    ActionType.DRAW_CARD: DrawCardParams,
    ActionType.APPLY_CARD_EFFECT: ApplyCardEffectParams,
    ActionType.MORTGAGE_PROPERTY: PropertyParams,
    ActionType.UNMORTGAGE_PROPERTY: PropertyParams,
    ActionType.BUY_HOUSE: PropertyParams,
    ActionType.SELL_HOUSE: PropertyParams,
    ActionType.BUY_HOTEL: PropertyParams,
    ActionType.SELL_HOTEL: PropertyParams,
    ActionType.TRADE_START: NoParams,
    ActionType.TRADE_CANCEL: NoParams,
    ActionType.TRADE_EXECUTE: TradeExecuteParams,
    ActionType.ADJUST_BALANCE: AdjustBalanceParams,
    ActionType.TRANSFER_CASH: TransferCashParams,
    ActionType.DECLARE_BANKRUPTCY: DeclareBankruptcyParams,
    ActionType.END_TURN: NoParams,
    ActionType.MANUAL_POSITION: ManualPositionParams,
    ActionType.MANUAL_OWNERSHIP: ManualOwnershipParams,
    ActionType.UNDO: NoParams,
    ActionType.TRAIN_EVENT_TRIGGER: NoParams,
    ActionType.TRAIN_EVENT_STOP: TrainStopParams,
    ActionType.TRAIN_EVENT_BUY: TrainBuyParams,
    ActionType.TRAIN_EVENT_SKIP: NoParams,
    ActionType.TRAIN_EVENT_PAY_RENT: TrainPayRentParams,
    ActionType.CHANCE_EVENT_TRIGGER: NoParams,
    ActionType.CHANCE_EVENT_APPLY: ChanceApplyParams,
    ActionType.FREE_PARKING_EVENT_TRIGGER: FreeParkingTriggerParams,
    ActionType.FREE_PARKING_EVENT_ACCEPT: NoParams,
    ActionType.FREE_PARKING_EVENT_DECLINE: NoParams,
}


def validate_params(action_type: ActionType, params: Mapping[str, Any]) -> ActionParams:
    """
    Validate raw action parameters against the schema of their action kind.

    Raises:
        InvalidActionError: if fields are missing, unexpected or malformed
    """
    schema = ACTION_PARAMS[action_type]
    try:
        return schema.model_validate(dict(params))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'params'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidActionError(f"Invalid parameters for {action_type.value}: {problems}") from e


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: Union[ActionType, str], **params: Any):
        self.action_type = action_type
        self.params = params

    @property
    def kind(self) -> Optional[ActionType]:
        """The resolved action kind, or None if the type is not a known kind."""
        if isinstance(self.action_type, ActionType):
            return self.action_type
        try:
            return ActionType(self.action_type)
        except (ValueError, TypeError):
            return None

    def to_dict(self) -> Dict[str, Any]:
        name = self.action_type.value if isinstance(self.action_type, ActionType) else self.action_type
        return {"type": name, **self.params}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        name = self.action_type.value if isinstance(self.action_type, ActionType) else self.action_type
        return f"Action({name}, {self.params})"


def parse_action(payload: Mapping[str, Any]) -> Action:
    """
    Build an Action from a raw mapping such as {"type": "BUY_PROPERTY", "property_id": "boardwalk"}.

    Parameters are not validated here; apply_action does that.

    Raises:
        InvalidActionError: if the payload has no "type" key
    """
    if "type" not in payload:
        raise InvalidActionError("Action payload is missing its 'type'")
    params = {key: value for key, value in payload.items() if key != "type"}
    return Action(payload["type"], **params)
