"""
Chance and Community Chest cards, and the chance-event outcome table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DeckType(Enum):
    """The two card decks."""

    CHANCE = "CHANCE"
    COMMUNITY_CHEST = "COMMUNITY_CHEST"


class CardEffectType(Enum):
    """Types of card effects."""

    MONEY = "MONEY"
    MOVE = "MOVE"
    MOVE_TO = "MOVE_TO"
    ADVANCE_TO_RAILROAD = "ADVANCE_TO_RAILROAD"
    ADVANCE_TO_UTILITY = "ADVANCE_TO_UTILITY"
    GO_TO_JAIL = "GO_TO_JAIL"
    GET_OUT_OF_JAIL = "GET_OUT_OF_JAIL"
    REPAIRS = "REPAIRS"
    PAY_EACH_PLAYER = "PAY_EACH_PLAYER"
    COLLECT_FROM_EACH_PLAYER = "COLLECT_FROM_EACH_PLAYER"


@dataclass(frozen=True)
class Card:
    """Represents a Chance or Community Chest card."""

    card_id: str
    deck: DeckType
    text: str
    effect: CardEffectType
    amount: int = 0  # MONEY (signed), per-player amount for the *_EACH_PLAYER effects
    target_position: Optional[int] = None  # MOVE_TO
    move_spaces: int = 0  # MOVE (negative moves backwards)
    per_house: int = 0  # REPAIRS
    per_hotel: int = 0  # REPAIRS

    def __repr__(self) -> str:
        return f"Card('{self.card_id}')"


CHANCE_CARDS: List[Card] = [
    Card("chance-1", DeckType.CHANCE, "Advance to GO. Collect $200.", CardEffectType.MOVE_TO, target_position=0),
    Card(
        "chance-2",
        DeckType.CHANCE,
        "Advance to Illinois Avenue. If you pass GO, collect $200.",
        CardEffectType.MOVE_TO,
        target_position=24,
    ),
    Card(
        "chance-3",
        DeckType.CHANCE,
        "Advance to St. Charles Place. If you pass GO, collect $200.",
        CardEffectType.MOVE_TO,
        target_position=11,
    ),
    Card(
        "chance-4",
        DeckType.CHANCE,
        "Advance to the nearest Railroad. If unowned, you may buy it. "
        "If owned, pay owner twice the rental.",
        CardEffectType.ADVANCE_TO_RAILROAD,
    ),
    Card(
        "chance-5",
        DeckType.CHANCE,
        "Advance to the nearest Railroad. If unowned, you may buy it. "
        "If owned, pay owner twice the rental.",
        CardEffectType.ADVANCE_TO_RAILROAD,
    ),
    Card(
        "chance-6",
        DeckType.CHANCE,
        "Advance token to nearest Utility. If unowned, you may buy it. "
        "If owned, throw dice and pay owner a total 10 times the amount thrown.",
        CardEffectType.ADVANCE_TO_UTILITY,
    ),
    Card("chance-7", DeckType.CHANCE, "Bank pays you dividend of $50.", CardEffectType.MONEY, amount=50),
    Card(
        "chance-8",
        DeckType.CHANCE,
        "Get Out of Jail Free. This card may be kept until needed or sold.",
        CardEffectType.GET_OUT_OF_JAIL,
    ),
    Card("chance-9", DeckType.CHANCE, "Go Back 3 Spaces.", CardEffectType.MOVE, move_spaces=-3),
    Card(
        "chance-10",
        DeckType.CHANCE,
        "Go to Jail. Go directly to Jail. Do not pass GO, do not collect $200.",
        CardEffectType.GO_TO_JAIL,
    ),
    Card(
        "chance-11",
        DeckType.CHANCE,
        "Make general repairs on all your property. For each house pay $25. For each hotel pay $100.",
        CardEffectType.REPAIRS,
        per_house=25,
        per_hotel=100,
    ),
    Card("chance-12", DeckType.CHANCE, "Pay poor tax of $15.", CardEffectType.MONEY, amount=-15),
    Card(
        "chance-13",
        DeckType.CHANCE,
        "Take a trip to Reading Railroad. If you pass GO, collect $200.",
        CardEffectType.MOVE_TO,
        target_position=5,
    ),
    Card(
        "chance-14",
        DeckType.CHANCE,
        "Take a walk on the Boardwalk. Advance token to Boardwalk.",
        CardEffectType.MOVE_TO,
        target_position=39,
    ),
    Card(
        "chance-15",
        DeckType.CHANCE,
        "You have been elected Chairman of the Board. Pay each player $50.",
        CardEffectType.PAY_EACH_PLAYER,
        amount=50,
    ),
    Card("chance-16", DeckType.CHANCE, "Your building loan matures. Collect $150.", CardEffectType.MONEY, amount=150),
]

COMMUNITY_CHEST_CARDS: List[Card] = [
    Card(
        "chest-1", DeckType.COMMUNITY_CHEST, "Advance to GO. Collect $200.", CardEffectType.MOVE_TO, target_position=0
    ),
    Card(
        "chest-2", DeckType.COMMUNITY_CHEST, "Bank error in your favor. Collect $200.", CardEffectType.MONEY, amount=200
    ),
    Card("chest-3", DeckType.COMMUNITY_CHEST, "Doctor's fee. Pay $50.", CardEffectType.MONEY, amount=-50),
    Card("chest-4", DeckType.COMMUNITY_CHEST, "From sale of stock you get $50.", CardEffectType.MONEY, amount=50),
    Card(
        "chest-5",
        DeckType.COMMUNITY_CHEST,
        "Get Out of Jail Free. This card may be kept until needed or sold.",
        CardEffectType.GET_OUT_OF_JAIL,
    ),
    Card(
        "chest-6",
        DeckType.COMMUNITY_CHEST,
        "Go to Jail. Go directly to Jail. Do not pass GO, do not collect $200.",
        CardEffectType.GO_TO_JAIL,
    ),
    Card("chest-7", DeckType.COMMUNITY_CHEST, "Holiday fund matures. Receive $100.", CardEffectType.MONEY, amount=100),
    Card("chest-8", DeckType.COMMUNITY_CHEST, "Income tax refund. Collect $20.", CardEffectType.MONEY, amount=20),
    Card(
        "chest-9",
        DeckType.COMMUNITY_CHEST,
        "It is your birthday. Collect $10 from every player.",
        CardEffectType.COLLECT_FROM_EACH_PLAYER,
        amount=10,
    ),
    Card(
        "chest-10", DeckType.COMMUNITY_CHEST, "Life insurance matures. Collect $100.", CardEffectType.MONEY, amount=100
    ),
    Card("chest-11", DeckType.COMMUNITY_CHEST, "Pay hospital fees of $100.", CardEffectType.MONEY, amount=-100),
    Card("chest-12", DeckType.COMMUNITY_CHEST, "Pay school fees of $150.", CardEffectType.MONEY, amount=-150),
    Card("chest-13", DeckType.COMMUNITY_CHEST, "Receive $25 consultancy fee.", CardEffectType.MONEY, amount=25),
    Card(
        "chest-14",
        DeckType.COMMUNITY_CHEST,
        "You are assessed for street repairs. $40 per house. $115 per hotel.",
        CardEffectType.REPAIRS,
        per_house=40,
        per_hotel=115,
    ),
    Card(
        "chest-15",
        DeckType.COMMUNITY_CHEST,
        "You have won second prize in a beauty contest. Collect $10.",
        CardEffectType.MONEY,
        amount=10,
    ),
    Card("chest-16", DeckType.COMMUNITY_CHEST, "You inherit $100.", CardEffectType.MONEY, amount=100),
]

CARDS_BY_ID: Dict[str, Card] = {card.card_id: card for card in CHANCE_CARDS + COMMUNITY_CHEST_CARDS}


def get_card(card_id: str) -> Card:
    """Look up a card by id. Raises KeyError for unknown ids."""
    return CARDS_BY_ID[card_id]


def jail_card_id(deck: DeckType) -> str:
    """Id of the Get Out of Jail Free card belonging to a deck."""
    cards = CHANCE_CARDS if deck == DeckType.CHANCE else COMMUNITY_CHEST_CARDS
    return next(c.card_id for c in cards if c.effect == CardEffectType.GET_OUT_OF_JAIL)


# Chance events


class OutcomeAction(Enum):
    """How a chance-event outcome is resolved."""

    RECEIVE = "receive"
    PAY = "pay"
    RECEIVE_PER_PLAYER = "receive_per_player"
    PAY_PER_PLAYER = "pay_per_player"
    RECEIVE_PROPERTY_UPGRADE = "receive_property_upgrade"
    PAY_PROPERTY_REPAIR = "pay_property_repair"
    TAX_AUDIT = "tax_audit"
    RENT_REIMBURSEMENT = "rent_reimbursement"
    LUCKY_INVESTMENT = "lucky_investment"


@dataclass(frozen=True)
class ChanceOutcome:
    """One entry of the chance-event table."""

    outcome_id: str
    good: bool
    name: str
    description: str
    action: OutcomeAction
    amount: int = 0  # bank amount, or the suggested per-player amount

    @property
    def needs_property(self) -> bool:
        return self.action in (OutcomeAction.RECEIVE_PROPERTY_UPGRADE, OutcomeAction.PAY_PROPERTY_REPAIR)


TAX_AUDIT_RATE = 0.10

CHANCE_OUTCOMES: List[ChanceOutcome] = [
    ChanceOutcome(
        "unexpected-sponsorship",
        True,
        "Unexpected Sponsorship",
        "Receive 200M from the bank.",
        OutcomeAction.RECEIVE,
        200,
    ),
    ChanceOutcome(
        "viral-attraction",
        True,
        "Viral Attraction",
        "Receive 300M from the bank.",
        OutcomeAction.RECEIVE,
        300,
    ),
    ChanceOutcome("tech-grant", True, "Tech Grant Awarded", "Receive 400M from the bank.", OutcomeAction.RECEIVE, 400),
    ChanceOutcome(
        "property-upgrade",
        True,
        "Property Upgrade Buzz",
        "Choose any one property you own. Collect 150M from each other player.",
        OutcomeAction.RECEIVE_PROPERTY_UPGRADE,
        150,
    ),
    ChanceOutcome(
        "hidden-revenue",
        True,
        "Found Hidden Revenue Stream",
        "Receive 500M from the bank.",
        OutcomeAction.RECEIVE,
        500,
    ),
    ChanceOutcome(
        "celebrity-endorsement",
        True,
        "Celebrity Endorsement",
        "Receive 250M from the bank.",
        OutcomeAction.RECEIVE,
        250,
    ),
    ChanceOutcome(
        "lucky-investment",
        True,
        "Lucky Investment Flip",
        "Receive 100M now and an additional 100M at your next turn start (manual reminder).",
        OutcomeAction.LUCKY_INVESTMENT,
        100,
    ),
    ChanceOutcome(
        "rent-reimbursement",
        True,
        "Rent Reimbursement",
        "Take back the last rent you paid (manual amount entry).",
        OutcomeAction.RENT_REIMBURSEMENT,
    ),
    ChanceOutcome("maintenance-failure", False, "Maintenance Failure", "Pay 150M to the bank.", OutcomeAction.PAY, 150),
    ChanceOutcome("property-damage", False, "Property Damage", "Pay 200M to the bank.", OutcomeAction.PAY, 200),
    ChanceOutcome(
        "legal-dispute",
        False,
        "Legal Dispute",
        "Pay 100M to each other player.",
        OutcomeAction.PAY_PER_PLAYER,
        100,
    ),
    ChanceOutcome("failed-expansion", False, "Failed Expansion", "Pay 300M to the bank.", OutcomeAction.PAY, 300),
    ChanceOutcome(
        "security-breach",
        False,
        "Security Breach",
        "Choose one property you own. Pay 150M to the bank for repairs.",
        OutcomeAction.PAY_PROPERTY_REPAIR,
        150,
    ),
    ChanceOutcome("tax-audit", False, "Tax Audit", "Pay 10% of your current cash.", OutcomeAction.TAX_AUDIT),
    ChanceOutcome("bad-publicity", False, "Bad Publicity", "Pay 250M to the bank.", OutcomeAction.PAY, 250),
    ChanceOutcome(
        "forced-donation",
        False,
        "Forced Donation",
        "Pay 50M to each other player.",
        OutcomeAction.PAY_PER_PLAYER,
        50,
    ),
]

OUTCOMES_BY_ID: Dict[str, ChanceOutcome] = {o.outcome_id: o for o in CHANCE_OUTCOMES}


def get_outcome(outcome_id: str) -> ChanceOutcome:
    """Look up a chance-event outcome by id. Raises KeyError for unknown ids."""
    return OUTCOMES_BY_ID[outcome_id]
