"""
Game state model and game creation.
"""

from __future__ import annotations

import copy
import logging
import random
import time
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from monopoly_ledger.board import Board, get_board
from monopoly_ledger.cards import CHANCE_CARDS, COMMUNITY_CHEST_CARDS, DeckType
from monopoly_ledger.config import GameSettings
from monopoly_ledger.money import Transaction
from monopoly_ledger.player import PlayerState, PropertyState
from monopoly_ledger.random_events import Prize, shuffle_cards
from monopoly_ledger.spaces import PropertyData

logger = logging.getLogger(__name__)

MAX_PLAYERS = 8


class GamePhase(Enum):
    """Coarse-grained mode governing which actions are legal."""

    NORMAL = "NORMAL"
    IN_JAIL_DECISION = "IN_JAIL_DECISION"
    CARD_DRAW = "CARD_DRAW"
    TRADE = "TRADE"
    BANKRUPTCY_RESOLUTION = "BANKRUPTCY_RESOLUTION"


class ActionType(Enum):
    """Types of actions that can be applied to a game."""

    ROLL_DICE = "ROLL_DICE"
    PASS_GO = "PASS_GO"
    GO_TO_JAIL = "GO_TO_JAIL"
    PAY_JAIL_FINE = "PAY_JAIL_FINE"
    USE_JAIL_CARD = "USE_JAIL_CARD"
    BUY_PROPERTY = "BUY_PROPERTY"
    PAY_RENT = "PAY_RENT"
    COLLECT_RENT = "COLLECT_RENT"
    DRAW_CARD = "DRAW_CARD"
    APPLY_CARD_EFFECT = "APPLY_CARD_EFFECT"
    MORTGAGE_PROPERTY = "MORTGAGE_PROPERTY"
    UNMORTGAGE_PROPERTY = "UNMORTGAGE_PROPERTY"
    BUY_HOUSE = "BUY_HOUSE"
    SELL_HOUSE = "SELL_HOUSE"
    BUY_HOTEL = "BUY_HOTEL"
    SELL_HOTEL = "SELL_HOTEL"
    TRADE_START = "TRADE_START"
    TRADE_CANCEL = "TRADE_CANCEL"
    TRADE_EXECUTE = "TRADE_EXECUTE"
    ADJUST_BALANCE = "ADJUST_BALANCE"
    TRANSFER_CASH = "TRANSFER_CASH"
    DECLARE_BANKRUPTCY = "DECLARE_BANKRUPTCY"
    END_TURN = "END_TURN"
    MANUAL_POSITION = "MANUAL_POSITION"
    MANUAL_OWNERSHIP = "MANUAL_OWNERSHIP"
    UNDO = "UNDO"
    TRAIN_EVENT_TRIGGER = "TRAIN_EVENT_TRIGGER"
    TRAIN_EVENT_STOP = "TRAIN_EVENT_STOP"
    TRAIN_EVENT_BUY = "TRAIN_EVENT_BUY"
    TRAIN_EVENT_SKIP = "TRAIN_EVENT_SKIP"
    TRAIN_EVENT_PAY_RENT = "TRAIN_EVENT_PAY_RENT"
    CHANCE_EVENT_TRIGGER = "CHANCE_EVENT_TRIGGER"
    CHANCE_EVENT_APPLY = "CHANCE_EVENT_APPLY"
    FREE_PARKING_EVENT_TRIGGER = "FREE_PARKING_EVENT_TRIGGER"
    FREE_PARKING_EVENT_ACCEPT = "FREE_PARKING_EVENT_ACCEPT"
    FREE_PARKING_EVENT_DECLINE = "FREE_PARKING_EVENT_DECLINE"


class PendingEventKind(Enum):
    """Randomized sub-flows that wait for a follow-up action."""

    CARD = "CARD"
    TRAIN = "TRAIN"
    CHANCE = "CHANCE"
    FREE_PARKING = "FREE_PARKING"


@dataclass
class PendingEvent:
    """An unresolved randomized sub-flow. Only the fields of its kind are set."""

    kind: PendingEventKind
    player_id: str
    card_id: Optional[str] = None
    deck: Optional[DeckType] = None
    property_id: Optional[str] = None
    outcome_id: Optional[str] = None
    prize: Optional[Prize] = None


@dataclass
class GameStateSnapshot:
    """A pre-action copy of the game, kept for undo."""

    state: GameState
    timestamp: float


@dataclass
class GameState:
    """
    Represents the complete state of a Monopoly game.

    Instances are treated as values: the engine never mutates the state it is
    given, it returns a new one.
    """

    game_id: str
    settings: GameSettings
    players: List[PlayerState]
    property_states: Dict[str, PropertyState]
    property_data: Dict[str, PropertyData]
    current_turn_index: int = 0
    turn_number: int = 1
    phase: GamePhase = GamePhase.NORMAL
    chance_deck: List[str] = field(default_factory=list)
    chance_discard: List[str] = field(default_factory=list)
    chest_deck: List[str] = field(default_factory=list)
    chest_discard: List[str] = field(default_factory=list)
    free_parking_pot: int = 0
    log: List[Transaction] = field(default_factory=list)
    history: List[GameStateSnapshot] = field(default_factory=list)
    last_dice_roll: Optional[Tuple[int, int]] = None
    pending_event: Optional[PendingEvent] = None
    action_count: int = 0

    @property
    def board(self) -> Board:
        return get_board()

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        return self.players[self.current_turn_index % len(self.players)]

    def get_player(self, player_id: Optional[str]) -> Optional[PlayerState]:
        """Get a player by id, or None if there is no such player."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players."""
        return [p for p in self.players if not p.is_bankrupt]

    def get_property_state(self, property_id: str) -> Optional[PropertyState]:
        return self.property_states.get(property_id)

    def get_property_data(self, property_id: str) -> Optional[PropertyData]:
        return self.property_data.get(property_id)

    def deck_lists(self, deck: DeckType) -> Tuple[List[str], List[str]]:
        """The (draw pile, discard pile) pair of a deck."""
        if deck == DeckType.CHANCE:
            return self.chance_deck, self.chance_discard
        return self.chest_deck, self.chest_discard

    def copy(self) -> GameState:
        """Deep copy of the whole state, history included."""
        return copy.deepcopy(self)

    def snapshot(self) -> GameStateSnapshot:
        """Deep copy of this state with its own history left out."""
        history, self.history = self.history, []
        try:
            state = copy.deepcopy(self)
        finally:
            self.history = history
        return GameStateSnapshot(state=state, timestamp=time.time())


def create_game(
    player_names: List[str],
    settings: Optional[GameSettings] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Create a new game with the specified players and settings.

    Args:
        player_names: Display names, in turn order (1-8 players, 2+ recommended)
        settings: Rule settings, defaults to the standard rules
        rng: Randomness source for the initial deck shuffle; defaults to
            random.Random(settings.seed). Settings without a seed get a random
            one, so every game can be replayed from its saved state

    Returns:
        Initialized GameState
    """
    if len(player_names) < 1:
        raise ValueError("Game requires at least 1 player")
    if len(player_names) > MAX_PLAYERS:
        raise ValueError(f"Game supports at most {MAX_PLAYERS} players")

    settings = settings or GameSettings()
    if settings.seed is None:
        settings = replace(settings, seed=random.randrange(2**32))
    rng = rng or random.Random(settings.seed)
    board = get_board()

    players = [
        PlayerState(player_id=f"p{index}", name=name, balance=settings.starting_cash)
        for index, name in enumerate(player_names, start=1)
    ]

    state = GameState(
        game_id=uuid.uuid4().hex[:12],
        settings=settings,
        players=players,
        property_states={pid: PropertyState(property_id=pid) for pid in board.property_ids()},
        property_data={pid: board.properties[pid] for pid in board.property_ids()},
        chance_deck=shuffle_cards([c.card_id for c in CHANCE_CARDS], rng),
        chest_deck=shuffle_cards([c.card_id for c in COMMUNITY_CHEST_CARDS], rng),
    )

    logger.info(f"Created game {state.game_id} with players {', '.join(player_names)}")
    return state
