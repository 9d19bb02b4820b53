"""
Transaction records for the game's audit log.
"""

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

BANK = "BANK"


class TransactionType(Enum):
    """Kinds of audit log entries."""

    ROLL_DICE = "ROLL_DICE"
    MOVE_PLAYER = "MOVE_PLAYER"
    PASS_GO = "PASS_GO"
    BUY_PROPERTY = "BUY_PROPERTY"
    PAY_RENT = "PAY_RENT"
    PAY_TAX = "PAY_TAX"
    DRAW_CARD = "DRAW_CARD"
    APPLY_CARD_EFFECT = "APPLY_CARD_EFFECT"
    GO_TO_JAIL = "GO_TO_JAIL"
    JAIL_PAY_FINE = "JAIL_PAY_FINE"
    JAIL_USE_CARD = "JAIL_USE_CARD"
    JAIL_ROLL_ATTEMPT = "JAIL_ROLL_ATTEMPT"
    TRADE_START = "TRADE_START"
    TRADE_CANCEL = "TRADE_CANCEL"
    TRADE_EXECUTE = "TRADE_EXECUTE"
    MORTGAGE_PROPERTY = "MORTGAGE_PROPERTY"
    UNMORTGAGE_PROPERTY = "UNMORTGAGE_PROPERTY"
    BUY_HOUSE = "BUY_HOUSE"
    SELL_HOUSE = "SELL_HOUSE"
    BUY_HOTEL = "BUY_HOTEL"
    SELL_HOTEL = "SELL_HOTEL"
    ADJUST_BALANCE = "ADJUST_BALANCE"
    TRANSFER_CASH = "TRANSFER_CASH"
    DECLARE_BANKRUPTCY = "DECLARE_BANKRUPTCY"
    END_TURN = "END_TURN"
    MANUAL_POSITION = "MANUAL_POSITION"
    MANUAL_OWNERSHIP = "MANUAL_OWNERSHIP"
    FREE_PARKING_POT = "FREE_PARKING_POT"
    TRAIN_EVENT = "TRAIN_EVENT"
    CHANCE_EVENT = "CHANCE_EVENT"
    FREE_PARKING_EVENT = "FREE_PARKING_EVENT"


@dataclass(frozen=True)
class Transaction:
    """A single audit log entry. Never mutated once created."""

    transaction_id: str
    timestamp: float
    transaction_type: TransactionType
    note: str
    amount: Optional[int] = None
    from_player_id: Optional[str] = None
    to_player_id: Optional[str] = None
    property_id: Optional[str] = None
    card_id: Optional[str] = None

    def __repr__(self) -> str:
        amount = f" {self.amount:+d}" if self.amount is not None else ""
        return f"[{self.transaction_type.value}{amount}] {self.note}"


def create_transaction(
    transaction_type: TransactionType,
    note: str,
    amount: Optional[int] = None,
    from_player_id: Optional[str] = None,
    to_player_id: Optional[str] = None,
    property_id: Optional[str] = None,
    card_id: Optional[str] = None,
) -> Transaction:
    """Create a log entry stamped with a fresh id and the current time."""
    return Transaction(
        transaction_id=uuid.uuid4().hex[:12],
        timestamp=time.time(),
        transaction_type=transaction_type,
        note=note,
        amount=amount,
        from_player_id=from_player_id,
        to_player_id=to_player_id,
        property_id=property_id,
        card_id=card_id,
    )


def append_transactions(log: List[Transaction], entries: List[Transaction], limit: int) -> List[Transaction]:
    """Append entries and keep only the most recent `limit` transactions."""
    log.extend(entries)
    if len(log) > limit:
        del log[: len(log) - limit]
    return log
