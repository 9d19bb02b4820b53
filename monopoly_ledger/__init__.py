"""
Monopoly Ledger

A deterministic action-application engine for Monopoly-style games: every
move is an Action applied to an immutable GameState, with an audit log and
undo history.
"""

from .board import Board, get_board
from .config import EngineSettings, GameSettings, configure_logging, get_engine_settings
from .exceptions import ErrorKind, MonopolyError
from .game import ActionType, GamePhase, GameState, create_game
from .phases import get_legal_actions, is_action_allowed
from .player import PlayerState, PropertyState
from .rent import has_monopoly, rent_due
from .rules import ActionResult, apply_action, replay
from .schemas import Action, parse_action
from .snapshot import deserialize_state, serialize_state

__all__ = [
    "Action",
    "ActionResult",
    "ActionType",
    "Board",
    "EngineSettings",
    "ErrorKind",
    "GamePhase",
    "GameSettings",
    "GameState",
    "MonopolyError",
    "PlayerState",
    "PropertyState",
    "apply_action",
    "configure_logging",
    "create_game",
    "deserialize_state",
    "get_board",
    "get_engine_settings",
    "get_legal_actions",
    "has_monopoly",
    "is_action_allowed",
    "parse_action",
    "rent_due",
    "replay",
    "serialize_state",
]
