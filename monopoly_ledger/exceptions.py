"""
Custom exception hierarchy for the Monopoly ledger engine.

Every precondition failure inside an action handler is raised as an
ActionError subclass carrying an ErrorKind. The reducer converts these into
failed ActionResults, so callers never see them propagate.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error identifiers surfaced in failed action results."""

    PROPERTY_NOT_FOUND = "PropertyNotFound"
    PROPERTY_ALREADY_OWNED = "PropertyAlreadyOwned"
    PROPERTY_NOT_OWNED = "PropertyNotOwned"
    NOT_OWNER = "NotOwner"
    ALREADY_MORTGAGED = "AlreadyMortgaged"
    NOT_MORTGAGED = "NotMortgaged"
    HAS_IMPROVEMENTS = "HasImprovements"
    NO_IMPROVEMENTS = "NoImprovements"
    MAX_IMPROVEMENT_REACHED = "MaxImprovementReached"
    BUILD_NOT_ALLOWED = "BuildNotAllowed"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    BANKRUPT_PLAYER_INVOLVED = "BankruptPlayerInvolved"
    NOT_IN_JAIL = "NotInJail"
    NO_JAIL_CARD = "NoJailCard"
    INVALID_PHASE_FOR_ACTION = "InvalidPhaseForAction"
    NO_HISTORY_TO_UNDO = "NoHistoryToUndo"
    NO_PENDING_EVENT = "NoPendingEvent"
    EVENT_ALREADY_PENDING = "EventAlreadyPending"
    ROLL_REQUIRED = "RollRequired"
    INVALID_ACTION = "InvalidAction"
    UNKNOWN_ACTION = "UnknownAction"
    ENGINE_ERROR = "EngineError"


class MonopolyError(Exception):
    """Base exception for all game-related errors."""


class ActionError(MonopolyError):
    """An action failed validation against the current game state."""

    kind: ErrorKind = ErrorKind.ENGINE_ERROR


class PropertyNotFoundError(ActionError):
    kind = ErrorKind.PROPERTY_NOT_FOUND


class PropertyAlreadyOwnedError(ActionError):
    kind = ErrorKind.PROPERTY_ALREADY_OWNED


class PropertyNotOwnedError(ActionError):
    kind = ErrorKind.PROPERTY_NOT_OWNED


class NotOwnerError(ActionError):
    kind = ErrorKind.NOT_OWNER


class AlreadyMortgagedError(ActionError):
    kind = ErrorKind.ALREADY_MORTGAGED


class NotMortgagedError(ActionError):
    kind = ErrorKind.NOT_MORTGAGED


class HasImprovementsError(ActionError):
    """Houses or a hotel block the requested operation."""

    kind = ErrorKind.HAS_IMPROVEMENTS


class NoImprovementsError(ActionError):
    kind = ErrorKind.NO_IMPROVEMENTS


class MaxImprovementReachedError(ActionError):
    kind = ErrorKind.MAX_IMPROVEMENT_REACHED


class BuildNotAllowedError(ActionError):
    """Monopoly, group type, mortgage or even-building rule not satisfied."""

    kind = ErrorKind.BUILD_NOT_ALLOWED


class InsufficientFundsError(ActionError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class PlayerNotFoundError(ActionError):
    kind = ErrorKind.PLAYER_NOT_FOUND


class BankruptPlayerError(ActionError):
    kind = ErrorKind.BANKRUPT_PLAYER_INVOLVED


class NotInJailError(ActionError):
    kind = ErrorKind.NOT_IN_JAIL


class NoJailCardError(ActionError):
    kind = ErrorKind.NO_JAIL_CARD


class InvalidPhaseError(ActionError):
    kind = ErrorKind.INVALID_PHASE_FOR_ACTION


class NoHistoryError(ActionError):
    kind = ErrorKind.NO_HISTORY_TO_UNDO


class NoPendingEventError(ActionError):
    kind = ErrorKind.NO_PENDING_EVENT


class EventAlreadyPendingError(ActionError):
    kind = ErrorKind.EVENT_ALREADY_PENDING


class RollRequiredError(ActionError):
    """Utility rent cannot be computed without a dice roll."""

    kind = ErrorKind.ROLL_REQUIRED


class InvalidActionError(ActionError):
    """Action parameters are missing, unexpected or malformed."""

    kind = ErrorKind.INVALID_ACTION


class UnknownActionError(ActionError):
    kind = ErrorKind.UNKNOWN_ACTION


class SnapshotError(MonopolyError):
    """A saved game could not be restored."""
