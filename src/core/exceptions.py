"""
Exceptions raised at the boundaries of the engine.

The rule engine itself answers with empty sets / False instead of raising.
These are for the callers that build snapshots, replay plies or read settings.

NOTE: these must not subclass ValueError, otherwise pydantic wraps them into a ValidationError.
"""


class GameError(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidSnapshotError(GameError):
    """A board snapshot breaks one of the invariants the engine relies on."""


class IllegalMoveError(GameError):
    """The requested move is not among the legal moves of the piece."""


class NotYourTurnError(GameError):
    """A piece of the color that is not on turn was asked to move."""


class InvalidRequestError(GameError):
    """Malformed data received by one of the transport models."""


class ConfigurationError(GameError):
    """Engine settings that contradict each other."""
