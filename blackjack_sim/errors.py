"""Exceptions raised by the game engine.

Two tiers exist. ``InvalidStateError`` and ``InvalidBetError`` mean the
driver or a strategy broke the engine's contract; they abort a run.
``MoveError`` subclasses are ordinary game outcomes the caller reacts to.
"""


class GameError(Exception):
    """Base class for all engine errors."""


class InvalidStateError(GameError):
    """An operation was attempted in a turn state that does not allow it."""


class InvalidBetError(GameError):
    """A strategy returned a stake below the table minimum."""

    def __init__(self, amount: int, minimum: int) -> None:
        super().__init__(f"bet must be at least {minimum}, got {amount}")
        self.amount = amount
        self.minimum = minimum


class MoveError(GameError):
    """A move could not be applied as requested."""


class BustError(MoveError):
    """The hand's score went over 21."""

    def __init__(self, score: int) -> None:
        super().__init__(f"hand score exceeded 21: {score}")
        self.score = score


class IllegalMoveError(MoveError):
    """The current hand does not meet a move's preconditions."""
