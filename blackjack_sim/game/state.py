"""Turn state enumeration."""

from enum import Enum, auto


class TurnState(Enum):
    """
    Whose turn it is within a round.

    Flow: PLAYER_TURN → DEALER_TURN → HAND_OVER. A new round re-enters
    PLAYER_TURN only through a deal.
    """

    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    HAND_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Move(Enum):
    """Actions a strategy may choose on its turn."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()

    def __str__(self) -> str:
        return self.name.lower()
