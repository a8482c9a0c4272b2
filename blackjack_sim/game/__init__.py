"""Round engine and turn state management."""

from blackjack_sim.game.events import EventEmitter, EventType, GameEvent
from blackjack_sim.game.state import Move, TurnState
from blackjack_sim.game.engine import BlackjackGame, MIN_BET

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "Move",
    "TurnState",
    "BlackjackGame",
    "MIN_BET",
]
