"""Deterministic blackjack round simulator for evaluating strategies."""

from blackjack_sim.cards import Card, Shoe, Rank, Suit
from blackjack_sim.hand import Hand, min_score, score, is_soft, is_blackjack, is_pair
from blackjack_sim.simulation import Simulation

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "min_score",
    "score",
    "is_soft",
    "is_blackjack",
    "is_pair",
    "Simulation",
]
