"""Strategy contract and reference strategies."""

from blackjack_sim.strategy.base import Strategy
from blackjack_sim.strategy.basic import BasicStrategy, BasicStrategyPlayer
from blackjack_sim.strategy.counting import CountingStrategy, CountingSystem, HiLoSystem

__all__ = [
    "Strategy",
    "BasicStrategy",
    "BasicStrategyPlayer",
    "CountingStrategy",
    "CountingSystem",
    "HiLoSystem",
]
