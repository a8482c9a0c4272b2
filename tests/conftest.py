"""Pytest fixtures for blackjack simulator tests."""

from random import Random

import pytest

from blackjack_sim.cards import Card, Rank, Shoe, Suit, cards
from blackjack_sim.game import BlackjackGame
from blackjack_sim.hand import Hand
from blackjack_sim.strategy import BasicStrategy, HiLoSystem


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 3-deck shoe."""
    s = Shoe(num_decks=3, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def stacked_game():
    """Factory for a game whose shoe deals the given cards in order."""

    def _make(spec: str, blackjack_payout: float = 0.0) -> BlackjackGame:
        return BlackjackGame(
            shoe=Shoe.stacked(cards(spec)),
            blackjack_payout=blackjack_payout,
        )

    return _make


@pytest.fixture
def start_round():
    """Place a bet and deal on a game."""

    def _start(game: BlackjackGame, bet: int = 100) -> BlackjackGame:
        game.place_bet(lambda shuffled: bet, False)
        game.deal()
        return game

    return _start


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.DIAMONDS)], bet=100)


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=[Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)], bet=100)


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=[Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)], bet=100)


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand(cards=[Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS)], bet=100)


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def basic_strategy():
    """Basic strategy chart."""
    return BasicStrategy()
