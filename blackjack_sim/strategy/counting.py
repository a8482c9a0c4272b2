"""Card counting and a strategy that bets on the count."""

import math
from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from blackjack_sim.cards import Card, Rank
from blackjack_sim.strategy.basic import BasicStrategy, BasicStrategyPlayer


class CountingSystem(ABC):
    """Keeps a running count of cards seen using per-rank tag values."""

    def __init__(self) -> None:
        self._running_count = 0.0
        self._cards_seen = 0

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, float]:
        """Count adjustment for each rank."""
        ...

    def count_card(self, card: Card) -> float:
        """Add a card to the running count and return its tag value."""
        tag = self.tag_values[card.rank]
        self._running_count += tag
        self._cards_seen += 1
        return tag

    def count_cards(self, cards: Sequence[Card]) -> float:
        return sum(self.count_card(card) for card in cards)

    @property
    def running_count(self) -> float:
        return self._running_count

    @property
    def cards_seen(self) -> int:
        return self._cards_seen

    def true_count(self, decks_remaining: float) -> float:
        """Running count per deck left; zero once the shoe is exhausted."""
        if decks_remaining <= 0:
            return 0.0
        return self._running_count / decks_remaining

    def reset(self) -> None:
        self._running_count = 0.0
        self._cards_seen = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"


class HiLoSystem(CountingSystem):
    """
    Hi-Lo counting system.

    Tag values:
        2-6: +1
        7-9: 0
        10-A: -1
    """

    _TAG_VALUES: Mapping[Rank, float] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 0,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
        Rank.ACE: -1,
    }

    @property
    def name(self) -> str:
        return "Hi-Lo"

    @property
    def tag_values(self) -> Mapping[Rank, float]:
        return self._TAG_VALUES


class CountingStrategy(BasicStrategyPlayer):
    """
    Plays basic strategy and raises its bet as the true count climbs.

    The strategy cannot see the shoe, so decks remaining are estimated
    from the cards it has observed since the last shuffle.
    """

    def __init__(
        self,
        num_decks: int = 3,
        min_bet: int = 100,
        max_units: int = 8,
        system: CountingSystem | None = None,
        chart: BasicStrategy | None = None,
    ) -> None:
        """
        Initialize the counter.

        Args:
            num_decks: Decks in a full shoe
            min_bet: Bet for one unit, also the floor
            max_units: Largest bet as a multiple of min_bet
            system: Counting system to use, Hi-Lo by default
            chart: Playing chart, basic strategy by default
        """
        super().__init__(bet_amount=min_bet, chart=chart)
        self.num_decks = num_decks
        self.max_units = max_units
        self.system = system or HiLoSystem()

    @property
    def decks_remaining(self) -> float:
        return (self.num_decks * 52 - self.system.cards_seen) / 52

    @property
    def true_count(self) -> float:
        return self.system.true_count(self.decks_remaining)

    def bet(self, shuffled: bool) -> int:
        if shuffled:
            self.system.reset()
        units = math.floor(self.true_count) - 1
        return self.bet_amount * min(max(units, 1), self.max_units)

    def results(
        self,
        hands: Sequence[Sequence[Card]],
        dealer_hand: Sequence[Card],
    ) -> None:
        for hand in hands:
            self.system.count_cards(hand)
        self.system.count_cards(dealer_hand)
        super().results(hands, dealer_hand)
