"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from blackjack_sim.cards import Card


def min_score(cards: Sequence[Card]) -> int:
    """Sum of card values with every Ace counted as 1."""
    return sum(card.rank.min_value for card in cards)


def score(cards: Sequence[Card]) -> int:
    """
    Best score for a set of cards.

    A hand holding any Ace with a minimum score of 11 or less counts one
    Ace as 11. Only the total matters, so A-A-9 scores 21.
    """
    low = min_score(cards)
    if low <= 11 and any(card.is_ace for card in cards):
        return low + 10
    return low


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if an Ace is being counted as 11."""
    return score(cards) != min_score(cards)


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check for a natural: exactly two cards scoring 21."""
    return len(cards) == 2 and score(cards) == 21


def is_pair(cards: Sequence[Card]) -> bool:
    """Check if the cards are exactly two of the same rank."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


@dataclass
class Hand:
    """Cards held by one seat along with the stake riding on them."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False
    is_split: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def snapshot(self) -> list[Card]:
        """Return a copy of the cards that callers may keep or mutate."""
        return list(self.cards)

    @property
    def score(self) -> int:
        return score(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_blackjack(self) -> bool:
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        return self.score > 21

    @property
    def is_pair(self) -> bool:
        return is_pair(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_blackjack:
            return f"{cards_str} (BLACKJACK)"
        if self.is_busted:
            return f"{cards_str} (BUST)"
        if self.is_soft:
            return f"{cards_str} (soft {self.score})"
        return f"{cards_str} ({self.score})"
