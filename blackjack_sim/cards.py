"""Cards and the shoe they are drawn from."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    HEARTS = auto()

    def __str__(self) -> str:
        return {
            Suit.SPADES: "♠",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.HEARTS: "♥",
        }[self]


class Rank(Enum):
    """Card ranks. Ace is low; faces sit above ten."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def min_value(self) -> int:
        """Point value with the Ace counted as 1 and faces as 10."""
        return min(self.value, 10)


_RANK_CODES = {str(rank): rank for rank in Rank}
_RANK_CODES["T"] = Rank.TEN

_SUIT_CODES = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10♦' or 'kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")
        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def cards(spec: str) -> list[Card]:
    """Parse a whitespace separated list of card strings."""
    return [Card.from_string(token) for token in spec.split()]


class Shoe:
    """
    A multi-deck shoe drawn from the front.

    The shoe is due for a reshuffle once fewer than a third of its full
    size remains.
    """

    def __init__(self, num_decks: int = 3, rng: Random | None = None) -> None:
        """
        Initialize an empty shoe.

        Args:
            num_decks: Number of 52-card decks a full shoe holds
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []

    @classmethod
    def stacked(cls, cards: Iterable[Card], num_decks: int = 1) -> "Shoe":
        """Build a shoe that deals the given cards in order."""
        shoe = cls(num_decks=num_decks)
        shoe._cards = list(cards)
        return shoe

    def fill(self) -> None:
        """Refill with every card of every deck in order."""
        self._cards = [
            Card(rank, suit)
            for _ in range(self._num_decks)
            for suit in Suit
            for rank in Rank
        ]

    def shuffle(self) -> None:
        """Replace the contents with a freshly shuffled full shoe."""
        self.fill()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            raise IndexError("Cannot draw from empty shoe")
        return self._cards.pop(0)

    @property
    def min_cards(self) -> int:
        """Fewest cards the shoe may hold before a round is dealt."""
        return 52 * self._num_decks // 3

    @property
    def needs_shuffle(self) -> bool:
        return len(self._cards) < self.min_cards

    @property
    def num_decks(self) -> int:
        return self._num_decks

    @property
    def decks_remaining(self) -> float:
        """Return the number of decks left to deal."""
        return len(self._cards) / 52

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
