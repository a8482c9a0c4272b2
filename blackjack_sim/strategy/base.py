"""The capabilities a betting and playing strategy must provide."""

from typing import Protocol, Sequence

from blackjack_sim.cards import Card
from blackjack_sim.game.state import Move


class Strategy(Protocol):
    """
    A player the simulation can seat.

    Strategies only ever receive copies of the cards in play, so they
    cannot disturb a round in progress.
    """

    def bet(self, shuffled: bool) -> int:
        """Stake for the next round; ``shuffled`` is True on a fresh shoe."""
        ...

    def play(self, hand: Sequence[Card], dealer_up_card: Card) -> Move:
        """Choose a move for the hand whose turn it is."""
        ...

    def results(
        self,
        hands: Sequence[Sequence[Card]],
        dealer_hand: Sequence[Card],
    ) -> None:
        """Observe every final hand once the round is settled."""
        ...
