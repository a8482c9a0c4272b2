"""The house's fixed playing rule."""

from typing import Sequence

from blackjack_sim.cards import Card
from blackjack_sim.game.state import Move
from blackjack_sim.hand import score

DEALER_STANDS_ON = 17


class DealerPolicy:
    """Hit below 17, stand on every 17 including soft ones."""

    def play(self, hand: Sequence[Card], up_card: Card) -> Move:
        if score(hand) < DEALER_STANDS_ON:
            return Move.HIT
        return Move.STAND
