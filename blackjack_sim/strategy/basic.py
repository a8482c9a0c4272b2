"""Basic strategy chart and a flat-betting player that follows it."""

from typing import Mapping, Sequence

from blackjack_sim.cards import Card
from blackjack_sim.game.state import Move
from blackjack_sim.hand import is_pair, is_soft, score

# Chart codes. Lower-case "d" doubles when allowed and stands otherwise.
_CODES = {
    "H": Move.HIT,
    "S": Move.STAND,
    "D": Move.DOUBLE,
    "d": Move.DOUBLE,
    "P": Move.SPLIT,
}

# Columns are the dealer up card: 2 3 4 5 6 7 8 9 10 A
_HARD_ROWS = {
    9: "HDDDDHHHHH",
    10: "DDDDDDDDHH",
    11: "DDDDDDDDDH",
    12: "HHSSSHHHHH",
    13: "SSSSSHHHHH",
    14: "SSSSSHHHHH",
    15: "SSSSSHHHHH",
    16: "SSSSSHHHHH",
}

_SOFT_ROWS = {
    12: "HHHHHHHHHH",
    13: "HHHDDHHHHH",
    14: "HHHDDHHHHH",
    15: "HHDDDHHHHH",
    16: "HHDDDHHHHH",
    17: "HDDDDHHHHH",
    18: "SddddSSHHH",
    19: "SSSSSSSSSS",
    20: "SSSSSSSSSS",
    21: "SSSSSSSSSS",
}

# Keyed by the value of one card of the pair, Ace = 11.
_PAIR_ROWS = {
    2: "PPPPPPHHHH",
    3: "PPPPPPHHHH",
    4: "HHHPPHHHHH",
    5: "DDDDDDDDHH",
    6: "PPPPPHHHHH",
    7: "PPPPPPHHHH",
    8: "PPPPPPPPPP",
    9: "PPPPPSPPSS",
    10: "SSSSSSSSSS",
    11: "PPPPPPPPPP",
}

ChartKey = tuple[int, int]


def _build_table(rows: Mapping[int, str]) -> dict[ChartKey, str]:
    table: dict[ChartKey, str] = {}
    for total, row in rows.items():
        for dealer, code in zip(range(2, 12), row):
            table[(total, dealer)] = code
    return table


def card_value(card: Card) -> int:
    """Chart value of a single card, Ace = 11."""
    return 11 if card.is_ace else card.rank.min_value


class BasicStrategy:
    """
    Multi-deck basic strategy: dealer stands on soft 17, double after
    split allowed, no surrender.
    """

    def __init__(self) -> None:
        self._hard_table = _build_table(_HARD_ROWS)
        self._soft_table = _build_table(_SOFT_ROWS)
        self._pair_table = _build_table(_PAIR_ROWS)

    def get_move(
        self,
        hand: Sequence[Card],
        dealer_up_card: Card,
        can_split: bool = True,
    ) -> Move:
        """
        Look up the chart move for a hand.

        Args:
            hand: The cards in the hand being played
            dealer_up_card: The dealer's face-up card
            can_split: Whether splitting is still permitted this round

        Returns:
            The move to make
        """
        dealer = card_value(dealer_up_card)
        can_double = len(hand) == 2
        total = score(hand)

        if can_split and is_pair(hand):
            code = self._pair_table[(card_value(hand[0]), dealer)]
        elif is_soft(hand):
            code = self._soft_table.get((total, dealer), "S" if total >= 19 else "H")
        elif total >= 17:
            code = "S"
        else:
            code = self._hard_table.get((total, dealer), "H")

        return self._resolve(code, can_double)

    @staticmethod
    def _resolve(code: str, can_double: bool) -> Move:
        """Turn a chart code into a move that is legal for the hand."""
        if code == "D" and not can_double:
            return Move.HIT
        if code == "d" and not can_double:
            return Move.STAND
        return _CODES[code]


class BasicStrategyPlayer:
    """Bets the same amount every round and plays the basic strategy chart."""

    def __init__(self, bet_amount: int = 100, chart: BasicStrategy | None = None) -> None:
        self.bet_amount = bet_amount
        self.chart = chart or BasicStrategy()
        self._has_split = False

    def bet(self, shuffled: bool) -> int:
        return self.bet_amount

    def play(self, hand: Sequence[Card], dealer_up_card: Card) -> Move:
        # Split hands may not be split again, so one split per round.
        move = self.chart.get_move(hand, dealer_up_card, can_split=not self._has_split)
        if move is Move.SPLIT:
            self._has_split = True
        return move

    def results(
        self,
        hands: Sequence[Sequence[Card]],
        dealer_hand: Sequence[Card],
    ) -> None:
        self._has_split = False
