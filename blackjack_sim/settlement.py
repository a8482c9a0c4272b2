"""End of round payouts."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from blackjack_sim.cards import Card
from blackjack_sim.hand import Hand, is_blackjack, score


class Outcome(Enum):
    """Why a hand was paid the way it was, in order of precedence."""

    BOTH_BLACKJACK = auto()
    DEALER_BLACKJACK = auto()
    PLAYER_BLACKJACK = auto()
    PLAYER_BUST = auto()
    DEALER_BUST = auto()
    PLAYER_HIGHER = auto()
    DEALER_HIGHER = auto()
    PUSH = auto()


@dataclass(frozen=True)
class HandResult:
    """Settlement of a single player hand."""

    hand_index: int
    bet: int
    winnings: int
    outcome: Outcome


def settle_hand(
    cards: Sequence[Card],
    bet: int,
    dealer_cards: Sequence[Card],
    blackjack_payout: float = 0.0,
    hand_index: int = 0,
) -> HandResult:
    """
    Settle one player hand against the dealer.

    Rules are checked in order and the first match wins, so a busted
    player loses even when the dealer busts too.

    Args:
        cards: The player's final cards
        bet: Stake riding on the hand
        dealer_cards: The dealer's final cards
        blackjack_payout: Multiplier applied to the bet for a player natural
        hand_index: Position of the hand among the player's hands

    Returns:
        The hand's signed winnings and the rule that decided them
    """
    player_score, dealer_score = score(cards), score(dealer_cards)
    player_bj, dealer_bj = is_blackjack(cards), is_blackjack(dealer_cards)

    if player_bj and dealer_bj:
        outcome, winnings = Outcome.BOTH_BLACKJACK, 0
    elif dealer_bj:
        outcome, winnings = Outcome.DEALER_BLACKJACK, -bet
    elif player_bj:
        outcome, winnings = Outcome.PLAYER_BLACKJACK, int(bet * blackjack_payout)
    elif player_score > 21:
        outcome, winnings = Outcome.PLAYER_BUST, -bet
    elif dealer_score > 21:
        outcome, winnings = Outcome.DEALER_BUST, bet
    elif player_score > dealer_score:
        outcome, winnings = Outcome.PLAYER_HIGHER, bet
    elif dealer_score > player_score:
        outcome, winnings = Outcome.DEALER_HIGHER, -bet
    else:
        outcome, winnings = Outcome.PUSH, 0

    return HandResult(hand_index=hand_index, bet=bet, winnings=winnings, outcome=outcome)


def settle(
    hands: Sequence[Hand],
    dealer_cards: Sequence[Card],
    blackjack_payout: float = 0.0,
) -> list[HandResult]:
    """Settle every player hand independently."""
    return [
        settle_hand(hand.cards, hand.bet, dealer_cards, blackjack_payout, hand_index=i)
        for i, hand in enumerate(hands)
    ]


def net_winnings(results: Sequence[HandResult]) -> int:
    """Total signed winnings across a round's hands."""
    return sum(result.winnings for result in results)
