"""Tests for round settlement."""

import pytest

from blackjack_sim.cards import cards
from blackjack_sim.hand import Hand
from blackjack_sim.settlement import Outcome, net_winnings, settle, settle_hand


class TestSettleHand:
    """Tests for settling a single hand."""

    @pytest.mark.parametrize(
        "player, dealer, winnings, outcome",
        [
            ("AS KD", "AC QH", 0, Outcome.BOTH_BLACKJACK),
            ("10S 9D", "AC QH", -100, Outcome.DEALER_BLACKJACK),
            ("7S 7D 7C", "AC QH", -100, Outcome.DEALER_BLACKJACK),
            ("10S 6D KC", "10C 6H QH", -100, Outcome.PLAYER_BUST),
            ("10S 6D", "10C 6H QH", 100, Outcome.DEALER_BUST),
            ("10C 9D", "7S 6H 5D", 100, Outcome.PLAYER_HIGHER),
            ("10C 7D", "10S 8H", -100, Outcome.DEALER_HIGHER),
            ("10C 8D", "9S 9H", 0, Outcome.PUSH),
            ("7S 7D 7C", "10S AH 10C", 0, Outcome.PUSH),
        ],
    )
    def test_precedence(self, player, dealer, winnings, outcome):
        result = settle_hand(cards(player), 100, cards(dealer), blackjack_payout=1.5)
        assert result.winnings == winnings
        assert result.outcome is outcome

    def test_player_blackjack_pays_multiplier(self):
        """Test A-K against 9-9 pays the configured bonus."""
        result = settle_hand(cards("AS KD"), 100, cards("9C 9D"), blackjack_payout=1.5)
        assert result.outcome is Outcome.PLAYER_BLACKJACK
        assert result.winnings == 150

    def test_blackjack_payout_disabled_by_default(self):
        """Test a zero multiplier pays nothing for a natural."""
        result = settle_hand(cards("AS KD"), 100, cards("9C 9D"))
        assert result.outcome is Outcome.PLAYER_BLACKJACK
        assert result.winnings == 0

    def test_blackjack_payout_truncates(self):
        result = settle_hand(cards("AS KD"), 101, cards("9C 9D"), blackjack_payout=1.5)
        assert result.winnings == 151

    def test_three_card_21_is_not_a_natural(self):
        result = settle_hand(cards("7S 7D 7C"), 100, cards("10C 8H"), blackjack_payout=1.5)
        assert result.outcome is Outcome.PLAYER_HIGHER
        assert result.winnings == 100


class TestSettle:
    """Tests for settling every hand of a round."""

    def test_split_hands_settle_independently(self):
        """Test one split hand can win while the other loses."""
        hands = [
            Hand(cards=cards("8S 10D 2C"), bet=100, is_split=True),
            Hand(cards=cards("8H 9C"), bet=200, is_split=True),
        ]
        results = settle(hands, cards("10S 8C"))
        assert [r.winnings for r in results] == [100, -200]
        assert [r.hand_index for r in results] == [0, 1]
        assert net_winnings(results) == -100

    def test_two_pushes_net_zero(self):
        hands = [
            Hand(cards=cards("8S 10D"), bet=100),
            Hand(cards=cards("8H KC"), bet=100),
        ]
        results = settle(hands, cards("10S 8C"))
        assert all(r.outcome is Outcome.PUSH for r in results)
        assert net_winnings(results) == 0
