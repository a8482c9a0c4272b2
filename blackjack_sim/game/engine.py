"""Round state machine and the moves that drive it."""

from typing import TYPE_CHECKING, Callable

from transitions import Machine, MachineError

from blackjack_sim.cards import Card, Shoe
from blackjack_sim.errors import (
    BustError,
    IllegalMoveError,
    InvalidBetError,
    InvalidStateError,
)
from blackjack_sim.game.events import EventEmitter, EventType, GameEvent
from blackjack_sim.game.state import Move, TurnState
from blackjack_sim.hand import Hand
from blackjack_sim.settlement import HandResult, net_winnings, settle

if TYPE_CHECKING:
    from blackjack_sim.strategy.base import Strategy

MIN_BET = 100


class BlackjackGame:
    """
    One seat against the dealer, played a round at a time.

    The engine owns the round state (player hands, active hand index,
    dealer hand, pending bet) and the running balance. It never decides
    a move itself; the driver feeds it moves from a strategy or the
    dealer policy.
    """

    STATES = [s.name.lower() for s in TurnState]

    TRANSITIONS = [
        {"trigger": "start_round", "source": "hand_over", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "hand_over"},
        {"trigger": "dealer_natural", "source": "player_turn", "dest": "hand_over"},
    ]

    def __init__(
        self,
        shoe: Shoe,
        blackjack_payout: float = 0.0,
        min_bet: int = MIN_BET,
    ) -> None:
        """
        Initialize a game with no round in progress.

        Args:
            shoe: Card supply shared by every round
            blackjack_payout: Bet multiplier paid on a player natural
            min_bet: Smallest stake a strategy may place
        """
        self.shoe = shoe
        self.blackjack_payout = blackjack_payout
        self.min_bet = min_bet

        self.player: list[Hand] = []
        self.hand_index = 0
        self.dealer = Hand()
        self.pending_bet = 0
        self.balance = 0
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="hand_over",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> TurnState:
        """Get current turn state as enum."""
        return TurnState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _advance(self, trigger: str) -> None:
        """Fire a state machine trigger, failing fast on an illegal transition."""
        try:
            self.trigger(trigger)  # type: ignore[attr-defined]
        except MachineError as exc:
            raise InvalidStateError(exc.value) from exc

    def _draw_into(self, hand: Hand) -> Card:
        """Deal a card from the shoe to a hand."""
        card = self.shoe.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer" if hand is self.dealer else "player",
            score=hand.score,
        )
        return card

    @property
    def current_hand(self) -> Hand:
        """
        The hand whose turn it is.

        Raises:
            InvalidStateError: If no hand is in play
        """
        if self.state is TurnState.PLAYER_TURN:
            return self.player[self.hand_index]
        if self.state is TurnState.DEALER_TURN:
            return self.dealer
        raise InvalidStateError("it is not currently any player's turn")

    @property
    def dealer_up_card(self) -> Card:
        """The dealer's face-up card."""
        return self.dealer.cards[0]

    def place_bet(self, bet_fn: Callable[[bool], int], shuffled: bool) -> int:
        """
        Ask a strategy for the next round's stake.

        Args:
            bet_fn: Strategy callback receiving whether the shoe was just shuffled
            shuffled: Whether the shoe was reshuffled before this round

        Returns:
            The accepted bet

        Raises:
            InvalidStateError: If a round is still in progress
            InvalidBetError: If the bet is below the table minimum
        """
        if self.state is not TurnState.HAND_OVER:
            raise InvalidStateError(f"cannot bet during {self.state}")

        amount = bet_fn(shuffled)
        if amount < self.min_bet:
            raise InvalidBetError(amount, self.min_bet)

        self.pending_bet = amount
        self.events.emit_new(EventType.BET_PLACED, amount=amount, shuffled=shuffled)
        return amount

    def deal(self) -> None:
        """Deal two cards each, player first, and hand the turn to the player."""
        self._advance("start_round")

        player_hand = Hand(bet=self.pending_bet)
        self.player = [player_hand]
        self.hand_index = 0
        self.dealer = Hand()
        for _ in range(2):
            self._draw_into(player_hand)
            self._draw_into(self.dealer)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player=str(player_hand),
            dealer_up_card=str(self.dealer_up_card),
        )

    def check_dealer_blackjack(self) -> bool:
        """End the round at once if the dealer was dealt a natural."""
        if self.state is not TurnState.PLAYER_TURN or not self.dealer.is_blackjack:
            return False
        self.events.emit_new(EventType.DEALER_BLACKJACK, dealer=str(self.dealer))
        self._advance("dealer_natural")
        return True

    def hit(self) -> None:
        """
        Draw one card into the current hand.

        Raises:
            BustError: If the hand now scores over 21; the caller should stand
        """
        hand = self.current_hand
        is_dealer = hand is self.dealer
        self._draw_into(hand)
        self.events.emit_new(
            EventType.DEALER_HITS if is_dealer else EventType.PLAYER_HIT,
            score=hand.score,
        )
        if hand.is_busted:
            self.events.emit_new(
                EventType.DEALER_BUSTS if is_dealer else EventType.PLAYER_BUSTS,
                score=hand.score,
            )
            raise BustError(hand.score)

    def stand(self) -> None:
        """
        End the current hand's turn.

        During the player's turn this moves to the next hand, then to the
        dealer once every hand has acted. During the dealer's turn it ends
        the round.
        """
        if self.state is TurnState.PLAYER_TURN:
            self.events.emit_new(
                EventType.PLAYER_STAND,
                hand_index=self.hand_index,
                score=self.current_hand.score,
            )
            self.hand_index += 1
            if self.hand_index == len(self.player):
                self._advance("player_done")
        elif self.state is TurnState.DEALER_TURN:
            self.events.emit_new(EventType.DEALER_STANDS, score=self.dealer.score)
            self._advance("dealer_done")
        else:
            raise IllegalMoveError("cannot stand, no hand is in play")

    def double(self) -> None:
        """
        Double the bet, take exactly one card and stand.

        The stand happens even when the extra card busts the hand.
        """
        hand = self._player_hand_for("double")
        if len(hand) != 2:
            raise IllegalMoveError("can only double on a hand with two cards")

        hand.bet *= 2
        hand.is_doubled = True
        self._draw_into(hand)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=self.hand_index,
            score=hand.score,
            bet=hand.bet,
        )
        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, score=hand.score)
        self.stand()

    def split(self) -> None:
        """Move the second card of a pair into a new hand played after the others."""
        hand = self._player_hand_for("split")
        if len(hand) != 2:
            raise IllegalMoveError("you can only split with two cards in hand")
        if not hand.is_pair:
            raise IllegalMoveError("both cards must have the same rank to split")
        if hand.is_split:
            raise IllegalMoveError("split hands cannot be split again")

        new_hand = Hand(cards=[hand.cards.pop()], bet=hand.bet, is_split=True)
        hand.is_split = True
        self.player.append(new_hand)
        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand_index=self.hand_index,
            num_hands=len(self.player),
        )

    def _player_hand_for(self, action: str) -> Hand:
        """Return the active player hand, or fail if it is not the player's turn."""
        if self.state is not TurnState.PLAYER_TURN:
            raise InvalidStateError(f"cannot {action} during {self.state}")
        return self.current_hand

    def apply(self, move: Move) -> None:
        """Apply a move chosen by a strategy or the dealer policy."""
        actions = {
            Move.HIT: self.hit,
            Move.STAND: self.stand,
            Move.DOUBLE: self.double,
            Move.SPLIT: self.split,
        }
        if move not in actions:
            raise ValueError(f"unknown move: {move!r}")
        actions[move]()

    def end_round(self, strategy: "Strategy | None" = None) -> list[HandResult]:
        """
        Settle the finished round and clear the table.

        Each hand's winnings are added to the balance. The strategy, if
        given, sees every final hand and the dealer's hand afterwards.

        Raises:
            InvalidStateError: If the round has not reached HAND_OVER
        """
        if self.state is not TurnState.HAND_OVER or not self.player:
            raise InvalidStateError("there is no finished round to settle")

        results = settle(self.player, self.dealer.cards, self.blackjack_payout)
        for result in results:
            self.events.emit_new(
                EventType.HAND_SETTLED,
                hand_index=result.hand_index,
                outcome=result.outcome.name,
                winnings=result.winnings,
            )
        self.balance += net_winnings(results)
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=net_winnings(results),
            balance=self.balance,
        )

        if strategy is not None:
            strategy.results(
                [hand.snapshot() for hand in self.player],
                self.dealer.snapshot(),
            )

        self.player = []
        self.hand_index = 0
        self.dealer = Hand()
        return results
