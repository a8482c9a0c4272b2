"""Simulation driver: plays a configured number of rounds for a strategy."""

import logging
from random import Random

from config import SimulationConfig

from blackjack_sim.cards import Shoe
from blackjack_sim.dealer import DealerPolicy
from blackjack_sim.errors import BustError, IllegalMoveError
from blackjack_sim.game.engine import BlackjackGame
from blackjack_sim.game.events import EventType, GameEvent
from blackjack_sim.game.state import Move, TurnState
from blackjack_sim.settlement import HandResult
from blackjack_sim.strategy.base import Strategy

logger = logging.getLogger(__name__)


def log_event(event: GameEvent) -> None:
    """Write a game event to the debug log."""
    logger.debug("%s", event)


class Simulation:
    """
    Runs rounds of blackjack back to back.

    Each simulation owns its shoe, round state and balance, so separate
    instances may run side by side.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: Random | None = None,
        dealer: DealerPolicy | None = None,
        shoe: Shoe | None = None,
    ) -> None:
        """
        Initialize a simulation.

        Args:
            config: Run options (read from the environment if not provided)
            rng: Random number generator for shuffling, seeded from config if None
            dealer: Dealer playing rule
            shoe: Card supply, a fresh empty shoe if not provided

        Raises:
            ValueError: If the shoe's deck count differs from the config, or
                both a shoe and an rng are given
        """
        self.config = config or SimulationConfig()
        if shoe is not None:
            if rng is not None:
                raise ValueError("pass either a shoe or an rng, not both")
            if shoe.num_decks != self.config.num_decks:
                raise ValueError(
                    f"shoe holds {shoe.num_decks} decks but the config asks for "
                    f"{self.config.num_decks}"
                )
        else:
            shoe = Shoe(num_decks=self.config.num_decks, rng=rng or Random(self.config.seed))
        self.shoe = shoe
        self.dealer = dealer or DealerPolicy()
        self.game = BlackjackGame(
            shoe=self.shoe,
            blackjack_payout=self.config.blackjack_payout,
            min_bet=self.config.min_bet,
        )
        self.game.subscribe(log_event)

    @property
    def balance(self) -> int:
        return self.game.balance

    def run(self, strategy: Strategy) -> int:
        """
        Play the configured number of rounds.

        Returns:
            Net winnings over the run
        """
        self.game.balance = 0
        for _ in range(self.config.num_hands):
            shuffled = self.reshuffle_if_needed()
            self.play_round(strategy, shuffled)

        logger.info(
            "Played %d hands with %s: balance %d",
            self.config.num_hands,
            type(strategy).__name__,
            self.balance,
        )
        return self.balance

    def reshuffle_if_needed(self) -> bool:
        """Reshuffle a shoe that has run low; return whether it happened."""
        if not self.shoe.needs_shuffle:
            return False
        self.shoe.shuffle()
        self.game.events.emit_new(EventType.SHOE_SHUFFLED, cards=len(self.shoe))
        logger.info("Shuffled a new %d-deck shoe", self.shoe.num_decks)
        return True

    def play_round(self, strategy: Strategy, shuffled: bool = False) -> list[HandResult]:
        """Bet, deal, play both turns and settle a single round."""
        game = self.game
        game.place_bet(strategy.bet, shuffled)
        game.deal()

        if not game.check_dealer_blackjack():
            while game.state is TurnState.PLAYER_TURN:
                move = strategy.play(game.current_hand.snapshot(), game.dealer_up_card)
                self._apply(move)

            while game.state is TurnState.DEALER_TURN:
                move = self.dealer.play(game.current_hand.snapshot(), game.dealer_up_card)
                self._apply(move)

        results = game.end_round(strategy)
        for result in results:
            logger.debug(
                "Hand %d %s: %+d",
                result.hand_index,
                result.outcome.name,
                result.winnings,
            )
        return results

    def _apply(self, move: Move) -> None:
        try:
            self.game.apply(move)
        except BustError:
            self.game.stand()
        except IllegalMoveError as exc:
            logger.warning("Illegal move %s: %s; standing instead", move, exc)
            self.game.events.emit_new(
                EventType.INVALID_ACTION,
                move=str(move),
                message=str(exc),
            )
            self.game.stand()
