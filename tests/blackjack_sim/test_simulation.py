"""Tests for the simulation driver."""

import logging
from random import Random

import pytest

from config import SimulationConfig

from blackjack_sim.cards import Shoe, cards
from blackjack_sim.errors import InvalidBetError
from blackjack_sim.game import EventType, Move
from blackjack_sim.settlement import Outcome
from blackjack_sim.simulation import Simulation
from blackjack_sim.strategy import BasicStrategyPlayer, CountingStrategy


class ScriptedStrategy:
    """Plays a fixed list of moves, then stands."""

    def __init__(self, moves=(), bet=100):
        self.moves = list(moves)
        self.amount = bet
        self.shuffles = []
        self.results_seen = []

    def bet(self, shuffled):
        self.shuffles.append(shuffled)
        return self.amount

    def play(self, hand, dealer_up_card):
        return self.moves.pop(0) if self.moves else Move.STAND

    def results(self, hands, dealer_hand):
        self.results_seen.append((hands, dealer_hand))


class AlwaysHit(ScriptedStrategy):
    def play(self, hand, dealer_up_card):
        return Move.HIT


class NeverPlays(ScriptedStrategy):
    def play(self, hand, dealer_up_card):
        raise AssertionError("player should not act after a dealer natural")


def stacked_simulation(spec, **config):
    return Simulation(
        config=SimulationConfig(num_decks=1, seed=1, **config),
        shoe=Shoe.stacked(cards(spec)),
    )


class TestPlayRound:
    """Tests for playing a single round."""

    def test_dealer_draws_to_18(self):
        """Test 19 beats a dealer who draws from 13 to 18."""
        sim = stacked_simulation("10C 7S 9D 6H 5D")
        [result] = sim.play_round(ScriptedStrategy())
        assert result.outcome is Outcome.PLAYER_HIGHER
        assert sim.balance == 100
        assert sim.game.state.name == "HAND_OVER"

    def test_bust_forces_stand(self):
        sim = stacked_simulation("10C 7S 6D 10H KS")
        strategy = AlwaysHit()
        [result] = sim.play_round(strategy)
        assert result.outcome is Outcome.PLAYER_BUST
        assert sim.balance == -100
        [(hands, dealer_hand)] = strategy.results_seen
        assert hands == [cards("10C 6D KS")]
        assert dealer_hand == cards("7S 10H")

    def test_dealer_blackjack_skips_turns(self):
        sim = stacked_simulation("9C AS 9D KH")
        strategy = NeverPlays()
        [result] = sim.play_round(strategy)
        assert result.outcome is Outcome.DEALER_BLACKJACK
        assert sim.balance == -100
        assert len(strategy.results_seen) == 1

    def test_double(self):
        sim = stacked_simulation("5C 10S 6D 8H 9S")
        [result] = sim.play_round(ScriptedStrategy([Move.DOUBLE]))
        assert result.bet == 200
        assert result.winnings == 200

    def test_split_round_two_pushes(self):
        """Test two split hands that both push leave the balance alone."""
        sim = stacked_simulation("8C 10S 8D 8H 10D 10C")
        strategy = ScriptedStrategy([Move.SPLIT, Move.HIT, Move.STAND, Move.HIT, Move.STAND])
        results = sim.play_round(strategy)
        assert [r.outcome for r in results] == [Outcome.PUSH, Outcome.PUSH]
        assert sim.balance == 0
        [(hands, _)] = strategy.results_seen
        assert hands == [cards("8C 10D"), cards("8D 10C")]

    def test_illegal_move_stands(self, caplog):
        """Test a move whose preconditions fail is replaced by a stand."""
        sim = stacked_simulation("10C 7S 9D 6H 5D")
        invalid = []
        sim.game.subscribe(invalid.append, EventType.INVALID_ACTION)
        with caplog.at_level(logging.WARNING, logger="blackjack_sim.simulation"):
            [result] = sim.play_round(ScriptedStrategy([Move.SPLIT]))
        assert len(invalid) == 1
        assert "Illegal move split" in caplog.text
        assert result.outcome is Outcome.PLAYER_HIGHER

    def test_bet_below_minimum_aborts(self):
        sim = stacked_simulation("10C 7S 9D 6H")
        with pytest.raises(InvalidBetError):
            sim.play_round(ScriptedStrategy(bet=50))


class TestSetup:
    """Tests for building a simulation."""

    def test_shoe_deck_count_must_match_config(self):
        with pytest.raises(ValueError):
            Simulation(SimulationConfig(num_decks=6, seed=1), shoe=Shoe(num_decks=1))

    def test_shoe_and_rng_are_exclusive(self):
        with pytest.raises(ValueError):
            Simulation(
                SimulationConfig(num_decks=1, seed=1),
                rng=Random(3),
                shoe=Shoe(num_decks=1),
            )

    def test_reshuffle_threshold_follows_config(self):
        sim = Simulation(SimulationConfig(num_decks=6, seed=1))
        assert sim.shoe.min_cards == 104
        assert sim.reshuffle_if_needed()
        assert len(sim.shoe) == 312

    def test_matching_shoe_is_used(self):
        shoe = Shoe(num_decks=2)
        sim = Simulation(SimulationConfig(num_decks=2, seed=1), shoe=shoe)
        assert sim.shoe is shoe


class TestRun:
    """Tests for full simulation runs."""

    def test_runs_configured_hands(self):
        sim = Simulation(SimulationConfig(num_hands=25, seed=3))
        strategy = ScriptedStrategy()
        balance = sim.run(strategy)
        assert isinstance(balance, int)
        assert balance == sim.balance
        assert len(strategy.results_seen) == 25

    def test_same_seed_same_balance(self):
        config = SimulationConfig(num_hands=200, seed=11)
        first = Simulation(config).run(BasicStrategyPlayer())
        second = Simulation(config).run(BasicStrategyPlayer())
        assert first == second

    def test_run_resets_balance(self):
        sim = Simulation(SimulationConfig(num_hands=20, seed=5))
        first = sim.run(BasicStrategyPlayer())
        second = sim.run(BasicStrategyPlayer())
        assert sim.balance == second
        assert isinstance(first, int)

    def test_shuffle_flag_only_on_fresh_shoe(self):
        sim = Simulation(SimulationConfig(num_decks=1, num_hands=60, seed=9))
        shoe_sizes = []

        class Recorder(ScriptedStrategy):
            def bet(self, shuffled):
                shoe_sizes.append(len(sim.shoe))
                return super().bet(shuffled)

        strategy = Recorder()
        shuffles = []
        sim.game.subscribe(shuffles.append, EventType.SHOE_SHUFFLED)
        sim.run(strategy)

        assert strategy.shuffles[0] is True
        assert strategy.shuffles.count(True) == len(shuffles) > 1
        for shuffled, size in zip(strategy.shuffles, shoe_sizes):
            if shuffled:
                assert size == 52
            else:
                assert size >= sim.shoe.min_cards

    def test_counting_strategy_runs(self):
        sim = Simulation(SimulationConfig(num_decks=2, num_hands=100, seed=2))
        strategy = CountingStrategy(num_decks=2)
        balance = sim.run(strategy)
        assert balance == sim.balance

    def test_explicit_rng(self):
        config = SimulationConfig(num_hands=50)
        first = Simulation(config, rng=Random(4)).run(BasicStrategyPlayer())
        second = Simulation(config, rng=Random(4)).run(BasicStrategyPlayer())
        assert first == second

    def test_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="blackjack_sim.simulation"):
            Simulation(SimulationConfig(num_hands=5, seed=1)).run(BasicStrategyPlayer())
        assert "Played 5 hands with BasicStrategyPlayer" in caplog.text
        assert "Shuffled a new 3-deck shoe" in caplog.text
