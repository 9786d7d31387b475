"""Tests for the player history, frequency tracking and strategies."""

from collections import Counter

import numpy as np
import pytest

from rochambeau.game import Move, Outcome, Player, Round, Strategy


def make_round(i: int, outcome: Outcome = Outcome.WIN) -> Round:
    """Distinct-looking round for index i."""
    return Round(my_move=Move(i % 3), their_move=Move((i + 1) % 3), outcome=outcome)


class TestHistory:
    """Tests for the ring buffer of recent rounds."""

    def test_new_player_is_empty(self, rng: np.random.Generator) -> None:
        """Test that a new player has no history and zero frequencies."""
        player = Player(rng)
        assert player.count == 0
        assert player.cursor == 0
        assert player.rounds_in_order() == ()
        assert player.my_frequency == [0, 0, 0]
        assert player.their_frequency == [0, 0, 0]
        assert player.nth_last(0) is None

    def test_add_first_round(self, rng: np.random.Generator) -> None:
        """Test that the first round lands at the start of the buffer."""
        player = Player(rng)
        round_ = Round(Move.ROCK, Move.SCISSORS, Outcome.WIN)
        player.add_round(round_)

        assert player.count == 1
        assert player.cursor == 1
        assert player.nth_last(0) == round_

    def test_full_buffer_wraps_cursor(self, rng: np.random.Generator) -> None:
        """Test that filling the buffer wraps the cursor back to zero."""
        player = Player(rng, history_size=10)
        for i in range(10):
            player.add_round(make_round(i))

        assert player.count == 10
        assert player.cursor == 0

    @pytest.mark.parametrize("added", [0, 1, 2, 3, 4, 7, 20])
    def test_count_is_capped(self, rng: np.random.Generator, added: int) -> None:
        """Test count == min(N, K) and the snapshot length matches."""
        player = Player(rng, history_size=3)
        for i in range(added):
            player.add_round(make_round(i))

        assert player.count == min(added, 3)
        assert len(player.rounds_in_order()) == player.count

    def test_partial_buffer_order(self, rng: np.random.Generator) -> None:
        """Test ordering before the buffer fills."""
        player = Player(rng)
        first = Round(Move.ROCK, Move.SCISSORS, Outcome.WIN)
        second = Round(Move.PAPER, Move.ROCK, Outcome.WIN)
        player.add_round(first)
        player.add_round(second)

        assert player.rounds_in_order() == (first, second)

    def test_eviction_order(self, rng: np.random.Generator) -> None:
        """Test that R1..R5 with K=3 keeps exactly R3, R4, R5."""
        player = Player(rng, history_size=3)
        rounds = [make_round(i, Outcome.TIE if i % 2 else Outcome.LOSS) for i in range(5)]
        rounds[2] = Round(Move.SCISSORS, Move.SCISSORS, Outcome.TIE)
        for r in rounds:
            player.add_round(r)

        assert player.rounds_in_order() == tuple(rounds[2:])
        assert player.nth_last(0) == rounds[4]
        assert player.nth_last(1) == rounds[3]
        assert player.nth_last(2) == rounds[2]
        assert player.nth_last(3) is None

    def test_overflow_keeps_most_recent(self, rng: np.random.Generator) -> None:
        """Test that the oldest rounds are replaced once the buffer is full."""
        player = Player(rng, history_size=10)
        rounds = [make_round(i, Outcome.LOSS if i >= 10 else Outcome.WIN) for i in range(12)]
        for r in rounds:
            player.add_round(r)

        assert player.cursor == 2
        assert player.rounds_in_order() == tuple(rounds[2:])

    def test_nth_last_full_buffer(self, rng: np.random.Generator) -> None:
        """Test nth_last over a full buffer."""
        player = Player(rng, history_size=10)
        rounds = [make_round(i) for i in range(10)]
        for r in rounds:
            player.add_round(r)

        for n in range(10):
            assert player.nth_last(n) == rounds[9 - n]
        assert player.nth_last(10) is None

    def test_nth_last_rejects_negative(self, rng: np.random.Generator) -> None:
        """Test that a negative offset is an error."""
        player = Player(rng)
        with pytest.raises(IndexError):
            player.nth_last(-1)

    def test_rounds_in_order_is_a_snapshot(self, rng: np.random.Generator) -> None:
        """Test that the snapshot does not change when more rounds are added."""
        player = Player(rng, history_size=3)
        player.add_round(make_round(0))
        snapshot = player.rounds_in_order()
        player.add_round(make_round(1))

        assert len(snapshot) == 1
        assert player.rounds_in_order() == player.rounds_in_order()

    def test_invalid_history_size(self, rng: np.random.Generator) -> None:
        """Test that the buffer must hold at least one round."""
        with pytest.raises(ValueError, match="history_size"):
            Player(rng, history_size=0)


class TestFrequencies:
    """Tests for cumulative move frequencies."""

    def test_frequencies_survive_eviction(self, rng: np.random.Generator) -> None:
        """Test that 8 rounds with K=3 are all still counted."""
        player = Player(rng, history_size=3)
        for _ in range(5):
            player.add_round(Round(Move.PAPER, Move.ROCK, Outcome.WIN))
        for _ in range(3):
            player.add_round(Round(Move.SCISSORS, Move.PAPER, Outcome.WIN))

        assert player.count == 3
        assert player.their_frequency == [5, 3, 0]
        assert player.my_frequency == [0, 5, 3]
        assert player.total_rounds == 8

    def test_frequencies_never_decrease(self, rng: np.random.Generator) -> None:
        """Test monotonic counters over many additions."""
        player = Player(rng, history_size=3)
        previous = [0, 0, 0]
        for i in range(30):
            player.add_round(make_round(i))
            assert all(now >= before for now, before in zip(player.their_frequency, previous))
            previous = list(player.their_frequency)
        assert sum(player.their_frequency) == 30


class TestStrategies:
    """Tests for move selection."""

    def test_random_uses_integer_draw(self, scripted) -> None:
        """Test that the random strategy maps integer draws onto moves."""
        player = Player(scripted(integers=[0, 1, 2]))
        moves = [player.play(Strategy.RANDOM) for _ in range(3)]
        assert moves == [Move.ROCK, Move.PAPER, Move.SCISSORS]

    def test_random_is_roughly_uniform(self, rng: np.random.Generator) -> None:
        """Test the empirical distribution of the random strategy."""
        player = Player(rng)
        counts = Counter(player.play(Strategy.RANDOM) for _ in range(3000))
        for move in Move:
            assert 0.28 < counts[move] / 3000 < 0.39

    def test_last_move_counters_opponent(self, rng: np.random.Generator) -> None:
        """Test that last-move counters the opponent's previous move."""
        player = Player(rng)
        player.add_round(Round(Move.ROCK, Move.SCISSORS, Outcome.WIN))
        assert player.play(Strategy.LAST_MOVE) is Move.ROCK

        player.add_round(Round(Move.PAPER, Move.PAPER, Outcome.TIE))
        assert player.play(Strategy.LAST_MOVE) is Move.SCISSORS

    def test_last_move_without_history_is_random(self, scripted) -> None:
        """Test the random fallback before any round was played."""
        player = Player(scripted(integers=[2]))
        assert player.play(Strategy.LAST_MOVE) is Move.SCISSORS

    def test_always_rock(self, rng: np.random.Generator) -> None:
        """Test that always-rock ignores history, even after losses."""
        player = Player(rng)
        assert player.play(Strategy.ALWAYS_ROCK) is Move.ROCK

        player.add_round(Round(Move.PAPER, Move.SCISSORS, Outcome.LOSS))
        player.add_round(Round(Move.SCISSORS, Move.ROCK, Outcome.LOSS))
        player.add_round(Round(Move.ROCK, Move.PAPER, Outcome.LOSS))

        for _ in range(10):
            assert player.play(Strategy.ALWAYS_ROCK) is Move.ROCK

    def test_play_does_not_record(self, rng: np.random.Generator) -> None:
        """Test that choosing a move leaves the history untouched."""
        player = Player(rng)
        for strategy in Strategy:
            player.play(strategy)
        assert player.count == 0
        assert player.total_rounds == 0

    def test_freq_one_move_without_history_is_random(self, scripted) -> None:
        """Test the random fallback with no opponent moves seen."""
        player = Player(scripted(integers=[1]))
        assert player.play(Strategy.FREQ_ONE_MOVE) is Move.PAPER

    def test_freq_one_move_single_opponent_move(self, rng: np.random.Generator) -> None:
        """Test that a pure-rock opponent is always countered with paper."""
        player = Player(rng)
        for _ in range(3):
            player.add_round(Round(Move.PAPER, Move.ROCK, Outcome.WIN))

        for _ in range(20):
            assert player.play(Strategy.FREQ_ONE_MOVE) is Move.PAPER

    def test_freq_one_move_interval_partition(self, scripted) -> None:
        """Test that the draw is split into Rock, Paper, Scissors intervals in order."""
        # Opponent proportions: rock 1/2, paper 1/4, scissors 1/4
        player = Player(scripted(floats=[0.0, 0.49, 0.5, 0.74, 0.75, 0.99]))
        for their in (Move.ROCK, Move.ROCK, Move.PAPER, Move.SCISSORS):
            player.add_round(Round(Move.ROCK, their, Outcome.TIE))

        moves = [player.play(Strategy.FREQ_ONE_MOVE) for _ in range(6)]
        assert moves == [
            Move.PAPER,
            Move.PAPER,
            Move.SCISSORS,
            Move.SCISSORS,
            Move.ROCK,
            Move.ROCK,
        ]

    def test_freq_one_move_equal_proportions(self, scripted) -> None:
        """Test that equal proportions still partition by fixed move order."""
        player = Player(scripted(floats=[0.2, 0.5, 0.9]))
        for their in (Move.SCISSORS, Move.PAPER, Move.ROCK):
            player.add_round(Round(Move.ROCK, their, Outcome.TIE))

        moves = [player.play(Strategy.FREQ_ONE_MOVE) for _ in range(3)]
        assert moves == [Move.PAPER, Move.SCISSORS, Move.ROCK]

    def test_freq_one_move_uses_lifetime_counts(self, rng: np.random.Generator) -> None:
        """Test the distribution follows all opponent moves, not just the buffer."""
        player = Player(rng, history_size=3)
        for _ in range(5):
            player.add_round(Round(Move.PAPER, Move.ROCK, Outcome.WIN))
        for _ in range(3):
            player.add_round(Round(Move.SCISSORS, Move.PAPER, Outcome.WIN))

        counts = Counter(player.play(Strategy.FREQ_ONE_MOVE) for _ in range(2000))
        assert 0.55 < counts[Move.PAPER] / 2000 < 0.70
        assert 0.30 < counts[Move.SCISSORS] / 2000 < 0.45
        assert counts[Move.ROCK] == 0

    def test_prob_30_40_30_thresholds(self, scripted) -> None:
        """Test the fixed [0, .3), [.3, .7), [.7, 1) intervals."""
        player = Player(scripted(floats=[0.0, 0.29, 0.3, 0.31, 0.69, 0.7, 0.71, 0.99]))
        moves = [player.play(Strategy.PROB_30_40_30) for _ in range(8)]
        assert moves == [
            Move.ROCK,
            Move.ROCK,
            Move.PAPER,
            Move.PAPER,
            Move.PAPER,
            Move.SCISSORS,
            Move.SCISSORS,
            Move.SCISSORS,
        ]

    def test_prob_30_40_30_distribution(self, rng: np.random.Generator) -> None:
        """Test the empirical mix of the fixed-probability strategy."""
        player = Player(rng)
        counts = Counter(player.play(Strategy.PROB_30_40_30) for _ in range(3000))
        assert 0.25 < counts[Move.ROCK] / 3000 < 0.35
        assert 0.35 < counts[Move.PAPER] / 3000 < 0.45
        assert 0.25 < counts[Move.SCISSORS] / 3000 < 0.35


class TestStrategyNames:
    """Tests for strategy lookup by name."""

    def test_from_name(self) -> None:
        """Test lookup of every short name."""
        assert Strategy.from_name("lastmove") is Strategy.LAST_MOVE
        assert Strategy.from_name("30_40_30") is Strategy.PROB_30_40_30

    def test_unknown_name(self) -> None:
        """Test that unknown names list the valid ones."""
        with pytest.raises(ValueError, match="freq1move"):
            Strategy.from_name("paperonly")
