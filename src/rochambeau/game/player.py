"""Strategy-driven rock-paper-scissors player.

A player remembers its last ``history_size`` rounds in a fixed-size ring
buffer and keeps cumulative counts of every move made by itself and by its
opponent. Counts are never decremented when old rounds fall out of the
buffer.
"""

from enum import Enum

from rochambeau.game.moves import Move, Round, counters
from rochambeau.game.random_source import RandomSource

DEFAULT_HISTORY_SIZE = 10

_MOVES = (Move.ROCK, Move.PAPER, Move.SCISSORS)
_PROB_30_40_30_THRESHOLDS = (0.3, 0.7)


class Strategy(Enum):
    """Move-generation policy selected at the call site of ``Player.play``."""

    RANDOM = "random"  # Uniform over the three moves
    LAST_MOVE = "lastmove"  # Counter the opponent's previous move
    ALWAYS_ROCK = "alwaysrock"
    FREQ_ONE_MOVE = "freq1move"  # Counter a move drawn from opponent frequencies
    PROB_30_40_30 = "30_40_30"  # Fixed 30/40/30 mix over Rock/Paper/Scissors

    @classmethod
    def from_name(cls, name: str) -> "Strategy":
        """Look up a strategy by its short name (e.g. ``"lastmove"``).

        Raises:
            ValueError: If the name does not match any strategy.
        """
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            msg = f"Unknown strategy: {name!r} (expected one of: {valid})"
            raise ValueError(msg) from None


class Player:
    """A rock-paper-scissors player with bounded history.

    Example:
        player = Player(np.random.default_rng(0))
        move = player.play(Strategy.LAST_MOVE)
        player.add_round(Round(move, Move.ROCK, judge(move, Move.ROCK)))
    """

    def __init__(self, rng: RandomSource, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        """Initialize a player with empty history.

        Args:
            rng: Private random source for this player.
            history_size: Number of most recent rounds to remember.
        """
        if history_size < 1:
            msg = f"history_size must be at least 1, got {history_size}"
            raise ValueError(msg)

        self.rng = rng
        self.history_size = history_size
        self._history: list[Round | None] = [None] * history_size
        self._cursor = 0
        self.count = 0

        self.my_frequency = [0, 0, 0]
        self.their_frequency = [0, 0, 0]

    @property
    def cursor(self) -> int:
        """Slot the next round will be written to."""
        return self._cursor

    def add_round(self, round_: Round) -> None:
        """Record a round, overwriting the oldest one once the buffer is full."""
        self._history[self._cursor] = round_
        self._cursor = (self._cursor + 1) % self.history_size
        if self.count < self.history_size:
            self.count += 1

        self.my_frequency[round_.my_move.value] += 1
        self.their_frequency[round_.their_move.value] += 1

    def nth_last(self, n: int) -> Round | None:
        """Return the round played ``n`` rounds before the most recent one.

        ``n=0`` is the most recent round. Returns None when fewer than
        ``n + 1`` rounds are remembered.
        """
        if n < 0:
            msg = f"n must be non-negative, got {n}"
            raise IndexError(msg)
        if n >= self.count:
            return None
        return self._history[(self._cursor - 1 - n) % self.history_size]

    def rounds_in_order(self) -> tuple[Round, ...]:
        """Snapshot of remembered rounds, oldest first."""
        start = 0 if self.count < self.history_size else self._cursor
        return tuple(
            self._history[(start + i) % self.history_size] for i in range(self.count)
        )

    @property
    def total_rounds(self) -> int:
        """Rounds recorded over the player's whole lifetime."""
        return sum(self.my_frequency)

    def play(self, strategy: Strategy) -> Move:
        """Choose a move. Nothing is recorded; call ``add_round`` afterwards."""
        if strategy is Strategy.RANDOM:
            return self._random_move()

        if strategy is Strategy.LAST_MOVE:
            last = self.nth_last(0)
            if last is None:
                return self._random_move()
            return counters(last.their_move)

        if strategy is Strategy.ALWAYS_ROCK:
            return Move.ROCK

        if strategy is Strategy.FREQ_ONE_MOVE:
            return self._frequency_counter()

        if strategy is Strategy.PROB_30_40_30:
            return _pick_by_thresholds(self.rng.random(), _PROB_30_40_30_THRESHOLDS)

        msg = f"Unhandled strategy: {strategy}"
        raise ValueError(msg)

    def _random_move(self) -> Move:
        return _MOVES[int(self.rng.integers(3))]

    def _frequency_counter(self) -> Move:
        # Draw the opponent's "predicted" move in proportion to its lifetime
        # frequencies (Rock, Paper, Scissors intervals in that order), then
        # counter it.
        total = sum(self.their_frequency)
        if total == 0:
            return self._random_move()
        rock, paper, _ = self.their_frequency
        thresholds = (rock / total, (rock + paper) / total)
        predicted = _pick_by_thresholds(self.rng.random(), thresholds)
        return counters(predicted)


def _pick_by_thresholds(draw: float, thresholds: tuple[float, float]) -> Move:
    """Map a uniform draw in [0, 1) onto consecutive Rock/Paper/Scissors intervals.

    ``thresholds`` holds the cumulative upper ends of the Rock and Paper
    intervals, so each interval is half-open on the right.
    """
    if draw < thresholds[0]:
        return Move.ROCK
    if draw < thresholds[1]:
        return Move.PAPER
    return Move.SCISSORS
