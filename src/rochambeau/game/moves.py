"""Moves, outcomes and rounds of rock-paper-scissors.

The three moves form a cycle of dominance: Paper beats Rock, Scissors beats
Paper and Rock beats Scissors. Outcomes are always expressed from one named
perspective ("my" move against "their" move).
"""

from dataclasses import dataclass
from enum import Enum


class Move(Enum):
    """A single rock-paper-scissors move.

    The integer value doubles as the index into per-move frequency tables.
    """

    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "Rock"."""
        return self.name.capitalize()


class Outcome(Enum):
    """Result of a round from one player's perspective."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


_COUNTERS = {
    Move.ROCK: Move.PAPER,
    Move.PAPER: Move.SCISSORS,
    Move.SCISSORS: Move.ROCK,
}

_LOSES_TO = {
    Move.ROCK: Move.SCISSORS,
    Move.PAPER: Move.ROCK,
    Move.SCISSORS: Move.PAPER,
}


def counters(move: Move) -> Move:
    """Return the move that defeats ``move``."""
    return _COUNTERS[move]


def loses_to(move: Move) -> Move:
    """Return the move that ``move`` defeats."""
    return _LOSES_TO[move]


def flip(outcome: Outcome) -> Outcome:
    """Return the same result seen from the other side of the table."""
    if outcome is Outcome.WIN:
        return Outcome.LOSS
    if outcome is Outcome.LOSS:
        return Outcome.WIN
    return Outcome.TIE


def judge(my_move: Move, their_move: Move) -> Outcome:
    """Judge a round from the perspective of the player who played ``my_move``."""
    if my_move is their_move:
        return Outcome.TIE
    if loses_to(my_move) is their_move:
        return Outcome.WIN
    return Outcome.LOSS


@dataclass(frozen=True, slots=True)
class Round:
    """One played round, recorded from the owning player's perspective."""

    my_move: Move
    their_move: Move
    outcome: Outcome

    def mirrored(self) -> "Round":
        """The same round as the opponent recorded it."""
        return Round(
            my_move=self.their_move,
            their_move=self.my_move,
            outcome=flip(self.outcome),
        )
