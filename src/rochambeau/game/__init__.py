"""Rock-paper-scissors game model: moves, players and strategies."""

from rochambeau.game.moves import Move, Outcome, Round, counters, flip, judge, loses_to
from rochambeau.game.player import DEFAULT_HISTORY_SIZE, Player, Strategy
from rochambeau.game.random_source import (
    EntropyUnavailableError,
    RandomSource,
    spawn_generators,
)

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "EntropyUnavailableError",
    "Move",
    "Outcome",
    "Player",
    "RandomSource",
    "Round",
    "Strategy",
    "counters",
    "flip",
    "judge",
    "loses_to",
    "spawn_generators",
]
