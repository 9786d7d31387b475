"""Interactive human-vs-AI session on the terminal."""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from loguru import logger
from rich.console import Console

from rochambeau.game.moves import Move, Outcome, Round, flip, judge
from rochambeau.game.player import DEFAULT_HISTORY_SIZE, Player, Strategy
from rochambeau.game.random_source import RandomSource, spawn_generators

INVALID_INPUT_MESSAGE = "Invalid input. Please enter Q, R, P, or S."


class InvalidCommandError(ValueError):
    """Raised when a line of input is not a single recognised command."""

    pass


class Command(Enum):
    """A single-character instruction typed by the human player."""

    QUIT = "q"
    ROCK = "r"
    PAPER = "p"
    SCISSORS = "s"

    @property
    def move(self) -> Move | None:
        """The move this command plays, or None for quit."""
        return _COMMAND_MOVES.get(self)


_COMMAND_MOVES = {
    Command.ROCK: Move.ROCK,
    Command.PAPER: Move.PAPER,
    Command.SCISSORS: Move.SCISSORS,
}

_OUTCOME_MESSAGES = {
    Outcome.WIN: "You win!",
    Outcome.LOSS: "You lose!",
    Outcome.TIE: "It's a tie!",
}


def parse_command(line: str) -> Command:
    """Parse one line of input (case-insensitive, trailing newline ignored).

    Raises:
        InvalidCommandError: If the line is not exactly one of Q, R, P or S.
    """
    text = line.rstrip("\r\n")
    if len(text) != 1:
        msg = f"Expected a single character, got {text!r}"
        raise InvalidCommandError(msg)
    try:
        return Command(text.lower())
    except ValueError:
        msg = f"Unknown command: {text!r}"
        raise InvalidCommandError(msg) from None


@dataclass
class SessionSummary:
    """Tally of an interactive session, from the human's perspective."""

    rounds: int = 0
    human_wins: int = 0
    ai_wins: int = 0

    @property
    def ties(self) -> int:
        return self.rounds - self.human_wins - self.ai_wins

    @property
    def human_win_rate(self) -> float:
        return self.human_wins / self.rounds if self.rounds > 0 else 0.0

    @property
    def ai_win_rate(self) -> float:
        return self.ai_wins / self.rounds if self.rounds > 0 else 0.0

    @property
    def tie_rate(self) -> float:
        return self.ties / self.rounds if self.rounds > 0 else 0.0

    def record(self, outcome: Outcome) -> None:
        """Count one round judged from the human's side."""
        self.rounds += 1
        if outcome is Outcome.WIN:
            self.human_wins += 1
        elif outcome is Outcome.LOSS:
            self.ai_wins += 1


class InteractiveSession:
    """Plays rounds between a human on a text stream and an AI player."""

    def __init__(
        self,
        strategy: Strategy,
        *,
        rng: RandomSource | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        input_stream: TextIO | None = None,
        console: Console | None = None,
    ) -> None:
        self.strategy = strategy
        if rng is None:
            rng = spawn_generators(1)[0]
        self.ai = Player(rng, history_size=history_size)
        self.input_stream = input_stream or sys.stdin
        self.console = console or Console()
        self.summary = SessionSummary()

    def _read_command(self) -> Command:
        """Read lines until one parses; end of input counts as quit."""
        while True:
            line = self.input_stream.readline()
            if not line:
                return Command.QUIT
            try:
                return parse_command(line)
            except InvalidCommandError as e:
                logger.debug(f"Rejected input: {e}")
                self.console.print(INVALID_INPUT_MESSAGE)

    def play_round(self) -> bool:
        """Play one round. Returns False when the human quits."""
        self.console.print(f"Round {self.summary.rounds + 1}! Q to quit, or play R/P/S.")

        # The AI commits to its move before the human's input is read
        ai_move = self.ai.play(self.strategy)

        command = self._read_command()
        human_move = command.move
        if human_move is None:
            return False

        self.console.print(f"You played {human_move.label}.")
        self.console.print(f"AI played {ai_move.label}.")

        outcome = judge(human_move, ai_move)
        self.console.print(_OUTCOME_MESSAGES[outcome])

        self.ai.add_round(Round(my_move=ai_move, their_move=human_move, outcome=flip(outcome)))
        self.summary.record(outcome)
        logger.debug(f"Round {self.summary.rounds}: {human_move.label} vs {ai_move.label}")
        return True

    def run(self) -> SessionSummary:
        """Play until the human quits, then print and return the summary."""
        while self.play_round():
            pass

        s = self.summary
        self.console.print(f"Game over! You won {s.human_wins}/{s.rounds} rounds.")
        if s.rounds > 0:
            self.console.print(f"Your win %: {s.human_win_rate * 100:.2f}")
            self.console.print(f"AI win %: {s.ai_win_rate * 100:.2f}")
            self.console.print(f"Tie %: {s.tie_rate * 100:.2f}")
        return s
