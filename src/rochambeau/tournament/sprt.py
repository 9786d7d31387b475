"""Sequential Probability Ratio Test (SPRT) for rock-paper-scissors strategies.

SPRT decides whether one strategy beats another without fixing the number of
games in advance. Ties carry no evidence and are excluded from the statistic;
each non-tie game is a Bernoulli trial where "success" means strategy A won.

Two log-likelihood ratios are tracked against H0: p = p0.

- The high track tests H1: p = p0 + effect_size (A is better).
- The low track tests H2: p = p0 - effect_size (B is better).

After a minimum number of non-tie games the test stops as soon as either
track crosses the upper bound, or both tracks fall below the lower bound
(no significant difference). A hard cap on games played guards against pairs
that never separate.

References:
- https://www.chessprogramming.org/Sequential_Probability_Ratio_Test
"""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
from loguru import logger

from rochambeau.configs.schema import PlayerConfig, SPRTConfig
from rochambeau.game.moves import Outcome
from rochambeau.game.player import Player, Strategy
from rochambeau.game.random_source import RandomSource, spawn_generators
from rochambeau.tournament.simulator import simulate_one_game

CI_Z = 1.96  # Two-sided 95% normal quantile


class Verdict(Enum):
    """Terminal classification of a comparison run."""

    AI1_BETTER = "ai1_better"
    AI2_BETTER = "ai2_better"
    NO_DIFFERENCE = "no_difference"
    INCONCLUSIVE = "inconclusive"  # Game cap reached without a decision

    @property
    def glyph(self) -> str:
        """Single-character table marker: W, L, D or ?."""
        return _GLYPHS[self]


_GLYPHS = {
    Verdict.AI1_BETTER: "W",
    Verdict.AI2_BETTER: "L",
    Verdict.NO_DIFFERENCE: "D",
    Verdict.INCONCLUSIVE: "?",
}


def reverse_verdict(verdict: Verdict) -> Verdict:
    """The same verdict with the roles of A and B swapped."""
    if verdict is Verdict.AI1_BETTER:
        return Verdict.AI2_BETTER
    if verdict is Verdict.AI2_BETTER:
        return Verdict.AI1_BETTER
    return verdict


@dataclass
class SPRTResult:
    """Result of a finished SPRT run between strategy A (ai1) and B (ai2)."""

    verdict: Verdict

    # Win rates among non-tie games (0 when no non-tie game was played)
    ai1_win_rate: float
    ai2_win_rate: float

    # Game statistics
    total_games: int
    non_tie_games: int
    ai1_wins: int = 0
    ai2_wins: int = 0
    ties: int = 0

    # Final log-likelihood ratios
    llr_high: float = 0.0
    llr_low: float = 0.0

    @property
    def tie_rate(self) -> float:
        """Ties over all games played."""
        return self.ties / self.total_games if self.total_games > 0 else 0.0

    @property
    def rate_difference(self) -> float:
        """A's win rate minus B's win rate."""
        return self.ai1_win_rate - self.ai2_win_rate

    def confidence_interval(self, z: float = CI_Z) -> tuple[float, float] | None:
        """Approximate confidence interval for the win-rate difference.

        Uses ``diff +/- z * 2 * sqrt(p1 * (1 - p1) / n)`` where p1 is A's win
        rate and n the number of non-tie games. A's variance stands in for
        both arms, so this is a normal approximation rather than an exact
        two-proportion interval.

        Returns:
            ``(low, high)``, or None when no non-tie game was played.
        """
        if self.non_tie_games == 0:
            return None
        p1 = self.ai1_win_rate
        se = 2.0 * math.sqrt(p1 * (1.0 - p1) / self.non_tie_games)
        diff = self.rate_difference
        return diff - z * se, diff + z * se


class SPRTCalculator:
    """Running two-sided SPRT over a stream of game outcomes.

    Example:
        sprt = SPRTCalculator(SPRTConfig(alpha=0.05, beta=0.05))

        for outcome in outcomes:
            verdict = sprt.update(outcome)
            if verdict is not None:
                break

        result = sprt.result()
    """

    def __init__(self, config: SPRTConfig | None = None) -> None:
        """Initialize the calculator and derive its constants.

        Args:
            config: Test parameters. Defaults to ``SPRTConfig()``.
        """
        self.config = config or SPRTConfig()
        cfg = self.config

        self.lower_bound = cfg.lower_bound
        self.upper_bound = cfg.upper_bound

        # Per-outcome LLR increments for each hypothesis track
        self.high_win = math.log(cfg.p_high / cfg.p0)
        self.high_loss = math.log((1 - cfg.p_high) / (1 - cfg.p0))
        self.low_win = math.log(cfg.p_low / cfg.p0)
        self.low_loss = math.log((1 - cfg.p_low) / (1 - cfg.p0))

        self.total_games = 0
        self.non_tie_games = 0
        self.ai1_wins = 0
        self.ai2_wins = 0
        self.ties = 0
        self.llr_high = 0.0
        self.llr_low = 0.0
        self.verdict: Verdict | None = None

        logger.debug(
            f"SPRT bounds [{self.lower_bound:.3f}, {self.upper_bound:.3f}], "
            f"p0={cfg.p0}, p_high={cfg.p_high}, p_low={cfg.p_low}"
        )

    @property
    def finished(self) -> bool:
        """Whether a terminal verdict has been reached."""
        return self.verdict is not None

    def update(self, outcome: Outcome) -> Verdict | None:
        """Account for one game from A's perspective.

        Args:
            outcome: Result of the game for strategy A.

        Returns:
            The verdict if the test has just decided, otherwise None.

        Raises:
            RuntimeError: If called after the test has finished.
        """
        if self.verdict is not None:
            msg = f"SPRT already finished with verdict {self.verdict.value}"
            raise RuntimeError(msg)

        self.total_games += 1
        if outcome is Outcome.WIN:
            self.ai1_wins += 1
            self.non_tie_games += 1
            self.llr_high += self.high_win
            self.llr_low += self.low_win
        elif outcome is Outcome.LOSS:
            self.ai2_wins += 1
            self.non_tie_games += 1
            self.llr_high += self.high_loss
            self.llr_low += self.low_loss
        else:
            self.ties += 1

        decision = self._decide()
        if decision is None and self.total_games >= self.config.max_games:
            decision = Verdict.INCONCLUSIVE
            logger.warning(
                f"SPRT inconclusive after {self.total_games} games "
                f"({self.non_tie_games} non-tie)"
            )

        if decision is not None:
            self.verdict = decision
            logger.debug(
                f"SPRT decided {decision.value} after {self.total_games} games: "
                f"llr_high={self.llr_high:.3f}, llr_low={self.llr_low:.3f}"
            )
        return decision

    def _decide(self) -> Verdict | None:
        if self.non_tie_games < self.config.min_non_tie_games:
            return None
        if self.llr_high >= self.upper_bound:
            return Verdict.AI1_BETTER
        if self.llr_low >= self.upper_bound:
            return Verdict.AI2_BETTER
        if self.llr_high <= self.lower_bound and self.llr_low <= self.lower_bound:
            return Verdict.NO_DIFFERENCE
        return None

    def result(self) -> SPRTResult:
        """Snapshot of the current statistics.

        A run that has not decided yet is reported as inconclusive.
        """
        if self.non_tie_games > 0:
            ai1_win_rate = self.ai1_wins / self.non_tie_games
            ai2_win_rate = self.ai2_wins / self.non_tie_games
        else:
            ai1_win_rate = 0.0
            ai2_win_rate = 0.0

        return SPRTResult(
            verdict=self.verdict or Verdict.INCONCLUSIVE,
            ai1_win_rate=ai1_win_rate,
            ai2_win_rate=ai2_win_rate,
            total_games=self.total_games,
            non_tie_games=self.non_tie_games,
            ai1_wins=self.ai1_wins,
            ai2_wins=self.ai2_wins,
            ties=self.ties,
            llr_high=self.llr_high,
            llr_low=self.llr_low,
        )


def run_sprt(
    strategy_a: Strategy,
    strategy_b: Strategy,
    config: SPRTConfig | None = None,
    *,
    player_config: PlayerConfig | None = None,
    seed: int | np.random.SeedSequence | None = None,
    rngs: tuple[RandomSource, RandomSource] | None = None,
) -> SPRTResult:
    """Compare two strategies by simulating games until the SPRT decides.

    Two fresh players are created for the run and discarded afterwards.

    Args:
        strategy_a: Strategy of the first player (A).
        strategy_b: Strategy of the second player (B).
        config: Test parameters. Defaults to ``SPRTConfig()``.
        player_config: Player settings. Defaults to ``PlayerConfig()``.
        seed: Root seed for the players' independent random streams.
            Ignored when ``rngs`` is given.
        rngs: Explicit random sources for players A and B.

    Returns:
        SPRTResult with the verdict, win rates and game counts.
    """
    sprt = SPRTCalculator(config)
    player_config = player_config or PlayerConfig()
    if rngs is None:
        rngs = tuple(spawn_generators(2, seed))

    player_a = Player(rngs[0], history_size=player_config.history_size)
    player_b = Player(rngs[1], history_size=player_config.history_size)

    logger.debug(f"Running SPRT: {strategy_a.value} vs {strategy_b.value}")
    while not sprt.finished:
        outcome = simulate_one_game(player_a, strategy_a, player_b, strategy_b)
        sprt.update(outcome)

    return sprt.result()
