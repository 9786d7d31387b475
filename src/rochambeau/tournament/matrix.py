"""All-pairs strategy comparison matrix.

Runs one SPRT per unordered pair of strategies (including each strategy
against itself as a sanity check) and mirrors every result across the
diagonal, so cell (i, j) always reads "row strategy vs column strategy".
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from loguru import logger
from tqdm import tqdm

from rochambeau.configs.schema import PlayerConfig, SPRTConfig
from rochambeau.game.player import Strategy
from rochambeau.game.random_source import seed_sequence
from rochambeau.tournament.sprt import SPRTResult, Verdict, reverse_verdict, run_sprt


@dataclass(frozen=True)
class ComparisonResult:
    """One matrix cell: the row strategy's win rate and verdict against the column."""

    win_rate: float  # NaN when the run was inconclusive
    verdict: Verdict

    @property
    def defined(self) -> bool:
        """Whether the cell carries a numeric win rate."""
        return not math.isnan(self.win_rate)

    @classmethod
    def from_sprt(cls, result: SPRTResult) -> "ComparisonResult":
        """Cell for strategy A's row."""
        return cls(win_rate=_rate_or_nan(result, result.ai1_win_rate), verdict=result.verdict)

    @classmethod
    def mirrored_from_sprt(cls, result: SPRTResult) -> "ComparisonResult":
        """Cell for strategy B's row, with roles swapped."""
        return cls(
            win_rate=_rate_or_nan(result, result.ai2_win_rate),
            verdict=reverse_verdict(result.verdict),
        )


def _rate_or_nan(result: SPRTResult, rate: float) -> float:
    return math.nan if result.verdict is Verdict.INCONCLUSIVE else rate


@dataclass
class ComparisonMatrix:
    """Square matrix of comparison results over a fixed roster."""

    strategies: list[Strategy]
    cells: list[list[ComparisonResult]]
    runs: dict[tuple[int, int], SPRTResult]  # Raw results keyed by (i, j), i <= j

    def __len__(self) -> int:
        return len(self.strategies)

    def cell(self, i: int, j: int) -> ComparisonResult:
        """Result of strategy ``i`` against strategy ``j``."""
        return self.cells[i][j]

    def row_average(self, i: int) -> float:
        """Average win rate of strategy ``i`` over its defined cells (NaN if none)."""
        rates = [c.win_rate for c in self.cells[i] if c.defined]
        if not rates:
            return math.nan
        return sum(rates) / len(rates)

    def averages(self) -> list[float]:
        """Row averages in roster order."""
        return [self.row_average(i) for i in range(len(self))]

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for YAML/JSON output. NaN rates become None."""
        return {
            "strategies": [s.value for s in self.strategies],
            "cells": [
                [
                    {
                        "win_rate": c.win_rate if c.defined else None,
                        "verdict": c.verdict.value,
                    }
                    for c in row
                ]
                for row in self.cells
            ],
            "averages": [None if math.isnan(a) else a for a in self.averages()],
        }


def run_all_strategy_comparisons(
    strategies: Sequence[Strategy],
    config: SPRTConfig | None = None,
    *,
    player_config: PlayerConfig | None = None,
    seed: int | np.random.SeedSequence | None = None,
    progress: bool = False,
) -> ComparisonMatrix:
    """Run an SPRT for every pair ``(i, j)`` with ``i <= j`` and fill the matrix.

    Comparisons run sequentially; each one owns two freshly created players
    with independent random streams spawned from ``seed``.

    Args:
        strategies: Roster, in table order.
        config: SPRT parameters shared by every comparison.
        player_config: Player settings shared by every comparison.
        seed: Root seed. Fixing it makes the whole matrix reproducible.
        progress: Show a tqdm progress bar over pairs.

    Returns:
        The filled ComparisonMatrix.
    """
    strategies = list(strategies)
    n = len(strategies)
    pairs = [(i, j) for i in range(n) for j in range(i, n)]
    pair_seeds = seed_sequence(seed).spawn(len(pairs))

    logger.info(f"Running {len(pairs)} SPRT comparisons over {n} strategies")

    cells: list[list[ComparisonResult | None]] = [[None] * n for _ in range(n)]
    runs: dict[tuple[int, int], SPRTResult] = {}

    pbar = tqdm(total=len(pairs), desc="Comparisons", unit="pair", disable=not progress)
    try:
        for (i, j), pair_seed in zip(pairs, pair_seeds):
            a, b = strategies[i], strategies[j]
            pbar.set_postfix_str(f"{a.value} vs {b.value}")

            result = run_sprt(a, b, config, player_config=player_config, seed=pair_seed)
            runs[(i, j)] = result
            cells[i][j] = ComparisonResult.from_sprt(result)
            if i != j:
                cells[j][i] = ComparisonResult.mirrored_from_sprt(result)

            logger.info(
                f"{a.value} vs {b.value}: {result.verdict.value} "
                f"({result.ai1_win_rate:.1%} after {result.total_games} games)"
            )
            pbar.update(1)
    finally:
        pbar.close()

    return ComparisonMatrix(strategies=strategies, cells=cells, runs=runs)
