"""Tournament module for strategy-vs-strategy matches with SPRT testing."""

from rochambeau.tournament.matrix import (
    ComparisonMatrix,
    ComparisonResult,
    run_all_strategy_comparisons,
)
from rochambeau.tournament.simulator import simulate_one_game
from rochambeau.tournament.sprt import (
    SPRTCalculator,
    SPRTResult,
    Verdict,
    reverse_verdict,
    run_sprt,
)

__all__ = [
    "ComparisonMatrix",
    "ComparisonResult",
    "SPRTCalculator",
    "SPRTResult",
    "Verdict",
    "reverse_verdict",
    "run_all_strategy_comparisons",
    "run_sprt",
    "simulate_one_game",
]
