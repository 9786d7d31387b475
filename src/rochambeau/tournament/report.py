"""Rich renderers for SPRT runs and comparison matrices."""

import math

from rich.table import Table

from rochambeau.configs.schema import SPRTConfig
from rochambeau.game.player import Strategy
from rochambeau.tournament.matrix import ComparisonMatrix
from rochambeau.tournament.sprt import SPRTResult, Verdict

VERDICT_LEGEND = "Verdicts: W=Win, L=Loss, D=Draw, ?=Inconclusive"

_VERDICT_COLORS = {
    Verdict.AI1_BETTER: "green",
    Verdict.AI2_BETTER: "red",
    Verdict.NO_DIFFERENCE: "yellow",
    Verdict.INCONCLUSIVE: "dim",
}


def format_rate(rate: float) -> str:
    """Format a rate as a percentage, or "n/a" when it is NaN."""
    if math.isnan(rate):
        return "n/a"
    return f"{rate:.1%}"


def decision_text(verdict: Verdict, strategy_a: Strategy, strategy_b: Strategy) -> str:
    """One-line conclusion with rich markup."""
    if verdict is Verdict.AI1_BETTER:
        return f"[bold green]DECISION:[/bold green] AI1 ({strategy_a.value}) is better"
    if verdict is Verdict.AI2_BETTER:
        return f"[bold green]DECISION:[/bold green] AI2 ({strategy_b.value}) is better"
    if verdict is Verdict.NO_DIFFERENCE:
        return "[bold yellow]DECISION:[/bold yellow] No significant difference"
    return "[bold red]INCONCLUSIVE:[/bold red] reached max games"


def create_hypotheses_table(
    config: SPRTConfig, strategy_a: Strategy, strategy_b: Strategy
) -> Table:
    """Describe the hypotheses and decision bounds of a run."""
    table = Table(title="Sequential Probability Ratio Test", show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green")

    effect = config.effect_size * 100
    table.add_row("Strategies", f"{strategy_a.value} vs {strategy_b.value}")
    table.add_row("H0", f"p = {config.p0:.3f}")
    table.add_row("H1", f"AI1 better by >={effect:.1f}% (p = {config.p_high:.3f})")
    table.add_row("H2", f"AI2 better by >={effect:.1f}% (p = {config.p_low:.3f})")
    table.add_row("alpha / beta", f"{config.alpha:.3f} / {config.beta:.3f}")
    table.add_row("Bounds", f"[{config.lower_bound:.3f}, {config.upper_bound:.3f}]")
    return table


def create_result_table(
    result: SPRTResult, strategy_a: Strategy, strategy_b: Strategy
) -> Table:
    """Final statistics of one SPRT run."""
    table = Table(title="Final Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total games", str(result.total_games))
    table.add_row("Non-ties", str(result.non_tie_games))
    table.add_row(f"AI1 ({strategy_a.value}) wins", str(result.ai1_wins))
    table.add_row(f"AI2 ({strategy_b.value}) wins", str(result.ai2_wins))
    table.add_row("Ties", str(result.ties))

    ci = result.confidence_interval()
    if ci is not None:
        table.add_row("", "")
        table.add_row("AI1 win rate", f"{result.ai1_win_rate:.1%}")
        table.add_row("AI2 win rate", f"{result.ai2_win_rate:.1%}")
        table.add_row("Tie rate", f"{result.tie_rate:.1%}")
        table.add_row("95% CI for rate difference", f"[{ci[0]:.3f}, {ci[1]:.3f}]")

    table.add_row("", "")
    table.add_row("LLR (high / low)", f"{result.llr_high:.3f} / {result.llr_low:.3f}")
    color = _VERDICT_COLORS[result.verdict]
    table.add_row("Verdict", f"[{color}]{result.verdict.value}[/{color}]")
    return table


def create_matrix_table(matrix: ComparisonMatrix) -> Table:
    """Strategy comparison table: win rate% (verdict) per cell plus row average."""
    table = Table(title="Strategy Comparison Table", caption=VERDICT_LEGEND)
    table.add_column("", style="bold cyan", justify="right")
    for strategy in matrix.strategies:
        table.add_column(strategy.value, justify="right")
    table.add_column("Average", style="bold", justify="right")

    for i, strategy in enumerate(matrix.strategies):
        row = [strategy.value]
        for j in range(len(matrix)):
            cell = matrix.cell(i, j)
            color = _VERDICT_COLORS[cell.verdict]
            row.append(f"[{color}]{format_rate(cell.win_rate)} ({cell.verdict.glyph})[/{color}]")
        row.append(format_rate(matrix.row_average(i)))
        table.add_row(*row)

    return table
