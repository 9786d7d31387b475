"""Command-line interface for rochambeau."""

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel

from rochambeau import __version__
from rochambeau.configs.schema import ExperimentConfig, PlayerConfig
from rochambeau.game.interactive import InteractiveSession
from rochambeau.game.player import Strategy
from rochambeau.game.random_source import spawn_generators
from rochambeau.tournament.matrix import run_all_strategy_comparisons
from rochambeau.tournament.report import (
    create_hypotheses_table,
    create_matrix_table,
    create_result_table,
    decision_text,
)
from rochambeau.tournament.sprt import run_sprt
from rochambeau.utils import load_experiment_config, setup_logging

app = typer.Typer(
    name="rochambeau",
    help="Compare rock-paper-scissors strategies with sequential probability ratio tests",
    add_completion=False,
)
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", help="YAML config file")
OverrideOption = typer.Option(
    None, "--set", "-s", help="Config override, e.g. sprt.alpha=0.01 (repeatable)"
)
SeedOption = typer.Option(None, "--seed", help="Root random seed (default: OS entropy)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


def _parse_strategy(name: str) -> Strategy:
    try:
        return Strategy.from_name(name)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _prepare(
    config: Path | None,
    overrides: list[str] | None,
    seed: int | None,
    verbose: bool,
) -> ExperimentConfig:
    """Load configuration and set up logging for a command."""
    try:
        cfg = load_experiment_config(config, overrides)
        if seed is not None:
            cfg = replace(cfg, seed=seed)
    except (FileNotFoundError, ValueError, TypeError) as e:
        raise typer.BadParameter(str(e)) from e
    setup_logging("DEBUG" if verbose else cfg.log_level, cfg.log_file)
    return cfg


def _run_matrix(cfg: ExperimentConfig, progress: bool) -> None:
    console.print("Running SPRT comparisons between all strategies...\n")
    matrix = run_all_strategy_comparisons(
        cfg.matrix.roster,
        cfg.sprt,
        player_config=cfg.player,
        seed=cfg.seed,
        progress=progress and cfg.matrix.progress,
    )
    console.print()
    console.print(create_matrix_table(matrix))


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the full strategy comparison matrix when no command is given."""
    if ctx.invoked_subcommand is None:
        cfg = _prepare(None, None, None, False)
        _run_matrix(cfg, progress=True)


@app.command()
def version() -> None:
    """Print version information."""
    console.print(f"[bold blue]rochambeau[/bold blue] v{__version__}")


@app.command()
def matrix(
    config: Optional[Path] = ConfigOption,
    overrides: Optional[list[str]] = OverrideOption,
    seed: Optional[int] = SeedOption,
    no_progress: bool = typer.Option(False, "--no-progress", help="Hide the progress bar"),
    verbose: bool = VerboseOption,
) -> None:
    """Compare every pair of strategies and print the comparison table."""
    cfg = _prepare(config, overrides, seed, verbose)
    _run_matrix(cfg, progress=not no_progress)


@app.command()
def sprt(
    strategy_a: str = typer.Argument(..., help="Strategy of AI1"),
    strategy_b: str = typer.Argument(..., help="Strategy of AI2"),
    config: Optional[Path] = ConfigOption,
    overrides: Optional[list[str]] = OverrideOption,
    seed: Optional[int] = SeedOption,
    verbose: bool = VerboseOption,
) -> None:
    """Run one sequential test between two strategies and report the result."""
    a = _parse_strategy(strategy_a)
    b = _parse_strategy(strategy_b)
    cfg = _prepare(config, overrides, seed, verbose)

    console.print(create_hypotheses_table(cfg.sprt, a, b))
    result = run_sprt(a, b, cfg.sprt, player_config=cfg.player, seed=cfg.seed)

    console.print()
    console.print(decision_text(result.verdict, a, b))
    console.print(Panel.fit(create_result_table(result, a, b), title="[bold]Results[/bold]"))


@app.command()
def play(
    strategy: str = typer.Option("freq1move", "--strategy", help="Strategy the AI plays"),
    seed: Optional[int] = SeedOption,
    history_size: int = typer.Option(10, "--history-size", help="Rounds the AI remembers"),
    verbose: bool = VerboseOption,
) -> None:
    """Play rock-paper-scissors against the AI (Q to quit, R/P/S to play)."""
    ai_strategy = _parse_strategy(strategy)
    try:
        cfg = ExperimentConfig(player=PlayerConfig(history_size=history_size), seed=seed)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    setup_logging("DEBUG" if verbose else "WARNING")
    logger.debug(f"Interactive session against {ai_strategy.value}")

    rng = spawn_generators(1, cfg.seed)[0]
    session = InteractiveSession(
        ai_strategy, rng=rng, history_size=cfg.player.history_size, console=console
    )
    session.run()


if __name__ == "__main__":
    app()
