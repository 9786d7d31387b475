#!/usr/bin/env python3
"""Strategy comparison matrix runner.

Runs a Sequential Probability Ratio Test (SPRT) between every pair of
rock-paper-scissors strategies in the configured roster and prints the
comparison table.

Usage:
    # Run with defaults
    uv run python scripts/sprt_matrix.py

    # Larger effect size (fewer games per pair, coarser verdicts)
    uv run python scripts/sprt_matrix.py sprt.effect_size=0.02

    # Reproducible run over a smaller roster
    uv run python scripts/sprt_matrix.py seed=1234 \\
        'matrix.strategies=[lastmove,alwaysrock,freq1move]'

    # Save the matrix as YAML
    uv run python scripts/sprt_matrix.py output.save_yaml=true
"""

from datetime import datetime
from pathlib import Path

import hydra
from loguru import logger
from omegaconf import DictConfig, OmegaConf
from rich.console import Console

from rochambeau.configs.schema import config_from_dict
from rochambeau.tournament.matrix import run_all_strategy_comparisons
from rochambeau.tournament.report import create_matrix_table
from rochambeau.utils import save_config, setup_logging

console = Console()


@hydra.main(version_base=None, config_path="../configs", config_name="sprt_matrix")
def main(cfg: DictConfig) -> None:
    """Main comparison matrix entry point."""
    # Get project root (Hydra changes cwd)
    project_root = Path(hydra.utils.get_original_cwd())

    container = OmegaConf.to_container(cfg, resolve=True)
    output_cfg = container.pop("output", {})
    experiment = config_from_dict(container)

    setup_logging(experiment.log_level, experiment.log_file)
    logger.info("Starting strategy comparison matrix")
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")

    matrix = run_all_strategy_comparisons(
        experiment.matrix.roster,
        experiment.sprt,
        player_config=experiment.player,
        seed=experiment.seed,
        progress=experiment.matrix.progress,
    )

    console.print()
    console.print(create_matrix_table(matrix))

    if output_cfg.get("save_yaml"):
        if output_cfg.get("path"):
            out_path = project_root / output_cfg["path"]
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            out_path = project_root / f"outputs/sprt_matrix_{timestamp}.yaml"
        save_config({"config": container, "matrix": matrix.to_dict()}, out_path)
        logger.info(f"Saved matrix to {out_path}")

    console.print("\n[bold green]Comparison complete![/bold green]")


if __name__ == "__main__":
    main()
