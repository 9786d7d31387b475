"""Strongly-typed configuration schemas for rochambeau.

These dataclasses provide validation, IDE support, and serve as the
single source of truth for all configuration options.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from rochambeau.game.player import DEFAULT_HISTORY_SIZE, Strategy

DEFAULT_ROSTER = ["random", "lastmove", "alwaysrock", "freq1move", "30_40_30"]


@dataclass
class SPRTConfig:
    """Parameters of the sequential probability ratio test.

    The test compares H0: p = p0 against two alternatives, p_high = p0 + effect_size
    (strategy A wins more) and p_low = p0 - effect_size (strategy B wins more),
    where p is A's win probability among non-tie games.
    """

    alpha: float = 0.005  # False-positive rate
    beta: float = 0.005  # False-negative rate
    p0: float = 0.5
    effect_size: float = 0.005
    max_games: int = 1_000_000  # Hard cap; reaching it is "inconclusive"
    min_non_tie_games: int = 10  # Evidence gate before any decision

    def __post_init__(self) -> None:
        """Validate parameter ranges."""
        if not (0 < self.alpha < 1):
            msg = f"alpha must be in (0, 1), got {self.alpha}"
            raise ValueError(msg)
        if not (0 < self.beta < 1):
            msg = f"beta must be in (0, 1), got {self.beta}"
            raise ValueError(msg)
        if not (0 < self.p0 < 1):
            msg = f"p0 must be in (0, 1), got {self.p0}"
            raise ValueError(msg)
        if self.effect_size <= 0:
            msg = f"effect_size must be positive, got {self.effect_size}"
            raise ValueError(msg)
        if not (0 < self.p_low and self.p_high < 1):
            msg = (
                f"p0 +/- effect_size must stay inside (0, 1), "
                f"got [{self.p_low}, {self.p_high}]"
            )
            raise ValueError(msg)
        if self.max_games < 1:
            msg = f"max_games must be at least 1, got {self.max_games}"
            raise ValueError(msg)
        if self.min_non_tie_games < 1:
            msg = f"min_non_tie_games must be at least 1, got {self.min_non_tie_games}"
            raise ValueError(msg)

    @property
    def p_high(self) -> float:
        """Win probability under "A is better"."""
        return self.p0 + self.effect_size

    @property
    def p_low(self) -> float:
        """Win probability under "B is better"."""
        return self.p0 - self.effect_size

    @property
    def lower_bound(self) -> float:
        """Wald's lower (accept) bound, ln(beta / (1 - alpha))."""
        return math.log(self.beta / (1 - self.alpha))

    @property
    def upper_bound(self) -> float:
        """Wald's upper (reject) bound, ln((1 - beta) / alpha)."""
        return math.log((1 - self.beta) / self.alpha)


@dataclass
class PlayerConfig:
    """Configuration for simulated players."""

    history_size: int = DEFAULT_HISTORY_SIZE

    def __post_init__(self) -> None:
        if self.history_size < 1:
            msg = f"history_size must be at least 1, got {self.history_size}"
            raise ValueError(msg)


@dataclass
class MatrixConfig:
    """Configuration for the all-pairs comparison matrix."""

    strategies: list[str] = field(default_factory=lambda: list(DEFAULT_ROSTER))
    progress: bool = True  # Show a tqdm progress bar over pairs

    def __post_init__(self) -> None:
        """Reject unknown strategy names early."""
        self.strategies = list(self.strategies)
        if not self.strategies:
            msg = "strategies must not be empty"
            raise ValueError(msg)
        for name in self.strategies:
            Strategy.from_name(name)

    @property
    def roster(self) -> list[Strategy]:
        """Configured strategies, in table order."""
        return [Strategy.from_name(name) for name in self.strategies]


@dataclass
class ExperimentConfig:
    """Top-level configuration combining all sub-configs."""

    sprt: SPRTConfig = field(default_factory=SPRTConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)

    seed: int | None = None  # None draws fresh OS entropy
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            msg = f"seed must be a non-negative integer or None, got {self.seed!r}"
            raise ValueError(msg)


def config_from_dict(data: dict[str, Any]) -> ExperimentConfig:
    """Create ExperimentConfig from a dictionary (e.g., from OmegaConf).

    Args:
        data: Dictionary with configuration values.

    Returns:
        ExperimentConfig instance.
    """
    return ExperimentConfig(
        sprt=SPRTConfig(**data.get("sprt", {})),
        player=PlayerConfig(**data.get("player", {})),
        matrix=MatrixConfig(**data.get("matrix", {})),
        seed=data.get("seed"),
        log_level=data.get("log_level", "INFO"),
        log_file=data.get("log_file"),
    )


def config_to_dict(config: ExperimentConfig) -> dict[str, Any]:
    """Convert ExperimentConfig to a dictionary for serialization.

    Args:
        config: ExperimentConfig instance.

    Returns:
        Dictionary representation.
    """
    return asdict(config)
