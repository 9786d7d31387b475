"""Configuration management utilities."""

from rochambeau.configs.schema import (
    DEFAULT_ROSTER,
    ExperimentConfig,
    MatrixConfig,
    PlayerConfig,
    SPRTConfig,
    config_from_dict,
    config_to_dict,
)

__all__ = [
    "DEFAULT_ROSTER",
    "ExperimentConfig",
    "MatrixConfig",
    "PlayerConfig",
    "SPRTConfig",
    "config_from_dict",
    "config_to_dict",
]
