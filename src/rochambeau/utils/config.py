"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from rochambeau.configs.schema import ExperimentConfig, config_from_dict, config_to_dict


def load_config(config_path: str | Path, overrides: list[str] | None = None) -> DictConfig:
    """Load a configuration file with optional overrides.

    Args:
        config_path: Path to the YAML configuration file.
        overrides: Optional list of CLI-style overrides (e.g., ["sprt.alpha=0.01"]).

    Returns:
        Merged configuration as a DictConfig.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    config = OmegaConf.load(config_path)

    if overrides:
        override_conf = OmegaConf.from_dotlist(overrides)
        config = OmegaConf.merge(config, override_conf)

    return config


def load_experiment_config(
    config_path: str | Path | None = None, overrides: list[str] | None = None
) -> ExperimentConfig:
    """Build a validated ExperimentConfig from defaults, a YAML file and overrides.

    Args:
        config_path: Optional YAML file layered over the defaults.
        overrides: Optional dotlist overrides applied last.

    Returns:
        ExperimentConfig instance.
    """
    config = OmegaConf.create(config_to_dict(ExperimentConfig()))
    if config_path is not None:
        config = OmegaConf.merge(config, load_config(config_path))
    if overrides:
        config = OmegaConf.merge(config, OmegaConf.from_dotlist(overrides))
    return config_from_dict(OmegaConf.to_container(config, resolve=True))


def save_config(config: DictConfig | ExperimentConfig | dict[str, Any], path: str | Path) -> None:
    """Save a configuration to a YAML file.

    Args:
        config: Configuration to save.
        path: Path to save the configuration to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(config, ExperimentConfig):
        config = config_to_dict(config)
    if isinstance(config, dict):
        config = OmegaConf.create(config)

    OmegaConf.save(config, path)
