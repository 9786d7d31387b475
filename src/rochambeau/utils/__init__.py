"""Shared utilities for rochambeau."""

from rochambeau.utils.config import load_config, load_experiment_config, save_config
from rochambeau.utils.logging import setup_logging

__all__ = ["load_config", "load_experiment_config", "save_config", "setup_logging"]
