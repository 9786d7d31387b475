"""rochambeau: rock-paper-scissors strategy comparison with SPRT.

- Game model: `from rochambeau.game import Move, Player, Strategy`
- Statistical comparison: `from rochambeau.tournament import run_sprt`
- Shared utilities: `from rochambeau import setup_logging, load_config`
"""

__version__ = "0.1.0"

# Re-export common utilities for convenience
from rochambeau.utils import load_config, save_config, setup_logging

__all__ = [
    "__version__",
    "load_config",
    "save_config",
    "setup_logging",
]
