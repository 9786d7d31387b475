"""Logging configuration utilities.

Console output is routed through ``tqdm.write`` so that per-comparison log
lines emitted while the matrix progress bar is live are printed above the
bar instead of tearing it.
"""

import sys
from pathlib import Path

from loguru import logger
from tqdm import tqdm

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def _console_sink(message: str) -> None:
    # sys.stderr is looked up per call so redirected streams are honoured
    tqdm.write(message, file=sys.stderr, end="")


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
    colorize: bool | None = None,
) -> None:
    """Configure loguru for rochambeau commands and scripts.

    Args:
        level: Minimum log level, for both sinks.
        log_file: Optional path to a rotating, gzip-compressed log file.
        rotation: When to rotate the log file.
        retention: How long to keep old log files.
        colorize: Force ANSI colours on or off. Defaults to colouring only
            when stderr is a terminal.
    """
    logger.remove()

    if colorize is None:
        colorize = sys.stderr.isatty()
    logger.add(_console_sink, level=level, format=CONSOLE_FORMAT, colorize=colorize)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
        )

    logger.debug(f"Logging configured at level {level} (file: {log_file or 'none'})")
