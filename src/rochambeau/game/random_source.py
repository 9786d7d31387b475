"""Random sources handed to players.

Players never reach for global randomness: each one is constructed with its
own source, so tests can substitute a scripted one and simulations can give
every player an independent stream.
"""

from typing import Protocol

import numpy as np
from loguru import logger


class EntropyUnavailableError(RuntimeError):
    """Raised when the operating system cannot provide seed entropy."""

    pass


class RandomSource(Protocol):
    """The subset of ``numpy.random.Generator`` that players consume."""

    def integers(self, high: int) -> int: ...

    def random(self) -> float: ...


def seed_sequence(seed: int | np.random.SeedSequence | None = None) -> np.random.SeedSequence:
    """Build a seed sequence, drawing OS entropy when ``seed`` is None.

    Raises:
        EntropyUnavailableError: If fresh entropy was requested and the OS
            could not supply it.
    """
    if isinstance(seed, np.random.SeedSequence):
        return seed
    try:
        return np.random.SeedSequence(seed)
    except OSError as e:
        msg = "Could not acquire seed entropy from the operating system"
        raise EntropyUnavailableError(msg) from e


def spawn_generators(
    count: int, seed: int | np.random.SeedSequence | None = None
) -> list[np.random.Generator]:
    """Create ``count`` statistically independent generators.

    Args:
        count: Number of generators to create.
        seed: Root seed. The same seed always yields the same generators.

    Returns:
        One ``numpy.random.Generator`` per requested stream.
    """
    root = seed_sequence(seed)
    children = root.spawn(count)
    logger.debug(f"Spawned {count} generators from entropy {root.entropy}")
    return [np.random.default_rng(child) for child in children]
