"""Pytest configuration and shared fixtures."""

from collections.abc import Iterable

import numpy as np
import pytest
from loguru import logger

from rochambeau.configs.schema import SPRTConfig


class ScriptedRandom:
    """Random source that replays fixed draws, for deterministic strategy tests."""

    def __init__(self, integers: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        self._integers = list(integers)
        self._floats = list(floats)

    def integers(self, high: int) -> int:
        if not self._integers:
            raise AssertionError("ScriptedRandom ran out of integer draws")
        value = self._integers.pop(0)
        assert 0 <= value < high
        return value

    def random(self) -> float:
        if not self._floats:
            raise AssertionError("ScriptedRandom ran out of float draws")
        return self._floats.pop(0)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for statistical tests."""
    return np.random.default_rng(12345)


@pytest.fixture
def fast_sprt_config() -> SPRTConfig:
    """SPRT parameters that decide within a few thousand games."""
    return SPRTConfig(alpha=0.005, beta=0.005, effect_size=0.05, max_games=50_000)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added by setup_logging so they do not outlive the test's streams."""
    yield
    logger.remove()
