"""
Shared fixtures: seeded random sources, a fake millisecond clock and
settings that ignore the caller's environment.
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path no matter where pytest is invoked from
# ---------------------------------------------------------------------------
import pathlib, sys
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import os
import random

import pytest

from trial_engine.config import Settings, TrialConfig


class FakeClock:
    """Millisecond source that advances by a fixed step per reading."""

    def __init__(self, step=10.0):
        self.step = step
        self.current = 0.0

    def __call__(self):
        self.current += self.step
        return self.current


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TRIALS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def trial_config():
    return TrialConfig(timeLimitSeconds=60, allowGracefulExtension=False, seed=7)


@pytest.fixture
def make_game(rng, fake_clock, settings, trial_config):
    """Build a controller with the shared deterministic fixtures."""
    def factory(cls, config=None, **kwargs):
        kwargs.setdefault("rng", rng)
        kwargs.setdefault("clock_source", fake_clock)
        kwargs.setdefault("settings", settings)
        return cls(config or trial_config, **kwargs)
    return factory
