import random

import pytest

from catjump.constants import GameSettings
from catjump.game_engine import GameEngine


class ScriptedRandom(random.Random):
    """random() returns the scripted values first, then falls back to the seeded stream."""

    def __init__(self, values, seed=0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def scripted():
    """Factory for a ScriptedRandom with the given leading values."""
    return ScriptedRandom


@pytest.fixture
def engine(settings):
    """A ready engine in the middle of a fresh run."""
    eng = GameEngine(settings=settings, seed=1234)
    eng.mark_ready()
    assert eng.start()
    return eng
