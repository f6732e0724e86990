import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wordclock.models.state import WordDisplaySettings
from wordclock.services.cycler import VocabularyCycler


def make_tsv(n, prefix="word"):
    rows = [f"{prefix}{i}\tuk{i}\tus{i}\ttrans{i}" for i in range(n)]
    return "\n".join(rows) + "\n"


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def settings():
    return WordDisplaySettings(display_enabled=True)


@pytest.fixture
def clock():
    return FakeClock(1_000)


@pytest.fixture
def make_cycler(settings, clock):
    def _make(buffer=None, seed=0, loader=None):
        if loader is None:
            loader = lambda: buffer
        return VocabularyCycler(settings, loader=loader, clock=clock, seed_source=lambda: seed)
    return _make
