import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from gridsnake import config
from gridsnake.game_loop import GameLoop


class FakeTimer:
    """Stands in for pygame.time.set_timer and remembers every call."""

    def __init__(self):
        self.calls = []
        self.intervals = {}

    def __call__(self, event, millis):
        self.calls.append((event, millis))
        self.intervals[event] = millis


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def make_game(timer):
    def _make(settings=None, seed=0):
        store = config.SettingsStore(settings or config.Settings())
        screen = pygame.Surface(store.get().canvas_size)
        scores = []
        game = GameLoop(store, screen, set_timer=timer, score_sink=scores.append, rng=random.Random(seed))
        game.scores = scores
        game.restart()
        return game
    return _make
