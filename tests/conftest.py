import importlib.util
import os
import random

import pytest

from lotto_ai.stats import DrawRecord

SCRIPTS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts")


def load_script(name):
    """Import a module from scripts/ by file path."""
    spec = importlib.util.spec_from_file_location(name, os.path.join(SCRIPTS_DIR, f"{name}.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def make_draws(count, seed=7, max_number=37, strong_max=7):
    """Random valid draws, newest first (highest sequence id first)."""
    rng = random.Random(seed)
    draws = []
    for seq in range(count, 0, -1):
        main = tuple(rng.sample(range(1, max_number + 1), 6))
        draws.append(DrawRecord(seq, main, rng.randint(1, strong_max), f"2024-01-{seq % 28 + 1:02d}"))
    return draws


@pytest.fixture
def scenario_draws():
    return [
        DrawRecord(3, (1, 2, 3, 4, 5, 6), 1, "2024-03-03"),
        DrawRecord(2, (1, 2, 7, 8, 9, 10), 2, "2024-03-02"),
        DrawRecord(1, (1, 11, 12, 13, 14, 15), 2, "2024-03-01"),
    ]


@pytest.fixture
def history():
    return make_draws(250)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    """Records calls and replays queued responses (or raises queued exceptions)."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)
