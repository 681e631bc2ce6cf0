"""Shared fixtures. Real-time tests run only with --realtime."""

from datetime import datetime, timedelta

import pytest


def pytest_addoption(parser):
    parser.addoption("--realtime", action="store_true", default=False,
                     help="run tests that wait on real timer threads")


@pytest.fixture
def realtime_required(request):
    if not request.config.getoption("--realtime"):
        pytest.skip("requires --realtime flag")


class ScriptedRng:
    """
    Drop-in for numpy.random.Generator that hands out queued values.
    When a queue runs dry: integers -> low, random -> 0.99, poisson -> 0,
    choice -> the first `size` indices.
    """

    def __init__(self, ints=(), randoms=(), poissons=()):
        self.ints = list(ints)
        self.randoms = list(randoms)
        self.poissons = list(poissons)

    def integers(self, low, high=None):
        return self.ints.pop(0) if self.ints else low

    def random(self):
        return self.randoms.pop(0) if self.randoms else 0.99

    def poisson(self, lam):
        return self.poissons.pop(0) if self.poissons else 0

    def choice(self, n, size=None, replace=True):
        return list(range(size or 1))


class FakeNow:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start=datetime(2025, 4, 20, 10, 0, 0)):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)

    def set(self, when):
        self.current = when


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def fake_now():
    return FakeNow()
