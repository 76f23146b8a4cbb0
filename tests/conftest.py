"""Shared fixtures."""

import pytest


class ScriptedRng:
    """Stands in for ``numpy.random.Generator``, replaying fixed integers."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def integers(self, low, high):
        value = self.values.pop(0)
        assert low <= value < high
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRng
