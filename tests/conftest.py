"""Shared fixtures for propgen tests."""

import pytest


class FixedSource:
    """A random source that always returns the same double."""

    def __init__(self, value):
        self.value = value

    def next_double(self):
        return self.value


@pytest.fixture
def fixed_source():
    """Factory for random sources pinned to one double.

    0.99 draws the top of any range, 0.0 the bottom.
    """
    return FixedSource
