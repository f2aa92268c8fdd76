"""Pytest fixtures for securerand tests."""
import pytest

from securerand.errors import EntropySourceError
from securerand.logic.rng import SecureRandomSource


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large statistical samples)"
    )


class ScriptedSource(SecureRandomSource):
    """Source that replays a fixed list of byte strings."""

    def __init__(self, chunks: list[bytes]):
        self._chunks = list(chunks)
        self.requests: list[int] = []

    def random_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        if not self._chunks:
            raise AssertionError("ScriptedSource exhausted")
        return self._chunks.pop(0)


class FailingSource(SecureRandomSource):
    """Source whose provider is always unavailable."""

    def __init__(self):
        self.calls = 0

    def random_bytes(self, n: int) -> bytes:
        self.calls += 1
        raise EntropySourceError("entropy device unavailable")


@pytest.fixture
def scripted_source():
    """Factory for ScriptedSource instances."""
    return ScriptedSource


@pytest.fixture
def failing_source():
    return FailingSource()
