import pytest
from darkhorse import services
from darkhorse.db.store import MemoryStore


class FixedRandom:
    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture(autouse=True)
def _no_pending(monkeypatch):
    monkeypatch.setattr(services, '_pending', False)
