import pytest

from paudle import create_app
from paudle.config import TestingConfig
from paudle.exceptions import StorageError
from paudle.services.storage import MemoryStore
from paudle.services.word_source import WordSource
from paudle.utils.game_logger import configure_game_logger

TEST_WORDS = [
    "pause", "crane", "speed", "erase", "allay", "equal",
    "eerie", "house", "mouse", "pulse", "spice", "paper",
]


class FixedWordSource(WordSource):
    """Accepts the test words but always picks the same secret."""

    def __init__(self, words, secret):
        super().__init__(words)
        self.secret = secret
        self.seeds = []

    def choose_secret_word(self, seed=None):
        self.seeds.append(seed)
        return self.secret


class BrokenStore(MemoryStore):
    """Store whose writes always fail."""

    def set(self, key, value):
        raise StorageError("disk full")


class FlakyStore(MemoryStore):
    """Store whose reads of chosen keys fail until ``failing`` is cleared."""

    def __init__(self):
        super().__init__()
        self.failing = set()

    def get(self, key):
        if key in self.failing:
            raise StorageError("timeout")
        return super().get(key)


@pytest.fixture(autouse=True)
def game_logger(tmp_path):
    return configure_game_logger(str(tmp_path / "logs"))


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def word_source():
    return FixedWordSource(TEST_WORDS, "pause")


@pytest.fixture
def app(tmp_path, store, word_source):
    class LocalTestingConfig(TestingConfig):
        LOG_DIR = str(tmp_path / "logs")

    return create_app(LocalTestingConfig, store=store, word_source=word_source)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fixed_words():
    """Factory for word sources with a chosen secret."""
    def make(secret, words=TEST_WORDS):
        return FixedWordSource(words, secret)
    return make


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()
