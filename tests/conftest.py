"""Pytest configuration and fixtures."""

import pytest

from quicklink.link_store import LinkStore
from quicklink.service import ShortenerService
from quicklink.shortcode import ShortCodeGenerator
from quicklink.storage.memory import MemoryStorage
from quicklink.common.logging_config import setup_logging


# 2023-11-14T22:13:20.000Z
START_MS = 1_700_000_000_000

TEST_ORIGIN = "https://quick.link"


class FakeClock:
    """Millisecond clock that only moves when told to."""
    
    def __init__(self, start_ms: int = START_MS):
        self.now = start_ms
    
    def __call__(self) -> int:
        return self.now
    
    def advance(self, minutes: float = 0, seconds: float = 0, ms: int = 0) -> None:
        self.now += int(minutes * 60_000 + seconds * 1000 + ms)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def storage(logger):
    """Create an empty in-memory storage."""
    return MemoryStorage(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def store(storage, short_code_generator, clock, logger):
    """Create link store over the in-memory storage."""
    return LinkStore(
        storage=storage,
        origin=TEST_ORIGIN,
        generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def service(store, logger):
    """Create service instance."""
    return ShortenerService(store=store, logger=logger)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
