"""Pytest configuration and fixtures."""

import logging
from collections.abc import Iterator

import pytest

from libpixel.client import Client
from libpixel.common.settings import Settings, get_settings

TEST_HOST = "test.libpx.com"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate tests from LIBPIXEL_* variables, local .env files and logging config."""
    for name in ("HOST", "HTTPS", "SECRET", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"LIBPIXEL_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger = logging.getLogger("libpixel")
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def client() -> Client:
    """Signing client used by most tests."""
    return Client(host=TEST_HOST, https=False, secret="LibPixel")


@pytest.fixture
def unsigned_client() -> Client:
    """Client without a secret."""
    return Client(host=TEST_HOST)


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        host=TEST_HOST,
        https=True,
        secret="LibPixel",
    )
