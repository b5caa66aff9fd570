"""Root conftest: shared test configuration."""

import os

import pytest

from pdfsmith.config import get_settings

# Ensure tests never reach a real log store
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")


@pytest.fixture
def clear_settings_cache():
    """Drop the cached Settings before and after the test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """URL of a fresh file-backed SQLite log store."""
    return f"sqlite+aiosqlite:///{tmp_path / 'logs.db'}"


@pytest.fixture
def unreachable_url(tmp_path) -> str:
    """URL whose parent directory does not exist: every connect fails."""
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'logs.db'}"
