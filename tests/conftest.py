"""
Test configuration and fixtures for the search query package.

This module provides pytest fixtures and configuration for testing.
"""

import sys
from pathlib import Path
from typing import Dict, Generator

import pytest

# Add the repository root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fulltext_query.config.config import QueryConfig, get_query_config, set_query_config


@pytest.fixture(autouse=True)
def restore_query_config() -> Generator[QueryConfig, None, None]:
    """Restore the process-wide query configuration after each test."""
    original = get_query_config()
    yield original
    set_query_config(original)


@pytest.fixture
def query_config() -> QueryConfig:
    """Provide a query configuration with a non-default page size."""
    return QueryConfig(default_page_size=25)


@pytest.fixture
def test_env_vars(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """Set up test environment variables."""
    env_vars = {
        "FULLTEXT_QUERY_DEFAULT_PAGE_SIZE": "20",
        "FULLTEXT_QUERY_LOGGING_LEVEL": "DEBUG",
        "FULLTEXT_QUERY_DEBUG": "true",
        "FULLTEXT_QUERY_ENVIRONMENT": "test",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars
