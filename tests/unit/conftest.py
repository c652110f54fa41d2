"""Pytest configuration and shared fixtures for the github-releases-mcp unit tests."""

import os
from collections.abc import Generator

import pytest

from github_releases_mcp.config import ENV_PREFIX, LEGACY_GITHUB_TOKEN_ENV, get_settings
from github_releases_mcp.libs.github.models import RepositoryRef


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove configuration variables and the settings cache for the test's duration."""
    original_env = os.environ.copy()
    for var in list(os.environ):
        if var.startswith(ENV_PREFIX) or var == LEGACY_GITHUB_TOKEN_ENV:
            del os.environ[var]
    get_settings.cache_clear()

    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(original_env)
        get_settings.cache_clear()


@pytest.fixture
def repository() -> RepositoryRef:
    """The repository used throughout the release tests."""
    return RepositoryRef(owner="withastro", name="astro")
