"""GitHub client construction shared by the release and package tools."""

from github_releases_mcp.config import Settings, get_settings
from github_releases_mcp.libs.github import GitHubClient, GitHubConfig


def github_config_from_settings(settings: Settings) -> GitHubConfig:
    """Map application settings onto the GitHub client configuration."""
    return GitHubConfig(
        base_url=settings.github_api_base_url,
        api_token=settings.github_token,
        api_version=settings.github_api_version,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
    )


def get_github_client() -> GitHubClient:
    """Get a GitHubClient configured from the application settings.

    Raises:
        RuntimeError: If settings are not properly configured.
    """
    try:
        settings = get_settings()
    except Exception as e:
        raise RuntimeError(
            f"Settings not initialized. Please check your environment configuration. Error: {e}"
        ) from e

    return GitHubClient(github_config_from_settings(settings))
