"""GitHub REST API client library."""

from github_releases_mcp.libs.github.client import GitHubClient
from github_releases_mcp.libs.github.config import GitHubConfig
from github_releases_mcp.libs.github.exceptions import (
    GitHubAPIError,
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubError,
    GitHubNetworkError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubTransientError,
)
from github_releases_mcp.libs.github.models import (
    OrganizationPackage,
    PackageType,
    PackageVisibility,
    Release,
    RepositoryRef,
)

__all__ = [
    "GitHubAPIError",
    "GitHubAuthenticationError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubConfig",
    "GitHubError",
    "GitHubNetworkError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubTransientError",
    "OrganizationPackage",
    "PackageType",
    "PackageVisibility",
    "Release",
    "RepositoryRef",
]
