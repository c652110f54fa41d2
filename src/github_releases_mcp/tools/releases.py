"""Tools for querying the releases of a GitHub repository."""

import json
import logging
from textwrap import dedent
from typing import Final

from pydantic import TypeAdapter, ValidationError

from github_releases_mcp.libs.github import (
    GitHubClientError,
    Release,
    RepositoryRef,
)
from github_releases_mcp.libs.releases import (
    ReleaseError,
    ReleaseFetchError,
    ReleaseResolver,
)
from github_releases_mcp.tools.github_utils import get_github_client

logger = logging.getLogger(__name__)

_RELEASES_ADAPTER: Final = TypeAdapter(list[Release])

VERSION_FORMATS: Final[str] = "v1.0.0, 1.0.0, @1.0.0 or package@1.0.0"

# Tool description constants
GET_RELEASE_INFO_DESCRIPTION: Final[str] = dedent(
    f"""
    Get detailed information about a specific GitHub release version.

    Versions are matched by semantic-version precedence, so any of the formats
    {VERSION_FORMATS} finds the same release. In monorepos that tag releases as
    "@scope/name@1.0.0" or "name@1.0.0", pass package_name to pick the package.

    Args:
        owner: GitHub repository owner.
        repo: GitHub repository name.
        version: The version to look up.
        package_name: Optional package key (e.g. "@astrojs/vue"); releases
                      without a package prefix belong to "default".

    Returns:
        The release in JSON format (tag_name, name, published_at, body,
        prerelease, html_url), or null if no release matches.

    Raises:
        ValueError: If owner/repo are invalid or the version cannot be parsed.
        ReleaseFetchError: If the releases could not be retrieved from GitHub.
    """
).strip()

COMPARE_RELEASES_DESCRIPTION: Final[str] = dedent(
    f"""
    Compare two GitHub release versions by returning every release between them.

    Returns all releases whose version lies between from_version and to_version
    (both inclusive), sorted from oldest to newest version, with their full
    release notes. Useful for changelogs and migration guides. Tags that are not
    semantic versions are ignored. Supported formats: {VERSION_FORMATS}.

    Args:
        owner: GitHub repository owner.
        repo: GitHub repository name.
        from_version: Lower bound version.
        to_version: Upper bound version.
        package_name: Optional package key to restrict a monorepo to one package.

    Returns:
        JSON array of releases in ascending version order; empty if none match.

    Raises:
        ValueError: If owner/repo are invalid or either version cannot be parsed.
        ReleaseFetchError: If the releases could not be retrieved from GitHub.
    """
).strip()

LIST_RELEASES_DESCRIPTION: Final[str] = dedent(
    """
    List the GitHub releases of a repository, newest first as returned by GitHub.

    Args:
        owner: GitHub repository owner.
        repo: GitHub repository name.
        limit: Maximum number of releases to return (default: all; 0 or less
               also means all).
        include_prereleases: Include releases flagged as pre-release
                             (default: false).
        package_name: Optional package key to restrict a monorepo to one package.

    Returns:
        JSON array of releases; empty if the repository has none.

    Raises:
        ValueError: If owner/repo are invalid.
        ReleaseFetchError: If the releases could not be retrieved from GitHub.
    """
).strip()

LIST_RELEASE_PACKAGES_DESCRIPTION: Final[str] = dedent(
    """
    Discover the packages released from a repository.

    Monorepos tag releases per package ("@scope/name@1.0.0", "name@1.0.0").
    This tool returns the distinct package keys found in release tags (or
    release names when the tag carries none), in the order GitHub lists them.
    Releases without a package prefix are reported as "default".

    Args:
        owner: GitHub repository owner.
        repo: GitHub repository name.

    Returns:
        JSON array of package keys, usable as package_name in the other
        release tools.

    Raises:
        ValueError: If owner/repo are invalid.
        ReleaseFetchError: If the releases could not be retrieved from GitHub.
    """
).strip()


def _repository(owner: str, repo: str) -> RepositoryRef:
    try:
        return RepositoryRef(owner=owner, name=repo)
    except ValidationError as e:
        messages = "; ".join(str(error["msg"]) for error in e.errors())
        raise ValueError(f"Invalid repository {owner!r}/{repo!r}: {messages}") from None


def _package_filter(package_name: str | None) -> str | None:
    if package_name is None or not package_name.strip():
        return None
    return package_name.strip()


async def github_release_info(
    owner: str, repo: str, version: str, package_name: str | None = None
) -> str:
    """Get the release matching a version.

    Returns:
        Release JSON, or JSON null if no release matches.
    """
    try:
        repository = _repository(owner, repo)

        client = get_github_client()
        async with client:
            release = await ReleaseResolver(client).get_release(
                repository, version, package=_package_filter(package_name)
            )

        if release is None:
            return json.dumps(None, indent=2)
        return release.model_dump_json(indent=2)

    except ValueError:
        logger.warning("Invalid parameters for github_release_info", exc_info=True)
        raise
    except (ReleaseFetchError, GitHubClientError):
        logger.exception("Error fetching release info")
        raise
    except Exception as exc:
        logger.exception("Unexpected error fetching release info")
        raise ReleaseError(f"Failed to get release {version} of {owner}/{repo}") from exc


async def github_releases_compare(
    owner: str,
    repo: str,
    from_version: str,
    to_version: str,
    package_name: str | None = None,
) -> str:
    """Get all releases between two versions, inclusive, in ascending order.

    Returns:
        JSON array of releases.
    """
    try:
        repository = _repository(owner, repo)

        client = get_github_client()
        async with client:
            releases = await ReleaseResolver(client).get_releases_between(
                repository, from_version, to_version, package=_package_filter(package_name)
            )

        return _RELEASES_ADAPTER.dump_json(releases, indent=2).decode()

    except ValueError:
        logger.warning("Invalid parameters for github_releases_compare", exc_info=True)
        raise
    except (ReleaseFetchError, GitHubClientError):
        logger.exception("Error comparing releases")
        raise
    except Exception as exc:
        logger.exception("Unexpected error comparing releases")
        raise ReleaseError(
            f"Failed to compare releases {from_version}..{to_version} of {owner}/{repo}"
        ) from exc


async def github_releases_list(
    owner: str,
    repo: str,
    limit: int | None = None,
    include_prereleases: bool = False,
    package_name: str | None = None,
) -> str:
    """List releases in GitHub order with optional filtering.

    Returns:
        JSON array of releases.
    """
    try:
        repository = _repository(owner, repo)

        client = get_github_client()
        async with client:
            releases = await ReleaseResolver(client).list_releases(
                repository,
                package=_package_filter(package_name),
                include_prereleases=include_prereleases,
                limit=limit,
            )

        return _RELEASES_ADAPTER.dump_json(releases, indent=2).decode()

    except ValueError:
        logger.warning("Invalid parameters for github_releases_list", exc_info=True)
        raise
    except (ReleaseFetchError, GitHubClientError):
        logger.exception("Error listing releases")
        raise
    except Exception as exc:
        logger.exception("Unexpected error listing releases")
        raise ReleaseError(f"Failed to list releases of {owner}/{repo}") from exc


async def github_release_packages(owner: str, repo: str) -> str:
    """List the distinct package keys found in a repository's releases.

    Returns:
        JSON array of package keys.
    """
    try:
        repository = _repository(owner, repo)

        client = get_github_client()
        async with client:
            packages = await ReleaseResolver(client).list_packages(repository)

        return json.dumps(packages, indent=2)

    except ValueError:
        logger.warning("Invalid parameters for github_release_packages", exc_info=True)
        raise
    except (ReleaseFetchError, GitHubClientError):
        logger.exception("Error discovering release packages")
        raise
    except Exception as exc:
        logger.exception("Unexpected error discovering release packages")
        raise ReleaseError(f"Failed to list packages of {owner}/{repo}") from exc
