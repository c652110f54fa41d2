"""Release queries over a repository's complete release collection.

Every query fetches the full collection afresh (nothing is cached between
queries), then normalizes tags and derives package keys per release before
filtering. Version parameters supplied by the caller are validated before any
request is made.
"""

import logging
from collections.abc import Iterable

from semver import Version

from github_releases_mcp.libs.github.models import Release, RepositoryRef
from github_releases_mcp.libs.releases.exceptions import InvalidVersionError
from github_releases_mcp.libs.releases.fetcher import (
    DEFAULT_PAGE_SIZE,
    ReleaseSource,
    fetch_all_releases,
)
from github_releases_mcp.libs.releases.packages import extract_package_name
from github_releases_mcp.libs.releases.versioning import normalize_version

logger = logging.getLogger(__name__)


def require_version(value: str, parameter: str = "version") -> Version:
    """Normalize a caller-supplied version or raise :class:`InvalidVersionError`."""
    version = normalize_version(value)
    if version is None:
        raise InvalidVersionError(value, parameter)
    return version


def release_version(release: Release) -> Version | None:
    """The normalized version of a release's tag, or None if it has none."""
    return normalize_version(release.tag_name)


def _in_package(release: Release, package: str | None) -> bool:
    return package is None or extract_package_name(release) == package


def _versioned(
    releases: Iterable[Release], package: str | None
) -> Iterable[tuple[Version, Release]]:
    """Yield ``(version, release)`` for releases in *package* with a resolvable tag."""
    for release in releases:
        version = release_version(release)
        if version is not None and _in_package(release, package):
            yield version, release


class ReleaseResolver:
    """Answers point, range, listing and package queries for a repository.

    Args:
        source: The release source collaborator, typically a ``GitHubClient``
            that is already inside its ``async with`` block.
        page_size: Releases requested per page.
    """

    def __init__(self, source: ReleaseSource, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.source = source
        self.page_size = page_size

    async def _fetch(self, repository: RepositoryRef) -> list[Release]:
        return await fetch_all_releases(self.source, repository, page_size=self.page_size)

    async def get_release(
        self, repository: RepositoryRef, version: str, package: str | None = None
    ) -> Release | None:
        """Find the release whose tag resolves to *version*.

        Versions are compared by semantic-version precedence, so ``v1.2.0``,
        ``1.2.0`` and ``pkg@1.2.0`` all match ``1.2.0``.

        Args:
            repository: Repository to search.
            version: Target version in any supported tag format.
            package: Only consider releases with this package key.

        Returns:
            The first matching release in collection order, or None.

        Raises:
            InvalidVersionError: If *version* does not normalize.
            ReleaseFetchError: If the release collection cannot be retrieved.
        """
        target = require_version(version, "version")
        releases = await self._fetch(repository)

        for candidate, release in _versioned(releases, package):
            if candidate == target:
                logger.debug(
                    "Matched release",
                    extra={"repository": repository.full_name, "tag_name": release.tag_name},
                )
                return release

        logger.debug(
            "No release matched",
            extra={"repository": repository.full_name, "version": str(target), "package": package},
        )
        return None

    async def get_releases_between(
        self,
        repository: RepositoryRef,
        from_version: str,
        to_version: str,
        package: str | None = None,
    ) -> list[Release]:
        """Return releases with ``from_version <= version <= to_version``.

        Releases whose tags do not normalize are skipped. The result is sorted
        ascending by version; releases with equal versions keep their
        collection order.

        Raises:
            InvalidVersionError: If either bound does not normalize; the error
                names the failing bound.
            ReleaseFetchError: If the release collection cannot be retrieved.
        """
        lower = require_version(from_version, "from_version")
        upper = require_version(to_version, "to_version")
        releases = await self._fetch(repository)

        in_range = [
            (version, release)
            for version, release in _versioned(releases, package)
            if lower <= version <= upper
        ]
        in_range.sort(key=lambda pair: pair[0])

        logger.debug(
            "Resolved release range",
            extra={
                "repository": repository.full_name,
                "from_version": str(lower),
                "to_version": str(upper),
                "matched": len(in_range),
            },
        )
        return [release for _, release in in_range]

    async def list_releases(
        self,
        repository: RepositoryRef,
        package: str | None = None,
        include_prereleases: bool = False,
        limit: int | None = None,
    ) -> list[Release]:
        """List releases in collection order.

        Filters by package first, then drops pre-releases unless
        *include_prereleases*, then keeps the first *limit* entries. A limit of
        None, zero or less means no limit. Releases are listed whether or not
        their tags normalize.

        Raises:
            ReleaseFetchError: If the release collection cannot be retrieved.
        """
        releases = await self._fetch(repository)

        selected = [
            release
            for release in releases
            if _in_package(release, package) and (include_prereleases or not release.prerelease)
        ]
        if limit is not None and limit > 0:
            selected = selected[:limit]
        return selected

    async def list_packages(self, repository: RepositoryRef) -> list[str]:
        """Return the distinct package keys of a repository in first-seen order.

        Raises:
            ReleaseFetchError: If the release collection cannot be retrieved.
        """
        releases = await self._fetch(repository)
        return list(dict.fromkeys(extract_package_name(release) for release in releases))
