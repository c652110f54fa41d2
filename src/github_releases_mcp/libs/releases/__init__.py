"""Release resolution: version normalization, package scoping and queries."""

from github_releases_mcp.libs.releases.exceptions import (
    InvalidVersionError,
    ReleaseError,
    ReleaseFetchError,
)
from github_releases_mcp.libs.releases.fetcher import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PackageSource,
    ReleaseSource,
    fetch_all_organization_packages,
    fetch_all_pages,
    fetch_all_releases,
)
from github_releases_mcp.libs.releases.packages import DEFAULT_PACKAGE, extract_package_name
from github_releases_mcp.libs.releases.resolver import ReleaseResolver, release_version
from github_releases_mcp.libs.releases.versioning import normalize_version

__all__ = [
    "DEFAULT_PACKAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "InvalidVersionError",
    "PackageSource",
    "ReleaseError",
    "ReleaseFetchError",
    "ReleaseResolver",
    "ReleaseSource",
    "extract_package_name",
    "fetch_all_organization_packages",
    "fetch_all_pages",
    "fetch_all_releases",
    "normalize_version",
    "release_version",
]
