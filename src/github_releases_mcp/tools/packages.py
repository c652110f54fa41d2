"""Tools for discovering the packages published by a GitHub organization."""

import logging
from textwrap import dedent
from typing import Final

from pydantic import TypeAdapter

from github_releases_mcp.libs.github import (
    GitHubClientError,
    OrganizationPackage,
    PackageType,
    PackageVisibility,
)
from github_releases_mcp.libs.releases import (
    ReleaseError,
    ReleaseFetchError,
    fetch_all_organization_packages,
)
from github_releases_mcp.tools.github_utils import get_github_client

logger = logging.getLogger(__name__)

_PACKAGES_ADAPTER: Final = TypeAdapter(list[OrganizationPackage])

LIST_ORGANIZATION_PACKAGES_DESCRIPTION: Final[str] = dedent(
    """
    List the packages published by a GitHub organization.

    Args:
        org: GitHub organization login.
        package_type: Package ecosystem, one of: npm, maven, rubygems, docker,
                      nuget, container.
        visibility: Optional visibility filter, one of: public, private,
                    internal. Listing private or internal packages requires a
                    token with the read:packages scope.

    Returns:
        JSON array of packages (id, name, package_type, visibility, html_url,
        version_count, created_at, updated_at); empty if none match.

    Raises:
        ValueError: If org is empty or package_type/visibility are invalid.
        ReleaseFetchError: If the packages could not be retrieved from GitHub.
    """
).strip()


async def github_organization_packages(
    org: str, package_type: str, visibility: str | None = None
) -> str:
    """List all packages of an organization.

    Returns:
        JSON array of packages.
    """
    try:
        if not org or not org.strip():
            raise ValueError("org cannot be empty")

        try:
            package_type_enum = PackageType(package_type.strip().lower())
        except ValueError:
            valid_types = [t.value for t in PackageType]
            raise ValueError(f"package_type must be one of: {valid_types}") from None

        visibility_enum: PackageVisibility | None = None
        if visibility:
            try:
                visibility_enum = PackageVisibility(visibility.strip().lower())
            except ValueError:
                valid_visibilities = [v.value for v in PackageVisibility]
                raise ValueError(f"visibility must be one of: {valid_visibilities}") from None

        client = get_github_client()
        async with client:
            packages = await fetch_all_organization_packages(
                client, org.strip(), package_type_enum, visibility_enum
            )

        return _PACKAGES_ADAPTER.dump_json(packages, indent=2).decode()

    except ValueError:
        logger.warning("Invalid parameters for github_organization_packages", exc_info=True)
        raise
    except (ReleaseFetchError, GitHubClientError):
        logger.exception("Error listing organization packages")
        raise
    except Exception as exc:
        logger.exception("Unexpected error listing organization packages")
        raise ReleaseError(f"Failed to list packages of organization {org}") from exc
