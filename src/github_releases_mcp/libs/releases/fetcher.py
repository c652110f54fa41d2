"""Page-number pagination over remote collections.

GitHub list endpoints return at most 100 items per page and do not report a
total, so the loop keeps requesting pages for as long as full pages come back.
Pages are requested strictly one after another because the decision to ask for
page N+1 depends on the size of page N.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Final, Protocol, TypeVar

from github_releases_mcp.libs.github.models import (
    OrganizationPackage,
    PackageType,
    PackageVisibility,
    Release,
    RepositoryRef,
)
from github_releases_mcp.libs.releases.exceptions import ReleaseFetchError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_PAGE_SIZE: Final[int] = 100
DEFAULT_PAGE_SIZE: Final[int] = MAX_PAGE_SIZE


class ReleaseSource(Protocol):
    """Anything that can return one page of a repository's releases."""

    async def list_releases_page(
        self, repository: RepositoryRef, page: int, per_page: int
    ) -> Sequence[Release]: ...


class PackageSource(Protocol):
    """Anything that can return one page of an organization's packages."""

    async def list_organization_packages_page(
        self,
        org: str,
        page: int,
        per_page: int,
        package_type: PackageType,
        visibility: PackageVisibility | None = None,
    ) -> Sequence[OrganizationPackage]: ...


async def fetch_all_pages(
    fetch_page: Callable[[int, int], Awaitable[Sequence[T]]],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    description: str = "items",
) -> list[T]:
    """Collect every item by calling ``fetch_page(page, page_size)`` from page 1.

    Stops after the first page holding fewer than *page_size* items (an empty
    page included). Items are returned in the order the pages delivered them;
    nothing is deduplicated.

    Args:
        fetch_page: Coroutine function taking ``(page, per_page)``.
        page_size: Items requested per page, between 1 and 100.
        description: What is being fetched, used in error messages.

    Returns:
        All items across all pages.

    Raises:
        ValueError: If page_size is out of range.
        ReleaseFetchError: If any page request fails. No partial result is
            returned and nothing is retried at this level.
    """
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    items: list[T] = []
    page = 1
    while True:
        try:
            batch = await fetch_page(page, page_size)
        except Exception as e:
            logger.exception(
                "Failed to fetch page", extra={"description": description, "page": page}
            )
            raise ReleaseFetchError(
                f"Failed to fetch {description} from GitHub: {e}", page=page
            ) from e

        items.extend(batch)
        logger.debug(
            "Fetched page",
            extra={"description": description, "page": page, "page_items": len(batch)},
        )

        if len(batch) < page_size:
            break
        page += 1

    logger.debug(
        "Fetched complete collection",
        extra={"description": description, "pages": page, "total_items": len(items)},
    )
    return items


async def fetch_all_releases(
    source: ReleaseSource,
    repository: RepositoryRef,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Release]:
    """Return every release of *repository*, in the source's order.

    Raises:
        ReleaseFetchError: If any page request fails.
    """

    async def fetch_page(page: int, per_page: int) -> Sequence[Release]:
        return await source.list_releases_page(repository, page, per_page)

    return await fetch_all_pages(
        fetch_page, page_size=page_size, description=f"releases of {repository.full_name}"
    )


async def fetch_all_organization_packages(
    source: PackageSource,
    org: str,
    package_type: PackageType,
    visibility: PackageVisibility | None = None,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[OrganizationPackage]:
    """Return every package of *org* matching the type and visibility filters.

    Raises:
        ReleaseFetchError: If any page request fails.
    """

    async def fetch_page(page: int, per_page: int) -> Sequence[OrganizationPackage]:
        return await source.list_organization_packages_page(
            org, page, per_page, package_type, visibility
        )

    return await fetch_all_pages(
        fetch_page, page_size=page_size, description=f"packages of {org}"
    )
