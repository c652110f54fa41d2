"""Async REST client for the GitHub releases and packages endpoints."""

import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import TypeVar

import httpx
import tenacity
from pydantic import BaseModel, ValidationError

from github_releases_mcp.libs.github.config import GitHubConfig
from github_releases_mcp.libs.github.exceptions import (
    GitHubAPIError,
    GitHubAuthenticationError,
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
from github_releases_mcp.type_defs import JsonDict
from github_releases_mcp.user_agent import get_user_agent

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

GITHUB_MEDIA_TYPE = "application/vnd.github+json"
TRANSIENT_STATUS_CODES = frozenset({502, 503, 504})


class GitHubClient:
    """Client for the read-only GitHub REST endpoints used by the release tools.

    Implements both the release source (``list_releases_page``) and the package
    source (``list_organization_packages_page``) consumed by the release
    fetcher. Each call fetches exactly one page; pagination is the caller's job.

    Timeouts, network errors and 502/503/504 responses are retried up to
    ``config.max_retries`` times. Rate-limit responses are raised immediately.
    """

    def __init__(self, config: GitHubConfig):
        """Initialize the GitHub client.

        Args:
            config: Configuration for the GitHub API
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self.retry_policy = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception_type(
                (httpx.TimeoutException, httpx.NetworkError, GitHubTransientError)
            ),
            stop=tenacity.stop_after_attempt(config.max_retries + 1),
            wait=tenacity.wait_exponential(multiplier=1, min=2, max=10),
            reraise=True,
        )
        logger.debug(
            "Initialized GitHub client",
            extra={"base_url": config.base_url, "authenticated": config.authenticated},
        )

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "User-Agent": get_user_agent(),
            "X-GitHub-Api-Version": self.config.api_version,
        }
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    async def __aenter__(self) -> "GitHubClient":
        """Enter async context manager."""
        logger.debug("Opening HTTP client connection")
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self._build_headers(),
            timeout=httpx.Timeout(self.config.timeout),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("HTTP client connection closed")

    async def list_releases_page(
        self, repository: RepositoryRef, page: int, per_page: int
    ) -> list[Release]:
        """Fetch one page of a repository's releases.

        Args:
            repository: The repository to read.
            page: 1-based page number.
            per_page: Page size (GitHub accepts at most 100).

        Returns:
            The releases on that page, in API order. Empty when past the end.

        Raises:
            GitHubNotFoundError: If the repository does not exist or is not visible.
            GitHubAuthenticationError: If the token is rejected.
            GitHubRateLimitError: If the rate limit is exhausted.
            GitHubNetworkError: If the request times out or cannot connect.
            GitHubAPIError: For any other error response or malformed payload.
        """
        path = f"/repos/{repository.owner}/{repository.name}/releases"
        params: dict[str, str | int] = {"page": page, "per_page": per_page}
        items = await self._get_list(path, params, resource="releases")
        return self._parse_items(items, Release, resource="releases")

    async def list_organization_packages_page(
        self,
        org: str,
        page: int,
        per_page: int,
        package_type: PackageType,
        visibility: PackageVisibility | None = None,
    ) -> list[OrganizationPackage]:
        """Fetch one page of the packages published by an organization.

        Args:
            org: Organization login.
            page: 1-based page number.
            per_page: Page size (GitHub accepts at most 100).
            package_type: Package ecosystem to list.
            visibility: Optional visibility filter.

        Returns:
            The packages on that page, in API order.

        Raises:
            Same as :meth:`list_releases_page`.
        """
        path = f"/orgs/{org}/packages"
        params: dict[str, str | int] = {
            "page": page,
            "per_page": per_page,
            "package_type": package_type.value,
        }
        if visibility is not None:
            params["visibility"] = visibility.value
        items = await self._get_list(path, params, resource="packages")
        return self._parse_items(items, OrganizationPackage, resource="packages")

    async def _get_list(
        self, path: str, params: Mapping[str, str | int], *, resource: str
    ) -> list[JsonDict]:
        if not self._client:
            raise GitHubAPIError("Client not initialized. Use async context manager.")

        logger.debug("Requesting GitHub %s", resource, extra={"path": path, "params": dict(params)})

        try:
            response = await self._get_with_retry(path, params)
        except httpx.TimeoutException as e:
            logger.exception("Timeout fetching GitHub %s", resource, extra={"path": path})
            raise GitHubNetworkError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            logger.exception("Network error fetching GitHub %s", resource, extra={"path": path})
            raise GitHubNetworkError(f"Network error: {e}") from e
        except GitHubTransientError as e:
            logger.exception(
                "Transient server error persisted after retries", extra={"path": path}
            )
            raise GitHubAPIError(
                f"Server returned transient error after multiple retries: {e}",
                status_code=e.status_code,
            ) from e

        return self._handle_response(response, resource)

    async def _get_with_retry(
        self, path: str, params: Mapping[str, str | int]
    ) -> httpx.Response:
        if not self._client:
            raise GitHubAPIError("Client not initialized. Use async context manager.")
        async for attempt in self.retry_policy:
            with attempt:
                response = await self._client.get(path, params=params)
                if response.status_code in TRANSIENT_STATUS_CODES:
                    logger.warning(
                        "Transient server error, will retry",
                        extra={"status_code": response.status_code, "path": path},
                    )
                    raise GitHubTransientError(
                        f"Transient server error {response.status_code}",
                        status_code=response.status_code,
                    )
        return response

    def _handle_response(self, response: httpx.Response, resource: str) -> list[JsonDict]:
        """Map error statuses to typed exceptions and return the JSON array.

        A successful response whose body is not a JSON array is treated as an
        empty page.
        """
        status = response.status_code
        if status >= 400:
            message = self._error_message(response)
            summary = f"Error fetching {resource}: {status} {response.reason_phrase}"

            if self._is_rate_limited(response):
                reset_header = response.headers.get("x-ratelimit-reset")
                reset_at = int(reset_header) if reset_header and reset_header.isdigit() else None
                logger.error(
                    "GitHub rate limit exceeded",
                    extra={"status_code": status, "reset_at": reset_at},
                )
                raise GitHubRateLimitError(
                    summary, status_code=status, details=message, reset_at=reset_at
                )
            if status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
                logger.error("Authentication failed", extra={"status_code": status})
                raise GitHubAuthenticationError(summary, status_code=status, details=message)
            if status == HTTPStatus.NOT_FOUND:
                logger.warning("Resource not found", extra={"url": str(response.url)})
                raise GitHubNotFoundError(summary, status_code=status, details=message)

            logger.error(
                "API error",
                extra={"status_code": status, "url": str(response.url), "error": message},
            )
            raise GitHubAPIError(summary, status_code=status, details=message)

        try:
            data = response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Failed to parse {resource} response: {e}") from e

        if not isinstance(data, list):
            logger.warning(
                "Expected a JSON array, treating response as an empty page",
                extra={"resource": resource, "payload_type": type(data).__name__},
            )
            return []
        return data

    @staticmethod
    def _is_rate_limited(response: httpx.Response) -> bool:
        if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
            return True
        return response.status_code == HTTPStatus.FORBIDDEN and (
            response.headers.get("x-ratelimit-remaining") == "0"
            or "retry-after" in response.headers
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:200] or None
        if isinstance(payload, dict):
            message = payload.get("message")
            return str(message) if message else None
        return None

    @staticmethod
    def _parse_items(items: list[JsonDict], model: type[ModelT], *, resource: str) -> list[ModelT]:
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            logger.exception("Failed to parse GitHub %s", resource)
            raise GitHubAPIError(f"Failed to parse {resource} response: {e}") from e

