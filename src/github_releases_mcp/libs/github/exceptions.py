"""Exceptions for GitHub REST API operations."""


class GitHubError(Exception):
    """Base exception for all GitHub client errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: The main error message.
            details: Optional additional details about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        """Return a string representation of the error."""
        if self.details:
            return f"{self.message}. Details: {self.details}"
        return self.message


class GitHubClientError(GitHubError):
    """HTTP/network-related errors when communicating with the GitHub API."""

    def __init__(
        self, message: str, status_code: int | None = None, details: str | None = None
    ) -> None:
        """Initialize the client error.

        Args:
            message: The main error message.
            status_code: HTTP status code if applicable.
            details: Optional additional details about the error.
        """
        self.status_code = status_code
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return a string representation of the error."""
        base_message = self.message
        if self.status_code:
            base_message = f"{base_message} (HTTP {self.status_code})"
        if self.details:
            base_message = f"{base_message}. Details: {self.details}"
        return base_message


class GitHubNotFoundError(GitHubClientError):
    """The repository or organization does not exist or is not visible."""

    pass


class GitHubAuthenticationError(GitHubClientError):
    """The token was rejected."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """The API rate limit is exhausted.

    Never retried: the failure is surfaced with the reset time when GitHub
    provides one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: str | None = None,
        reset_at: int | None = None,
    ) -> None:
        """Initialize the rate limit error.

        Args:
            message: The main error message.
            status_code: HTTP status code.
            details: Optional additional details about the error.
            reset_at: UNIX timestamp at which the rate limit resets, if known.
        """
        self.reset_at = reset_at
        super().__init__(message, status_code, details)


class GitHubAPIError(GitHubClientError):
    """The API returned an error or an unusable payload."""

    pass


class GitHubNetworkError(GitHubClientError):
    """Timeouts and connection failures."""

    pass


class GitHubTransientError(GitHubClientError):
    """HTTP 502, 503 or 504 from the API; retried by the client."""

    pass
