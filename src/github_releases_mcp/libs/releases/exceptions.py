"""Exceptions raised by release queries."""


class ReleaseError(Exception):
    """Base exception for all release query errors."""

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


class InvalidVersionError(ReleaseError, ValueError):
    """A version supplied by the caller does not resolve to a semantic version.

    Raised before anything is fetched.
    """

    def __init__(self, value: str, parameter: str = "version") -> None:
        """Initialize the error.

        Args:
            value: The raw version string that failed to normalize.
            parameter: Name of the query parameter that carried it.
        """
        self.value = value
        self.parameter = parameter
        super().__init__(f"Invalid version format for {parameter}: {value!r}")


class ReleaseFetchError(ReleaseError):
    """The release collection could not be retrieved.

    A failed page aborts the whole fetch; the underlying error is chained as
    ``__cause__`` and its message is included in this one.
    """

    def __init__(self, message: str, page: int | None = None, details: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: The main error message.
            page: The page number whose request failed, if known.
            details: Optional additional details about the error.
        """
        self.page = page
        super().__init__(message, details)
