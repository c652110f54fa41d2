"""User-Agent header value for GitHub API requests.

GitHub rejects API requests without a User-Agent, so every request carries
``github-releases-mcp (version <version>)``.
"""

import logging
from functools import cache
from typing import Final

logger = logging.getLogger(__name__)

USER_AGENT_PRODUCT: Final[str] = "github-releases-mcp"


@cache
def get_version() -> str:
    """Return the package version, or "unknown" if it cannot be determined."""
    try:
        from github_releases_mcp import __version__

        return __version__
    except (ImportError, AttributeError):
        logger.debug("Could not retrieve __version__ from github_releases_mcp package")
        return "unknown"


@cache
def get_user_agent() -> str:
    """Construct the User-Agent header value."""
    user_agent = f"{USER_AGENT_PRODUCT} (version {get_version()})"
    logger.debug("Built User-Agent string", extra={"user_agent": user_agent})
    return user_agent
