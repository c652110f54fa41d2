"""Application configuration management using Pydantic Settings.

This module provides centralized configuration management for the MCP server,
loading and validating settings from environment variables. The settings are
built once per process by :func:`get_settings` and handed explicitly to the
GitHub client at the tool boundary; the release resolution code never reads the
environment itself.
"""

import logging
from functools import lru_cache
from typing import ClassVar, Final, Literal
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Environment variable prefix constants
ENV_PREFIX_NAME: Final[str] = "GITHUB_RELEASES_MCP"
ENV_PREFIX_DELIMITER: Final[str] = "_"
ENV_PREFIX: Final[str] = f"{ENV_PREFIX_NAME}{ENV_PREFIX_DELIMITER}"

# Environment variable name constants - dynamically generated from prefix
GITHUB_TOKEN_ENV: Final[str] = f"{ENV_PREFIX}GITHUB_TOKEN"
LEGACY_GITHUB_TOKEN_ENV: Final[str] = "GITHUB_PERSONAL_ACCESS_TOKEN"
GITHUB_API_BASE_URL_ENV: Final[str] = f"{ENV_PREFIX}GITHUB_API_BASE_URL"
GITHUB_API_VERSION_ENV: Final[str] = f"{ENV_PREFIX}GITHUB_API_VERSION"
HTTP_TIMEOUT_ENV: Final[str] = f"{ENV_PREFIX}HTTP_TIMEOUT"
HTTP_MAX_RETRIES_ENV: Final[str] = f"{ENV_PREFIX}HTTP_MAX_RETRIES"
ENVIRONMENT_ENV: Final[str] = f"{ENV_PREFIX}ENV"
LOGFIRE_TOKEN_ENV: Final[str] = f"{ENV_PREFIX}LOGFIRE_TOKEN"
STATELESS_HTTP_ENV: Final[str] = f"{ENV_PREFIX}STATELESS_HTTP"
TRANSPORT_MODE_ENV: Final[str] = f"{ENV_PREFIX}TRANSPORT_MODE"

DEFAULT_GITHUB_API_BASE_URL: Final[str] = "https://api.github.com"
DEFAULT_GITHUB_API_VERSION: Final[str] = "2022-11-28"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub API Configuration
    github_token: str | None = Field(
        default=None,
        description="Optional GitHub personal access token (raises the API rate limit)",
        validation_alias=AliasChoices(GITHUB_TOKEN_ENV, LEGACY_GITHUB_TOKEN_ENV),
    )

    github_api_base_url: str = Field(
        default=DEFAULT_GITHUB_API_BASE_URL,
        description="Base URL of the GitHub REST API",
        validation_alias=GITHUB_API_BASE_URL_ENV,
    )

    github_api_version: str = Field(
        default=DEFAULT_GITHUB_API_VERSION,
        description="Value sent in the X-GitHub-Api-Version header",
        validation_alias=GITHUB_API_VERSION_ENV,
    )

    # HTTP Client Configuration
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for a single GitHub API request",
        validation_alias=HTTP_TIMEOUT_ENV,
    )

    http_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries for timeouts, network errors and 502/503/504 responses",
        validation_alias=HTTP_MAX_RETRIES_ENV,
    )

    # Environment Configuration
    environment: str = Field(
        default="development",
        description="Environment name (e.g., 'development', 'production', 'staging')",
        validation_alias=ENVIRONMENT_ENV,
    )

    # Logfire Configuration (optional)
    logfire_token: str | None = Field(
        default=None,
        description="Optional Pydantic Logfire token for observability",
        validation_alias=LOGFIRE_TOKEN_ENV,
    )

    stateless_http: bool = Field(
        default=False,
        description="Stateless mode (new transport per request)",
        validation_alias=STATELESS_HTTP_ENV,
    )

    transport_mode: Literal["stdio", "http", "streamable-http", "sse"] = Field(
        default="stdio",
        description="MCP transport mode (stdio, http, streamable-http, or sse)",
        validation_alias=TRANSPORT_MODE_ENV,
    )

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: str | None) -> str | None:
        """Treat an empty or whitespace-only token as no token."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("github_api_base_url")
    @classmethod
    def validate_github_api_base_url(cls, v: str) -> str:
        """Validate that the API base URL is a clean HTTPS origin."""
        if not v.startswith("https://"):
            raise ValueError("GitHub API base URL must use HTTPS (https://)")

        if v.endswith("/"):
            raise ValueError("GitHub API base URL must not have a trailing slash")

        parsed = urlparse(v)
        if not parsed.hostname:
            raise ValueError("GitHub API base URL must have a valid hostname")
        if parsed.query:
            raise ValueError("GitHub API base URL must not contain query parameters")
        if parsed.fragment:
            raise ValueError("GitHub API base URL must not contain a fragment")

        return v

    def model_post_init(self, __context: object, /) -> None:
        """Log configuration after initialization."""
        logger.info("Application configuration loaded successfully")
        logger.info(
            "GitHub API base URL configured", extra={"api_base_url": self.github_api_base_url}
        )

        # Log token presence without exposing values
        if self.github_token:
            logger.info("GitHub token is configured")
        else:
            logger.info(
                "No GitHub token configured, unauthenticated rate limits apply (set %s)",
                GITHUB_TOKEN_ENV,
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings

    Raises:
        ValidationError: If settings are invalid
    """
    try:
        settings = Settings()

        # Register the token with the logging filter to prevent leakage
        if settings.github_token:
            from github_releases_mcp.logging_security import register_secret

            register_secret(settings.github_token)

        return settings
    except Exception:
        logger.critical(
            "Failed to initialize application configuration",
            exc_info=True,
        )
        raise
