"""Configuration for the GitHub REST client."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class _ProgrammaticSettings(BaseSettings):
    """Base class that only accepts values passed to the constructor."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Disable all settings sources except for programmatic initialization."""
        return (init_settings,)


class GitHubConfig(_ProgrammaticSettings):
    """Configuration for the GitHub REST API client.

    Built from the application :class:`~github_releases_mcp.config.Settings`
    at the tool boundary and passed explicitly to the client.
    """

    model_config = SettingsConfigDict(validate_assignment=True)

    base_url: str = Field(
        default="https://api.github.com",
        description="Base URL for the GitHub REST API (must use HTTPS).",
    )
    api_token: str | None = Field(
        default=None,
        description="Optional bearer token for authentication.",
    )
    api_version: str = Field(
        default="2022-11-28",
        description="Value for the X-GitHub-Api-Version header.",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds.",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Retries for timeouts, network errors and 502/503/504 responses.",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require HTTPS and strip trailing slashes.

        Raises:
            ValueError: If base_url is empty or doesn't use HTTPS
        """
        if not v:
            raise ValueError("base_url cannot be empty")

        if not v.startswith("https://"):
            raise ValueError("base_url must use HTTPS protocol")

        return v.rstrip("/")

    @property
    def authenticated(self) -> bool:
        """Whether requests carry an Authorization header."""
        return bool(self.api_token)
