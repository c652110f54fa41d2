"""Pydantic models for GitHub REST API resources."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class PackageType(str, Enum):
    """Package ecosystems accepted by the organization packages endpoint."""

    NPM = "npm"
    MAVEN = "maven"
    RUBYGEMS = "rubygems"
    DOCKER = "docker"
    NUGET = "nuget"
    CONTAINER = "container"


class PackageVisibility(str, Enum):
    """Package visibility filter values."""

    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"


class RepositoryRef(BaseModel):
    """An ``owner/name`` reference to a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @field_validator("owner", "name")
    @classmethod
    def validate_segment(cls, v: str) -> str:
        """Require a non-empty, slash-free path segment."""
        v = v.strip()
        if not v:
            raise ValueError("repository owner and name cannot be empty")
        if "/" in v:
            raise ValueError(f"invalid repository path segment: {v!r}")
        return v

    @property
    def full_name(self) -> str:
        """The ``owner/name`` form used by the GitHub API."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        """Return the ``owner/name`` form."""
        return self.full_name


class Release(BaseModel):
    """One published release of a repository.

    Only the fields the release queries rely on are declared; anything else in
    the API payload is ignored. Instances are immutable.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    tag_name: str
    name: str | None = None
    published_at: datetime | None = None
    body: str | None = None
    prerelease: bool = False
    draft: bool = False
    html_url: str | None = None


class OrganizationPackage(BaseModel):
    """A package published by a GitHub organization."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    package_type: str | None = None
    visibility: str | None = None
    url: str | None = None
    html_url: str | None = None
    version_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
