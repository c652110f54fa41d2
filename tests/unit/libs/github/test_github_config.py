"""Unit tests for GitHub client configuration and models."""

import pytest
from pydantic import ValidationError

from github_releases_mcp.libs.github.config import GitHubConfig
from github_releases_mcp.libs.github.models import Release, RepositoryRef


class TestGitHubConfig:
    """Test GitHubConfig validation."""

    def test_defaults(self) -> None:
        config = GitHubConfig()

        assert config.base_url == "https://api.github.com"
        assert config.api_token is None
        assert config.authenticated is False
        assert config.max_retries == 2

    def test_ignores_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only constructor arguments are read."""
        monkeypatch.setenv("BASE_URL", "https://elsewhere.test")
        monkeypatch.setenv("API_TOKEN", "ghp_from_env")

        config = GitHubConfig()

        assert config.base_url == "https://api.github.com"
        assert config.api_token is None

    def test_trailing_slash_removed(self) -> None:
        config = GitHubConfig(base_url="https://ghe.example.test/api/v3/")

        assert config.base_url == "https://ghe.example.test/api/v3"

    @pytest.mark.parametrize("base_url", ["", "http://api.github.com", "api.github.com"])
    def test_rejects_non_https(self, base_url: str) -> None:
        with pytest.raises(ValidationError):
            GitHubConfig(base_url=base_url)

    @pytest.mark.parametrize(
        ("field", "value"),
        [("timeout", 0), ("timeout", -1.5), ("max_retries", -1)],
    )
    def test_rejects_out_of_range(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            GitHubConfig(**{field: value})

    def test_authenticated_with_token(self) -> None:
        assert GitHubConfig(api_token="ghp_abc").authenticated is True


class TestRepositoryRef:
    """Test repository reference validation."""

    def test_full_name(self) -> None:
        repository = RepositoryRef(owner=" withastro ", name="astro")

        assert repository.full_name == "withastro/astro"
        assert str(repository) == "withastro/astro"

    @pytest.mark.parametrize(
        ("owner", "name"),
        [("", "astro"), ("withastro", "   "), ("withastro/astro", "x"), ("a", "b/c")],
    )
    def test_rejects_invalid_segments(self, owner: str, name: str) -> None:
        with pytest.raises(ValidationError):
            RepositoryRef(owner=owner, name=name)

    def test_is_hashable(self) -> None:
        first = RepositoryRef(owner="withastro", name="astro")

        assert first == RepositoryRef(owner="withastro", name="astro")
        assert len({first, RepositoryRef(owner="withastro", name="astro")}) == 1


class TestRelease:
    """Test Release parsing."""

    def test_parses_api_payload(self) -> None:
        release = Release.model_validate(
            {
                "id": 1,
                "tag_name": "v1.0.0",
                "name": None,
                "published_at": "2024-03-01T12:00:00Z",
                "prerelease": True,
                "assets": [],
            }
        )

        assert release.name is None
        assert release.prerelease is True
        assert release.published_at is not None
        assert release.published_at.year == 2024
        assert not hasattr(release, "assets")

    def test_is_immutable(self) -> None:
        release = Release(id=1, tag_name="v1.0.0")

        with pytest.raises(ValidationError):
            release.tag_name = "v2.0.0"  # type: ignore[misc]
