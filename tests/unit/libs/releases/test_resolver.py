"""Unit tests for ReleaseResolver queries."""

import pytest

from github_releases_mcp.libs.github.models import RepositoryRef
from github_releases_mcp.libs.releases.exceptions import InvalidVersionError, ReleaseFetchError
from github_releases_mcp.libs.releases.resolver import (
    ReleaseResolver,
    release_version,
    require_version,
)
from tests.unit.helpers.fakes import FakeReleaseSource, make_release


@pytest.fixture
def astro_releases():
    """A small monorepo-style release collection, in API (newest first) order."""
    return [
        make_release("@astrojs/vue@2.0.0"),
        make_release("v2.0.0-beta", prerelease=True),
        make_release("v1.2.0"),
        make_release("@astrojs/vue@1.5.0"),
        make_release("nightly"),
        make_release("v1.0.0"),
    ]


def _tags(releases) -> list[str]:
    return [release.tag_name for release in releases]


class TestRequireVersion:
    """Validation of caller-supplied versions."""

    def test_valid(self) -> None:
        assert str(require_version("v1.2.3")) == "1.2.3"

    def test_invalid_names_parameter(self) -> None:
        with pytest.raises(InvalidVersionError) as exc_info:
            require_version("latest", "to_version")

        assert exc_info.value.parameter == "to_version"
        assert exc_info.value.value == "latest"
        assert "to_version" in str(exc_info.value)

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            require_version("not-a-version")

    def test_release_version_of_unversioned_tag(self) -> None:
        assert release_version(make_release("nightly")) is None


class TestGetRelease:
    """Point lookups."""

    @pytest.mark.asyncio
    async def test_matches_by_precedence(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        release = await resolver.get_release(repository, "1.2.0")

        assert release is not None
        assert release.tag_name == "v1.2.0"

    @pytest.mark.parametrize("version", ["v1.0.0", "1.0.0", "@1.0.0", "anything@1.0.0"])
    @pytest.mark.asyncio
    async def test_any_input_format(
        self, repository: RepositoryRef, astro_releases, version: str
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        release = await resolver.get_release(repository, version)

        assert release is not None
        assert release.tag_name == "v1.0.0"

    @pytest.mark.asyncio
    async def test_prerelease_does_not_match_release(self, repository: RepositoryRef) -> None:
        source = FakeReleaseSource(
            [make_release("v1.0.0"), make_release("v1.2.0"), make_release("v2.0.0-beta")]
        )

        assert await ReleaseResolver(source).get_release(repository, "2.0.0") is None

    @pytest.mark.asyncio
    async def test_first_match_in_collection_order(self, repository: RepositoryRef) -> None:
        first = make_release("@astrojs/vue@2.0.0")
        source = FakeReleaseSource([first, make_release("v2.0.0")])

        release = await ReleaseResolver(source).get_release(repository, "2.0.0")

        assert release is first

    @pytest.mark.asyncio
    async def test_package_filter(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        vue = await resolver.get_release(repository, "2.0.0", package="@astrojs/vue")
        default = await resolver.get_release(repository, "1.5.0", package="default")

        assert vue is not None
        assert vue.tag_name == "@astrojs/vue@2.0.0"
        assert default is None

    @pytest.mark.asyncio
    async def test_invalid_version_fails_before_fetching(self, repository: RepositoryRef) -> None:
        source = FakeReleaseSource([make_release("v1.0.0")])

        with pytest.raises(InvalidVersionError):
            await ReleaseResolver(source).get_release(repository, "latest")
        assert source.requests == []

    @pytest.mark.asyncio
    async def test_each_query_refetches(self, repository: RepositoryRef, astro_releases) -> None:
        source = FakeReleaseSource(astro_releases)
        resolver = ReleaseResolver(source)

        await resolver.get_release(repository, "1.0.0")
        await resolver.get_release(repository, "1.0.0")

        assert source.pages_requested == [1, 1]

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, repository: RepositoryRef) -> None:
        source = FakeReleaseSource([], fail_on_page=1)

        with pytest.raises(ReleaseFetchError):
            await ReleaseResolver(source).get_release(repository, "1.0.0")


class TestGetReleasesBetween:
    """Inclusive range queries."""

    @pytest.mark.asyncio
    async def test_beta_excluded_and_ascending(self, repository: RepositoryRef) -> None:
        source = FakeReleaseSource(
            [make_release("v1.0.0"), make_release("v1.2.0"), make_release("v2.0.0-beta")]
        )

        releases = await ReleaseResolver(source).get_releases_between(repository, "1.0.0", "1.5.0")

        assert _tags(releases) == ["v1.0.0", "v1.2.0"]

    @pytest.mark.asyncio
    async def test_bounds_are_inclusive_and_sorted(
        self, repository: RepositoryRef, astro_releases
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.get_releases_between(repository, "v1.0.0", "2.0.0")

        assert _tags(releases) == [
            "v1.0.0",
            "v1.2.0",
            "@astrojs/vue@1.5.0",
            "v2.0.0-beta",
            "@astrojs/vue@2.0.0",
        ]

    @pytest.mark.asyncio
    async def test_equal_versions_keep_collection_order(self, repository: RepositoryRef) -> None:
        source = FakeReleaseSource(
            [
                make_release("@astrojs/react@1.1.0"),
                make_release("v1.0.0"),
                make_release("@astrojs/vue@1.1.0"),
                make_release("v1.1.0"),
            ]
        )

        releases = await ReleaseResolver(source).get_releases_between(repository, "1.0.0", "1.1.0")

        assert _tags(releases) == [
            "v1.0.0",
            "@astrojs/react@1.1.0",
            "@astrojs/vue@1.1.0",
            "v1.1.0",
        ]

    @pytest.mark.asyncio
    async def test_package_filter(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.get_releases_between(
            repository, "1.0.0", "3.0.0", package="@astrojs/vue"
        )

        assert _tags(releases) == ["@astrojs/vue@1.5.0", "@astrojs/vue@2.0.0"]

    @pytest.mark.asyncio
    async def test_inverted_range_is_empty(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        assert await resolver.get_releases_between(repository, "2.0.0", "1.0.0") == []

    @pytest.mark.parametrize(
        ("from_version", "to_version", "parameter"),
        [
            pytest.param("latest", "1.0.0", "from_version", id="bad-lower"),
            pytest.param("1.0.0", "next", "to_version", id="bad-upper"),
            pytest.param("x", "y", "from_version", id="both-bad-reports-lower"),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_bound_named_without_fetching(
        self, repository: RepositoryRef, from_version: str, to_version: str, parameter: str
    ) -> None:
        source = FakeReleaseSource([make_release("v1.0.0")])

        with pytest.raises(InvalidVersionError) as exc_info:
            await ReleaseResolver(source).get_releases_between(
                repository, from_version, to_version
            )

        assert exc_info.value.parameter == parameter
        assert source.requests == []


class TestListReleases:
    """Listing with package, pre-release and limit filters."""

    @pytest.mark.asyncio
    async def test_defaults_exclude_prereleases(
        self, repository: RepositoryRef, astro_releases
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.list_releases(repository)

        assert _tags(releases) == [
            "@astrojs/vue@2.0.0",
            "v1.2.0",
            "@astrojs/vue@1.5.0",
            "nightly",
            "v1.0.0",
        ]

    @pytest.mark.asyncio
    async def test_include_prereleases(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.list_releases(repository, include_prereleases=True)

        assert _tags(releases) == _tags(astro_releases)

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [
            pytest.param(2, 2, id="limit"),
            pytest.param(0, 5, id="zero-is-unlimited"),
            pytest.param(-3, 5, id="negative-is-unlimited"),
            pytest.param(None, 5, id="none-is-unlimited"),
            pytest.param(50, 5, id="larger-than-collection"),
        ],
    )
    @pytest.mark.asyncio
    async def test_limit(
        self, repository: RepositoryRef, astro_releases, limit: int | None, expected: int
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.list_releases(repository, limit=limit)

        assert len(releases) == expected

    @pytest.mark.asyncio
    async def test_limit_applies_after_filters(
        self, repository: RepositoryRef, astro_releases
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        releases = await resolver.list_releases(repository, package="default", limit=2)

        assert _tags(releases) == ["v1.2.0", "nightly"]

    @pytest.mark.asyncio
    async def test_handle_mention_stays_in_default_package(
        self, repository: RepositoryRef
    ) -> None:
        source = FakeReleaseSource(
            [make_release("v1.1.0", name="v1.1.0 thanks @octocat"), make_release("v1.0.0")]
        )
        resolver = ReleaseResolver(source)

        releases = await resolver.list_releases(repository, package="default")
        release = await resolver.get_release(repository, "1.1.0", package="default")

        assert _tags(releases) == ["v1.1.0", "v1.0.0"]
        assert release is not None
        assert await resolver.list_packages(repository) == ["default"]

    @pytest.mark.asyncio
    async def test_unknown_package_is_empty(
        self, repository: RepositoryRef, astro_releases
    ) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        assert await resolver.list_releases(repository, package="@astrojs/svelte") == []


class TestListPackages:
    """Package discovery."""

    @pytest.mark.asyncio
    async def test_first_seen_order(self, repository: RepositoryRef, astro_releases) -> None:
        resolver = ReleaseResolver(FakeReleaseSource(astro_releases))

        assert await resolver.list_packages(repository) == ["@astrojs/vue", "default"]

    @pytest.mark.asyncio
    async def test_empty_repository(self, repository: RepositoryRef) -> None:
        assert await ReleaseResolver(FakeReleaseSource([])).list_packages(repository) == []
