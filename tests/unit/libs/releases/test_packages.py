"""Unit tests for package scoping of releases."""

import pytest

from github_releases_mcp.libs.github.models import Release
from github_releases_mcp.libs.releases.packages import (
    DEFAULT_PACKAGE,
    PACKAGE_FIELDS,
    extract_package_name,
    package_from_string,
)
from tests.unit.helpers.fakes import make_release


class TestPackageFromString:
    """The anchored prefix pattern on its own."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            pytest.param("@astrojs/vue@2.0.0", "@astrojs/vue", id="scoped"),
            pytest.param("astro@4.0.0", "astro", id="unscoped"),
            pytest.param("create-astro@4.0.0-beta.1", "create-astro", id="hyphenated"),
            pytest.param("@scope/pkg@1.0.0@extra", "@scope/pkg", id="first-anchored-prefix"),
            pytest.param("v1.0.0", None, id="plain-version"),
            pytest.param("@1.2.3", None, id="bare-at-version"),
            pytest.param("@scope@1.0.0", None, id="scope-without-name"),
            pytest.param("release/1.0@x", None, id="slash-in-name"),
            pytest.param("v1.0.0 thanks @octocat", None, id="handle-mention"),
            pytest.param("Fixes from @octocat", None, id="words-before-handle"),
            pytest.param("@octocat made this", None, id="leading-handle"),
            pytest.param("@astrojs/vue @2.0.0", None, id="space-before-at"),
            pytest.param("", None, id="empty"),
            pytest.param(None, None, id="none"),
        ],
    )
    def test_prefix(self, text: str | None, expected: str | None) -> None:
        assert package_from_string(text) == expected


class TestExtractPackageName:
    """Precedence between tag, name and the default bucket."""

    def test_fields_are_consulted_tag_first(self) -> None:
        assert [field.name for field in PACKAGE_FIELDS] == ["tag_name", "name"]

    def test_scoped_tag(self) -> None:
        assert extract_package_name(make_release("@astrojs/vue@2.0.0")) == "@astrojs/vue"

    def test_plain_tag_is_default(self) -> None:
        assert extract_package_name(make_release("v1.0.0")) == DEFAULT_PACKAGE
        assert DEFAULT_PACKAGE == "default"

    def test_falls_back_to_name(self) -> None:
        release = make_release("v3.1.0", name="@astrojs/react@3.1.0")

        assert extract_package_name(release) == "@astrojs/react"

    def test_tag_wins_when_tag_and_name_disagree(self) -> None:
        release = make_release("@astrojs/vue@2.0.0", name="@astrojs/react@2.0.0")

        assert extract_package_name(release) == "@astrojs/vue"

    def test_null_name_is_default(self) -> None:
        release = Release(id=1, tag_name="v1.0.0", name=None)

        assert extract_package_name(release) == DEFAULT_PACKAGE

    @pytest.mark.parametrize(
        "name",
        ["v1.0.0 thanks @octocat", "Fixes from @octocat", "Release by @octocat and @hubot"],
    )
    def test_handle_mention_in_name_is_default(self, name: str) -> None:
        assert extract_package_name(make_release("v1.0.0", name=name)) == DEFAULT_PACKAGE
