"""Package scoping for monorepo-style release tags.

Repositories that publish several packages tag their releases as
``@scope/name@1.2.3`` or ``name@1.2.3``. The package key of a release is the
part before the version delimiter; releases without such a prefix belong to the
``"default"`` package.
"""

import re
from collections.abc import Callable
from typing import Final, NamedTuple

from github_releases_mcp.libs.github.models import Release

DEFAULT_PACKAGE: Final[str] = "default"

# Anchored at the start. Scope and name are limited to package-name characters
# (letters, digits, "_", "." and "-"), so a display name that merely mentions
# a handle such as "thanks @octocat" has no prefix. With several "@" only the
# first anchored prefix is taken.
_PACKAGE_PREFIX_RE: Final = re.compile(r"^(@[\w.-]+/[\w.-]+|[\w.-]+)@")


def package_from_string(text: str | None) -> str | None:
    """Return the ``@scope/name`` or ``name`` prefix of *text*, if any."""
    if not text:
        return None
    match = _PACKAGE_PREFIX_RE.match(text)
    return match.group(1) if match else None


class PackageField(NamedTuple):
    """A release field that may carry a package prefix."""

    name: str
    read: Callable[[Release], str | None]


# The tag is consulted before the display name. When both carry a prefix and
# they disagree, the tag wins.
PACKAGE_FIELDS: Final[tuple[PackageField, ...]] = (
    PackageField("tag_name", lambda release: release.tag_name),
    PackageField("name", lambda release: release.name),
)


def extract_package_name(release: Release) -> str:
    """Return the package key of *release*, or :data:`DEFAULT_PACKAGE`."""
    for field in PACKAGE_FIELDS:
        package = package_from_string(field.read(release))
        if package is not None:
            return package
    return DEFAULT_PACKAGE
