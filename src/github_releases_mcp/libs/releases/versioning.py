"""Normalization of release tags into comparable semantic versions.

Release tags come in several shapes: ``v1.2.3``, ``1.2.3``, ``1.2.3-rc.1``
and monorepo package tags such as ``@astrojs/vue@2.0.0`` or ``core@1.4.0``.
:func:`normalize_version` turns any of them into a :class:`semver.Version`,
or ``None`` when the string does not hold a valid version.

The candidate substring is chosen by an ordered list of named extraction
strategies; the first strategy that finds a candidate wins and the candidate is
then cleaned strictly. A candidate that fails cleaning makes the whole string
unresolvable: later strategies are not consulted.

The package-suffix strategy takes everything after the last ``@`` when it is a
full version, pre-release and build suffix included. ``pkg@2.0.0-beta.1``
therefore resolves to ``2.0.0-beta.1`` rather than failing over to the
embedded-triple search, which would drop the pre-release part.

Build metadata (``+build.5``) is discarded during cleaning, so two versions
that differ only by build metadata are equal.
"""

import re
from collections.abc import Callable
from typing import Final, NamedTuple

from semver import Version

# Optional pre-release and build suffix, as allowed by SemVer 2.0.
_SUFFIX = r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"
_TRIPLE = r"\d+\.\d+\.\d+"

_PACKAGE_SUFFIX_RE: Final = re.compile(rf"@({_TRIPLE}{_SUFFIX})$")
_LEADING_TRIPLE_RE: Final = re.compile(rf"^v?({_TRIPLE}{_SUFFIX})")
_CLEAN_PREFIX_RE: Final = re.compile(r"^[=v]+")


def from_package_suffix(raw: str) -> str | None:
    """Take the version after the final ``@`` of a package tag like ``name@1.2.3``."""
    match = _PACKAGE_SUFFIX_RE.search(raw)
    return match.group(1) if match else None


def from_leading_triple(raw: str) -> str | None:
    """Take a leading ``[v]X.Y.Z[-pre][+build]``, ignoring anything after it."""
    match = _LEADING_TRIPLE_RE.match(raw)
    return match.group(1) if match else None


def from_whole_string(raw: str) -> str | None:
    return raw


class ExtractionStrategy(NamedTuple):
    """A named way of locating the version part of a raw string."""

    name: str
    extract: Callable[[str], str | None]


EXTRACTION_STRATEGIES: Final[tuple[ExtractionStrategy, ...]] = (
    ExtractionStrategy("package_suffix", from_package_suffix),
    ExtractionStrategy("leading_triple", from_leading_triple),
    ExtractionStrategy("whole_string", from_whole_string),
)


def clean_version(candidate: str) -> Version | None:
    """Strictly parse a version after trimming whitespace and ``=``/``v`` prefixes.

    Returns:
        The parsed version with build metadata removed, or None if the candidate
        is not a valid SemVer 2.0 version.
    """
    text = _CLEAN_PREFIX_RE.sub("", candidate.strip())
    try:
        version = Version.parse(text)
    except (ValueError, TypeError):
        return None
    return version.replace(build=None)


def extract_candidate(raw: str) -> tuple[str, str] | None:
    """Return ``(strategy name, candidate)`` for the first strategy that matches."""
    for strategy in EXTRACTION_STRATEGIES:
        candidate = strategy.extract(raw)
        if candidate is not None:
            return strategy.name, candidate
    return None


def normalize_version(raw: str | None) -> Version | None:
    """Normalize a tag or user-supplied version string.

    Never raises: anything that does not resolve to a valid version yields None.

    Examples:
        >>> str(normalize_version("v1.2.3"))
        '1.2.3'
        >>> str(normalize_version("@astrojs/vue@2.0.0"))
        '2.0.0'
        >>> normalize_version("nightly") is None
        True
    """
    if not raw:
        return None
    found = extract_candidate(raw)
    if found is None:
        return None
    return clean_version(found[1])
