"""Version parsing and bumping utilities.

package.json versions are treated as major.minor.patch. Anything that does
not parse is read leniently: missing or non-numeric components count as 0,
so a malformed version never blocks a release.
"""

from __future__ import annotations

import enum
import re

import semver

from .errors import InvalidReleaseKind

DEFAULT_VERSION = "0.0.0"

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


class ReleaseKind(str, enum.Enum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @classmethod
    def parse(cls, value: str | ReleaseKind) -> ReleaseKind:
        """Return the release kind named by ``value``.

        Raises:
            InvalidReleaseKind: If ``value`` is not patch, minor or major.
        """
        if isinstance(value, ReleaseKind):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidReleaseKind(value) from None


def _component(part: str) -> int:
    match = _LEADING_DIGITS.match(part)
    return int(match.group(1)) if match else 0


def parse_version(version_str: str | None) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete or malformed versions by reading each component's
    leading digits and padding with zeros:
    - "1.2" → "1.2.0"
    - "1.2.3-beta.1" → "1.2.3"
    - "abc" → "0.0.0"
    - None → "0.0.0"

    Only the first 3 components are used (major.minor.patch).
    """
    parts = (version_str or DEFAULT_VERSION).split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    major, minor, patch = (_component(p) for p in parts[:3])
    return semver.Version(major, minor, patch)


def bump_version(version_str: str | None, kind: str | ReleaseKind) -> str:
    """Return the next version for a release of the given kind.

    Examples:
        bump_version("1.2.3", "minor") → "1.3.0"
        bump_version("0.0.9", "patch") → "0.0.10"
        bump_version("2.9.9", "major") → "3.0.0"

    Raises:
        InvalidReleaseKind: If ``kind`` is not patch, minor or major.
    """
    release_kind = ReleaseKind.parse(kind)
    version = parse_version(version_str)
    if release_kind is ReleaseKind.MAJOR:
        return str(version.bump_major())
    if release_kind is ReleaseKind.MINOR:
        return str(version.bump_minor())
    return str(version.bump_patch())
