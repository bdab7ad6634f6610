"""
Version domain objects for satisfy.

A reference name from a remote becomes one of two version identifiers:
- NumericVersion: "v1.2.3", "1.2.3-rc.1", "2.0.0-beta"
- OpaqueVersion: anything else ("main", "v1.2", "release-7"), kept verbatim

Numeric versions are totally ordered. Opaque versions are only ever compared
for equality.
"""

import functools
import re
from dataclasses import dataclass
from typing import Optional, Union

from packaging.version import Version, InvalidVersion

VERSION_PATTERN = re.compile(
    r'^v?(\d+)\.(\d+)\.(\d+)(?:-(rc|alpha|beta)(?:\.?(\d+))?)?$'
)

BOUND_PATTERN = re.compile(r'^[0-9.]+$')


@dataclass(frozen=True)
class Prerelease:
    """Prerelease suffix: label is one of rc, alpha, beta."""

    label: str
    ordinal: Optional[int] = None

    def __str__(self) -> str:
        if self.ordinal is None:
            return self.label
        return f"{self.label}{self.ordinal}"


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class NumericVersion:
    """
    A MAJOR.MINOR.PATCH version with an optional prerelease.

    The string form is the version key written into package descriptors:

        NumericVersion(2, 1, 0, Prerelease("beta", 1))  -> "2.1.0-beta1"
        NumericVersion(1, 0, 0)                         -> "1.0.0"
    """

    major: int
    minor: int
    patch: int
    prerelease: Optional[Prerelease] = None

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return base
        return f"{base}-{self.prerelease}"

    def __lt__(self, other):
        if not isinstance(other, NumericVersion):
            return NotImplemented
        return compare_versions(self, other) < 0


@dataclass(frozen=True)
class OpaqueVersion:
    """A reference name that does not parse as a numeric version."""

    raw: str

    def __str__(self) -> str:
        return self.raw


VersionIdentifier = Union[NumericVersion, OpaqueVersion]


def parse_version(raw: str) -> VersionIdentifier:
    """
    Parse a reference name into a version identifier.

    Never fails: strings outside the numeric grammar come back as an
    OpaqueVersion holding the original string.

    Args:
        raw: Tag or branch name (e.g. "v1.2.3", "1.2.3-rc.2", "main")

    Returns:
        NumericVersion or OpaqueVersion
    """
    match = VERSION_PATTERN.match(raw)
    if not match:
        return OpaqueVersion(raw)

    major, minor, patch, label, ordinal = match.groups()
    prerelease = None
    if label:
        prerelease = Prerelease(label, int(ordinal) if ordinal is not None else None)

    return NumericVersion(int(major), int(minor), int(patch), prerelease)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_versions(a: NumericVersion, b: NumericVersion) -> int:
    """
    Compare two numeric versions.

    Releases sort after every prerelease of the same triple. Prerelease
    labels compare alphabetically, then by ordinal, with a missing ordinal
    sorting first.

    Returns:
        -1, 0 or 1
    """
    if not isinstance(a, NumericVersion) or not isinstance(b, NumericVersion):
        raise TypeError("Only numeric versions can be ordered")

    result = _cmp((a.major, a.minor, a.patch), (b.major, b.minor, b.patch))
    if result:
        return result

    if a.prerelease is None or b.prerelease is None:
        # Release > prerelease
        return _cmp(a.prerelease is None, b.prerelease is None)

    result = _cmp(a.prerelease.label, b.prerelease.label)
    if result:
        return result

    a_ord, b_ord = a.prerelease.ordinal, b.prerelease.ordinal
    if a_ord is None or b_ord is None:
        return _cmp(a_ord is not None, b_ord is not None)
    return _cmp(a_ord, b_ord)


def version_key(identifier: VersionIdentifier) -> str:
    """Key used for a version in the manifest."""
    return str(identifier)


def parse_version_bound(raw: str) -> Version:
    """
    Parse a minimum-version bound such as "2.0" or "1.4.2".

    Only bare dotted numbers are accepted; "v2.0" or "2.0rc1" are not bounds.

    Raises:
        InvalidVersion: if the bound is not a dotted-numeric version
    """
    raw = str(raw).strip()
    if not BOUND_PATTERN.match(raw):
        raise InvalidVersion(f"Invalid version bound: {raw!r}")
    return Version(raw)


def parse_dotted(raw: str) -> Optional[Version]:
    """Parse a bare dotted-numeric string, or None if it is malformed ("1..2")."""
    try:
        return Version(raw)
    except InvalidVersion:
        return None
