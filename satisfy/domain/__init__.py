"""
Domain layer for satisfy.

Contains pure domain objects with no I/O or side effects:
- NumericVersion / OpaqueVersion: Parsed reference names
- PackageSource: One configured package from the packages file
- RawRef: One tag or branch read from a remote

These objects are immutable.
"""

from .version import (
    NumericVersion,
    OpaqueVersion,
    Prerelease,
    VersionIdentifier,
    parse_version,
    compare_versions,
    version_key,
)
from .source import PackageSource, RawRef, RefKind

__all__ = [
    'NumericVersion',
    'OpaqueVersion',
    'Prerelease',
    'VersionIdentifier',
    'parse_version',
    'compare_versions',
    'version_key',
    'PackageSource',
    'RawRef',
    'RefKind',
]
