"""
Package service for satisfy.

Pure functions that turn resolved versions into satis package entries:
- should_include: minimum-version filtering
- resolve_archive_url: GitHub zipball URLs
- synthesize_package: one package descriptor per version
- merge_repositories: append descriptors to the base definition
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..domain import NumericVersion, PackageSource, parse_version
from ..domain.version import parse_dotted
from .ref_service import DEV_PREFIX

AUTOGENERATED = 'Autogenerated by satisfy'

DOTTED_KEY_PATTERN = re.compile(r'^(dev-)?[0-9.]+$')

GITHUB_HOST = 'github.com'
GITHUB_URL_PATTERN = re.compile(
    r'^https://' + re.escape(GITHUB_HOST) + r'/([^/]+)/([^/]+?)(?:\.git)?$'
)


def should_include(source: PackageSource, version_key: str) -> bool:
    """
    Decide whether a version passes the source's minimum-version bound.

    Only bare dotted-numeric keys ("1.2.3", "dev-2.0") are compared against
    the bound; every other key is included.
    """
    if source.min_version is None:
        return True

    if not DOTTED_KEY_PATTERN.match(version_key):
        return True

    if version_key.startswith(DEV_PREFIX):
        version_key = version_key[len(DEV_PREFIX):]

    candidate = parse_dotted(version_key)
    if candidate is None:
        # Matches the pattern but is not a version, e.g. "1..2"
        return True

    return candidate >= source.bound


def resolve_archive_url(source_url: str, reference: str) -> Optional[str]:
    """
    Zipball URL for a reference of a GitHub-hosted repository.

    Args:
        source_url: https://github.com/<owner>/<repo>[.git]
        reference: Tag name or commit

    Returns:
        API zipball URL, or None for any other URL shape
    """
    match = GITHUB_URL_PATTERN.match(source_url)
    if not match:
        return None
    owner, repo = match.groups()
    return f"https://api.{GITHUB_HOST}/repos/{owner}/{repo}/zipball/{reference}"


def describe(description: Optional[str]) -> str:
    """Append the autogenerated marker to a description."""
    if description is None:
        return AUTOGENERATED
    return f"{description}; {AUTOGENERATED}"


def synthesize_package(
    name: str,
    version_key: str,
    reference: str,
    source_url: str,
    defaults: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build the package descriptor for one version.

    Defaults are copied, never modified. Identity fields (name, version,
    source) always override defaults. dist is only added when an archive
    URL exists.

    Args:
        name: Package name
        version_key: Version written to the descriptor
        reference: Tag name or commit to check out
        source_url: Git URL of the package
        defaults: Extra package metadata

    Returns:
        Package descriptor dict
    """
    package = dict(defaults) if defaults else {}

    package['description'] = describe(package.get('description'))
    package['name'] = name
    package['version'] = version_key
    package['source'] = {
        'url': source_url,
        'type': 'git',
        'reference': reference,
    }

    archive_url = resolve_archive_url(source_url, reference)
    if archive_url:
        package['dist'] = {
            'url': archive_url,
            'type': 'zip',
        }

    return package


def package_entry(package: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a descriptor as a satis repository entry."""
    return {'type': 'package', 'package': package}


def merge_repositories(
    base: Mapping[str, Any],
    synthesized: Iterable[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Append package entries to a repository definition.

    Returns a new definition; existing repositories keep their order and
    the new entries follow.
    """
    merged = dict(base)
    merged['repositories'] = list(base.get('repositories') or []) + list(synthesized)
    return merged


def sort_version_keys(keys: Iterable[str]) -> List[str]:
    """
    Order version keys for output.

    Numeric keys come first in ascending order, with each dev- branch
    placed after the tag of the same version. Other keys follow in their
    original order.
    """
    numeric = []
    opaque = []
    for index, key in enumerate(keys):
        is_dev = key.startswith(DEV_PREFIX)
        parsed = parse_version(key[len(DEV_PREFIX):] if is_dev else key)
        if isinstance(parsed, NumericVersion):
            numeric.append((parsed, is_dev, index, key))
        else:
            opaque.append(key)

    numeric.sort(key=lambda item: (item[0], item[1], item[2]))
    return [item[3] for item in numeric] + opaque
