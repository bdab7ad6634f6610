"""
Reference service for satisfy.

Turns `git ls-remote` output into candidate versions:

    <sha>\trefs/tags/v1.2.0        -> "1.2.0"     : "v1.2.0"
    <sha>\trefs/tags/v1.2.0^{}     -> "1.2.0"     : "v1.2.0"
    <sha>\trefs/heads/main         -> "dev-main"  : "<sha>"

Tags are referenced by name; branches by the commit the remote reported.
"""

import re
from typing import Dict, Iterable, Optional
import logging

from ..domain import RawRef, RefKind, parse_version, version_key
from ..infra import GitClient

logger = logging.getLogger(__name__)

TAG_PREFIX = 'refs/tags/'
BRANCH_PREFIX = 'refs/heads/'
PEELED_SUFFIX = '^{}'
DEV_PREFIX = 'dev-'

# Only tags that look like versions are published
TAG_NAME_PATTERN = re.compile(r'^v?\d')


def parse_ref_line(line: str) -> Optional[RawRef]:
    """
    Parse one ref-listing line.

    Args:
        line: "<object-id> <ref-path>" separated by any whitespace

    Returns:
        RawRef, or None for malformed lines and refs outside the tag and
        branch namespaces
    """
    parts = line.split()
    if len(parts) != 2:
        return None

    object_id, ref_path = parts

    if ref_path.startswith(TAG_PREFIX):
        name = ref_path[len(TAG_PREFIX):]
        if name.endswith(PEELED_SUFFIX):
            name = name[:-len(PEELED_SUFFIX)]
        if not TAG_NAME_PATTERN.match(name):
            return None
        return RawRef(RefKind.TAG, name, object_id)

    if ref_path.startswith(BRANCH_PREFIX):
        name = ref_path[len(BRANCH_PREFIX):]
        if not name:
            return None
        return RawRef(RefKind.BRANCH, name, object_id)

    return None


def ref_version_key(ref: RawRef) -> str:
    """Version key for a reference; branches get the dev- prefix."""
    key = version_key(parse_version(ref.name))
    if ref.kind is RefKind.BRANCH:
        return DEV_PREFIX + key
    return key


def ref_reference(ref: RawRef) -> str:
    """Source reference for a reference: tag name, or branch commit."""
    if ref.kind is RefKind.TAG:
        return ref.name
    return ref.object_id


def classify_refs(lines: Iterable[str], include_branches: bool = True) -> Dict[str, str]:
    """
    Map version keys to source references.

    Keys keep the position of their first appearance; when two lines give
    the same key the later line's reference wins.

    Args:
        lines: Raw ref-listing output
        include_branches: Also publish branches as dev- versions

    Returns:
        Ordered dict of version key -> reference
    """
    versions: Dict[str, str] = {}
    for line in lines:
        ref = parse_ref_line(line)
        if ref is None:
            continue
        if ref.kind is RefKind.BRANCH and not include_branches:
            continue

        key = ref_version_key(ref)
        if key in versions and versions[key] != ref_reference(ref):
            logger.debug(f"Version {key} redefined by {ref.kind.value} {ref.name}")
        versions[key] = ref_reference(ref)

    return versions


class RefService:
    """
    Lists a remote and classifies its references.

    Example:
        service = RefService()
        for version, reference in service.resolve(url).items():
            print(version, reference)
    """

    def __init__(self, git_client: Optional[GitClient] = None, include_branches: bool = True):
        """
        Initialize RefService.

        Args:
            git_client: Git client instance (creates default if None)
            include_branches: Publish branches as dev- versions
        """
        self.git = git_client or GitClient()
        self.include_branches = include_branches

    def resolve(self, url: str) -> Dict[str, str]:
        """Version key -> reference for every publishable ref of a remote."""
        lines = self.git.ls_remote(url)
        versions = classify_refs(lines, include_branches=self.include_branches)
        logger.debug(f"{url}: {len(lines)} refs listed, {len(versions)} versions")
        return versions
