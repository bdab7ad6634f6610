"""
Service layer for satisfy.

Services contain the business logic, orchestrating domain objects
and infrastructure:
- RefService: Remote ref listing and version classification
- package_service: Filtering, descriptor synthesis and merging
- BuildService: Full manifest builds

Services receive their dependencies through the constructor, so tests can
hand them a mocked GitClient.
"""

from .ref_service import RefService, classify_refs, parse_ref_line
from .package_service import (
    should_include,
    resolve_archive_url,
    synthesize_package,
    merge_repositories,
)
from .build_service import BuildService, BuildOptions, BuildSummary

__all__ = [
    'RefService',
    'classify_refs',
    'parse_ref_line',
    'should_include',
    'resolve_archive_url',
    'synthesize_package',
    'merge_repositories',
    'BuildService',
    'BuildOptions',
    'BuildSummary',
]
