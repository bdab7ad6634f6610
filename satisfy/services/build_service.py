"""
Build service for satisfy.

Orchestrates a full run: list every package source, filter its versions,
synthesize descriptors and merge them into the base repository definition.
Used by the `satisfy build` and `satisfy refs` commands.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..domain import PackageSource
from ..exit_codes import ResolutionError
from ..infra.git_client import GitClient
from .ref_service import RefService
from .package_service import (
    should_include,
    synthesize_package,
    package_entry,
    merge_repositories,
    resolve_archive_url,
    sort_version_keys,
)

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    """Options for a build."""
    strict: bool = False  # Fail when a source has no qualifying versions
    sort_versions: bool = False
    include_branches: bool = True
    parallel: int = 1  # Number of concurrent ref listings (1 = sequential)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'BuildOptions':
        """Build options from the 'resolution' section of the settings."""
        resolution = config.get('resolution', {})
        return cls(
            strict=bool(resolution.get('strict', False)),
            sort_versions=bool(resolution.get('sort_versions', False)),
            include_branches=bool(resolution.get('include_branches', True)),
            parallel=max(1, int(resolution.get('max_workers', 1))),
        )


@dataclass
class BuildSummary:
    """Number of descriptors produced per package source."""
    packages: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.packages.values())

    @property
    def empty(self) -> List[str]:
        return [name for name, count in self.packages.items() if count == 0]


class BuildService:
    """
    Service that resolves package sources into a satis manifest.

    Example:
        service = BuildService(options=BuildOptions(sort_versions=True))
        manifest = service.build(sources, base_definition)
        print(f"{service.last_summary.total} packages")
    """

    def __init__(
        self,
        git_client: Optional[GitClient] = None,
        options: Optional[BuildOptions] = None
    ):
        """
        Initialize BuildService.

        Args:
            git_client: Git client instance (creates default if None)
            options: Build options (defaults if None)
        """
        self.options = options or BuildOptions()
        self.refs = RefService(git_client, include_branches=self.options.include_branches)
        self.last_summary: Optional[BuildSummary] = None

    def _list_versions(self, sources: Sequence[PackageSource]) -> List[Dict[str, str]]:
        """Ref listings for every source, in source order."""
        if self.options.parallel <= 1 or len(sources) <= 1:
            return [self.refs.resolve(source.url) for source in sources]

        with ThreadPoolExecutor(max_workers=self.options.parallel) as executor:
            # map() yields in submission order regardless of completion order
            return list(executor.map(lambda source: self.refs.resolve(source.url), sources))

    def qualifying_versions(self, source: PackageSource, versions: Mapping[str, str]) -> Dict[str, str]:
        """Versions of a source that pass its bound, in output order."""
        keys = [key for key in versions if should_include(source, key)]
        if self.options.sort_versions:
            keys = sort_version_keys(keys)
        return {key: versions[key] for key in keys}

    def synthesize(self, source: PackageSource, versions: Mapping[str, str]) -> List[Dict[str, Any]]:
        """
        Package entries for one source.

        Raises:
            ResolutionError: in strict mode, when no version qualifies
        """
        qualifying = self.qualifying_versions(source, versions)

        if not qualifying:
            if self.options.strict:
                raise ResolutionError(f"No tags found for {source.name}", package=source.name)
            logger.warning(f"No versions found for {source.name} ({source.url})")
            return []

        logger.info(f"{source.name}: {len(qualifying)} of {len(versions)} versions")
        return [
            package_entry(synthesize_package(
                source.name, key, reference, source.url, source.defaults
            ))
            for key, reference in qualifying.items()
        ]

    def build(
        self,
        sources: Sequence[PackageSource],
        base: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """
        Resolve all sources and merge the results into the base definition.

        Args:
            sources: Package sources in configured order
            base: Repository definition with a repositories list

        Returns:
            New repository definition with the synthesized packages appended
        """
        summary = BuildSummary()
        self.last_summary = summary

        listings = self._list_versions(sources)

        entries: List[Dict[str, Any]] = []
        for source, versions in zip(sources, listings):
            found = self.synthesize(source, versions)
            summary.packages[source.name] = len(found)
            entries.extend(found)

        return merge_repositories(base, entries)

    def describe(self, source: PackageSource) -> List[Dict[str, Any]]:
        """
        Every version of one source with its filter outcome.

        Returns:
            Rows with version, reference, included and dist keys
        """
        versions = self.refs.resolve(source.url)
        keys = list(versions)
        if self.options.sort_versions:
            keys = sort_version_keys(keys)

        return [
            {
                'version': key,
                'reference': versions[key],
                'included': should_include(source, key),
                'dist': resolve_archive_url(source.url, versions[key]),
            }
            for key in keys
        ]
