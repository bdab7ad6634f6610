"""
satisfy - Generate satis package definitions from git repositories.

satisfy lists the tags and branches of each configured git repository,
turns every published reference into a package version and appends one
package entry per version to a base satis.json.

Quick Start:
    from satisfy import BuildService, load_packages, load_repo_definition

    sources = load_packages("packages.json")
    base = load_repo_definition("satis-base.json")
    manifest = BuildService().build(sources, base)

Packages file:
    {
        "acme/widget": {
            "url": "https://github.com/acme/widget.git",
            "minversion": "2.0",
            "defaults": {"homepage": "https://acme.example/widget"}
        }
    }

Versions:
    Tags "v1.2.3", "1.2.3-rc.1"  -> "1.2.3", "1.2.3-rc1"
    Branch "main"                -> "dev-main"
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    NumericVersion,
    OpaqueVersion,
    PackageSource,
    parse_version,
    compare_versions,
)

# Services
from .services import (
    BuildService,
    BuildOptions,
    RefService,
    classify_refs,
    should_include,
    resolve_archive_url,
    synthesize_package,
    merge_repositories,
)

# Input and output
from .infra import GitClient, load_packages, load_repo_definition, write_manifest

# Errors
from .exit_codes import CommandError, ConfigurationError, ResolutionError

__all__ = [
    "__version__",
    "NumericVersion",
    "OpaqueVersion",
    "PackageSource",
    "parse_version",
    "compare_versions",
    "BuildService",
    "BuildOptions",
    "RefService",
    "classify_refs",
    "should_include",
    "resolve_archive_url",
    "synthesize_package",
    "merge_repositories",
    "GitClient",
    "load_packages",
    "load_repo_definition",
    "write_manifest",
    "CommandError",
    "ConfigurationError",
    "ResolutionError",
]
