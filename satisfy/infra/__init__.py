"""
Infrastructure layer for satisfy.

Contains abstractions for external systems:
- GitClient: Git command execution (ref listing)
- file_store: Input loading and manifest output

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .file_store import (
    read_structured_file,
    load_packages,
    load_repo_definition,
    dump_manifest,
    write_manifest,
)

__all__ = [
    'GitClient',
    'read_structured_file',
    'load_packages',
    'load_repo_definition',
    'dump_manifest',
    'write_manifest',
]
