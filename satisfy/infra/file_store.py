"""
File store infrastructure for satisfy.

Reads the two input documents and writes the generated manifest:
- Packages file: package name -> {url, minversion, defaults}
- Repository definition: a satis.json with a "repositories" member
- Manifest output: pretty JSON, atomically written or printed to stdout

Inputs may be JSON (default), YAML (.yaml/.yml) or TOML (.toml).
"""

import json
import os
import sys
import tempfile
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml

from ..domain.source import PackageSource
from ..exit_codes import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_structured_file(path: PathLike, description: str) -> Any:
    """
    Read and parse a JSON, YAML or TOML file.

    Args:
        path: File to read
        description: What the file holds, used in error messages

    Returns:
        Parsed content

    Raises:
        ConfigurationError: if the file cannot be read or parsed
    """
    path = Path(path).expanduser()
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.debug(f"Reading {path} failed: {e}")
        raise ConfigurationError(f"Cannot open {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == '.toml':
            return tomllib.loads(raw.decode('utf-8'))
        if suffix in ('.yaml', '.yml'):
            return yaml.safe_load(raw)
        return json.loads(raw)
    except (ValueError, yaml.YAMLError) as e:
        # JSONDecodeError, TOMLDecodeError and UnicodeDecodeError are ValueErrors
        logger.debug(f"Parsing {path} failed: {e}")
        raise ConfigurationError(f"Cannot parse {description} in {path}")


def load_packages(path: PathLike) -> List[PackageSource]:
    """
    Load the packages to scan, in file order.

    Raises:
        ConfigurationError: if the file is unusable
    """
    data = read_structured_file(path, "package list")
    if data is None or (isinstance(data, list) and not data):
        return []
    if not isinstance(data, dict):
        raise ConfigurationError(f"Cannot parse package list in {path}")

    sources = [PackageSource.from_config(name, entry) for name, entry in data.items()]
    logger.debug(f"Loaded {len(sources)} package sources from {path}")
    return sources


def load_repo_definition(path: PathLike) -> Dict[str, Any]:
    """
    Load the base satis repository definition.

    Raises:
        ConfigurationError: if the file is unusable or has no repositories member
    """
    repo = read_structured_file(path, "repo definition")
    if not isinstance(repo, dict):
        raise ConfigurationError(f"Cannot parse repo definition in {path}")

    if repo.get('repositories') is None:
        raise ConfigurationError("Repo file must contain repositories member, even if empty")
    if not isinstance(repo['repositories'], list):
        raise ConfigurationError("Repo file repositories member must be a list")

    return repo


def dump_manifest(manifest: Dict[str, Any]) -> str:
    """Serialize a manifest as indented JSON; slashes are never escaped."""
    return json.dumps(manifest, indent=4, ensure_ascii=False)


def _write_atomic(path: Path, content: str) -> None:
    """Write content atomically using temp file and rename."""
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)

        # Atomic rename
        os.replace(temp_path, path)

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_manifest(manifest: Dict[str, Any], path: Optional[PathLike] = None) -> None:
    """
    Write the manifest to a file, or to stdout when no path is given.

    Args:
        manifest: Merged repository definition
        path: Output file; None means stdout
    """
    output = dump_manifest(manifest)
    if path is None:
        sys.stdout.write(output)
        sys.stdout.flush()
        return

    target = Path(path).expanduser()
    _write_atomic(target, output)
    logger.info(f"Manifest written to {target}")
