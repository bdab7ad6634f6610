"""
Package source domain objects for satisfy.

A PackageSource is one entry of the packages file:

    "frontend/fontawesome": {
        "url": "https://github.com/FortAwesome/Font-Awesome.git",
        "minversion": "2.0",
        "defaults": {"homepage": "http://fontawesome.io/"}
    }

RawRef is one line of a remote's ref listing after parsing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from packaging.version import Version, InvalidVersion

from ..exit_codes import ConfigurationError
from .version import parse_version_bound


class RefKind(Enum):
    """Namespace a reference was listed under."""
    TAG = "tag"
    BRANCH = "branch"


@dataclass(frozen=True)
class RawRef:
    """A tag or branch read from the ref lister."""
    kind: RefKind
    name: str
    object_id: str


@dataclass(frozen=True)
class PackageSource:
    """
    One configured package: where it lives and how to describe it.

    Attributes:
        name: Package name, unique within the packages file
        url: Git URL listed with `git ls-remote`
        min_version: Raw minimum-version bound, or None
        defaults: Metadata copied into every descriptor for this package
        bound: min_version parsed once at load time
    """

    name: str
    url: str
    min_version: Optional[str] = None
    defaults: Dict[str, Any] = field(default_factory=dict)
    bound: Optional[Version] = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        if self.min_version is None:
            return
        min_version = str(self.min_version)
        try:
            bound = parse_version_bound(min_version)
        except InvalidVersion:
            raise ConfigurationError(
                f"Package {self.name} has invalid minversion {min_version!r}"
            )
        object.__setattr__(self, 'min_version', min_version)
        object.__setattr__(self, 'bound', bound)

    @classmethod
    def from_config(cls, name: str, entry: Any) -> 'PackageSource':
        """
        Build a PackageSource from a packages-file entry.

        Raises:
            ConfigurationError: if the entry is not usable
        """
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"Package {name} must be an object")

        url = entry.get('url')
        if not isinstance(url, str) or not url.strip():
            raise ConfigurationError(f"Package {name} has no url")

        min_version = entry.get('minversion')

        return cls(
            name=name,
            url=url.strip(),
            min_version=min_version,
            defaults=normalize_defaults(name, entry.get('defaults')),
        )


def normalize_defaults(name: str, defaults: Any) -> Dict[str, Any]:
    """Defaults are a mapping; null or an empty list mean no defaults."""
    if defaults is None:
        return {}
    if isinstance(defaults, Mapping):
        return dict(defaults)
    if isinstance(defaults, (list, tuple)) and not defaults:
        return {}
    raise ConfigurationError(f"Defaults for package {name} must be an object")
