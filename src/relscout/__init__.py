"""relscout - find the latest stable upstream release of packages."""

from .catalog import PackageCatalog, build_registry
from .common import CacheStore, Fetcher
from .errors import (
    FetchError,
    NoCandidateError,
    RelscoutError,
    ResolutionError,
    UnimplementedResolverError,
    UnknownPackageError,
)
from .versioning import ResolutionResult, ResolverRegistry, VersionResolutionService

__version__ = "0.1.0"

__all__ = [
    "CacheStore",
    "Fetcher",
    "PackageCatalog",
    "build_registry",
    "ResolutionResult",
    "ResolverRegistry",
    "VersionResolutionService",
    "RelscoutError",
    "ResolutionError",
    "FetchError",
    "NoCandidateError",
    "UnimplementedResolverError",
    "UnknownPackageError",
]
