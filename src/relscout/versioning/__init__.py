"""Version comparison, strategies, dispatch and batch resolution."""

from .categories import Category, FamilyCategory, PendingCategory, StaticCategory
from .compare import compare, max_version, natural_sorted, version_key
from .models import ResolutionMode, ResolutionResult
from .registry import ResolverRegistry
from .service import VersionResolutionService

__all__ = [
    "Category",
    "StaticCategory",
    "PendingCategory",
    "FamilyCategory",
    "compare",
    "max_version",
    "natural_sorted",
    "version_key",
    "ResolutionMode",
    "ResolutionResult",
    "ResolverRegistry",
    "VersionResolutionService",
]
