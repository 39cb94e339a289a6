"""Fixed-priority dispatch from package names to categories."""

from __future__ import annotations

from typing import List, Sequence

from relscout.common.http_client import Fetcher
from relscout.errors import UnknownPackageError
from .categories import Category


class ResolverRegistry:
    """Ordered list of categories; the first one accepting a name wins."""

    def __init__(self, categories: Sequence[Category]):
        self._categories = list(categories)

    @property
    def categories(self) -> List[Category]:
        """Categories in priority order."""
        return list(self._categories)

    def lookup(self, package: str) -> Category:
        """Return the category handling ``package``.

        Raises:
            UnknownPackageError: When every category declines the name
        """
        for category in self._categories:
            if category.matches(package):
                return category
        raise UnknownPackageError(package)

    def is_known(self, package: str) -> bool:
        """True when some category accepts ``package``."""
        return any(category.matches(package) for category in self._categories)

    def resolve(self, package: str, fetcher: Fetcher) -> str:
        """Dispatch ``package`` to its category and return the version.

        Raises:
            UnknownPackageError: Unrecognised name (fatal)
            ResolutionError: Soft failure inside the category
        """
        return self.lookup(package).resolve(package, fetcher)
