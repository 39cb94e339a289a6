"""Categories: named groups of packages sharing one resolution strategy."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from relscout.common.http_client import Fetcher
from relscout.common.logging_utils import extra_context, is_debug_enabled
from relscout.errors import FetchError, NoCandidateError, UnimplementedResolverError
from .strategies.base import ExtractionStrategy
from .strategies.family import ReleaseFamily

logger = logging.getLogger(__name__)


class Category(ABC):
    """A group of package names resolved the same way.

    ``matches`` is the "mine / not mine" decision used by the registry;
    ``resolve`` is only called for names the category accepted.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def matches(self, package: str) -> bool:
        """Return True when this category handles ``package``."""

    @abstractmethod
    def resolve(self, package: str, fetcher: Fetcher) -> str:
        """Return the latest version of ``package``.

        Raises:
            ResolutionError: Soft failure, the package resolves to absent
        """

    @abstractmethod
    def known_names(self, fetcher: Fetcher) -> List[str]:
        """Package names this category contributes to the catalog."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StaticCategory(Category):
    """Exact package names, each bound to its own strategy instance."""

    def __init__(self, name: str, entries: Dict[str, ExtractionStrategy]):
        super().__init__(name)
        self.entries = dict(entries)

    def matches(self, package: str) -> bool:
        return package in self.entries

    def resolve(self, package: str, fetcher: Fetcher) -> str:
        return self.entries[package].resolve(fetcher)

    def known_names(self, fetcher: Fetcher) -> List[str]:
        return list(self.entries)


class PendingCategory(Category):
    """Known packages whose resolver is intentionally not implemented yet."""

    def __init__(self, name: str, packages: Iterable[str]):
        super().__init__(name)
        self.packages = list(dict.fromkeys(packages))

    def matches(self, package: str) -> bool:
        return package in self.packages

    def resolve(self, package: str, fetcher: Fetcher) -> str:
        raise UnimplementedResolverError(package)

    def known_names(self, fetcher: Fetcher) -> List[str]:
        return list(self.packages)


class FamilyCategory(Category):
    """A release family: the bare name plus one member per supported line."""

    def __init__(self, name: str, family: ReleaseFamily):
        super().__init__(name)
        self.family = family

    def matches(self, package: str) -> bool:
        return self.family.matches(package)

    def resolve(self, package: str, fetcher: Fetcher) -> str:
        return self.family.resolve(package, fetcher)

    def known_names(self, fetcher: Fetcher) -> List[str]:
        names = [self.family.name]
        try:
            lines = self.family.supported_lines(fetcher)
        except (FetchError, NoCandidateError) as exc:
            if is_debug_enabled(logger):
                logger.debug(
                    "Family expansion failed",
                    extra=extra_context(
                        event="family_expansion",
                        component="categories",
                        action="known_names",
                        outcome="failed",
                        target=self.family.name,
                        reason=str(exc),
                    ),
                )
            return names
        names.extend(self.family.member_name(line) for line in lines)
        return names
