"""Batch version resolution with per-package failure isolation."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Iterable, List, Optional

from relscout.common.http_client import Fetcher
from relscout.common.logging_utils import extra_context, is_debug_enabled, Timer
from relscout.constants import Constants
from relscout.errors import FetchError, NoCandidateError, UnimplementedResolverError
from .compare import natural_sorted
from .models import ResolutionMode, ResolutionResult
from .registry import ResolverRegistry

if TYPE_CHECKING:
    from relscout.catalog import PackageCatalog

logger = logging.getLogger(__name__)


class VersionResolutionService:
    """Resolve one or many packages through a :class:`ResolverRegistry`.

    Soft failures (fetch errors, empty matches, pending resolvers) become an
    absent version for that package only. An unknown package name is fatal
    and is detected before any resolution work starts.
    """

    def __init__(self, registry: ResolverRegistry, fetcher: Fetcher, max_workers: Optional[int] = None):
        """Initialize the service.

        Args:
            registry: Category registry used for dispatch
            fetcher: Cached fetcher shared by all tasks
            max_workers: Concurrency ceiling (defaults to Constants.MAX_WORKERS)
        """
        self.registry = registry
        self.fetcher = fetcher
        self.max_workers = max(1, max_workers if max_workers is not None else Constants.MAX_WORKERS)

    def resolve(self, package: str) -> ResolutionResult:
        """Resolve a single package.

        Raises:
            UnknownPackageError: When no category recognises ``package``
        """
        category = self.registry.lookup(package)
        with Timer() as t:
            try:
                version: Optional[str] = category.resolve(package, self.fetcher)
                outcome = "resolved"
            except UnimplementedResolverError:
                version, outcome = None, "pending"
            except (FetchError, NoCandidateError) as exc:
                version, outcome = None, "absent"
                if is_debug_enabled(logger):
                    logger.debug(
                        "Resolution failed: %s",
                        exc,
                        extra=extra_context(
                            event="resolution_failed",
                            component="service",
                            action="resolve",
                            outcome=type(exc).__name__,
                            target=package,
                        ),
                    )

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved %s",
                package,
                extra=extra_context(
                    event="resolution",
                    component="service",
                    action="resolve",
                    outcome=outcome,
                    category=category.name,
                    version=version,
                    duration_ms=t.duration_ms(),
                    target=package,
                ),
            )
        return ResolutionResult(package=package, version=version)

    def resolve_all(self, packages: Iterable[str], concurrent: bool = True) -> List[ResolutionResult]:
        """Resolve many packages.

        Serial mode resolves one package at a time in catalog order (natural
        order of package names); concurrent mode returns results in that same
        order whatever the completion order of the tasks.

        Raises:
            UnknownPackageError: Before any work when a name is unknown
        """
        names = list(dict.fromkeys(packages))
        for name in names:
            self.registry.lookup(name)

        mode = ResolutionMode.CONCURRENT if concurrent and len(names) > 1 else ResolutionMode.SERIAL
        logger.info("Resolving %d package(s) in %s mode.", len(names), mode.value)

        if mode is ResolutionMode.SERIAL:
            return [self.resolve(name) for name in natural_sorted(names)]

        results: List[ResolutionResult] = []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(names))) as executor:
            futures = {executor.submit(self.resolve, name): name for name in names}
            for future in as_completed(futures):
                results.append(future.result())
        return natural_sorted(results, key=lambda r: r.package)

    def catalog_diff(self, catalog: "PackageCatalog") -> List[str]:
        """Catalog packages whose concurrent resolution is currently absent."""
        results = self.resolve_all(catalog.all_names(), concurrent=True)
        return [r.package for r in results if r.absent]
