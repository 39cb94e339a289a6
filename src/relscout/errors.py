"""Exception taxonomy for version resolution.

Only :class:`UnknownPackageError` is fatal. Every :class:`ResolutionError`
is caught at the single-package boundary and turned into an absent version.
"""

from __future__ import annotations

from typing import Optional


class RelscoutError(Exception):
    """Base class for all relscout errors."""


class UnknownPackageError(RelscoutError):
    """No category recognises the requested package name."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"Unknown package: {package}")


class ResolutionError(RelscoutError):
    """A soft failure; the package resolves to absent."""


class FetchError(ResolutionError):
    """Network, transport or git failure, or an empty upstream response."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class NoCandidateError(ResolutionError):
    """Upstream content was fetched but no acceptable version matched."""

    def __init__(self, source: str, detail: Optional[str] = None):
        self.source = source
        self.detail = detail
        message = f"No version candidates from {source}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnimplementedResolverError(ResolutionError):
    """The package is known but its resolver is intentionally empty."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"Resolver for {package} is not implemented yet")
