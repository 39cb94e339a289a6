"""Base class for extraction strategies."""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Pattern, Union

from relscout.common.http_client import Fetcher
from relscout.errors import NoCandidateError
from ..compare import max_version

# Release candidates, pre-releases and platform-specific builds.
DEFAULT_EXCLUDE = re.compile(
    r"(?:^|[^a-z])(?:rc|alpha|beta|pre|preview|dev|snapshot|nightly"
    r"|win(?:dows)?|mac|darwin|linux|x86|x64|arm|aarch64)",
    re.IGNORECASE,
)

# Dotted numeric release such as 1, 1.2 or 1.2.3.4.
DOTTED_VERSION = r"\d+(?:\.\d+)*"

PatternLike = Union[str, Pattern[str]]


def _compile(pattern: Optional[PatternLike], default: Optional[Pattern[str]] = None, flags: int = 0) -> Optional[Pattern[str]]:
    if pattern is None:
        return default
    if isinstance(pattern, str):
        return re.compile(pattern, flags)
    return pattern


class ExtractionStrategy(ABC):
    """Turn fetched upstream content into the latest version token.

    Subclasses implement :meth:`fetch_candidates`; filtering and reduction
    to the maximum are shared.
    """

    def __init__(self, exclude: Optional[PatternLike] = None, version_regex: str = DOTTED_VERSION):
        """Initialize the strategy.

        Args:
            exclude: Pattern disqualifying candidates (defaults to DEFAULT_EXCLUDE)
            version_regex: Pattern every accepted candidate must fully match
        """
        self.exclude = _compile(exclude, DEFAULT_EXCLUDE, re.IGNORECASE)
        self.version_regex = version_regex
        self._version_pattern = re.compile(version_regex)

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable upstream identifier used in errors and logs."""

    @abstractmethod
    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        """Fetch upstream content and return raw version candidates.

        Raises:
            FetchError: When the upstream can not be fetched
        """

    def is_excluded(self, candidate: str) -> bool:
        """Return True when ``candidate`` is disqualified."""
        if self.exclude is not None and self.exclude.search(candidate):
            return True
        return self._version_pattern.fullmatch(candidate) is None

    def pick(self, candidates: List[str]) -> str:
        """Return the maximum acceptable candidate.

        Raises:
            NoCandidateError: When no candidate survives filtering
        """
        accepted = [c for c in candidates if not self.is_excluded(c)]
        best = max_version(accepted)
        if best is None:
            raise NoCandidateError(self.source, f"{len(candidates)} candidates, none acceptable")
        return best

    def resolve(self, fetcher: Fetcher) -> str:
        """Fetch, filter and reduce to the latest version."""
        return self.pick(self.fetch_candidates(fetcher))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source!r})"
