"""Mirror and directory-listing strategies.

These read an FTP-style or HTML index page and pull versions out of file or
directory names following a per-project naming convention
(prefix + version + suffix).
"""

import re
from typing import List, Optional

from relscout.common.http_client import Fetcher
from .base import DOTTED_VERSION, ExtractionStrategy, PatternLike

TARBALL_SUFFIX = r"\.tar\.(?:gz|bz2|xz|lz|zst)"
GNU_MIRROR = "https://ftp.gnu.org/gnu"


class DirectoryListingStrategy(ExtractionStrategy):
    """Extract ``<prefix><version><suffix>`` occurrences from an index page."""

    def __init__(
        self,
        url: str,
        prefix: str,
        suffix: str = TARBALL_SUFFIX,
        version_regex: str = DOTTED_VERSION,
        exclude: Optional[PatternLike] = None,
    ):
        """Initialize the strategy.

        Args:
            url: Index page URL
            prefix: Literal text preceding the version (escaped)
            suffix: Regex following the version
            version_regex: Regex of the version itself
            exclude: Disqualifying pattern
        """
        super().__init__(exclude=exclude, version_regex=version_regex)
        self.url = url
        self.prefix = prefix
        self.suffix = suffix
        self._pattern = re.compile(f"{re.escape(prefix)}({version_regex}){suffix}")

    @property
    def source(self) -> str:
        return self.url

    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        text = fetcher.fetch_text(self.url)
        return list(dict.fromkeys(self._pattern.findall(text)))


class GnuMirrorStrategy(DirectoryListingStrategy):
    """GNU project tarballs on ftp.gnu.org."""

    def __init__(self, project: str, tarball: Optional[str] = None, **kwargs):
        """Initialize the strategy.

        Args:
            project: Directory name under /gnu/
            tarball: Tarball base name when it differs from ``project``
        """
        super().__init__(f"{GNU_MIRROR}/{project}/", prefix=f"{tarball or project}-", **kwargs)
        self.project = project
