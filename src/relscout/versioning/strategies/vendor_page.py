"""Vendor download page scraping.

The most brittle strategy: a redesign of the page makes the phrase pattern
stop matching, which degrades that package to absent instead of failing.
"""

import re
from typing import List, Optional

from relscout.common.http_client import Fetcher
from .base import DOTTED_VERSION, ExtractionStrategy, PatternLike


class PagePhraseStrategy(ExtractionStrategy):
    """Extract the version next to a fixed phrase on a vendor page."""

    def __init__(
        self,
        url: str,
        pattern: str,
        separator: Optional[str] = None,
        exclude: Optional[PatternLike] = None,
        version_regex: str = DOTTED_VERSION,
    ):
        """Initialize the strategy.

        Args:
            url: Page URL
            pattern: Regex with exactly one capture group holding the version
            separator: Character rewritten to '.' in captured versions
        """
        super().__init__(exclude=exclude, version_regex=version_regex)
        self.url = url
        self.separator = separator
        self._pattern = re.compile(pattern, re.MULTILINE)
        if self._pattern.groups != 1:
            raise ValueError(f"Phrase pattern needs exactly one group: {pattern}")

    @property
    def source(self) -> str:
        return self.url

    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        text = fetcher.fetch_text(self.url)
        found = self._pattern.findall(text)
        if self.separator:
            found = [v.replace(self.separator, ".") for v in found]
        return list(dict.fromkeys(found))
