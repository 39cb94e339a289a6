"""Git remote tag strategy."""

from typing import List, Optional

from relscout.common.http_client import Fetcher
from .base import DOTTED_VERSION, ExtractionStrategy, PatternLike
from .tag_api import tags_to_candidates


class GitRemoteStrategy(ExtractionStrategy):
    """Resolve from the tag refs of a remote git repository."""

    def __init__(
        self,
        url: str,
        prefix: str = "",
        separator: Optional[str] = None,
        exclude: Optional[PatternLike] = None,
        version_regex: str = DOTTED_VERSION,
    ):
        super().__init__(exclude=exclude, version_regex=version_regex)
        self.url = url
        self.prefix = prefix
        self.separator = separator

    @property
    def source(self) -> str:
        return self.url

    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        return tags_to_candidates(fetcher.git_tags(self.url), self.prefix, self.separator)
