"""Tag-listing API strategies (GitHub, GitLab)."""

import os
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

from relscout.common.http_client import Fetcher
from relscout.constants import Constants
from relscout.errors import NoCandidateError
from .base import DOTTED_VERSION, ExtractionStrategy, PatternLike


def strip_tag(tag: str, prefix: str = "", separator: Optional[str] = None) -> Optional[str]:
    """Remove a literal tag prefix and normalise the separator.

    Returns None when ``prefix`` is set and the tag does not carry it.
    """
    tag = tag.strip()
    if prefix:
        if not tag.startswith(prefix):
            return None
        tag = tag[len(prefix):]
    if separator:
        tag = tag.replace(separator, ".")
    return tag


def tags_to_candidates(tags: Iterable[str], prefix: str = "", separator: Optional[str] = None) -> List[str]:
    """Apply :func:`strip_tag` to every tag, dropping non-matching ones."""
    candidates = []
    for tag in tags:
        stripped = strip_tag(tag, prefix, separator)
        if stripped:
            candidates.append(stripped)
    return candidates


def is_even_minor(version: str) -> bool:
    """GNOME-style stable series check: the minor number is even."""
    parts = version.split(".")
    if len(parts) < 2 or not parts[1].isdigit():
        return False
    return int(parts[1]) % 2 == 0


class TagApiStrategy(ExtractionStrategy):
    """Resolve from a JSON array of objects carrying a ``name`` field."""

    def __init__(
        self,
        url: str,
        prefix: str = "",
        separator: Optional[str] = None,
        exclude: Optional[PatternLike] = None,
        version_regex: str = DOTTED_VERSION,
        even_minor_only: bool = False,
    ):
        super().__init__(exclude=exclude, version_regex=version_regex)
        self.url = url
        self.prefix = prefix
        self.separator = separator
        self.even_minor_only = even_minor_only

    @property
    def source(self) -> str:
        return self.url

    def headers(self) -> Dict[str, str]:
        """Extra request headers (authentication)."""
        return {}

    def fetch_candidates(self, fetcher: Fetcher) -> List[str]:
        data = fetcher.fetch_json(self.url, headers=self.headers() or None)
        if not isinstance(data, list):
            raise NoCandidateError(self.source, "tag API did not return a list")
        names = [item["name"] for item in data if isinstance(item, dict) and isinstance(item.get("name"), str)]
        return tags_to_candidates(names, self.prefix, self.separator)

    def is_excluded(self, candidate: str) -> bool:
        if super().is_excluded(candidate):
            return True
        return self.even_minor_only and not is_even_minor(candidate)


class GitHubTagsStrategy(TagApiStrategy):
    """GitHub ``/repos/<owner>/<repo>/tags`` listing."""

    def __init__(self, repo: str, prefix: str = "", **kwargs):
        """Initialize the strategy.

        Args:
            repo: Repository in 'owner/repo' format
            prefix: Literal tag prefix stripped before comparison
        """
        url = f"{Constants.GITHUB_API_BASE}/repos/{repo}/tags?per_page={Constants.TAGS_PER_PAGE}"
        super().__init__(url, prefix=prefix, **kwargs)
        self.repo = repo

    def headers(self) -> Dict[str, str]:
        token = os.environ.get(Constants.ENV_GITHUB_TOKEN)
        if token:
            return {"Authorization": f"Bearer {token}", "Accept": "application/vnd.github+json"}
        return {"Accept": "application/vnd.github+json"}


class GitLabTagsStrategy(TagApiStrategy):
    """GitLab ``/projects/<id>/repository/tags`` listing on any GitLab host."""

    def __init__(self, host: str, project: str, prefix: str = "", **kwargs):
        """Initialize the strategy.

        Args:
            host: GitLab host name, e.g. 'gitlab.gnome.org'
            project: Project path, e.g. 'GNOME/glib'
            prefix: Literal tag prefix stripped before comparison
        """
        project_path = quote(project, safe="")
        url = f"https://{host}/api/v4/projects/{project_path}/repository/tags?per_page={Constants.TAGS_PER_PAGE}"
        super().__init__(url, prefix=prefix, **kwargs)
        self.host = host
        self.project = project

    def headers(self) -> Dict[str, str]:
        token = os.environ.get(Constants.ENV_GITLAB_TOKEN)
        if token and self.host == "gitlab.com":
            return {"Private-Token": token}
        return {}
