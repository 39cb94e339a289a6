"""Extraction strategies, one per upstream shape."""

from .base import DEFAULT_EXCLUDE, DOTTED_VERSION, ExtractionStrategy
from .family import NodeDistIndexStrategy, NodeJsFamily, PythonFamily, ReleaseFamily
from .git_remote import GitRemoteStrategy
from .mirror import DirectoryListingStrategy, GnuMirrorStrategy
from .tag_api import GitHubTagsStrategy, GitLabTagsStrategy, TagApiStrategy
from .vendor_page import PagePhraseStrategy

__all__ = [
    "DEFAULT_EXCLUDE",
    "DOTTED_VERSION",
    "ExtractionStrategy",
    "TagApiStrategy",
    "GitHubTagsStrategy",
    "GitLabTagsStrategy",
    "GitRemoteStrategy",
    "DirectoryListingStrategy",
    "GnuMirrorStrategy",
    "PagePhraseStrategy",
    "ReleaseFamily",
    "NodeDistIndexStrategy",
    "NodeJsFamily",
    "PythonFamily",
]
