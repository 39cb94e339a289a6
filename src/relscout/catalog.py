"""The package catalog: every category and the names it resolves.

Categories are listed in dispatch priority order. Adding a package means
adding one entry to the matching table below.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from relscout.common.http_client import Fetcher
from relscout.versioning.categories import Category, FamilyCategory, PendingCategory, StaticCategory
from relscout.versioning.compare import natural_sorted
from relscout.versioning.registry import ResolverRegistry
from relscout.versioning.strategies import (
    DirectoryListingStrategy,
    ExtractionStrategy,
    GitHubTagsStrategy,
    GitLabTagsStrategy,
    GitRemoteStrategy,
    GnuMirrorStrategy,
    NodeJsFamily,
    PagePhraseStrategy,
    PythonFamily,
)

GITHUB_TAGS: Dict[str, ExtractionStrategy] = {
    "fmt": GitHubTagsStrategy("fmtlib/fmt"),
    "jq": GitHubTagsStrategy("jqlang/jq", prefix="jq-"),
    "libuv": GitHubTagsStrategy("libuv/libuv", prefix="v"),
    "lz4": GitHubTagsStrategy("lz4/lz4", prefix="v"),
    "meson": GitHubTagsStrategy("mesonbuild/meson"),
    "neovim": GitHubTagsStrategy("neovim/neovim", prefix="v"),
    "ninja": GitHubTagsStrategy("ninja-build/ninja", prefix="v"),
    "zstd": GitHubTagsStrategy("facebook/zstd", prefix="v"),
}

GITLAB_TAGS: Dict[str, ExtractionStrategy] = {
    "cmake": GitLabTagsStrategy("gitlab.kitware.com", "cmake/cmake", prefix="v"),
    "glib": GitLabTagsStrategy("gitlab.gnome.org", "GNOME/glib", even_minor_only=True),
    "libxml2": GitLabTagsStrategy("gitlab.gnome.org", "GNOME/libxml2", prefix="v"),
}

GIT_REMOTE: Dict[str, ExtractionStrategy] = {
    "curl": GitRemoteStrategy("https://github.com/curl/curl.git", prefix="curl-", separator="_"),
    "git": GitRemoteStrategy("https://github.com/git/git.git", prefix="v"),
    "openssl": GitRemoteStrategy("https://github.com/openssl/openssl.git", prefix="openssl-"),
}

GNU_PROJECTS = [
    "autoconf",
    "automake",
    "bash",
    "binutils",
    "bison",
    "coreutils",
    "diffutils",
    "findutils",
    "gawk",
    "grep",
    "gzip",
    "libtool",
    "m4",
    "make",
    "patch",
    "sed",
    "tar",
    "wget",
]

GNU_MIRROR: Dict[str, ExtractionStrategy] = {name: GnuMirrorStrategy(name) for name in GNU_PROJECTS}

MIRROR_DIRECTORY: Dict[str, ExtractionStrategy] = {
    "linux": DirectoryListingStrategy("https://cdn.kernel.org/pub/linux/kernel/v6.x/", prefix="linux-", suffix=r"\.tar\.xz"),
    "pkgconf": DirectoryListingStrategy("https://distfiles.ariadne.space/pkgconf/", prefix="pkgconf-", suffix=r"\.tar\.xz"),
    "xz": DirectoryListingStrategy("https://tukaani.org/xz/", prefix="xz-", suffix=r"\.tar\.gz"),
}

VENDOR_PAGE: Dict[str, ExtractionStrategy] = {
    "go": PagePhraseStrategy("https://go.dev/VERSION?m=text", r"^go(\d+\.\d+(?:\.\d+)?)$"),
    "perl": PagePhraseStrategy("https://www.perl.org/get.html", r"(\d+\.\d+\.\d+) is the latest stable version"),
    "rust": PagePhraseStrategy(
        "https://static.rust-lang.org/dist/channel-rust-stable.toml",
        r'\[pkg\.rust\]\s*version\s*=\s*"(\d+\.\d+\.\d+)',
    ),
    "sqlite": PagePhraseStrategy("https://www.sqlite.org/index.html", r'releaselog/[\d_]+\.html">Version (\d+(?:\.\d+)+)'),
}

PENDING = ["chromium", "firefox", "libreoffice", "thunderbird"]


def build_categories() -> List[Category]:
    """All categories in dispatch priority order."""
    return [
        StaticCategory("github-tags", GITHUB_TAGS),
        StaticCategory("gitlab-tags", GITLAB_TAGS),
        StaticCategory("git-remote", GIT_REMOTE),
        StaticCategory("gnu-mirror", GNU_MIRROR),
        StaticCategory("mirror-directory", MIRROR_DIRECTORY),
        StaticCategory("vendor-page", VENDOR_PAGE),
        FamilyCategory("nodejs", NodeJsFamily()),
        FamilyCategory("python", PythonFamily()),
        PendingCategory("pending", PENDING),
    ]


def build_registry() -> ResolverRegistry:
    """Registry over :func:`build_categories`."""
    return ResolverRegistry(build_categories())


def uses_git(registry: ResolverRegistry, packages: List[str]) -> bool:
    """True when any of ``packages`` is resolved through the git-remote category."""
    return any(registry.lookup(name).name == "git-remote" for name in packages)


class PackageCatalog:
    """Every package name the registry can resolve, including family members."""

    def __init__(self, registry: ResolverRegistry, fetcher: Fetcher):
        self.registry = registry
        self.fetcher = fetcher
        self._names: Optional[List[str]] = None

    def all_names(self) -> List[str]:
        """Static names plus expanded families, de-duplicated and naturally sorted."""
        if self._names is None:
            names: List[str] = []
            for category in self.registry.categories:
                names.extend(category.known_names(self.fetcher))
            self._names = natural_sorted(dict.fromkeys(names))
        return list(self._names)

    def __contains__(self, package: str) -> bool:
        return package in self.all_names()

    def __len__(self) -> int:
        return len(self.all_names())
