"""On-disk TTL cache for upstream responses.

One file per request URL; freshness is the file modification time compared
against the TTL. Empty bodies are never stored so a failed fetch can not be
served from cache later.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from relscout.constants import Constants
from relscout.common.logging_utils import extra_context, is_debug_enabled, safe_url

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|\s]')


def default_cache_dir() -> Path:
    """Return the cache directory honoring env and configured overrides."""
    env_dir = os.environ.get(Constants.ENV_CACHE_DIR)
    if env_dir:
        return Path(env_dir)
    if Constants.CACHE_DIR:
        return Path(Constants.CACHE_DIR)
    return Path(tempfile.gettempdir()) / Constants.CACHE_DIR_NAME


@dataclass
class CacheEntry:
    """A single persisted response."""

    url: str
    body: bytes
    fetched_at: float = field(default_factory=time.time)

    def age(self, now: Optional[float] = None) -> float:
        """Seconds since the entry was fetched."""
        return (now if now is not None else time.time()) - self.fetched_at

    def is_fresh(self, ttl: int, now: Optional[float] = None) -> bool:
        """Check whether this entry is still inside the TTL window."""
        return bool(self.body) and self.age(now) < ttl


class CacheStore:
    """TTL cache for upstream responses, persisted as files.

    Concurrent writers to the same key race with last-write-wins semantics;
    writes go through a temporary file and an atomic rename so readers only
    ever see a complete snapshot.
    """

    def __init__(self, directory: Optional[Union[str, Path]] = None, ttl: Optional[int] = None):
        """Initialize the cache store.

        Args:
            directory: Cache directory. Defaults to :func:`default_cache_dir`.
            ttl: Time-to-live in seconds. Defaults to Constants.CACHE_TTL_SEC.
        """
        self.directory = Path(directory) if directory is not None else default_cache_dir()
        self.ttl = ttl if ttl is not None else Constants.CACHE_TTL_SEC

    @staticmethod
    def key_for(url: str) -> str:
        """Map a URL to a filesystem-safe file name."""
        name = _UNSAFE_CHARS.sub("_", url)
        if len(name) > Constants.CACHE_MAX_NAME_LEN:
            digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
            name = f"{name[:150]}-{digest}"
        return name

    def path_for(self, url: str) -> Path:
        """Return the cache file path for ``url``."""
        return self.directory / self.key_for(url)

    def get_entry(self, url: str) -> Optional[CacheEntry]:
        """Return the stored entry for ``url`` regardless of freshness."""
        path = self.path_for(url)
        try:
            fetched_at = path.stat().st_mtime
            body = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Unreadable cache entry %s: %s", path, exc)
            return None
        return CacheEntry(url=url, body=body, fetched_at=fetched_at)

    def get(self, url: str) -> Optional[bytes]:
        """Get a cached response body.

        Args:
            url: Request URL.

        Returns:
            Body bytes, or None when missing, empty or older than the TTL.
        """
        entry = self.get_entry(url)
        if entry is None or not entry.is_fresh(self.ttl):
            if is_debug_enabled(logger):
                logger.debug(
                    "Cache miss",
                    extra=extra_context(
                        event="cache_miss",
                        component="cache",
                        action="get",
                        target=safe_url(url),
                        outcome="missing" if entry is None else "stale",
                    ),
                )
            return None
        return entry.body

    def put(self, url: str, body: bytes) -> None:
        """Store a response body.

        An empty body is a no-op that also removes any leftover entry.
        """
        if not body:
            self.invalidate(url)
            return

        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.path_for(url)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(body)
            os.replace(tmp_path, target)
        except OSError:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise

    def try_put(self, url: str, body: bytes) -> bool:
        """Like :meth:`put` but a filesystem error only logs a warning.

        Returns:
            True when the cache now reflects ``body``.
        """
        try:
            self.put(url, body)
        except OSError as exc:
            logger.warning(
                "Cache write failed for %s: %s",
                safe_url(url),
                exc,
                extra=extra_context(
                    event="cache_write",
                    component="cache",
                    action="put",
                    outcome="os_error",
                    target=safe_url(url),
                ),
            )
            return False
        return True

    def invalidate(self, url: str) -> None:
        """Remove the cached response for ``url`` if present."""
        try:
            self.path_for(url).unlink()
        except FileNotFoundError:
            pass

    def clear(self) -> int:
        """Remove every cached response and return how many were deleted."""
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.iterdir():
            if path.is_file():
                path.unlink()
                removed += 1
        return removed

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        now = time.time()
        total = fresh = size = 0
        if self.directory.is_dir():
            for path in self.directory.iterdir():
                if not path.is_file() or path.name.startswith(".tmp-"):
                    continue
                st = path.stat()
                total += 1
                size += st.st_size
                if st.st_size and now - st.st_mtime < self.ttl:
                    fresh += 1
        return {
            "directory": str(self.directory),
            "total_entries": total,
            "fresh_entries": fresh,
            "stale_entries": total - fresh,
            "total_bytes": size,
            "ttl": self.ttl,
        }
