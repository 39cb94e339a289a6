"""Remote tag listing through ``git ls-remote``."""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import List, Optional

from relscout.constants import Constants
from relscout.errors import FetchError
from relscout.common.cache import CacheStore
from relscout.common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

TAG_NAMESPACE = "refs/tags/"
PEELED_SUFFIX = "^{}"


def git_available() -> bool:
    """Return True when a ``git`` executable is on PATH."""
    return shutil.which("git") is not None


def cache_key(url: str) -> str:
    """Cache key for the ls-remote output of ``url``."""
    return f"git-ls-remote:{url}"


def ls_remote_tags(url: str, cache: Optional[CacheStore] = None, timeout: Optional[float] = None) -> bytes:
    """Return raw ``git ls-remote --tags --refs`` output for ``url``.

    Args:
        url: Remote repository URL
        cache: Optional cache store; output is cached under :func:`cache_key`
        timeout: Seconds before the git process is killed

    Raises:
        FetchError: When git is missing, fails, times out or prints nothing
    """
    key = cache_key(url)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0")
    with Timer() as t:
        try:
            proc = subprocess.run(
                ["git", "ls-remote", "--tags", "--refs", url],
                capture_output=True,
                timeout=timeout,
                env=env,
                check=False,
            )
        except FileNotFoundError as exc:
            raise FetchError(url, "git executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise FetchError(url, f"git ls-remote timed out after {timeout} seconds") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "git ls-remote finished",
            extra=extra_context(
                event="git_ls_remote",
                component="git_client",
                action="ls-remote",
                outcome="success" if proc.returncode == 0 else "failure",
                returncode=proc.returncode,
                duration_ms=t.duration_ms(),
                target=safe_url(url),
            ),
        )

    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
        raise FetchError(url, f"git ls-remote exited with {proc.returncode}: {stderr}")

    output = (proc.stdout or b"").strip()
    if cache is not None:
        cache.try_put(key, output)
    if not output:
        raise FetchError(url, "git ls-remote returned no tags")
    return output


def parse_tag_refs(output: bytes) -> List[str]:
    """Extract tag names from ls-remote output lines ``<hash>\\t refs/tags/<name>``."""
    tags: List[str] = []
    for line in output.decode("utf-8", errors="replace").splitlines():
        fields = line.split()
        if len(fields) != 2:
            continue
        ref = fields[1]
        if not ref.startswith(TAG_NAMESPACE):
            continue
        name = ref[len(TAG_NAMESPACE):]
        if name.endswith(PEELED_SUFFIX):
            name = name[: -len(PEELED_SUFFIX)]
        if name and name not in tags:
            tags.append(name)
    return tags
