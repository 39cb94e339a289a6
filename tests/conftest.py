"""Shared fixtures: an offline fetcher and Constants isolation."""

import json
import logging
import os
import threading

import pytest

from relscout.common.cache import CacheStore
from relscout.common.http_client import Fetcher
from relscout.constants import Constants
from relscout.errors import FetchError


class FakeFetcher(Fetcher):
    """Fetcher serving canned responses and recording every request.

    ``responses`` maps URL to bytes, str, JSON-able list/dict or an
    exception instance to raise. Unknown URLs raise FetchError.
    """

    def __init__(self, responses=None, git_refs=None):
        super().__init__(cache=CacheStore(directory="/nonexistent-relscout-cache"))
        self.responses = dict(responses or {})
        self.git_refs = dict(git_refs or {})
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, url, headers=None):
        with self._lock:
            self.calls.append(url)
        value = self.responses.get(url)
        if value is None:
            raise FetchError(url, "no canned response")
        if isinstance(value, Exception):
            raise value
        if isinstance(value, (list, dict)):
            return json.dumps(value).encode("utf-8")
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def git_tags(self, url):
        with self._lock:
            self.calls.append(url)
        if url not in self.git_refs:
            raise FetchError(url, "no canned refs")
        return list(self.git_refs[url])


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture(autouse=True)
def restore_constants(monkeypatch):
    """Undo any Constants mutation and isolate cache/config env vars."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    for var in (Constants.ENV_CACHE_DIR, Constants.ENV_CONFIG, Constants.ENV_LOG_LEVEL):
        monkeypatch.delenv(var, raising=False)
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)
    # --cache-dir exports the env var directly
    os.environ.pop(Constants.ENV_CACHE_DIR, None)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by cli.main so they never outlive capsys streams."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if getattr(handler, "_relscout_handler", False):
            root.removeHandler(handler)
    root.setLevel(level)
