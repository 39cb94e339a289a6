"""Shared fetch, cache and logging helpers."""

from .cache import CacheEntry, CacheStore
from .http_client import Fetcher

__all__ = ["CacheEntry", "CacheStore", "Fetcher"]
