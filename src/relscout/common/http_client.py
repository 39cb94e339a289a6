"""Cached HTTP fetching shared by every extraction strategy.

Encapsulates request/timeout error handling and the cache round trip so
strategies only deal with bytes. All failures surface as
:class:`relscout.errors.FetchError`; nothing is retried.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from relscout.constants import Constants
from relscout.errors import FetchError
from relscout.common.cache import CacheStore
from relscout.common.git_client import ls_remote_tags, parse_tag_refs
from relscout.common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class Fetcher:
    """GET upstream resources through a :class:`CacheStore`."""

    def __init__(
        self,
        cache: Optional[CacheStore] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize the fetcher.

        Args:
            cache: Cache store (defaults to a store in the default cache dir)
            timeout: Per-request timeout in seconds (defaults to Constants.REQUEST_TIMEOUT)
            user_agent: User-Agent header sent on live requests
        """
        self.cache = cache if cache is not None else CacheStore()
        self.timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
        self.user_agent = user_agent or Constants.USER_AGENT

    def _request_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {"User-Agent": self.user_agent}
        if headers:
            merged.update(headers)
        return merged

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """Return the body of ``url``, from cache when fresh.

        Args:
            url: Target URL (also the cache key)
            headers: Extra request headers; they do not take part in the cache key

        Returns:
            Response body bytes

        Raises:
            FetchError: On transport error, timeout, non-2xx status or empty body
        """
        safe_target = safe_url(url)
        cached = self.cache.get(url)
        if cached is not None:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP cache hit",
                    extra=extra_context(
                        event="cache_hit",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                    ),
                )
            return cached

        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                    ),
                )
            try:
                response = requests.get(
                    url,
                    headers=self._request_headers(headers),
                    timeout=self.timeout,
                )
            except requests.Timeout as exc:
                self._log_failure(safe_target, "timeout", t)
                raise FetchError(url, f"timed out after {self.timeout} seconds") from exc
            except requests.RequestException as exc:  # includes ConnectionError
                self._log_failure(safe_target, "request_exception", t)
                raise FetchError(url, f"connection error: {exc}") from exc

        if not response.ok:
            self._log_failure(safe_target, "http_error", t, status_code=response.status_code)
            raise FetchError(url, f"HTTP status {response.status_code}")

        body = response.content or b""
        self.cache.try_put(url, body)
        if not body:
            self._log_failure(safe_target, "empty_body", t, status_code=response.status_code)
            raise FetchError(url, "empty response body")

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                ),
            )
        return body

    def fetch_text(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """Fetch ``url`` and decode it as UTF-8, replacing invalid bytes."""
        return self.fetch(url, headers=headers).decode("utf-8", errors="replace")

    def fetch_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        """Fetch ``url`` and parse it as JSON.

        Raises:
            FetchError: When the request fails or the body is not valid JSON
        """
        body = self.fetch(url, headers=headers)
        try:
            return json.loads(body)
        except ValueError as exc:
            if is_debug_enabled(logger):
                logger.debug(
                    "JSON decode error",
                    extra=extra_context(
                        event="parse",
                        component="http_client",
                        action="fetch_json",
                        outcome="json_decode_error",
                        target=safe_url(url),
                    ),
                )
            raise FetchError(url, "response is not valid JSON") from exc

    def git_tags(self, url: str) -> List[str]:
        """List tag names of a remote git repository (cached like HTTP)."""
        output = ls_remote_tags(url, cache=self.cache, timeout=self.timeout)
        return parse_tag_refs(output)

    def _log_failure(self, target: str, outcome: str, timer: Timer, status_code: Optional[int] = None) -> None:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request failed",
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    action="GET",
                    outcome=outcome,
                    status_code=status_code,
                    duration_ms=timer.duration_ms(),
                    target=target,
                ),
            )
