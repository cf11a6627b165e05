"""
breach.py

Breach corpus lookup using the k-anonymity range API (HaveIBeenPwned style).

Only the first 5 hex characters of the SHA-1 digest are ever sent; the
remaining 35 are matched locally against the returned range. Every failure
is fail-open: the result says "not breached" and carries an error kind.
"""

from __future__ import annotations
import concurrent.futures
import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import requests

from .cache import RangeCache, RangeEntry
from .errors import BreachError, HashUnavailableError
from .hashing import HashBackend

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.pwnedpasswords.com/range/"
DEFAULT_TIMEOUT = 5.0  # seconds
DEFAULT_USER_AGENT = "password-security/1.0"
PREFIX_LENGTH = 5
MIN_CHECK_LENGTH = 4
READ_CHUNK_SIZE = 1024
FETCH_WORKERS = 4


@dataclass(frozen=True)
class BreachResult:
    is_breached: bool
    count: int = 0
    error: Optional[BreachError] = None

    def to_dict(self) -> dict:
        d = {"is_breached": self.is_breached, "count": self.count}
        if self.error is not None:
            d["error"] = self.error.value
        return d


def split_digest(digest: str) -> Tuple[str, str]:
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]

def parse_range_response(text: str) -> List[RangeEntry]:
    """Parse 'SUFFIX:COUNT' lines; blank or malformed lines are skipped."""
    entries: List[RangeEntry] = []
    for line in text.splitlines():
        suffix, sep, count = line.strip().partition(":")
        if not sep:
            continue
        try:
            n = int(count)
        except ValueError:
            continue
        if n < 0:
            continue
        entries.append(RangeEntry(suffix.upper(), n))
    return entries

def find_suffix(entries: Iterable[RangeEntry], suffix: str) -> BreachResult:
    for entry in entries:
        # count 0 lines are padding, not real hits
        if entry.suffix == suffix and entry.count > 0:
            return BreachResult(True, entry.count)
    return BreachResult(False, 0)


class BreachChecker:
    """
    Checks passwords against the breach corpus.

    backend may be None when no SHA-1 strategy is usable; every check then
    reports HASH_UNAVAILABLE.
    """

    def __init__(self, backend: Optional[HashBackend], cache: Optional[RangeCache] = None,
                 session: Optional[requests.Session] = None, api_url: str = DEFAULT_API_URL,
                 timeout: float = DEFAULT_TIMEOUT, add_padding: bool = True,
                 user_agent: str = DEFAULT_USER_AGENT):
        self.backend = backend
        self.cache = cache
        self.session = session or requests.Session()
        self.api_url = api_url if api_url.endswith("/") else api_url + "/"
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}
        if add_padding:
            self.headers["Add-Padding"] = "true"
        self.request_count = 0
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=FETCH_WORKERS,
                                                               thread_name_prefix="breach-range")

    def check(self, password: str) -> BreachResult:
        start = time.perf_counter()
        try:
            result = self._check(password)
        except Exception:
            logger.exception("breach check failed unexpectedly")
            return BreachResult(False, 0, BreachError.CHECK_FAILED)
        elapsed_ms = (time.perf_counter() - start) * 1000
        if result.is_breached:
            logger.info("breach corpus hit (count=%d)", result.count)
        logger.debug("breach check completed in %.2fms", elapsed_ms)
        return result

    check_breached_password = check

    def _check(self, password: str) -> BreachResult:
        if not password or len(password) < MIN_CHECK_LENGTH:
            return BreachResult(False, 0)

        if self.backend is None:
            logger.warning("no hash backend configured, skipping breach check")
            return BreachResult(False, 0, BreachError.HASH_UNAVAILABLE)
        try:
            digest = self.backend.digest(password)
        except HashUnavailableError as e:
            logger.warning("hash generation failed: %s", e)
            return BreachResult(False, 0, BreachError.HASH_UNAVAILABLE)

        prefix, suffix = split_digest(digest)
        entries = self.cache.get(prefix) if self.cache is not None else None
        if entries is not None:
            logger.debug("range %s served from cache", prefix)
            return find_suffix(entries, suffix)

        entries, error = self.fetch_range(prefix)
        if error is not None:
            return BreachResult(False, 0, error)
        if self.cache is not None:
            self.cache.put(prefix, entries)
        return find_suffix(entries, suffix)

    def fetch_range(self, prefix: str) -> Tuple[Tuple[RangeEntry, ...], Optional[BreachError]]:
        """
        GET the range for prefix. Nothing but the prefix goes on the wire.

        The whole exchange (connect, headers and body) must finish within
        self.timeout; past that the result is TIMEOUT and the worker stops
        reading at its next chunk.
        """
        self.request_count += 1
        deadline = time.monotonic() + self.timeout
        future = self._executor.submit(self._download, f"{self.api_url}{prefix}", deadline)
        try:
            status, body = future.result(timeout=self.timeout)
        except (concurrent.futures.TimeoutError, requests.exceptions.Timeout):
            future.cancel()
            logger.warning("breach range request timed out after %.1fs", self.timeout)
            return (), BreachError.TIMEOUT
        except requests.exceptions.RequestException as e:
            logger.warning("breach range request failed: %s", type(e).__name__)
            return (), BreachError.API_ERROR

        if not 200 <= status < 300:
            logger.warning("breach range API error: %s", status)
            return (), BreachError.API_ERROR
        return tuple(parse_range_response(body)), None

    def _download(self, url: str, deadline: float) -> Tuple[int, str]:
        resp = self.session.get(url, headers=self.headers, timeout=self.timeout, stream=True)
        try:
            if not 200 <= resp.status_code < 300:
                return resp.status_code, ""
            chunks = []
            for chunk in resp.iter_content(chunk_size=READ_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise requests.exceptions.ReadTimeout("range response exceeded deadline")
                chunks.append(chunk)
            return resp.status_code, b"".join(chunks).decode(resp.encoding or "utf-8", "replace")
        finally:
            resp.close()

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        self.session.close()
