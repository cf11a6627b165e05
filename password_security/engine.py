"""
engine.py

PasswordSecurity wires one hash backend, one RangeCache and one
BreachChecker together. Build it once at start-up and pass it around;
close() releases the HTTP session and empties the cache.
"""

from __future__ import annotations
import logging
from typing import Optional

import requests

from .breach import DEFAULT_API_URL, DEFAULT_TIMEOUT, BreachChecker, BreachResult
from .cache import DEFAULT_CACHE_SIZE, DEFAULT_CACHE_TTL, RangeCache
from .generator import DEFAULT_PASSWORD_LENGTH, PasswordGenerator
from .hashing import HashBackend, select_backend
from .policy import PolicyConfig, PolicyResult, PolicyValidator
from .strength import StrengthAssessment, assess

logger = logging.getLogger(__name__)


class PasswordSecurity:

    def __init__(self, checker: BreachChecker, generator: Optional[PasswordGenerator] = None):
        self.checker = checker
        self.validator = PolicyValidator(checker)
        self.generator = generator or PasswordGenerator()

    @classmethod
    def create(cls, backend: Optional[HashBackend] = None, cache: Optional[RangeCache] = None,
               session: Optional[requests.Session] = None, api_url: str = DEFAULT_API_URL,
               timeout: float = DEFAULT_TIMEOUT, cache_ttl: float = DEFAULT_CACHE_TTL,
               cache_size: int = DEFAULT_CACHE_SIZE) -> "PasswordSecurity":
        if backend is None:
            backend = select_backend()
        if cache is None:
            cache = RangeCache(ttl=cache_ttl, max_entries=cache_size)
        checker = BreachChecker(backend, cache=cache, session=session, api_url=api_url, timeout=timeout)
        logger.debug("password security engine ready (backend=%s)", backend.name if backend else None)
        return cls(checker)

    @property
    def cache(self) -> Optional[RangeCache]:
        return self.checker.cache

    def check_breached_password(self, password: str) -> BreachResult:
        return self.checker.check(password)

    def assess_password_strength(self, password: str) -> StrengthAssessment:
        return assess(password)

    def validate_password_policy(self, password: str, policy: Optional[PolicyConfig] = None) -> PolicyResult:
        return self.validator.validate(password, policy)

    def generate_secure_password(self, length: int = DEFAULT_PASSWORD_LENGTH) -> str:
        return self.generator.generate(length)

    def close(self) -> None:
        if self.checker.cache is not None:
            self.checker.cache.clear()
        self.checker.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
