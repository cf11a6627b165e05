"""
errors.py

Exceptions and error kinds shared by the password security engine.
"""

from __future__ import annotations
from enum import Enum


class PasswordSecurityError(Exception):
    """Base class for errors raised inside the engine."""


class HashUnavailableError(PasswordSecurityError):
    """No SHA-1 primitive could produce a digest."""


class BreachError(str, Enum):
    """Why a breach check could not reach a verdict. Always fail-open."""
    HASH_UNAVAILABLE = "HASH_UNAVAILABLE"
    API_ERROR = "API_ERROR"
    TIMEOUT = "TIMEOUT"
    CHECK_FAILED = "CHECK_FAILED"

    def __str__(self) -> str:
        return self.value
