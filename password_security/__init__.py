"""Password breach checking, strength scoring, policy validation and generation."""

from .breach import BreachChecker, BreachResult, parse_range_response
from .cache import RangeCache, RangeEntry
from .engine import PasswordSecurity
from .errors import BreachError, HashUnavailableError, PasswordSecurityError
from .generator import PasswordGenerator, generate_secure_password
from .hashing import (BuiltinSha1Backend, HashBackend, HashlibBackend, PureSha1Backend,
                      select_backend, sha1_hex)
from .policy import PolicyConfig, PolicyResult, PolicyValidator, validate_password_policy
from .strength import StrengthAssessment, StrengthLevel, assess_password_strength

__version__ = "1.0.0"

__all__ = [
    "BreachChecker", "BreachError", "BreachResult", "BuiltinSha1Backend", "HashBackend",
    "HashUnavailableError", "HashlibBackend", "PasswordGenerator", "PasswordSecurity",
    "PasswordSecurityError", "PolicyConfig", "PolicyResult", "PolicyValidator",
    "PureSha1Backend", "RangeCache", "RangeEntry", "StrengthAssessment", "StrengthLevel",
    "assess_password_strength", "generate_secure_password", "parse_range_response",
    "select_backend", "sha1_hex", "validate_password_policy",
]
