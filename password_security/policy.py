"""
policy.py

Configurable password policy. validate() runs every rule and reports all
violations together; nothing short-circuits except an empty password.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .breach import BreachChecker, BreachResult
from .strength import StrengthAssessment, assess

logger = logging.getLogger(__name__)

DEFAULT_FORBIDDEN_PATTERNS = ("password", "admin", "login")


@dataclass(frozen=True)
class PolicyConfig:
    min_length: int = 8
    max_length: int = 128
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = True
    min_strength_score: int = 60
    check_breaches: bool = True
    max_repeating_chars: int = 3
    forbidden_patterns: Tuple[str, ...] = field(default=DEFAULT_FORBIDDEN_PATTERNS)

    def __post_init__(self):
        if self.min_length < 0 or self.max_length < 0:
            raise ValueError("length bounds must be non-negative")
        if self.min_length > self.max_length:
            raise ValueError(f"min_length ({self.min_length}) exceeds max_length ({self.max_length})")
        if self.max_repeating_chars < 1:
            raise ValueError("max_repeating_chars must be at least 1")
        if not 0 <= self.min_strength_score <= 100:
            raise ValueError("min_strength_score must be within 0..100")
        # lists from JSON/CLI become tuples so the config stays immutable
        object.__setattr__(self, "forbidden_patterns", tuple(self.forbidden_patterns))

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "PolicyConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"unknown policy option(s): {', '.join(unknown)}")
        return cls(**options)

    def with_options(self, **changes) -> "PolicyConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class PolicyResult:
    is_valid: bool
    violations: List[str]
    strength: StrengthAssessment
    breach: Optional[BreachResult] = None

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "is_valid": self.is_valid,
            "violations": list(self.violations),
            "strength": self.strength.to_dict(),
        }
        if self.breach is not None:
            d["breach"] = self.breach.to_dict()
        return d


class PolicyValidator:
    """Evaluates a password against a PolicyConfig, optionally with a breach lookup."""

    def __init__(self, checker: Optional[BreachChecker] = None):
        self.checker = checker

    def validate(self, password: str, policy: Optional[PolicyConfig] = None) -> PolicyResult:
        policy = policy or PolicyConfig()

        if not password:
            return PolicyResult(False, ["Password is required"], assess(""))

        violations: List[str] = []
        if len(password) < policy.min_length:
            violations.append(f"Password must be at least {policy.min_length} characters long")
        if len(password) > policy.max_length:
            violations.append(f"Password must not exceed {policy.max_length} characters")

        if policy.require_lowercase and not re.search(r"[a-z]", password):
            violations.append("Password must contain at least one lowercase letter")
        if policy.require_uppercase and not re.search(r"[A-Z]", password):
            violations.append("Password must contain at least one uppercase letter")
        if policy.require_numbers and not re.search(r"[0-9]", password):
            violations.append("Password must contain at least one number")
        if policy.require_special_chars and not re.search(r"[^a-zA-Z0-9]", password):
            violations.append("Password must contain at least one special character")

        strength = assess(password)
        if strength.score < policy.min_strength_score:
            violations.append(
                f"Password strength is too low (score: {strength.score}/{policy.min_strength_score})")

        if re.search(r"(.)\1{%d,}" % policy.max_repeating_chars, password, re.IGNORECASE | re.DOTALL):
            violations.append(
                f"Password contains too many repeating characters (max: {policy.max_repeating_chars})")

        lowered = password.lower()
        for pattern in policy.forbidden_patterns:
            if pattern and pattern.lower() in lowered:
                violations.append(f"Password cannot contain: {pattern}")

        breach = None
        if policy.check_breaches and self.checker is not None:
            breach = self.checker.check(password)
            if breach.is_breached:
                violations.append(
                    f"Password has appeared in a data breach {breach.count} time(s) and must not be used")
            elif breach.error is not None:
                logger.info("breach status unknown (%s); evaluated on structure only", breach.error)

        return PolicyResult(not violations, violations, strength, breach)


def validate_password_policy(password: str, policy: Optional[PolicyConfig] = None,
                             checker: Optional[BreachChecker] = None) -> PolicyResult:
    return PolicyValidator(checker).validate(password, policy)
