"""
strength.py

Password strength scoring (0-100) from length, character classes, entropy
and common weak patterns. Pure: no I/O, no state.
"""

from __future__ import annotations
import math
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

# --- small built-in lists ---
COMMON_WORDS = (
    "password", "welcome", "admin", "login", "user", "guest",
    "test", "demo", "temp", "change", "default", "root",
)

KEYBOARD_PATTERNS = ("qwerty", "asdf", "zxcv", "qaz", "wsx", "edc", "123456", "654321", "987654")

LEET_MAP = str.maketrans("013457@$", "oieastas")

SEQUENCES = ("0123456789", "abcdefghijklmnopqrstuvwxyz")

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^a-zA-Z0-9]")
_REPEAT = re.compile(r"(.)\1{2,}")
_YEAR = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")

MAX_FEEDBACK = 5


class StrengthLevel(str, Enum):
    NONE = "none"
    VERY_WEAK = "very_weak"
    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Requirement:
    met: bool
    text: str


@dataclass(frozen=True)
class StrengthAssessment:
    score: int
    level: StrengthLevel
    feedback: List[str] = field(default_factory=list)
    requirements: List[Requirement] = field(default_factory=list)
    entropy_bits: float = 0.0

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["level"] = self.level.value
        return d

# --- utilities ---
def charset_size(pw: str) -> int:
    size = 0
    if _LOWER.search(pw): size += 26
    if _UPPER.search(pw): size += 26
    if _DIGIT.search(pw): size += 10
    if _SPECIAL.search(pw): size += 32
    return size

def entropy_bits(pw: str) -> float:
    pool = charset_size(pw)
    if not pw or pool == 0:
        return 0.0
    return len(pw) * math.log2(pool)

def normalize_leet(pw: str) -> str:
    return pw.translate(LEET_MAP).lower()

# --- detectors ---
def detect_sequential_chars(pw: str) -> bool:
    """Any ascending run of three digits or letters, e.g. '123', 'abc', 'XYZ'."""
    low = pw.lower()
    for seq in SEQUENCES:
        for i in range(len(seq) - 2):
            if seq[i:i + 3] in low:
                return True
    # 8-9-0 wraps in the digit row
    return "890" in low

def detect_repeated_chars(pw: str) -> bool:
    return _REPEAT.search(pw) is not None

def detect_common_word(pw: str) -> bool:
    normalized = normalize_leet(pw)
    return any(w in normalized for w in COMMON_WORDS)

def detect_keyboard_pattern(pw: str) -> bool:
    low = pw.lower()
    return any(pat in low for pat in KEYBOARD_PATTERNS)

def detect_year(pw: str) -> bool:
    return _YEAR.search(pw) is not None

PATTERN_RULES = (
    (detect_sequential_chars, 10, "Avoid sequential characters"),
    (detect_repeated_chars, 15, "Avoid repeating characters"),
    (detect_common_word, 20, "Avoid common words even with character substitutions"),
    (detect_keyboard_pattern, 15, "Avoid keyboard patterns"),
    (detect_year, 10, "Avoid using years or dates"),
)

def analyze_patterns(pw: str) -> Tuple[int, List[str]]:
    penalty = 0
    feedback: List[str] = []
    for detector, cost, message in PATTERN_RULES:
        if detector(pw):
            penalty += cost
            feedback.append(message)
    return penalty, feedback

# --- scoring ---
def level_for(score: int) -> StrengthLevel:
    if score < 25:
        return StrengthLevel.VERY_WEAK
    if score < 45:
        return StrengthLevel.WEAK
    if score < 65:
        return StrengthLevel.FAIR
    if score < 80:
        return StrengthLevel.GOOD
    return StrengthLevel.STRONG

def assess(pw: str) -> StrengthAssessment:
    if not pw:
        return StrengthAssessment(score=0, level=StrengthLevel.NONE)

    score = 0
    feedback: List[str] = []
    requirements: List[Requirement] = []

    def requirement(met: bool, text: str, points: int, hint: str) -> None:
        nonlocal score
        requirements.append(Requirement(met, text))
        if met:
            score += points
        else:
            feedback.append(hint)

    length = len(pw)
    requirement(length >= 8, "At least 8 characters", 20, "Use at least 8 characters")
    if length >= 12: score += 10
    if length >= 16: score += 10

    requirement(bool(_LOWER.search(pw)), "Lowercase letter", 10, "Include lowercase letters")
    requirement(bool(_UPPER.search(pw)), "Uppercase letter", 10, "Include uppercase letters")
    requirement(bool(_DIGIT.search(pw)), "Number", 10, "Include numbers")
    requirement(bool(_SPECIAL.search(pw)), "Special character", 15,
                "Include special characters (!@#$%^&*)")

    penalty, pattern_feedback = analyze_patterns(pw)
    score -= penalty
    feedback.extend(pattern_feedback)

    bits = entropy_bits(pw)
    if bits >= 50: score += 10
    if bits >= 70: score += 5

    score = max(0, min(100, score))
    return StrengthAssessment(
        score=score,
        level=level_for(score),
        feedback=feedback[:MAX_FEEDBACK],
        requirements=requirements,
        entropy_bits=bits,
    )

assess_password_strength = assess
