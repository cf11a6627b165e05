"""
generator.py

Random passwords that always contain a lowercase letter, an uppercase letter,
a digit and a symbol. Uses the secrets module (CSPRNG).
"""

from __future__ import annotations
import secrets
import string
from typing import List

DEFAULT_PASSWORD_LENGTH = 16
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


class PasswordGenerator:

    def __init__(self, lowercase: str = string.ascii_lowercase, uppercase: str = string.ascii_uppercase,
                 digits: str = string.digits, symbols: str = SYMBOLS):
        self.classes = [lowercase, uppercase, digits, symbols]
        if not all(self.classes):
            raise ValueError("every character class needs at least one character")
        self.alphabet = "".join(self.classes)
        self.generated_count = 0

    def generate(self, length: int = DEFAULT_PASSWORD_LENGTH) -> str:
        if length < len(self.classes):
            raise ValueError(f"Password length must be at least {len(self.classes)} characters")

        chars: List[str] = [secrets.choice(cls) for cls in self.classes]
        chars.extend(secrets.choice(self.alphabet) for _ in range(length - len(chars)))

        # Fisher-Yates
        for i in range(len(chars) - 1, 0, -1):
            j = secrets.randbelow(i + 1)
            chars[i], chars[j] = chars[j], chars[i]

        self.generated_count += 1
        return "".join(chars)


def generate_secure_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    return PasswordGenerator().generate(length)
