"""
hashing.py

SHA-1 digests for the breach range protocol.

Three strategies, picked once at start-up by select_backend():
 - hashlib (OpenSSL backed)
 - CPython's bundled _sha1 module
 - a pure Python RFC 3174 implementation that is always available

Every strategy returns the same 40 character uppercase hex digest.
"""

from __future__ import annotations
import hashlib
import importlib
import logging
import struct
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple, Type

from .errors import HashUnavailableError

logger = logging.getLogger(__name__)

# RFC 3174 section 7.3 plus the empty string
SELF_TEST_VECTORS: List[Tuple[str, str]] = [
    ("", "DA39A3EE5E6B4B0D3255BFEF95601890AFD80709"),
    ("abc", "A9993E364706816ABA3E25717850C26C9CD0D89D"),
    ("abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
     "84983E441C3BD26EBAAE4AA1F95129E5E54670F1"),
]

_MASK32 = 0xFFFFFFFF

# --- pure python SHA-1 (RFC 3174) ---

def encode_password(password: str) -> bytes:
    # surrogatepass: lone surrogates must hash, not raise
    return password.encode("utf-8", "surrogatepass")

def _rotl(value: int, count: int) -> int:
    return ((value << count) | (value >> (32 - count))) & _MASK32

def _pad(data: bytes) -> bytes:
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF
    padded = bytearray(data)
    padded.append(0x80)
    while len(padded) % 64 != 56:
        padded.append(0x00)
    padded += struct.pack(">Q", bit_length)
    return bytes(padded)

def sha1_bytes(data: bytes) -> bytes:
    """Raw 20 byte SHA-1 of data, computed without any platform primitive."""
    h0, h1, h2, h3, h4 = 0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0
    message = _pad(data)

    for offset in range(0, len(message), 64):
        w = list(struct.unpack(">16I", message[offset:offset + 64]))
        for i in range(16, 80):
            w.append(_rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))

        a, b, c, d, e = h0, h1, h2, h3, h4
        for i in range(80):
            if i < 20:
                f = (b & c) | (~b & d)
                k = 0x5A827999
            elif i < 40:
                f = b ^ c ^ d
                k = 0x6ED9EBA1
            elif i < 60:
                f = (b & c) | (b & d) | (c & d)
                k = 0x8F1BBCDC
            else:
                f = b ^ c ^ d
                k = 0xCA62C1D6
            temp = (_rotl(a, 5) + (f & _MASK32) + e + k + w[i]) & _MASK32
            e = d
            d = c
            c = _rotl(b, 30)
            b = a
            a = temp

        h0 = (h0 + a) & _MASK32
        h1 = (h1 + b) & _MASK32
        h2 = (h2 + c) & _MASK32
        h3 = (h3 + d) & _MASK32
        h4 = (h4 + e) & _MASK32

    return struct.pack(">5I", h0, h1, h2, h3, h4)

def sha1_hex(password: str) -> str:
    return sha1_bytes(encode_password(password)).hex().upper()

# --- backends ---

class HashBackend(ABC):
    """One way of producing a SHA-1 digest of a password."""

    name = "abstract"

    @classmethod
    @abstractmethod
    def available(cls) -> bool:
        """Can this strategy run in this interpreter at all?"""

    @abstractmethod
    def digest(self, password: str) -> str:
        """Uppercase 40 character hex SHA-1 of the UTF-8 encoded password."""

    def verify(self) -> bool:
        """Check the backend against the known vectors, bit for bit."""
        for text, expected in SELF_TEST_VECTORS:
            try:
                if self.digest(text) != expected:
                    return False
            except HashUnavailableError:
                return False
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class HashlibBackend(HashBackend):
    name = "hashlib"

    @classmethod
    def available(cls) -> bool:
        try:
            hashlib.sha1(b"", usedforsecurity=False)
        except (ValueError, TypeError, AttributeError):
            return False
        return True

    def digest(self, password: str) -> str:
        try:
            return hashlib.sha1(encode_password(password), usedforsecurity=False).hexdigest().upper()
        except ValueError as e:
            raise HashUnavailableError(f"hashlib refused sha1: {e}") from e


class BuiltinSha1Backend(HashBackend):
    name = "builtin-sha1"

    @staticmethod
    def _module():
        return importlib.import_module("_sha1")

    @classmethod
    def available(cls) -> bool:
        try:
            cls._module()
        except ImportError:
            return False
        return True

    def digest(self, password: str) -> str:
        try:
            module = self._module()
        except ImportError as e:
            raise HashUnavailableError("_sha1 module is not available") from e
        return module.sha1(encode_password(password)).hexdigest().upper()


class PureSha1Backend(HashBackend):
    name = "pure-python"

    @classmethod
    def available(cls) -> bool:
        return True

    def digest(self, password: str) -> str:
        return sha1_hex(password)


DEFAULT_BACKENDS: Tuple[Type[HashBackend], ...] = (HashlibBackend, BuiltinSha1Backend, PureSha1Backend)

def select_backend(candidates: Iterable[Type[HashBackend]] = DEFAULT_BACKENDS,
                   verify: bool = True) -> Optional[HashBackend]:
    """
    Return the first usable backend, or None if no candidate can run.

    With verify set, a candidate must also reproduce SELF_TEST_VECTORS before
    it is accepted; a well-formed but wrong digest is rejected.
    """
    for cls in candidates:
        if not cls.available():
            logger.debug("hash backend %s unavailable", cls.name)
            continue
        backend = cls()
        if verify and not backend.verify():
            logger.warning("hash backend %s failed self-test, skipping", cls.name)
            continue
        logger.debug("using hash backend %s", cls.name)
        return backend
    logger.error("no SHA-1 backend available; breach checks will be skipped")
    return None
