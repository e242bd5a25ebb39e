"""
The closed set of keyed-hash algorithms an OTP can be built on.
"""

import hashlib
from enum import Enum
from typing import Optional


class HashAlgorithm(Enum):
    """
    Supported HMAC algorithms.

    Each member carries:
        name: wire name used in otpauth URIs ("SHA1", ...)
        primitive: hashlib identifier handed to ``hmac``
        default_key_length: recommended key length in bits
        strong_key_length: stronger key length in bits
    """

    MD5 = ("MD5", "md5", 160, 160)
    SHA1 = ("SHA1", "sha1", 160, 200)
    SHA256 = ("SHA256", "sha256", 240, 280)
    SHA512 = ("SHA512", "sha512", 480, 520)

    def __init__(self, wire_name: str, primitive: str,
                 default_key_length: int, strong_key_length: int):
        self.wire_name = wire_name
        self.primitive = primitive
        self.default_key_length = default_key_length
        self.strong_key_length = strong_key_length

    @property
    def digest_size(self) -> int:
        """Size in bytes of a digest produced by this algorithm."""
        return hashlib.new(self.primitive).digest_size

    @classmethod
    def find(cls, name: str) -> Optional["HashAlgorithm"]:
        """Look an algorithm up by its wire name; ``None`` when unknown."""
        if not name:
            return None
        wanted = name.strip().upper()
        for algorithm in cls:
            if algorithm.wire_name == wanted:
                return algorithm
        return None

    def __str__(self) -> str:
        return self.wire_name
