"""
keys.py — The shared secret behind every HOTP/TOTP code.

A ``SecretKey`` is an immutable wrapper over raw bytes. It can be decoded from
the usual textual encodings (hex, Base32, Base32hex, Base64, Base64 URL-safe)
or generated at random with a length matched to a ``HashAlgorithm``.

Security notes:
- RFC 4226 requires at least 128 bits and recommends 160 bits. ``strict=True``
  (the default) enforces 128 bits; ``strict=False`` tolerates 80 bits, which is
  what most authenticator apps hand out.
- ``repr`` never shows the key material.
"""

import base64
import binascii
import logging
import secrets
from dataclasses import InitVar, dataclass, field
from typing import Callable, Optional

from .algorithms import HashAlgorithm
from .constants import MIN_KEY_BYTES, STRICT_MIN_KEY_BYTES
from .errors import ConfigurationError, DecodeError

logger = logging.getLogger(__name__)

# rng(nbytes) -> bytes
RandomSource = Callable[[int], bytes]


def _pad(text: str, block: int) -> str:
    text = text.strip().replace(" ", "")
    return text + "=" * (-len(text) % block)


@dataclass(frozen=True)
class SecretKey:
    raw: bytes = field(repr=False)
    strict: InitVar[bool] = True

    def __post_init__(self, strict: bool) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise ConfigurationError(f"Key material must be bytes, got {type(self.raw).__name__}")
        raw = bytes(self.raw)
        object.__setattr__(self, "raw", raw)
        if strict and len(raw) < STRICT_MIN_KEY_BYTES:
            raise ConfigurationError(
                "RFC 4226 requires a key length of at least 128 bits and recommends 160 bits. "
                "Disable strict mode to use a shorter key."
            )
        if len(raw) < MIN_KEY_BYTES:
            raise ConfigurationError(
                "Key length must be at least 80 bits. "
                "RFC 4226 requires at least 128 bits and recommends 160 bits."
            )

    def __repr__(self) -> str:
        return f"SecretKey(<{self.key_length} bits>)"

    # --- Size ---------------------------------------------------------------
    @property
    def byte_length(self) -> int:
        return len(self.raw)

    @property
    def key_length(self) -> int:
        """Key length in bits."""
        return len(self.raw) * 8

    # --- Decoding -----------------------------------------------------------
    @classmethod
    def from_bytes(cls, raw: bytes, strict: bool = True) -> "SecretKey":
        return cls(raw, strict)

    @classmethod
    def from_hex(cls, text: str, strict: bool = True) -> "SecretKey":
        try:
            raw = bytes.fromhex(text.strip())
        except ValueError as e:
            raise DecodeError("Invalid hex secret") from e
        return cls(raw, strict)

    @classmethod
    def from_base32(cls, text: str, strict: bool = True) -> "SecretKey":
        """
        Decode a Base32 secret (RFC 4648 alphabet), padded or not.

        Lowercase input and embedded spaces are accepted, since secrets are often
        typed in by hand from an authenticator app's setup screen.
        """
        try:
            raw = base64.b32decode(_pad(text, 8), casefold=True)
        except binascii.Error as e:
            raise DecodeError("Invalid Base32 secret") from e
        return cls(raw, strict)

    @classmethod
    def from_base32hex(cls, text: str, strict: bool = True) -> "SecretKey":
        try:
            raw = base64.b32hexdecode(_pad(text, 8), casefold=True)
        except binascii.Error as e:
            raise DecodeError("Invalid Base32hex secret") from e
        return cls(raw, strict)

    @classmethod
    def from_base64(cls, text: str, strict: bool = True) -> "SecretKey":
        try:
            raw = base64.b64decode(_pad(text, 4), validate=True)
        except binascii.Error as e:
            raise DecodeError("Invalid Base64 secret") from e
        return cls(raw, strict)

    @classmethod
    def from_base64url(cls, text: str, strict: bool = True) -> "SecretKey":
        try:
            raw = base64.b64decode(_pad(text, 4), altchars=b"-_", validate=True)
        except binascii.Error as e:
            raise DecodeError("Invalid Base64 URL-safe secret") from e
        return cls(raw, strict)

    # --- Encoding -----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self.raw

    def to_hex(self) -> str:
        return self.raw.hex()

    def to_base32(self, padding: bool = True) -> str:
        b32 = base64.b32encode(self.raw).decode("ascii")
        return b32 if padding else b32.rstrip("=")

    def to_base32hex(self, padding: bool = True) -> str:
        b32 = base64.b32hexencode(self.raw).decode("ascii")
        return b32 if padding else b32.rstrip("=")

    def to_base64(self, padding: bool = True) -> str:
        b64 = base64.b64encode(self.raw).decode("ascii")
        return b64 if padding else b64.rstrip("=")

    def to_base64url(self, padding: bool = True) -> str:
        b64 = base64.urlsafe_b64encode(self.raw).decode("ascii")
        return b64 if padding else b64.rstrip("=")

    # --- Generation ---------------------------------------------------------
    @classmethod
    def random_with_length(
        cls,
        key_length: int,
        strict: bool = False,
        rng: Optional[RandomSource] = None,
    ) -> "SecretKey":
        """
        Generate a random key of ``key_length`` bits.

        Arguments:
            key_length: key size in bits, must be a multiple of 8
            strict: enforce the 128-bit floor instead of the 80-bit one
            rng: callable returning ``n`` random bytes; defaults to
                 ``secrets.token_bytes`` (CSPRNG)

        Raises:
            ConfigurationError: if the length is not a whole number of bytes
                                or below the allowed minimum
        """
        if key_length <= 0 or key_length % 8:
            raise ConfigurationError(f"Key length must be a positive multiple of 8 bits, got {key_length}")
        nbytes = key_length // 8
        source = rng if rng is not None else secrets.token_bytes
        raw = source(nbytes)
        if len(raw) != nbytes:
            raise ConfigurationError(f"Random source returned {len(raw)} bytes, expected {nbytes}")
        logger.debug("Generated %d-bit secret key", key_length)
        return cls(raw, strict)

    @classmethod
    def random(
        cls,
        algorithm: HashAlgorithm = HashAlgorithm.SHA1,
        strong: bool = False,
        strict: bool = False,
        rng: Optional[RandomSource] = None,
    ) -> "SecretKey":
        """Generate a random key sized by the algorithm's default (or strong) key length."""
        length = algorithm.strong_key_length if strong else algorithm.default_key_length
        return cls.random_with_length(length, strict=strict, rng=rng)
