"""
otp_core package
================

HOTP/TOTP code generation and validation following RFC 4226 & RFC 6238,
plus otpauth:// provisioning URIs for authenticator apps.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC(key=secret, msg=counter)) mod 10^digits
  → counter is supplied by the caller (event-based tokens).

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor((timestamp - T0) / period)
  → default period 30 seconds, 6 digits, SHA-1.

- Dynamic Truncation:
  Take 4 bytes of the HMAC at offset (last byte & 0x0F), clear the top bit.

──────────────────────────────────────────────
Usage
──────────────────────────────────────────────
1. Login flows (2FA check)
        from otp_core import TOTP, HashAlgorithm, SecretKey
        totp = TOTP(HashAlgorithm.SHA1, 6, 30, SecretKey.from_base32(stored_secret, strict=False))
        gap = totp.validate_window(1, user_input)
        if gap is not None: login_ok = True

2. Provisioning (QR code for Google Authenticator / Authy)
        key = SecretKey.random(HashAlgorithm.SHA1)
        uri = TOTP(HashAlgorithm.SHA1, 6, 30, key).to_uri("alice@example", issuer="MyService")

3. Event counters
        hotp = HOTP(HashAlgorithm.SHA1, 6, key)
        gap = hotp.validate_window(stored_counter, 5, user_input)
        if gap is not None: stored_counter += gap + 1

Generators are immutable and hold no state between calls; they are safe to
share between threads. Secrets are never persisted by this package.
"""

from .algorithms import HashAlgorithm
from .errors import ConfigurationError, DecodeError, FormatError, OTPError
from .hotp import HOTP
from .keys import SecretKey
from .presets import google_authenticator_hotp, google_authenticator_totp
from .totp import TOTP
from .truncation import truncated_code
from .uri import DecodedURI, decode as decode_uri, encode as encode_uri

__all__ = [
    "HashAlgorithm",
    "SecretKey",
    "HOTP",
    "TOTP",
    "DecodedURI",
    "encode_uri",
    "decode_uri",
    "truncated_code",
    "google_authenticator_hotp",
    "google_authenticator_totp",
    "OTPError",
    "ConfigurationError",
    "FormatError",
    "DecodeError",
]
