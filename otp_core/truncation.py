"""
truncation.py — Phần lõi RFC 4226 dùng chung cho HOTP và TOTP.

Các bước (RFC 4226 mục 5.3):
1. Counter -> message 8 byte big-endian (số âm dùng bù hai 64-bit)
2. HMAC(key, message) với hàm băm của algorithm
3. Dynamic truncation -> số nguyên 31-bit
4. code = value % 10^digits, thêm số 0 phía trước cho đủ ``digits`` ký tự

Tất cả đều là hàm thuần (pure functions); HOTP và TOTP chỉ khác nhau ở cách
lấy counter.
"""

import hmac
import struct
from typing import Dict, Iterable

from .algorithms import HashAlgorithm
from .constants import COUNTER_LIMIT, COUNTER_MIN
from .errors import ConfigurationError, FormatError
from .keys import SecretKey


# --- RFC helpers -----------------------------------------------------------
def counter_to_bytes(counter: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian message RFC 4226 requires.

    Negative counters (a TOTP instant before T0) are written as their 64-bit
    two's complement, so ``counter_to_bytes(-1) == b'\\xff' * 8``.

    Raises:
        ValueError: if the counter does not fit in 64 bits
    """
    if not COUNTER_MIN <= counter < COUNTER_LIMIT:
        raise ValueError(f"Counter {counter} does not fit in 64 bits")
    return struct.pack(">Q", counter & (COUNTER_LIMIT - 1))


def step_counter(counter: int, delta: int) -> int:
    """
    ``counter + delta`` wrapped into the 64-bit counter range.

    Window searches starting at the top of the range continue at 0, the way a
    64-bit register overflows.
    """
    stepped = counter + delta
    if stepped >= COUNTER_LIMIT:
        stepped -= COUNTER_LIMIT
    elif stepped < COUNTER_MIN:
        stepped += COUNTER_LIMIT
    return stepped


def hmac_digest(algorithm: HashAlgorithm, key: SecretKey, message: bytes) -> bytes:
    try:
        return hmac.new(key.to_bytes(), message, algorithm.primitive).digest()
    except ValueError as e:
        # ví dụ: hàm băm bị chính sách FIPS của hệ thống chặn
        raise ConfigurationError(f"HMAC-{algorithm.wire_name} rejected the key: {e}") from e


def dynamic_truncate(digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation.

    - offset = low nibble of the last digest byte
    - take 4 bytes from offset, clear the MSB of the first one
    - return the 31-bit unsigned integer

    Digest ngắn hơn 19 byte (MD5) thì offset được lấy modulo để 4 byte vẫn
    nằm trong digest.
    """
    offset = (digest[-1] & 0x0F) % (len(digest) - 3)
    return (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )


def truncated_code(algorithm: HashAlgorithm, key: SecretKey, counter: int, digits: int) -> int:
    """Numeric OTP value for ``counter``, in ``[0, 10^digits)``."""
    digest = hmac_digest(algorithm, key, counter_to_bytes(counter))
    return dynamic_truncate(digest) % (10 ** digits)


# --- Formatting ------------------------------------------------------------
def format_code(value: int, digits: int) -> str:
    return str(value).zfill(digits)


def parse_code(code: str) -> str:
    """
    Normalize a user supplied code to its digits without leading zeros.

    The value is kept as text, so arbitrarily long input never goes through
    integer conversion.

    Raises:
        FormatError: if ``code`` is not a non-empty string of ASCII digits
    """
    if not isinstance(code, str) or not code or not (code.isascii() and code.isdigit()):
        raise FormatError(f"Invalid code digits given: {code!r}")
    return code.lstrip("0") or "0"


def generate_code(algorithm: HashAlgorithm, key: SecretKey, counter: int, digits: int) -> str:
    return format_code(truncated_code(algorithm, key, counter, digits), digits)


def generate_codes(
    algorithm: HashAlgorithm, key: SecretKey, counters: Iterable[int], digits: int
) -> Dict[int, str]:
    """Codes for every counter, in iteration order."""
    return {c: generate_code(algorithm, key, c, digits) for c in counters}


def matches(algorithm: HashAlgorithm, key: SecretKey, counter: int, digits: int, value: str) -> bool:
    """Constant-time comparison of the code at ``counter`` against a parsed value."""
    expected = generate_code(algorithm, key, counter, digits)
    # value dài hơn ``digits`` thì khác độ dài -> không bao giờ khớp
    return hmac.compare_digest(expected, value.zfill(digits))
