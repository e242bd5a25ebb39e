"""
hotp.py — OTP theo counter (HOTP, RFC 4226).

Counter do phía gọi quản lý; validate_window chỉ dò về phía trước
(look-ahead) và trả về khoảng cách (gap) để đồng bộ lại counter.

Example:
    >>> key = SecretKey.from_hex("3132333435363738393031323334353637383930")
    >>> hotp = HOTP(HashAlgorithm.SHA1, 6, key)
    >>> hotp.generate(0)
    '755224'
    >>> hotp.validate_window(0, 5, hotp.generate(3))
    3
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from . import uri as otpauth
from .algorithms import HashAlgorithm
from .constants import DEFAULT_DIGITS, PROTOCOL_HOTP
from .errors import ConfigurationError, DecodeError
from .keys import SecretKey
from .truncation import generate_code, generate_codes, matches, parse_code, step_counter

logger = logging.getLogger(__name__)


def check_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int) or digits <= 0:
        raise ConfigurationError(f"digits must be a positive integer, got {digits!r}")


def check_window(window: int) -> None:
    if isinstance(window, bool) or not isinstance(window, int):
        raise TypeError(f"window must be an integer, got {window!r}")
    if window < 0:
        raise ValueError(f"window must not be negative, got {window}")


@dataclass(frozen=True)
class HOTP:
    """
    HOTP generator/validator.

    Arguments:
        algorithm: hash function used for the HMAC
        digits: number of digits of each code
        key: shared secret
    """

    algorithm: HashAlgorithm
    digits: int
    key: SecretKey

    protocol = PROTOCOL_HOTP

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, HashAlgorithm):
            raise ConfigurationError(f"Unsupported algorithm: {self.algorithm!r}")
        check_digits(self.digits)

    def generate(self, counter: int) -> str:
        """Code for ``counter``, zero-padded to ``digits`` characters."""
        return generate_code(self.algorithm, self.key, counter, self.digits)

    def generate_window(self, counter: int, look_ahead: int) -> Dict[int, str]:
        """Codes for ``counter .. counter + look_ahead`` inclusive, keyed by counter."""
        check_window(look_ahead)
        counters = (step_counter(counter, gap) for gap in range(look_ahead + 1))
        return generate_codes(self.algorithm, self.key, counters, self.digits)

    def validate(self, counter: int, code: str) -> bool:
        """
        Check ``code`` against the code for ``counter``.

        Raises:
            FormatError: if ``code`` is not a decimal number
        """
        return matches(self.algorithm, self.key, counter, self.digits, parse_code(code))

    def validate_window(self, counter: int, look_ahead: int, code: str) -> Optional[int]:
        """
        Search ``counter .. counter + look_ahead`` for ``code``.

        Returns:
            the gap between the matching counter and ``counter`` (the first match
            wins), or ``None`` when no counter in the window matches.
            The caller should resynchronize its counter to ``counter + gap + 1``.

        Raises:
            FormatError: if ``code`` is not a decimal number
        """
        check_window(look_ahead)
        value = parse_code(code)
        for gap in range(look_ahead + 1):
            stepped = step_counter(counter, gap)
            if matches(self.algorithm, self.key, stepped, self.digits, value):
                logger.debug("HOTP: match at counter=%d (gap=%d)", stepped, gap)
                return gap
        logger.debug("HOTP: no match in counter=%d..%d", counter, step_counter(counter, look_ahead))
        return None

    # --- Provisioning -------------------------------------------------------
    def to_uri(
        self,
        account: str,
        issuer: Optional[str] = None,
        params: Optional[Mapping[str, object]] = None,
    ) -> str:
        """otpauth://hotp URI; ``counter`` defaults to 0 when not supplied in ``params``."""
        extra = dict(params or {})
        extra.setdefault("counter", 0)
        extra["digits"] = self.digits
        extra["algorithm"] = self.algorithm.wire_name
        return otpauth.encode(self.protocol, account, self.key, issuer, extra)

    @classmethod
    def from_uri(cls, uri: str) -> "HOTP":
        """
        Rebuild a HOTP from an otpauth://hotp URI.

        Missing or unparsable ``algorithm``/``digits`` fall back to SHA1 / 6.

        Raises:
            DecodeError: if the URI is malformed or not a hotp URI
            ConfigurationError: if the decoded digits are not positive
        """
        decoded = otpauth.decode(uri)
        if decoded is None or decoded.protocol != cls.protocol:
            raise DecodeError("Illegal HOTP URI given.")
        return cls(
            otpauth.algorithm_param(decoded.params, HashAlgorithm.SHA1),
            otpauth.int_param(decoded.params, "digits", DEFAULT_DIGITS),
            decoded.key,
        )
