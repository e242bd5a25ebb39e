"""
totp.py — OTP theo thời gian (TOTP, RFC 6238).

TOTP = HOTP với counter = floor((now - T0) / X):
- X (``period``) mặc định 30 giây
- T0 (``initial_time``) mặc định là Unix epoch

Khi xác minh, dò một cửa sổ đối xứng quanh step hiện tại để chịu được lệch
đồng hồ cả hai chiều. Các hàm nhận ``instant`` sẽ đọc đồng hồ hệ thống nếu bỏ
trống; truyền ``instant`` vào để có kết quả cố định (ví dụ trong test).
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from . import uri as otpauth
from .algorithms import HashAlgorithm
from .constants import DEFAULT_DIGITS, DEFAULT_INITIAL_TIME, DEFAULT_PERIOD, PROTOCOL_TOTP
from .errors import ConfigurationError, DecodeError
from .hotp import check_digits, check_window
from .keys import SecretKey
from .truncation import generate_code, generate_codes, matches, parse_code, step_counter

logger = logging.getLogger(__name__)


def counter_from_time(instant: float, initial_time: int, period: int) -> int:
    """Time step containing ``instant``; negative when ``instant`` precedes ``initial_time``."""
    return int((instant - initial_time) // period)


@dataclass(frozen=True)
class TOTP:
    """
    TOTP generator/validator.

    Arguments:
        algorithm: hash function used for the HMAC
        digits: number of digits of each code
        period: time step in seconds
        key: shared secret
        initial_time: T0 in Unix seconds
    """

    algorithm: HashAlgorithm
    digits: int
    period: int
    key: SecretKey
    initial_time: int = DEFAULT_INITIAL_TIME

    protocol = PROTOCOL_TOTP

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, HashAlgorithm):
            raise ConfigurationError(f"Unsupported algorithm: {self.algorithm!r}")
        check_digits(self.digits)
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period <= 0:
            raise ConfigurationError(f"period must be a positive integer, got {self.period!r}")

    @staticmethod
    def current_time() -> int:
        return int(time.time())

    def _instant(self, instant: Optional[float]) -> float:
        return self.current_time() if instant is None else instant

    def counter_at(self, instant: Optional[float] = None) -> int:
        instant = self._instant(instant)
        counter = counter_from_time(instant, self.initial_time, self.period)
        logger.debug("TOTP: time=%s, counter=%d", instant, counter)
        return counter

    def remaining_seconds(self, instant: Optional[float] = None) -> int:
        """Seconds until the code for ``instant`` expires."""
        elapsed = self._instant(instant) - self.initial_time
        return int(self.period - (elapsed % self.period))

    def generate(self, instant: Optional[float] = None) -> str:
        return generate_code(self.algorithm, self.key, self.counter_at(instant), self.digits)

    def generate_window(self, window: int, instant: Optional[float] = None) -> Dict[int, str]:
        """Codes for steps ``counter - window .. counter + window``, keyed by counter."""
        check_window(window)
        counter = self.counter_at(instant)
        counters = (step_counter(counter, offset) for offset in range(-window, window + 1))
        return generate_codes(self.algorithm, self.key, counters, self.digits)

    def validate(self, code: str, instant: Optional[float] = None) -> bool:
        """
        Check ``code`` against the code for the step containing ``instant``.

        Raises:
            FormatError: if ``code`` is not a decimal number
        """
        value = parse_code(code)
        return matches(self.algorithm, self.key, self.counter_at(instant), self.digits, value)

    def validate_window(self, window: int, code: str, instant: Optional[float] = None) -> Optional[int]:
        """
        Search steps ``counter - window .. counter + window`` for ``code``.

        The search runs from the oldest step to the newest, so when several steps
        match the most negative offset wins.

        Returns:
            the signed step offset of the match (negative: a past step, positive:
            a future step), or ``None`` when nothing in the window matches.

        Raises:
            FormatError: if ``code`` is not a decimal number
        """
        check_window(window)
        value = parse_code(code)
        counter = self.counter_at(instant)
        for offset in range(-window, window + 1):
            stepped = step_counter(counter, offset)
            if matches(self.algorithm, self.key, stepped, self.digits, value):
                logger.debug("TOTP: match at counter=%d (offset=%d)", stepped, offset)
                return offset
        logger.debug("TOTP: no match within %d steps of counter=%d", window, counter)
        return None

    # --- Provisioning -------------------------------------------------------
    def to_uri(
        self,
        account: str,
        issuer: Optional[str] = None,
        params: Optional[Mapping[str, object]] = None,
    ) -> str:
        extra = dict(params or {})
        extra["digits"] = self.digits
        extra["period"] = self.period
        extra["algorithm"] = self.algorithm.wire_name
        return otpauth.encode(self.protocol, account, self.key, issuer, extra)

    @classmethod
    def from_uri(cls, uri: str) -> "TOTP":
        """
        Rebuild a TOTP from an otpauth://totp URI.

        Missing or unparsable ``algorithm``/``digits``/``period`` fall back to
        SHA1 / 6 / 30. T0 is not part of the URI format and is always 0.

        Raises:
            DecodeError: if the URI is malformed or not a totp URI
            ConfigurationError: if the decoded digits or period are not positive
        """
        decoded = otpauth.decode(uri)
        if decoded is None or decoded.protocol != cls.protocol:
            raise DecodeError("Illegal TOTP URI given.")
        return cls(
            otpauth.algorithm_param(decoded.params, HashAlgorithm.SHA1),
            otpauth.int_param(decoded.params, "digits", DEFAULT_DIGITS),
            otpauth.int_param(decoded.params, "period", DEFAULT_PERIOD),
            decoded.key,
        )
