"""
Generators restricted to what Google Authenticator and similar apps accept.
"""

from .algorithms import HashAlgorithm
from .constants import (
    AUTHENTICATOR_MIN_DIGITS,
    AUTHENTICATOR_MIN_PERIOD,
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
)
from .errors import ConfigurationError
from .hotp import HOTP
from .keys import SecretKey
from .totp import TOTP


def _check_digits(digits: int) -> None:
    if digits < AUTHENTICATOR_MIN_DIGITS:
        raise ConfigurationError(
            f"digits must be greater than or equal to {AUTHENTICATOR_MIN_DIGITS}, but it is {digits}"
        )


def google_authenticator_hotp(
    key: SecretKey,
    algorithm: HashAlgorithm = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> HOTP:
    _check_digits(digits)
    return HOTP(algorithm, digits, key)


def google_authenticator_totp(
    key: SecretKey,
    algorithm: HashAlgorithm = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
) -> TOTP:
    _check_digits(digits)
    if period < AUTHENTICATOR_MIN_PERIOD:
        raise ConfigurationError(
            f"period must be greater than or equal to {AUTHENTICATOR_MIN_PERIOD}, but it is {period}"
        )
    return TOTP(algorithm, digits, period, key)
