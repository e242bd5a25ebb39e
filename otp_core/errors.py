"""Exceptions raised by otp_core."""


class OTPError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(OTPError, ValueError):
    """Invalid generator configuration: digits, period or key length."""


class FormatError(OTPError, ValueError):
    """A supplied code is not a non-negative decimal number."""


class DecodeError(OTPError, ValueError):
    """A secret encoding or an otpauth URI could not be decoded."""
