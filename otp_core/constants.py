"""
constants.py — Default values shared by the generators, the URI codec and the CLI.
"""

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # chuẩn: 6 chữ số
DEFAULT_PERIOD = 30         # TOTP step (giây)
DEFAULT_INITIAL_TIME = 0    # T0, Unix epoch
DEFAULT_ALGORITHM_NAME = "SHA1"

# RFC 4226 section 4: 128 bits required, 80 bits tolerated in lenient mode
MIN_KEY_BYTES = 10
STRICT_MIN_KEY_BYTES = 16

COUNTER_MIN = -(1 << 63)
COUNTER_LIMIT = 1 << 64

URI_SCHEME = "otpauth"
PROTOCOL_HOTP = "hotp"
PROTOCOL_TOTP = "totp"
PROTOCOLS = (PROTOCOL_HOTP, PROTOCOL_TOTP)

# Google Authenticator & co. không chấp nhận cấu hình yếu hơn
AUTHENTICATOR_MIN_DIGITS = 6
AUTHENTICATOR_MIN_PERIOD = 5

# CLI labels
DEFAULT_ACCOUNT = "user@example"
DEFAULT_ISSUER = "otp-tool"
