import logging

import pytest

from otp_core import HOTP, TOTP, DecodeError, HashAlgorithm, SecretKey
from otp_core.uri import decode, encode

from .conftest import RFC_BASE32_SHA1

ACCOUNT = "Account Name!@#$^*()_=-"
ISSUER = "Ejisan Kuro!@#$^*()_=-"
SECRET = "GRLYIYNWQDW5YP2AXJRZZOUIBKXPBLPN"
# as exported by Google Authenticator / Authy
AUTHENTICATOR_URI = (
    "otpauth://totp/Ejisan%20Kuro!@%23$%5E*()_=-:Account%20Name!@%23$%5E*()_=-"
    "?secret=GRLYIYNWQDW5YP2AXJRZZOUIBKXPBLPN&issuer=Ejisan%20Kuro!@%23$%5E*()_=-"
)


def test_encode_layout(sha1_key: SecretKey) -> None:
    uri = encode("totp", "alice@example.com", sha1_key, "ACME Co", {"digits": 8})
    assert uri == (
        "otpauth://totp/ACME%20Co:alice@example.com"
        f"?secret={RFC_BASE32_SHA1}&issuer=ACME%20Co&digits=8"
    )


def test_encode_without_issuer(sha1_key: SecretKey) -> None:
    assert encode("hotp", "bob", sha1_key) == f"otpauth://hotp/bob?secret={RFC_BASE32_SHA1}"


def test_encode_rejects_unknown_protocol(sha1_key: SecretKey) -> None:
    with pytest.raises(ValueError):
        encode("motp", "bob", sha1_key)


def test_decode_authenticator_uri() -> None:
    decoded = decode(AUTHENTICATOR_URI)
    assert decoded.protocol == "totp"
    assert decoded.account == ACCOUNT
    assert decoded.issuer == ISSUER
    assert decoded.key == SecretKey.from_base32(SECRET)
    assert decoded.params["issuer"] == ISSUER


def test_round_trip_with_params() -> None:
    key = SecretKey.from_base32(SECRET)
    params = {"period": "15", "digits": "8", "algorithm": "SHA1", "image": "https://example.com/a b.png"}
    decoded = decode(encode("totp", ACCOUNT, key, ISSUER, params))
    assert decoded.protocol == "totp"
    assert decoded.account == ACCOUNT
    assert decoded.key == key
    assert decoded.issuer == ISSUER
    for name, value in params.items():
        assert decoded.params[name] == value


def test_round_trip_colon_in_names(sha1_key: SecretKey) -> None:
    decoded = decode(encode("hotp", "a:b", sha1_key, "x:y"))
    assert (decoded.issuer, decoded.account) == ("x:y", "a:b")


def test_issuer_from_parameter_only() -> None:
    decoded = decode(f"otpauth://totp/alice?secret={RFC_BASE32_SHA1}&issuer=Example")
    assert decoded.account == "alice"
    assert decoded.issuer == "Example"
    assert decode(f"otpauth://totp/alice?secret={RFC_BASE32_SHA1}").issuer is None


def test_padded_secret_accepted() -> None:
    padded = SecretKey.from_bytes(b"0123456789abcdefg").to_base32()
    assert "=" in padded
    assert decode(f"otpauth://totp/a?secret={padded.replace('=', '%3D')}") is not None


@pytest.mark.parametrize(
    "uri",
    [
        f"https://totp/alice?secret={RFC_BASE32_SHA1}",
        f"otpauth://motp/alice?secret={RFC_BASE32_SHA1}",
        "otpauth://totp/alice?issuer=Example",
        "otpauth://totp/alice?secret=",
        "otpauth://totp/alice?secret=not-base32!",
        "otpauth://totp/alice?secret=GEZDGNBV",
        "",
    ],
)
def test_decode_rejects(uri) -> None:
    assert decode(uri) is None


def test_scheme_is_case_insensitive() -> None:
    assert decode(f"OTPAUTH://TOTP/alice?secret={RFC_BASE32_SHA1}").protocol == "totp"


def test_short_authenticator_secret_accepted() -> None:
    decoded = decode("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP")
    assert decoded.key.key_length == 80


# --- HOTP/TOTP provisioning -------------------------------------------------
def test_totp_uri_round_trip() -> None:
    totp = TOTP(HashAlgorithm.SHA256, 8, 60, SecretKey.from_base32(SECRET))
    uri = totp.to_uri(ACCOUNT, ISSUER)
    decoded = decode(uri)
    assert decoded.params["digits"] == "8"
    assert decoded.params["period"] == "60"
    assert decoded.params["algorithm"] == "SHA256"
    assert TOTP.from_uri(uri) == totp


def test_hotp_uri_round_trip() -> None:
    hotp = HOTP(HashAlgorithm.SHA512, 7, SecretKey.from_base32(SECRET))
    uri = hotp.to_uri("bob", params={"counter": 42})
    assert decode(uri).params["counter"] == "42"
    assert decode(hotp.to_uri("bob")).params["counter"] == "0"
    assert HOTP.from_uri(uri) == hotp


def test_from_uri_defaults() -> None:
    totp = TOTP.from_uri(f"otpauth://totp/alice?secret={SECRET}")
    assert (totp.algorithm, totp.digits, totp.period, totp.initial_time) == (HashAlgorithm.SHA1, 6, 30, 0)
    hotp = HOTP.from_uri(f"otpauth://hotp/alice?secret={SECRET}")
    assert (hotp.algorithm, hotp.digits) == (HashAlgorithm.SHA1, 6)


def test_from_uri_unparsable_values_fall_back(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="otp_core.uri"):
        totp = TOTP.from_uri(f"otpauth://totp/alice?secret={SECRET}&digits=x&period=&algorithm=SHA3")
    assert (totp.algorithm, totp.digits, totp.period) == (HashAlgorithm.SHA1, 6, 30)
    assert "period" in caplog.text


def test_from_uri_protocol_mismatch() -> None:
    with pytest.raises(DecodeError):
        HOTP.from_uri(f"otpauth://totp/alice?secret={SECRET}")
    with pytest.raises(DecodeError):
        TOTP.from_uri(f"otpauth://hotp/alice?secret={SECRET}")
    with pytest.raises(DecodeError):
        TOTP.from_uri("otpauth://totp/alice")
