import pytest

from otp_core import SecretKey
from otp_core.cli import build_parser, main
from otp_core.uri import decode

from .conftest import RFC_BASE32_SHA1

SECRET = ["--secret", RFC_BASE32_SHA1]


def test_no_command_prints_help_hint(capsys) -> None:
    assert main([]) == 0
    assert "-h" in capsys.readouterr().out


def test_keygen(capsys) -> None:
    assert main(["keygen", "--algorithm", "SHA256"]) == 0
    key = SecretKey.from_base32(capsys.readouterr().out.strip())
    assert key.key_length == 240


def test_keygen_hex_strong(capsys) -> None:
    assert main(["keygen", "--strong", "--encoding", "hex"]) == 0
    assert SecretKey.from_hex(capsys.readouterr().out.strip()).key_length == 200


def test_hotp(capsys) -> None:
    assert main(["hotp", *SECRET, "--counter", "0"]) == 0
    assert capsys.readouterr().out.strip() == "HOTP(6d, counter=0): 755224"


def test_hotp_look_ahead(capsys) -> None:
    assert main(["hotp", *SECRET, "--counter", "1", "--look-ahead", "1"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "HOTP(6d, counter=1): 287082",
        "HOTP(6d, counter=2): 359152",
    ]


def test_totp_at_time(capsys) -> None:
    assert main(["totp", *SECRET, "--digits", "8", "--time", "59"]) == 0
    assert "94287082" in capsys.readouterr().out


def test_totp_window(capsys) -> None:
    assert main(["totp", *SECRET, "--digits", "8", "--time", "1111112040", "--window", "1"]) == 0
    out = capsys.readouterr().out
    assert "counter=37037067): 79453447" in out
    assert "counter=37037069): 19570641" in out


def test_verify_totp(capsys) -> None:
    args = ["verify", "totp", *SECRET, "--digits", "8", "--time", "1111112040"]
    assert main([*args, "--code", "19570641"]) == 0
    assert "offset = 1" in capsys.readouterr().out
    assert main([*args, "--code", "93804954"]) == 1
    assert "INVALID" in capsys.readouterr().out


def test_verify_hotp(capsys) -> None:
    args = ["verify", "hotp", *SECRET, "--counter", "0", "--look-ahead", "3"]
    assert main([*args, "--code", "969429"]) == 0
    assert "next counter = 4" in capsys.readouterr().out
    assert main([*args, "--code", "338314"]) == 1


def test_verify_malformed_code(capsys) -> None:
    assert main(["verify", "hotp", *SECRET, "--counter", "0", "--code", "12ab56"]) == 2
    assert "Invalid code" in capsys.readouterr().err


def test_uri_totp(capsys) -> None:
    assert main(["uri", "totp", *SECRET, "--account", "alice@example", "--issuer", "ACME"]) == 0
    decoded = decode(capsys.readouterr().out.strip())
    assert (decoded.protocol, decoded.account, decoded.issuer) == ("totp", "alice@example", "ACME")
    assert decoded.params["period"] == "30"


def test_uri_hotp_counter(capsys) -> None:
    assert main(["uri", "hotp", *SECRET, "--counter", "5"]) == 0
    assert decode(capsys.readouterr().out.strip()).params["counter"] == "5"


def test_decode(capsys) -> None:
    uri = f"otpauth://totp/ACME:alice?secret={RFC_BASE32_SHA1}&digits=8"
    assert main(["decode", uri]) == 0
    out = capsys.readouterr().out
    assert "account:  alice" in out
    assert "digits: 8" in out
    assert RFC_BASE32_SHA1 not in out


def test_decode_invalid(capsys) -> None:
    assert main(["decode", "https://example.com"]) == 1


def test_rejects_bad_arguments(capsys) -> None:
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["hotp", "--secret", "!!", "--counter", "0"])
    with pytest.raises(SystemExit):
        parser.parse_args(["hotp", *SECRET, "--counter", "0", "--algorithm", "SHA3"])
