import pytest

from otp_core import HashAlgorithm


def test_closed_set() -> None:
    assert [a.wire_name for a in HashAlgorithm] == ["MD5", "SHA1", "SHA256", "SHA512"]


@pytest.mark.parametrize(
    "algorithm, primitive, default, strong, digest_size",
    [
        (HashAlgorithm.MD5, "md5", 160, 160, 16),
        (HashAlgorithm.SHA1, "sha1", 160, 200, 20),
        (HashAlgorithm.SHA256, "sha256", 240, 280, 32),
        (HashAlgorithm.SHA512, "sha512", 480, 520, 64),
    ],
)
def test_fields(algorithm, primitive, default, strong, digest_size) -> None:
    assert algorithm.primitive == primitive
    assert algorithm.default_key_length == default
    assert algorithm.strong_key_length == strong
    assert algorithm.digest_size == digest_size


def test_find() -> None:
    assert HashAlgorithm.find("SHA256") is HashAlgorithm.SHA256
    assert HashAlgorithm.find("sha512") is HashAlgorithm.SHA512
    assert HashAlgorithm.find("HmacSHA1") is None
    assert HashAlgorithm.find("") is None


def test_str_is_wire_name() -> None:
    assert str(HashAlgorithm.SHA1) == "SHA1"
