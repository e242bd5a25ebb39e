import pytest

from otp_core import HashAlgorithm, SecretKey

# RFC 4226 Appendix D / RFC 6238 Appendix B seeds
RFC_SEED_SHA1 = "3132333435363738393031323334353637383930"
RFC_SEED_SHA256 = RFC_SEED_SHA1 + "313233343536373839303132"
RFC_SEED_SHA512 = RFC_SEED_SHA1 * 3 + "31323334"

RFC_BASE32_SHA1 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def sha1_key() -> SecretKey:
    return SecretKey.from_hex(RFC_SEED_SHA1)


@pytest.fixture
def rfc_keys() -> dict:
    return {
        HashAlgorithm.SHA1: SecretKey.from_hex(RFC_SEED_SHA1),
        HashAlgorithm.SHA256: SecretKey.from_hex(RFC_SEED_SHA256),
        HashAlgorithm.SHA512: SecretKey.from_hex(RFC_SEED_SHA512),
    }


def counting_rng(nbytes: int) -> bytes:
    return bytes(i % 256 for i in range(nbytes))
