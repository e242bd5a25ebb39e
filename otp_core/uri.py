"""
uri.py — otpauth:// provisioning URIs (Key URI Format used by authenticator apps).

    otpauth://<protocol>/[<issuer>:]<account>?secret=<base32>&issuer=<issuer>&<params>

Label parts and query values are percent-encoded. ``decode`` never raises on
malformed input: it returns ``None`` and the caller treats the URI as untrusted.
"""

import logging
from typing import Dict, Mapping, NamedTuple, Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from .algorithms import HashAlgorithm
from .constants import PROTOCOLS, URI_SCHEME
from .errors import OTPError
from .keys import SecretKey

logger = logging.getLogger(__name__)

_SAFE = "@"


class DecodedURI(NamedTuple):
    protocol: str
    account: str
    key: SecretKey
    issuer: Optional[str]
    params: Dict[str, str]


def encode(
    protocol: str,
    account: str,
    key: SecretKey,
    issuer: Optional[str] = None,
    params: Optional[Mapping[str, object]] = None,
) -> str:
    """
    Build an otpauth URI.

    Arguments:
        protocol: "hotp" or "totp"
        account: account name shown in the authenticator app
        key: shared secret, written as unpadded Base32
        issuer: service provider name, used as label prefix and ``issuer`` parameter
        params: extra query parameters (digits, period, algorithm, counter, ...)

    Raises:
        ValueError: if the protocol is not hotp/totp
    """
    protocol = protocol.lower()
    if protocol not in PROTOCOLS:
        raise ValueError(f"protocol must be one of {PROTOCOLS}, got {protocol!r}")

    label = quote(account, safe=_SAFE)
    if issuer:
        label = f"{quote(issuer, safe=_SAFE)}:{label}"

    query = {"secret": key.to_base32(padding=False)}
    if issuer:
        query["issuer"] = issuer
    for name, value in (params or {}).items():
        if name not in query:
            query[name] = str(value)

    return f"{URI_SCHEME}://{protocol}/{label}?{urlencode(query, quote_via=quote, safe=_SAFE)}"


def decode(uri: str) -> Optional[DecodedURI]:
    """
    Parse an otpauth URI.

    Returns ``None`` when the scheme is not otpauth, the protocol is unknown, or
    the ``secret`` parameter is missing or undecodable. The secret is accepted
    from 80 bits up, the common length handed out by authenticator services.
    """
    try:
        parts = urlsplit(uri.strip())
    except (AttributeError, ValueError):
        logger.debug("Rejected URI: not parsable")
        return None

    if parts.scheme.lower() != URI_SCHEME:
        logger.debug("Rejected URI: scheme %r", parts.scheme)
        return None
    protocol = parts.netloc.lower()
    if protocol not in PROTOCOLS:
        logger.debug("Rejected URI: protocol %r", protocol)
        return None

    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    secret = params.get("secret")
    if not secret:
        logger.debug("Rejected URI: missing secret")
        return None
    try:
        key = SecretKey.from_base32(secret, strict=False)
    except OTPError as e:
        logger.debug("Rejected URI: %s", e)
        return None

    raw_label = parts.path[1:] if parts.path.startswith("/") else parts.path
    if ":" in raw_label:
        raw_issuer, raw_account = raw_label.split(":", 1)
        issuer = unquote(raw_issuer)
        account = unquote(raw_account)
    else:
        account = unquote(raw_label)
        issuer = params.get("issuer") or None

    return DecodedURI(protocol, account, key, issuer, params)


# --- Parameter helpers for HOTP/TOTP reconstruction ------------------------
def algorithm_param(params: Mapping[str, str], default: HashAlgorithm) -> HashAlgorithm:
    raw = params.get("algorithm")
    if raw is None:
        return default
    algorithm = HashAlgorithm.find(raw)
    if algorithm is None:
        logger.warning("Unknown algorithm %r in otpauth URI, falling back to %s", raw, default)
        return default
    return algorithm


def int_param(params: Mapping[str, str], name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Unparsable %s=%r in otpauth URI, falling back to %d", name, raw, default)
        return default
