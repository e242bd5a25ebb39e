#!/usr/bin/env python3
"""
cli.py — CLI wrapper cho package otp_core.

Cung cấp các subcommand:
- keygen : sinh secret ngẫu nhiên
- hotp   : in mã HOTP cho một counter (kèm look-ahead nếu cần)
- totp   : in mã TOTP cho thời điểm hiện tại hoặc --time (--watch để xem real time)
- verify : xác minh mã OTP (TOTP/HOTP)
- uri    : in ra otpauth URI
- decode : hiển thị nội dung một otpauth URI

Secret luôn truyền vào dạng Base32 (--secret); không ghi gì xuống đĩa.

eg..:
    otp-core keygen --algorithm SHA256 --strong
    otp-core hotp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --counter 42
    otp-core totp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --digits 8 --time 59
    otp-core verify totp --secret ... --code 287082 --window 1
    otp-core uri totp --secret ... --account alice@example --issuer MyService
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .algorithms import HashAlgorithm
from .constants import (
    DEFAULT_ACCOUNT,
    DEFAULT_ALGORITHM_NAME,
    DEFAULT_DIGITS,
    DEFAULT_ISSUER,
    DEFAULT_PERIOD,
)
from .errors import OTPError
from .hotp import HOTP
from .keys import SecretKey
from .totp import TOTP
from .uri import decode

KEY_ENCODINGS = {
    "base32": lambda key: key.to_base32(padding=False),
    "hex": SecretKey.to_hex,
    "base64": SecretKey.to_base64,
}


# --- Argument types --------------------------------------------------------
def algorithm_type(value: str) -> HashAlgorithm:
    algorithm = HashAlgorithm.find(value)
    if algorithm is None:
        raise argparse.ArgumentTypeError(
            f"unknown algorithm {value!r} (choose from {', '.join(a.wire_name for a in HashAlgorithm)})"
        )
    return algorithm


def secret_type(value: str) -> SecretKey:
    try:
        return SecretKey.from_base32(value, strict=False)
    except OTPError as e:
        raise argparse.ArgumentTypeError(str(e))


def _hotp(args) -> HOTP:
    return HOTP(args.algorithm, args.digits, args.secret)


def _totp(args) -> TOTP:
    return TOTP(args.algorithm, args.digits, args.period, args.secret)


# --- CLI command handlers --------------------------------------------------
def cmd_keygen(args) -> int:
    key = SecretKey.random(args.algorithm, strong=args.strong)
    print(KEY_ENCODINGS[args.encoding](key))
    return 0


def cmd_hotp(args) -> int:
    hotp = _hotp(args)
    if args.look_ahead:
        for counter, code in hotp.generate_window(args.counter, args.look_ahead).items():
            print(f"HOTP({hotp.digits}d, counter={counter}): {code}")
    else:
        print(f"HOTP({hotp.digits}d, counter={args.counter}): {hotp.generate(args.counter)}")
    return 0


def cmd_totp(args) -> int:
    totp = _totp(args)
    if args.watch:
        return _watch_totp(totp)

    now = args.time if args.time is not None else totp.current_time()
    if args.window:
        for counter, code in totp.generate_window(args.window, now).items():
            print(f"TOTP({totp.digits}d, counter={counter}): {code}")
    else:
        code = totp.generate(now)
        print(f"TOTP ({totp.digits}d): {code}  (valid ~{totp.remaining_seconds(now):2d}s)")
    return 0


def _watch_totp(totp: TOTP) -> int:
    print(f"Press Ctrl+C to quit. Generating {totp.digits}-digit TOTP every {totp.period}s...\n")
    last_code = None
    try:
        while True:
            now = totp.current_time()
            code = totp.generate(now)
            remaining = totp.remaining_seconds(now)
            if code != last_code:
                print(f"TOTP ({totp.digits}d): {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_verify_hotp(args) -> int:
    gap = _hotp(args).validate_window(args.counter, args.look_ahead, args.code)
    if gap is None:
        print("[-] HOTP code is INVALID")
        return 1
    print(f"[+] HOTP code is VALID (gap = {gap}, next counter = {args.counter + gap + 1})")
    return 0


def cmd_verify_totp(args) -> int:
    totp = _totp(args)
    now = args.time if args.time is not None else totp.current_time()
    offset = totp.validate_window(args.window, args.code, now)
    if offset is None:
        print("[-] TOTP code is INVALID")
        return 1
    print(f"[+] TOTP code is VALID (offset = {offset} steps)")
    return 0


def cmd_uri_hotp(args) -> int:
    print(_hotp(args).to_uri(args.account, args.issuer, {"counter": args.counter}))
    return 0


def cmd_uri_totp(args) -> int:
    print(_totp(args).to_uri(args.account, args.issuer))
    return 0


def cmd_decode(args) -> int:
    decoded = decode(args.uri)
    if decoded is None:
        print("[!] Not a valid otpauth URI", file=sys.stderr)
        return 1
    print(f"protocol: {decoded.protocol}")
    print(f"account:  {decoded.account}")
    print(f"issuer:   {decoded.issuer or '-'}")
    print(f"key:      {decoded.key.key_length} bits")
    for name, value in sorted(decoded.params.items()):
        if name != "secret":
            print(f"{name}: {value}")
    return 0


def cmd_help(args) -> int:
    print("'otp-core -h' for help.")
    return 0


# --- Argparse builder ------------------------------------------------------
def _add_otp_options(p: argparse.ArgumentParser, with_period: bool) -> None:
    p.add_argument("--secret", type=secret_type, required=True, help="Base32 shared secret")
    p.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    p.add_argument("--algorithm", type=algorithm_type, default=DEFAULT_ALGORITHM_NAME,
                   help="HMAC algorithm: MD5, SHA1, SHA256 or SHA512")
    if with_period:
        p.add_argument("--period", type=int, default=DEFAULT_PERIOD, help="TOTP time step (seconds)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-core", description="HOTP/TOTP generator and verifier")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # keygen
    pk = sub.add_parser("keygen", help="Generate a random secret")
    pk.add_argument("--algorithm", type=algorithm_type, default=DEFAULT_ALGORITHM_NAME,
                    help="Algorithm whose recommended key length is used")
    pk.add_argument("--strong", action="store_true", help="Use the stronger key length")
    pk.add_argument("--encoding", choices=sorted(KEY_ENCODINGS), default="base32")
    pk.set_defaults(func=cmd_keygen)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_otp_options(ph, with_period=False)
    ph.add_argument("--counter", type=int, required=True)
    ph.add_argument("--look-ahead", type=int, default=0, help="Also print the next N codes")
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", help="Generate TOTP code")
    _add_otp_options(pt, with_period=True)
    pt.add_argument("--time", type=int, help="Unix time to generate for (default: now)")
    pt.add_argument("--window", type=int, default=0, help="Also print N steps before and after")
    pt.add_argument("--watch", action="store_true", help="Show TOTP code in real time")
    pt.set_defaults(func=cmd_totp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type", required=True)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_otp_options(pvt, with_period=True)
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    pvt.add_argument("--time", type=int, help="Unix time to verify at (default: now)")
    pvt.add_argument("--window", type=int, default=1, help="Allowed +/- step window")
    pvt.set_defaults(func=cmd_verify_totp)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_otp_options(pvh, with_period=False)
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    pvh.add_argument("--look-ahead", type=int, default=1, help="Allowed counter look-ahead")
    pvh.set_defaults(func=cmd_verify_hotp)

    # uri
    pu = sub.add_parser("uri", help="Print otpauth URI for TOTP/HOTP")
    sub_u = pu.add_subparsers(dest="uri_type", required=True)

    put = sub_u.add_parser("totp", help="otpauth://totp URI")
    _add_otp_options(put, with_period=True)
    put.set_defaults(func=cmd_uri_totp)

    puh = sub_u.add_parser("hotp", help="otpauth://hotp URI")
    _add_otp_options(puh, with_period=False)
    puh.add_argument("--counter", type=int, default=0, help="Initial counter")
    puh.set_defaults(func=cmd_uri_hotp)

    for q in (put, puh):
        q.add_argument("--account", default=DEFAULT_ACCOUNT, help="Account label for otpauth URI")
        q.add_argument("--issuer", default=DEFAULT_ISSUER, help="Issuer label for otpauth URI")

    # decode
    pd = sub.add_parser("decode", help="Show the content of an otpauth URI")
    pd.add_argument("uri")
    pd.set_defaults(func=cmd_decode)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[+] %(message)s")
    try:
        return args.func(args)
    except (OTPError, ValueError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
