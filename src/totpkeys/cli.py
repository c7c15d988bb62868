"""
Command line front end.

  totpkeys code "jbsw y3dp ehpk 3pxp"
  totpkeys check JBSWY3DPEHPK3PXP
  totpkeys inspect "otpauth://totp/Google:me@example.com?secret=JBSWY3DPEHPK3PXP"
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .exceptions import OTPAuthError
from .otp import DEFAULT_DIGITS
from .otpauth import parse_uri
from .totp import DEFAULT_INTERVAL, TOTP
from .validation import Invalid, validate_secret


def cmd_code(args: argparse.Namespace) -> int:
    result = validate_secret(args.input)
    if isinstance(result, Invalid):
        print("Invalid key ({}): {}".format(result.reason.value, result.message), file=sys.stderr)
        return 1
    try:
        totp = TOTP(result.secret, digits=args.digits, interval=args.period)
    except ValueError as e:
        print("Invalid option: {}".format(e), file=sys.stderr)
        return 1
    now = time.time()
    print("{}  ({}s remaining, {:.2f}%)".format(totp.at(now), totp.time_remaining(now), totp.progress(now)))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    result = validate_secret(args.input)
    if isinstance(result, Invalid):
        print("Invalid key ({}): {}".format(result.reason.value, result.message), file=sys.stderr)
        return 1
    print(result.secret)
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    try:
        record = parse_uri(args.uri)
    except OTPAuthError as e:
        print("Invalid URI: {}".format(e), file=sys.stderr)
        return 1
    print("Label:     {}".format(record.label))
    print("Issuer:    {}".format(record.issuer or "-"))
    print("Account:   {}".format(record.account or "-"))
    print("Secret:    {}".format(record.secret))
    print("Algorithm: {}".format(record.algorithm))
    print("Digits:    {}".format(record.digits))
    print("Period:    {}".format(record.period))
    for notice in record.notices:
        print("Note: {}".format(notice))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totpkeys", description="TOTP (HMAC-SHA1) codes from Base32 secrets or otpauth URIs.")
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    pc = sub.add_parser("code", help="Print the current code for a secret or otpauth URI")
    pc.add_argument("input")
    pc.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    pc.add_argument("--period", type=int, default=DEFAULT_INTERVAL, help="TOTP time step (seconds)")
    pc.set_defaults(func=cmd_code)

    pk = sub.add_parser("check", help="Validate a key and print its canonical secret")
    pk.add_argument("input")
    pk.set_defaults(func=cmd_check)

    pi = sub.add_parser("inspect", help="Show what an otpauth URI contains")
    pi.add_argument("uri")
    pi.set_defaults(func=cmd_inspect)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
