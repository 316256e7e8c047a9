#!/usr/bin/env python3
"""
cli.py — CLI wrapper for totp_core (stateless, works on otpauth URIs)

Subcommands:
- new    : create a credential, print secret and otpauth URI
- code   : print the current TOTP code for a URI
- verify : check a TOTP code against a URI
- parse  : print the fields of a URI as JSON
"""

import argparse
import json
import logging
import sys

from . import credential as cred_mod
from . import engine
from .errors import OTPError
from .secret import SECRET_BYTES

logger = logging.getLogger(__name__)


# --- CLI command handlers ---
def cmd_new(args):
    cred = cred_mod.new_credential(
        args.issuer, args.account,
        digits=args.digits, period=args.period, byte_length=args.bytes,
    )
    print(f"[*] Credential for '{args.issuer}:{args.account}'")
    print("    Secret:", cred.secret)
    print("    URI:   ", cred.uri)
    return 0


def cmd_code(args):
    cred = cred_mod.parse_uri(args.uri)
    code, remaining = engine.totp(cred, args.timestamp)
    print(f"TOTP ({cred.digits}d): {code}  (valid ~{remaining:2d}s)")
    return 0


def cmd_verify(args):
    cred = cred_mod.parse_uri(args.uri)
    ok = engine.verify_code(cred, args.code, now=args.timestamp, window=args.window)
    if ok:
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


def cmd_parse(args):
    cred = cred_mod.parse_uri(args.uri)
    print(json.dumps(cred.to_dict(), indent=2, ensure_ascii=False))
    return 0


def cmd_help(args):
    print("'otp-cli -h' for help.")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-cli", description="TOTP generator / verifier for otpauth URIs")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # new
    pn = sub.add_parser("new", help="Create a credential with a random secret")
    pn.add_argument("--issuer", default="otp-tool", help="Issuer label for the otpauth URI")
    pn.add_argument("--account", required=True, help="Account label for the otpauth URI")
    pn.add_argument("--digits", type=int, default=engine.DEFAULT_DIGITS, help="Number of OTP digits (6, 7 or 8)")
    pn.add_argument("--period", type=int, default=engine.DEFAULT_PERIOD, help="TOTP time step (seconds)")
    pn.add_argument("--bytes", type=int, default=SECRET_BYTES, help="Secret length in bytes")
    pn.set_defaults(func=cmd_new)

    # code
    pc = sub.add_parser("code", help="Show the TOTP code for a URI")
    pc.add_argument("--uri", required=True, help="otpauth://totp/ URI")
    pc.add_argument("--timestamp", type=float, help="Unix time to compute for (default: now)")
    pc.set_defaults(func=cmd_code)

    # verify
    pv = sub.add_parser("verify", help="Verify a TOTP code")
    pv.add_argument("--uri", required=True, help="otpauth://totp/ URI")
    pv.add_argument("--code", required=True, help="OTP code to verify")
    pv.add_argument("--timestamp", type=float, help="Unix time to verify at (default: now)")
    pv.add_argument("--window", type=int, default=0, help="Allowed +/- step window")
    pv.set_defaults(func=cmd_verify)

    # parse
    pp = sub.add_parser("parse", help="Print the fields of an otpauth URI as JSON")
    pp.add_argument("--uri", required=True, help="otpauth://totp/ URI")
    pp.set_defaults(func=cmd_parse)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return args.func(args)
    except OTPError as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"[!] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
