"""
otpkit – command line entry point.

Usage
-----
    python -m otpkit secret [--length 16] [--prefix TEXT] [--no-enforce]
    python -m otpkit code SECRET
    python -m otpkit verify SECRET CODE [--window 4] [--min-counter N]
    python -m otpkit uri ISSUER ACCOUNT SECRET [--chart]

Or, if installed as a package:
    otpkit ...
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from otpkit.config import OTPConfig
from otpkit.core.utils import format_otp
from otpkit.engine import OTPEngine
from otpkit.exceptions import OTPError
from otpkit.qr.uri import google_chart_url

logger = logging.getLogger("otpkit")


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ── Commands ──────────────────────────────────────────────────────────────────

def _cmd_secret(engine: OTPEngine, args: argparse.Namespace) -> int:
    print(engine.generate_secret_key(args.length, args.prefix))
    return 0


def _cmd_code(engine: OTPEngine, args: argparse.Namespace) -> int:
    code = engine.get_current_otp(args.secret)
    print(format_otp(code) if args.pretty else code)
    return 0


def _cmd_verify(engine: OTPEngine, args: argparse.Namespace) -> int:
    if args.min_counter is None:
        ok = engine.verify_key(args.secret, args.code, window=args.window)
        print("valid" if ok else "invalid")
        return 0 if ok else 1
    counter = engine.verify_key_newer(args.secret, args.code, args.min_counter, window=args.window)
    if counter is None:
        print("invalid")
        return 1
    print(counter)
    return 0


def _cmd_uri(engine: OTPEngine, args: argparse.Namespace) -> int:
    if args.chart:
        print(google_chart_url(args.issuer, args.account, args.secret))
    else:
        print(engine.provisioning_uri(args.issuer, args.account, args.secret))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="otpkit", description="Google Authenticator compatible TOTP tool.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--period", type=int, default=30, help="Time step in seconds")
    parser.add_argument("--digits", type=int, default=6, help="Number of code digits")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("secret", help="Generate a new base32 secret")
    p.add_argument("--length", type=int, default=16)
    p.add_argument("--prefix", default="")
    p.add_argument("--no-enforce", action="store_true", help="Allow lengths Google Authenticator rejects")
    p.set_defaults(func=_cmd_secret)

    p = sub.add_parser("code", help="Print the current code for a secret")
    p.add_argument("secret")
    p.add_argument("--pretty", action="store_true", help="Group digits, e.g. '123 456'")
    p.set_defaults(func=_cmd_code)

    p = sub.add_parser("verify", help="Verify a code against a secret")
    p.add_argument("secret")
    p.add_argument("code")
    p.add_argument("--window", type=int, default=None)
    p.add_argument("--min-counter", type=int, default=None, help="Accept only codes from this counter on")
    p.set_defaults(func=_cmd_verify)

    p = sub.add_parser("uri", help="Print a provisioning URI")
    p.add_argument("issuer")
    p.add_argument("account")
    p.add_argument("secret")
    p.add_argument("--chart", action="store_true", help="Print a Google Charts QR code URL instead")
    p.set_defaults(func=_cmd_uri)

    return parser


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        engine = OTPEngine(
            OTPConfig(
                period=args.period,
                digits=args.digits,
                enforce_compatibility=not getattr(args, "no_enforce", False),
            )
        )
        return args.func(engine, args)
    except OTPError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
