import argparse
import json
import sys
from typing import Optional

from wssec.builder import build_timestamp
from wssec.clock import SystemClock
from wssec.config import get_settings
from wssec.errors import MalformedTimestampError
from wssec.schemas import ValidationPolicy
from wssec.serialization import dumps, loads, timestamp_from_dict, timestamp_to_dict
from wssec.timeutil import parse_instant, seconds_until_expiry
from wssec.verification import verify_timestamp


def build_token(ttl: int, fmt: str, wsu_id: Optional[str] = None):
    token = build_timestamp(ttl, SystemClock().now_utc())
    if fmt == "json":
        print(json.dumps(timestamp_to_dict(token), indent=2))
    else:
        print(dumps(token, wsu_id).decode("utf-8"))


def load_token(path: str):
    with open(path, "rb") as f:
        raw = f.read()
    if raw.lstrip().startswith(b"{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedTimestampError("document is not valid JSON") from exc
        return timestamp_from_dict(data)
    return loads(raw)


def verify_token(path: str, ttl: int, skew: int, now_str: Optional[str] = None):
    try:
        token = load_token(path)
        now = parse_instant(now_str) if now_str else SystemClock().now_utc()
    except MalformedTimestampError as exc:
        print(f"MALFORMED TIMESTAMP: {exc}")
        sys.exit(2)

    policy = ValidationPolicy(ttl_seconds=ttl, max_future_skew_seconds=skew)
    outcome = verify_timestamp(token, policy, now)

    if outcome.accepted:
        remaining = seconds_until_expiry(token, now)
        if remaining is not None:
            print(f"Expires in {remaining}s")
        print("VERIFIED: OK")
        sys.exit(0)
    else:
        print(f"VERIFICATION FAILED: {outcome.reason.value}")
        sys.exit(1)


def main(argv=None):
    settings = get_settings()
    parser = argparse.ArgumentParser(description="WS-Security Timestamp CLI")
    subparsers = parser.add_subparsers(dest="command")

    build_parser = subparsers.add_parser("build")
    build_parser.add_argument("--ttl", type=int, default=settings.timestamp_ttl_seconds, help="Time to live (seconds)")
    build_parser.add_argument("--format", choices=["xml", "json"], default="xml")
    build_parser.add_argument("--id", dest="wsu_id", help="wsu:Id attribute")

    verify_parser = subparsers.add_parser("verify")
    verify_parser.add_argument("file", help="Timestamp XML or JSON file")
    verify_parser.add_argument("--ttl", type=int, default=settings.timestamp_ttl_seconds, help="Freshness window (seconds)")
    verify_parser.add_argument("--skew", type=int, default=settings.max_future_skew_seconds, help="Allowed future skew (seconds)")
    verify_parser.add_argument("--now", help="Verification instant (xsd:dateTime)")

    args = parser.parse_args(argv)

    if args.command == "build":
        build_token(args.ttl, args.format, args.wsu_id)
    elif args.command == "verify":
        verify_token(args.file, args.ttl, args.skew, args.now)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
