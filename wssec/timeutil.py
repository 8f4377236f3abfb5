from datetime import datetime, timezone
from typing import Optional

from wssec.errors import MalformedTimestampError


def ensure_utc(dt: datetime) -> datetime:
    """Convert an aware datetime to UTC. Naive datetimes are rejected."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("timestamp instants must be timezone-aware")
    return dt.astimezone(timezone.utc)


def format_instant(dt: datetime) -> str:
    """
    Render an instant as xsd:dateTime in UTC with a trailing Z.
    Sub-second digits are only emitted when present.
    """
    dt = ensure_utc(dt)
    timespec = "microseconds" if dt.microsecond else "seconds"
    return dt.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"


def parse_instant(text: str) -> datetime:
    if not isinstance(text, str) or not text.strip():
        raise MalformedTimestampError("instant missing")
    value = text.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(value)
    except ValueError as exc:
        raise MalformedTimestampError(f"instant {text!r} is not xsd:dateTime") from exc
    if dt.tzinfo is None:
        raise MalformedTimestampError(f"instant {text!r} has no timezone")
    try:
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise MalformedTimestampError(f"instant {text!r} is out of range in UTC") from exc


def seconds_until_expiry(token, now: datetime) -> Optional[int]:
    """
    Whole seconds left before the token's Expires instant, floored at zero.
    Returns None when the token carries no expiry.
    """
    if token.expires is None:
        return None
    delta_seconds = int((token.expires - ensure_utc(now)).total_seconds())
    return max(0, delta_seconds)
