"""
Instant formatting and parsing
- UTC rendering with trailing Z
- Fractional seconds only when present
- Offsets normalized to UTC on parse
- Missing timezone rejected
- Remaining lifetime helper
"""
import pytest
from datetime import datetime, timedelta, timezone
from wssec.builder import build_timestamp
from wssec.errors import MalformedTimestampError
from wssec.timeutil import format_instant, parse_instant, seconds_until_expiry
from tests.conftest import NOW


class TestFormat:
    def test_whole_seconds(self):
        assert format_instant(NOW) == "2026-01-15T10:00:00Z"

    def test_fraction_emitted(self):
        assert format_instant(NOW.replace(microsecond=120000)) == "2026-01-15T10:00:00.120000Z"

    def test_offset_converted(self):
        local = datetime(2026, 1, 15, 5, 0, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert format_instant(local) == "2026-01-15T10:00:00Z"

    def test_naive_rejected(self):
        with pytest.raises(ValueError):
            format_instant(datetime(2026, 1, 15, 10, 0, 0))


class TestParse:
    def test_z_suffix(self):
        assert parse_instant("2026-01-15T10:00:00Z") == NOW

    def test_milliseconds(self):
        """Millisecond precision as emitted by most WS-Security stacks."""
        assert parse_instant("2026-01-15T10:00:00.123Z") == NOW.replace(microsecond=123000)

    def test_offset_normalized(self):
        parsed = parse_instant("2026-01-15T12:00:00+02:00")
        assert parsed == NOW
        assert parsed.tzinfo == timezone.utc

    def test_missing_timezone_rejected(self):
        with pytest.raises(MalformedTimestampError):
            parse_instant("2026-01-15T10:00:00")

    def test_out_of_range_in_utc_rejected(self):
        """Valid local time whose UTC equivalent falls past the end of the calendar."""
        with pytest.raises(MalformedTimestampError):
            parse_instant("9999-12-31T23:59:59-01:00")

    @pytest.mark.parametrize("value", ["", "   ", "yesterday", "2026-13-45T10:00:00Z", None])
    def test_garbage_rejected(self, value):
        with pytest.raises(MalformedTimestampError):
            parse_instant(value)


class TestSecondsUntilExpiry:
    def test_remaining(self):
        token = build_timestamp(300, NOW)
        assert seconds_until_expiry(token, NOW + timedelta(seconds=100)) == 200

    def test_floored_at_zero(self):
        token = build_timestamp(-1, NOW)
        assert seconds_until_expiry(token, NOW) == 0

    def test_no_expires(self):
        assert seconds_until_expiry(build_timestamp(0, NOW), NOW) is None
