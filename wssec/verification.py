from datetime import datetime, timedelta
from typing import Optional, Union

from lxml import etree

from wssec.clock import Clock, SystemClock
from wssec.errors import INVALID_SECURITY, MESSAGE_EXPIRED, TimestampRejectedError
from wssec.logger import get_logger
from wssec.schemas import RejectionReason, Timestamp, ValidationPolicy, VerificationOutcome
from wssec.serialization import loads
from wssec.timeutil import ensure_utc

log = get_logger("verification")

FAULT_CODES = {
    RejectionReason.EXPIRED: MESSAGE_EXPIRED,
    RejectionReason.STALE: MESSAGE_EXPIRED,
    RejectionReason.IN_FUTURE: INVALID_SECURITY,
}


def verify_timestamp(token: Timestamp, policy: ValidationPolicy, now: datetime) -> VerificationOutcome:
    """
    Check a timestamp against a local policy at instant `now`.

    Checks run in a fixed order and the first failure is reported:
    Expired (now is past Expires; now == Expires is still valid),
    Stale (Created is older than the policy TTL),
    InFuture (Created is ahead of now beyond the allowed skew).
    """
    now = ensure_utc(now)

    if token.expires is not None and now > token.expires:
        return VerificationOutcome.reject(RejectionReason.EXPIRED)

    # The token carries no TTL, the freshness window is the verifier's
    if now - token.created > timedelta(seconds=policy.ttl_seconds):
        return VerificationOutcome.reject(RejectionReason.STALE)

    # Compared as a difference so nothing is added to now
    if token.created - now > timedelta(seconds=policy.max_future_skew_seconds):
        return VerificationOutcome.reject(RejectionReason.IN_FUTURE)

    return VerificationOutcome.accept()


def enforce_timestamp(token: Timestamp, policy: ValidationPolicy, now: datetime) -> Timestamp:
    """Verify and raise TimestampRejectedError on rejection."""
    outcome = verify_timestamp(token, policy, now)
    if not outcome.accepted:
        raise TimestampRejectedError(outcome.reason, FAULT_CODES[outcome.reason])
    return token


class TimestampProcessor:
    """Extracts the wsu:Timestamp from an incoming security header and enforces the policy."""

    def __init__(self, policy: ValidationPolicy, clock: Optional[Clock] = None):
        self.policy = policy
        self.clock = clock or SystemClock()

    def process(self, document: Union[bytes, str, etree._Element]) -> Timestamp:
        token = loads(document)
        now = self.clock.now_utc()
        try:
            return enforce_timestamp(token, self.policy, now)
        except TimestampRejectedError as exc:
            log.warning(
                "timestamp rejected reason=%s created=%s expires=%s now=%s",
                exc.reason.value, token.created, token.expires, now,
            )
            raise
