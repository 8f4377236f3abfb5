from datetime import datetime, timedelta

from wssec.logger import get_logger
from wssec.schemas import Timestamp
from wssec.timeutil import ensure_utc

DEFAULT_TTL_SECONDS = 300

log = get_logger("builder")


def build_timestamp(ttl_seconds: int, now: datetime) -> Timestamp:
    """
    Build a Timestamp created at `now`.

    A positive TTL sets Expires to now + ttl. A TTL of zero leaves Expires
    absent. A negative TTL still sets Expires, which then lies before Created;
    the builder does not judge its inputs.
    """
    created = ensure_utc(now)
    expires = None
    if ttl_seconds != 0:
        expires = created + timedelta(seconds=ttl_seconds)

    log.debug("built timestamp created=%s expires=%s", created, expires)
    return Timestamp(created=created, expires=expires)
