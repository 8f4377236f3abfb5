from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from wssec.timeutil import ensure_utc


class Timestamp(BaseModel, extra="forbid", frozen=True):
    """
    A wsu:Timestamp token: a Created instant and an optional Expires instant.
    Both are held in UTC.
    """
    created: datetime
    expires: Optional[datetime] = None

    @field_validator("created", "expires")
    @classmethod
    def _normalize_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        return ensure_utc(value)


# Largest window a timedelta can hold in either direction
MAX_WINDOW_SECONDS = int(-timedelta.min.total_seconds())


class ValidationPolicy(BaseModel, extra="forbid", frozen=True):
    # Maximum age of Created; negative values make every token stale
    ttl_seconds: int = Field(ge=-MAX_WINDOW_SECONDS, le=MAX_WINDOW_SECONDS)
    max_future_skew_seconds: int = Field(default=0, ge=0, le=MAX_WINDOW_SECONDS)


class RejectionReason(str, Enum):
    EXPIRED = "Expired"
    STALE = "Stale"
    IN_FUTURE = "InFuture"


class VerificationOutcome(BaseModel, extra="forbid", frozen=True):
    accepted: bool
    reason: Optional[RejectionReason] = None

    @model_validator(mode="after")
    def _reason_iff_rejected(self):
        if self.accepted == (self.reason is not None):
            raise ValueError("an outcome is either accepted or rejected with a reason")
        return self

    @classmethod
    def accept(cls) -> "VerificationOutcome":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "VerificationOutcome":
        return cls(accepted=False, reason=reason)
