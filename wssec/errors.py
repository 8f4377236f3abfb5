"""Project error hierarchy."""


class WSSecurityError(Exception):
    """Base error."""


class MalformedTimestampError(WSSecurityError, ValueError):
    """Raised when a serialized timestamp cannot be parsed."""


# Fault codes from the WS-Security fault vocabulary
MESSAGE_EXPIRED = "wsse:MessageExpired"
INVALID_SECURITY = "wsse:InvalidSecurity"


class TimestampRejectedError(WSSecurityError):
    """Raised by the message pipeline when a timestamp fails verification."""

    def __init__(self, reason, fault_code: str):
        self.reason = reason
        self.fault_code = fault_code
        super().__init__(f"{fault_code}: timestamp rejected ({reason.value})")
