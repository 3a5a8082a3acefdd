"""Error taxonomy for the journey pipeline."""

from enum import Enum
from typing import Optional


class JourneyError(Exception):
    """Base class for errors that end a journey request with a structured failure."""


class ConfigError(JourneyError):
    """Required Salesforce settings are missing or the settings source is malformed."""

    def __init__(self, missing: list[str], message: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(
            message or f"Missing Salesforce environment variables: {', '.join(self.missing)}"
        )


class AuthFailureReason(str, Enum):
    """Classification of a rejected OAuth token exchange."""

    INVALID_GRANT = "invalid_grant"
    INVALID_CLIENT_ID = "invalid_client_id"
    INVALID_CLIENT_SECRET = "invalid_client"
    OTHER = "other"

    @classmethod
    def from_code(cls, code: str | None) -> "AuthFailureReason":
        for reason in cls:
            if reason is not cls.OTHER and reason.value == code:
                return reason
        return cls.OTHER


_AUTH_HINTS = {
    AuthFailureReason.INVALID_GRANT: (
        "Invalid username, password, or security token. "
        "Make sure your password includes the security token at the end."
    ),
    AuthFailureReason.INVALID_CLIENT_ID: "Invalid Client ID. Check your Connected App settings.",
    AuthFailureReason.INVALID_CLIENT_SECRET: "Invalid Client Secret. Check your Connected App settings.",
}


class AuthError(JourneyError):
    """Upstream token exchange was rejected."""

    def __init__(
        self,
        reason: AuthFailureReason,
        detail: str | None = None,
        status_code: int | None = None,
    ):
        self.reason = reason
        self.detail = detail
        self.status_code = status_code
        hint = _AUTH_HINTS.get(reason) or detail or "Unknown error"
        super().__init__(f"Salesforce authentication failed: {hint}")


class ValidationError(JourneyError):
    """Contact identifier is missing or empty after sanitization."""


class NotFoundError(JourneyError):
    """Contact identifier has no matching record."""


class UpstreamError(JourneyError):
    """Contact lookup could not be completed against the CRM API."""


class PartialFetchWarning(UserWarning):
    """One source query failed; the fetch continues without it."""

    def __init__(self, source_id: str, cause: BaseException):
        self.source_id = source_id
        self.cause = cause
        super().__init__(f"Source '{source_id}' skipped: {cause}")
