from enum import StrEnum
from typing import Dict, Optional


class ErrorKind(StrEnum):
    HTTP = "http"            # backend answered with a non-success status
    TRANSPORT = "transport"  # no response at all
    PAYLOAD = "payload"      # success status, unusable body


class ApiError(Exception):
    """
    Base error for every backend call.

    Attributes:
        message: Human-readable text, safe to show in the UI.
        status: HTTP status code when a response was received.
        kind: Whether the failure came from a status, the transport or the body.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        kind: ErrorKind = ErrorKind.HTTP,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.kind = kind

    @property
    def is_transport(self) -> bool:
        return self.kind is ErrorKind.TRANSPORT

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status={self.status}, kind={self.kind.value})"


class AuthError(ApiError):
    """Bad credentials or a login response without a token."""


class FetchError(ApiError):
    """List/search failure."""


class SaveError(ApiError):
    """Create/update failure."""


class FormValidationError(Exception):
    """Local required-field rejection raised before any network call."""

    def __init__(self, fields: Dict[str, str]) -> None:
        self.fields = dict(fields)
        self.message = "Data belum lengkap atau tidak valid: " + ", ".join(sorted(self.fields))
        super().__init__(self.message)
