"""Failure taxonomy for the Norsk Pensjon integration.

Upstream failures are classified once, where they are detected, and travel
to the HTTP boundary as ``AdapterError`` values rather than exceptions.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class IntegrationError(RuntimeError):
    """Raised when the integration is misconfigured or unavailable."""


class Severity(str, Enum):
    PERMANENT_CLIENT = "permanent_client"
    PERMANENT_SERVER = "permanent_server"
    TRANSIENT = "transient"


class ErrorCode(IntEnum):
    ORGANIZATION_NOT_FOUND = 1
    UPSTREAM_ERROR = 2
    INVALID_REQUEST = 3


@dataclass(frozen=True)
class AdapterError:
    """A classified failure: severity, stable code, detail and optional cause."""

    severity: Severity
    code: ErrorCode
    detail: str = ""
    cause: Optional[BaseException] = None

    @classmethod
    def permanent_client(cls, code: ErrorCode, detail: str = "") -> "AdapterError":
        return cls(Severity.PERMANENT_CLIENT, code, detail)

    @classmethod
    def permanent_server(
        cls, code: ErrorCode, detail: str = "", cause: Optional[BaseException] = None
    ) -> "AdapterError":
        return cls(Severity.PERMANENT_SERVER, code, detail, cause)

    @classmethod
    def transient(
        cls, code: ErrorCode, detail: str = "", cause: Optional[BaseException] = None
    ) -> "AdapterError":
        return cls(Severity.TRANSIENT, code, detail, cause)

    def to_dict(self) -> dict:
        # cause is for logs only, never for the wire
        return {
            "code": int(self.code),
            "name": self.code.name,
            "severity": self.severity.value,
            "detail": self.detail,
        }


def classify_status(status: int) -> Optional[AdapterError]:
    """Map an upstream HTTP status to a failure, or None for 200.

    A 200 is only provisionally a success: the caller still has to decode
    the body and reject malformed or empty payloads.
    """
    if status == 200:
        return None
    if status in (401, 403):
        return AdapterError.permanent_client(
            ErrorCode.ORGANIZATION_NOT_FOUND, f"Authentication failed ({status})"
        )
    if status == 500:
        return AdapterError.transient(
            ErrorCode.UPSTREAM_ERROR, "Call to Norsk Pensjon failed (500 - internal server error)"
        )
    return AdapterError.permanent_client(
        ErrorCode.UPSTREAM_ERROR, f"External API call to Norsk Pensjon failed ({status})"
    )


def decode_failure(reason: str) -> AdapterError:
    return AdapterError.permanent_server(
        ErrorCode.UPSTREAM_ERROR, f"Could not deserialize response: {reason}"
    )


def unrecognized_payload() -> AdapterError:
    return AdapterError.permanent_server(
        ErrorCode.UPSTREAM_ERROR, "Did not understand the data model returned from upstream source"
    )


def transport_failure(exc: BaseException) -> AdapterError:
    return AdapterError.permanent_server(
        ErrorCode.UPSTREAM_ERROR, f"Could not reach Norsk Pensjon: {exc.__class__.__name__}", exc
    )


def invalid_request(reason: str) -> AdapterError:
    return AdapterError.permanent_client(ErrorCode.INVALID_REQUEST, f"Invalid request body: {reason}")
