"""
Error types.

API-level rejections (bad credentials, unknown user, ...) are not raised:
they come back as an error envelope, ``{"errors": [{"code", "message"}]}``.
Only failures that prevent the call from completing raise ``TransportError``.
"""

from typing import Any, List, Optional, TypedDict

# Codes the API uses when it rejects the credentials rather than the request.
AUTH_ERROR_CODES = frozenset({32, 89, 99, 135, 215, 220})


class ErrorDetail(TypedDict):
    code: int
    message: str


class ErrorEnvelope(TypedDict):
    errors: List[ErrorDetail]


class TwitterLiteError(Exception):
    """Base class for exceptions raised by the client."""


class TransportError(TwitterLiteError):
    """The request could not be completed or its response could not be read."""

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body


def make_error_envelope(code: int, message: str) -> ErrorEnvelope:
    return {"errors": [{"code": code, "message": message}]}


def is_error(result: Any) -> bool:
    """True when ``result`` is an error envelope rather than a success payload."""
    return isinstance(result, dict) and isinstance(result.get("errors"), list)


def is_authentication_error(result: Any) -> bool:
    """True when the API rejected the credentials (e.g. code 32 or 89)."""
    if not is_error(result):
        return False
    return any(err.get("code") in AUTH_ERROR_CODES for err in result["errors"])
