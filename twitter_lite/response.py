"""
Response decoding.

A response body is decoded in two steps, JSON first and form data second,
into a tagged result: ``Success`` carries the payload, ``Failure`` carries a
normalized error envelope. Bodies that fit neither raise ``TransportError``.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Union
from urllib.parse import parse_qsl

from .errors import ErrorEnvelope, TransportError, make_error_envelope


@dataclass(frozen=True)
class Success:
    value: Any


@dataclass(frozen=True)
class Failure:
    envelope: ErrorEnvelope


Result = Union[Success, Failure]


_FORM_PAIR = r"[A-Za-z0-9_.~%-]+=[^&\s<>]*"
FORM_BODY = re.compile(rf"{_FORM_PAIR}(?:&{_FORM_PAIR})*")


def parse_form(text: str) -> Dict[str, str]:
    """Strictly parse a url-encoded body; ValueError when it is not one."""
    text = text.strip()
    if not FORM_BODY.fullmatch(text):
        raise ValueError("not a url-encoded body")
    return dict(parse_qsl(text, keep_blank_values=True, strict_parsing=True))


def _to_code(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_errors(payload: Any, status: int, text: str) -> ErrorEnvelope:
    """Reduce any error payload to ``{"errors": [{"code", "message"}]}``."""
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return {
                "errors": [
                    {
                        "code": _to_code(err.get("code"), status),
                        "message": str(err.get("message", "")),
                    }
                    if isinstance(err, dict)
                    else {"code": status, "message": str(err)}
                    for err in errors
                ]
            }
        if isinstance(errors, str):
            return make_error_envelope(status, errors)
        message = payload.get("message") or payload.get("error") or payload.get("detail")
        if message is not None:
            return make_error_envelope(_to_code(payload.get("code"), status), str(message))
    return make_error_envelope(status, text.strip())


def decode(status: int, text: str, form: bool = False) -> Result:
    """
    Decode a response body.

    Args:
        status: HTTP status code
        text: Raw response body
        form: The endpoint answers success with url-encoded data

    Returns:
        Success or Failure

    Raises:
        TransportError: The body is neither JSON nor form data
    """
    if 200 <= status < 300:
        if status == 204 or not text.strip():
            return Success({})
        try:
            if form:
                return Success(parse_form(text))
            return Success(json.loads(text))
        except ValueError as e:
            raise TransportError(f"Malformed response body (HTTP {status})", status, text) from e

    try:
        payload = json.loads(text)
    except ValueError:
        try:
            payload = parse_form(text)
        except ValueError as e:
            raise TransportError(f"Unreadable error response (HTTP {status})", status, text) from e
    return Failure(normalize_errors(payload, status, text))


def unwrap(result: Result) -> Any:
    """Plain value for callers: the payload, or the error envelope."""
    if isinstance(result, Failure):
        return result.envelope
    return result.value
