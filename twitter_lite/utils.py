"""
Utility Functions
Helper functions for encoding request parameters.
"""

import secrets
import string
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

NONCE_ALPHABET = string.ascii_letters + string.digits


def percent_encode(value: Any) -> str:
    """
    Percent-encode a value per RFC 3986.

    Only the unreserved characters (letters, digits, ``-._~``) are left
    as-is; a space becomes ``%20``, never ``+``.

    Args:
        value: String (or anything with a string form) to encode

    Returns:
        Encoded string
    """
    return quote(str(value), safe="~")


def format_param_value(value: Any) -> str:
    """
    Render a parameter value the way the API expects it on the wire.

    Args:
        value: Scalar or list value

    Returns:
        String value; lists are comma-joined, booleans are lowercase
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(format_param_value(item) for item in value)
    return str(value)


def normalize_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Flatten request parameters to plain strings, dropping ``None`` values."""
    if not params:
        return {}
    return {
        str(key): format_param_value(value)
        for key, value in params.items()
        if value is not None
    }


def encoded_pairs(params: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Percent-encode every key and value, sorted by key then value."""
    return sorted((percent_encode(k), percent_encode(v)) for k, v in params.items())


def build_query(params: Mapping[str, str]) -> str:
    """Build a query string (or form body) from already normalized parameters."""
    return "&".join(f"{k}={v}" for k, v in encoded_pairs(params))


def generate_nonce(length: int = 32) -> str:
    """Random alphanumeric nonce."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def generate_timestamp() -> str:
    return str(int(time.time()))
