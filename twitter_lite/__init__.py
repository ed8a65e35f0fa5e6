"""
twitter-lite - Twitter API Client
A small asynchronous client for Twitter's REST and Stream APIs.
"""

__version__ = "0.1.0"
__author__ = "Developer"

from .client import TwitterClient
from .auth import Auth
from .config import ClientConfig, load_config_from_env
from .errors import (
    ErrorEnvelope,
    TransportError,
    TwitterLiteError,
    is_authentication_error,
    is_error,
)

__all__ = [
    "TwitterClient",
    "Auth",
    "ClientConfig",
    "load_config_from_env",
    "ErrorEnvelope",
    "TransportError",
    "TwitterLiteError",
    "is_error",
    "is_authentication_error",
]
