"""
Authentication Module
OAuth 1.0a request signing and the other Authorization header schemes.
"""

import base64
from typing import Dict, Mapping, Optional

from oauthlib import oauth1
from oauthlib.oauth1.rfc5849.utils import parse_authorization_header, unescape

from .utils import build_query, generate_nonce, generate_timestamp, percent_encode

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def bearer_header(token: str) -> str:
    return f"Bearer {token}"


def basic_header(consumer_key: Optional[str], consumer_secret: Optional[str]) -> str:
    """App-only token request header: Basic base64(enc(key):enc(secret))."""
    raw = f"{percent_encode(consumer_key or '')}:{percent_encode(consumer_secret or '')}"
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


class Auth:
    """Sign requests for one consumer and (optionally) one access token."""

    def __init__(self, consumer_key: Optional[str] = None, consumer_secret: Optional[str] = None,
                 token_key: Optional[str] = None, token_secret: Optional[str] = None):
        """
        Initialize authentication.

        Args:
            consumer_key: Consumer (API) key
            consumer_secret: Consumer (API) secret
            token_key: Access token, or request token during the token flow
            token_secret: Secret matching ``token_key``
        """
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.token_key = token_key
        self.token_secret = token_secret

    def _client(self, nonce=None, timestamp=None, callback_uri=None, verifier=None):
        return oauth1.Client(
            self.consumer_key or "", client_secret=self.consumer_secret,
            resource_owner_key=self.token_key or None,
            resource_owner_secret=self.token_secret,
            callback_uri=callback_uri, verifier=verifier,
            nonce=nonce or generate_nonce(), timestamp=timestamp or generate_timestamp())

    def header(self, method: str, url: str, params: Optional[Mapping[str, str]] = None,
               nonce: Optional[str] = None, timestamp: Optional[str] = None,
               callback_uri: Optional[str] = None, verifier: Optional[str] = None) -> str:
        """
        Signed ``Authorization`` header value for a request.

        Args:
            method: HTTP method
            url: Request URL without query string
            params: Query or form parameters (never JSON body fields)
            nonce: Fixed nonce, for reproducible signatures
            timestamp: Fixed timestamp, for reproducible signatures
            callback_uri: oauth_callback for the request-token step
            verifier: oauth_verifier for the access-token step

        Returns:
            ``OAuth oauth_consumer_key="...", ...``
        """
        method = method.upper()
        uri, headers, body = url, {}, None
        if params:
            # signed parameters are the same whether they travel in the query or the form
            if method in ("GET", "HEAD"):
                uri = f"{url}?{build_query(params)}"
            else:
                headers = {"Content-Type": FORM_CONTENT_TYPE}
                body = build_query(params)
        client = self._client(nonce, timestamp, callback_uri, verifier)
        _, signed, _ = client.sign(uri, http_method=method, body=body, headers=headers)
        return signed["Authorization"]

    def authorize(self, method: str, url: str, params: Optional[Mapping[str, str]] = None,
                  **kwargs) -> Dict[str, str]:
        """The signed oauth_* parameters of a request, ``oauth_signature`` included."""
        header = self.header(method, url, params, **kwargs)
        return {unescape(k): unescape(v) for k, v in parse_authorization_header(header)}
