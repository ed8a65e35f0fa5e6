"""
Twitter API Client
Main client for signing and sending requests to Twitter's REST APIs.
"""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional, Tuple

import aiohttp
from yarl import URL

from .auth import FORM_CONTENT_TYPE, Auth, basic_header, bearer_header
from .config import ClientConfig
from .errors import TransportError
from .logger import logger
from .response import Result, decode, unwrap
from .utils import build_query, normalize_params

BEARER_TOKEN_URL = "https://api.twitter.com/oauth2/token"
JSON_CONTENT_TYPE = "application/json"


class TwitterClient:
    """Twitter API Client for REST and Stream APIs."""

    def __init__(self, config: Optional[ClientConfig] = None, *,
                 session: Optional[aiohttp.ClientSession] = None, **options):
        """
        Initialize Twitter API client.

        Args:
            config: Client configuration; built from ``options`` when omitted
            session: Caller-owned aiohttp session; a new one is opened per call otherwise
            **options: ClientConfig fields (subdomain, version, consumer_key, ...)
        """
        if config is None:
            config = ClientConfig(**options)
        elif options:
            raise TypeError("pass either a ClientConfig or keyword options, not both")
        self.config = config
        self.session = session
        self.auth = Auth(config.consumer_key, config.consumer_secret,
                         config.access_token_key, config.access_token_secret)

    @property
    def url(self) -> str:
        return self.config.base_url

    @property
    def oauth_url(self) -> str:
        return self.config.oauth_url

    def resource_url(self, path: str) -> str:
        """Absolute URL (without query) for a resource path such as ``users/lookup``."""
        suffix = ".json" if self.config.extension else ""
        return f"{self.url}/{path.lstrip('/')}{suffix}"

    def _authorization(self, method: str, url: str, params: Mapping[str, str]) -> str:
        if self.config.bearer_token:
            return bearer_header(self.config.bearer_token)
        return self.auth.header(method, url, params)

    def _prepare(self, method: str, path: str, body: Any = None,
                 params: Optional[Mapping[str, Any]] = None):
        """Build url, headers and payload for one call."""
        url = self.resource_url(path)
        params = normalize_params(params)
        headers = {"Authorization": self._authorization(method, url, params)}

        if method == "GET" or body is not None:
            query = build_query(params)
            full_url = f"{url}?{query}" if query else url
            data = None
            if body is not None:
                headers["Content-Type"] = JSON_CONTENT_TYPE
                data = json.dumps(body)
        else:
            full_url = url
            headers["Content-Type"] = FORM_CONTENT_TYPE
            data = build_query(params)
        return full_url, headers, data

    async def _send(self, method: str, url: str, headers: Dict[str, str],
                    data: Optional[str] = None) -> Tuple[int, str]:
        logger.debug("%s %s", method, url)
        try:
            if self.session is not None:
                return await self._round_trip(self.session, method, url, headers, data)
            async with aiohttp.ClientSession() as session:
                return await self._round_trip(session, method, url, headers, data)
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

    @staticmethod
    async def _round_trip(session, method, url, headers, data):
        async with session.request(method, URL(url, encoded=True),
                                   headers=headers, data=data) as resp:
            text = await resp.text()
            return resp.status, text

    async def _call(self, method: str, url: str, headers: Dict[str, str],
                    data: Optional[str] = None, form: bool = False) -> Any:
        status, text = await self._send(method, url, headers, data)
        result: Result = decode(status, text, form=form)
        value = unwrap(result)
        if status >= 300:
            logger.info("%s %s returned HTTP %s: %s", method, url, status, value)
        return value

    async def request(self, method: str, path: str, body: Any = None,
                      params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Send a signed request.

        Args:
            method: HTTP method
            path: Resource path relative to ``url``
            body: JSON body; when None, non-GET params are sent form-encoded
            params: Query or form parameters

        Returns:
            Decoded payload, or an error envelope ``{"errors": [...]}``

        Raises:
            TransportError: The call could not be completed
        """
        method = method.upper()
        url, headers, data = self._prepare(method, path, body, params)
        return await self._call(method, url, headers, data)

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``path`` with query parameters."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None,
                   params: Optional[Mapping[str, Any]] = None) -> Any:
        """POST ``path``; JSON ``body`` if given, otherwise ``params`` as a form."""
        return await self.request("POST", path, body, params)

    async def put(self, path: str, body: Any = None,
                  params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", path, body, params)

    async def get_bearer_token(self) -> Any:
        """
        Exchange the consumer key/secret for an app-only bearer token.

        Returns:
            ``{"token_type": "bearer", "access_token": ...}`` or an error envelope
        """
        headers = {
            "Authorization": basic_header(self.config.consumer_key, self.config.consumer_secret),
            "Content-Type": FORM_CONTENT_TYPE + ";charset=UTF-8",
        }
        return await self._call("POST", BEARER_TOKEN_URL, headers, "grant_type=client_credentials")

    async def get_request_token(self, oauth_callback: str) -> Any:
        """
        First step of the three-legged flow.

        Args:
            oauth_callback: Callback URL, or ``oob`` for PIN-based authorization

        Returns:
            Dict with oauth_token, oauth_token_secret, oauth_callback_confirmed
        """
        url = f"{self.oauth_url}/request_token"
        consumer = Auth(self.config.consumer_key, self.config.consumer_secret)
        headers = {
            "Authorization": consumer.header("POST", url, callback_uri=oauth_callback),
        }
        return await self._call("POST", url, headers, form=True)

    async def get_access_token(self, key: str, secret: str, verifier: str) -> Any:
        """
        Last step of the three-legged flow.

        Args:
            key: Request token
            secret: Request token secret
            verifier: oauth_verifier returned to the callback (or the PIN)

        Returns:
            Dict with oauth_token, oauth_token_secret, user_id, screen_name
        """
        url = f"{self.oauth_url}/access_token"
        request_token = Auth(self.config.consumer_key, self.config.consumer_secret, key, secret)
        headers = {
            "Authorization": request_token.header("POST", url, verifier=verifier),
        }
        return await self._call("POST", url, headers, form=True)
