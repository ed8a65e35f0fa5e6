"""Shared fixtures: an in-memory stand-in for aiohttp.ClientSession."""

import json
from collections import namedtuple
from urllib.parse import unquote

import pytest

from twitter_lite import TwitterClient

Call = namedtuple("Call", "method url headers data")


class FakeResponse:
    def __init__(self, status, text):
        self.status = status
        self._text = text

    async def text(self):
        if isinstance(self._text, Exception):
            raise self._text
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records requests and replays queued responses (200 ``{}`` when empty)."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.error = None

    def reply(self, status, body):
        text = body if isinstance(body, (str, Exception)) else json.dumps(body)
        self.responses.append((status, text))

    def request(self, method, url, headers=None, data=None):
        self.calls.append(Call(method, str(url), dict(headers or {}), data))
        if self.error is not None:
            raise self.error
        status, text = self.responses.pop(0) if self.responses else (200, "{}")
        return FakeResponse(status, text)

    @property
    def last(self):
        return self.calls[-1]


def parse_oauth_header(value):
    """Split ``OAuth k="v", ...`` into a dict of decoded values."""
    assert value.startswith("OAuth ")
    params = {}
    for part in value[len("OAuth "):].split(", "):
        key, _, quoted = part.partition("=")
        params[unquote(key)] = unquote(quoted.strip('"'))
    return params


CREDENTIALS = dict(
    consumer_key="consumer-key",
    consumer_secret="consumer-secret",
    access_token_key="token-key",
    access_token_secret="token-secret",
)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return TwitterClient(session=session, **CREDENTIALS)
