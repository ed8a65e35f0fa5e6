"""Client configuration."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

API_HOST = "twitter.com"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for one client. Credentials are never validated here."""

    subdomain: str = "api"
    version: str = "1.1"
    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    access_token_key: Optional[str] = None
    access_token_secret: Optional[str] = None
    bearer_token: Optional[str] = None
    extension: bool = True

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.{API_HOST}/{self.version}"

    @property
    def oauth_url(self) -> str:
        return f"https://{self.subdomain}.{API_HOST}/oauth"


def load_config_from_env(dotenv_path: Optional[str] = None, **overrides) -> ClientConfig:
    """
    Build a ClientConfig from the environment (and a ``.env`` file, if any).

    Args:
        dotenv_path: Explicit .env path; defaults to python-dotenv's lookup
        **overrides: ClientConfig fields that take precedence over the environment

    Returns:
        ClientConfig
    """
    load_dotenv(dotenv_path=dotenv_path)
    values = dict(
        subdomain=os.getenv('TWITTER_SUBDOMAIN', 'api'),
        version=os.getenv('TWITTER_API_VERSION', '1.1'),
        consumer_key=os.getenv('TWITTER_CONSUMER_KEY'),
        consumer_secret=os.getenv('TWITTER_CONSUMER_SECRET'),
        access_token_key=os.getenv('ACCESS_TOKEN'),
        access_token_secret=os.getenv('ACCESS_TOKEN_SECRET'),
        bearer_token=os.getenv('TWITTER_BEARER_TOKEN'),
    )
    values.update(overrides)
    return ClientConfig(**values)
