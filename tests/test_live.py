"""Tests against the real API.

The API tests are skipped unless TWITTER_CONSUMER_KEY, TWITTER_CONSUMER_SECRET, ACCESS_TOKEN and
ACCESS_TOKEN_SECRET are available (environment or .env). The expectations
describe the dedicated testing account these tests were written for.
"""

import os
import random
import re
import string

import pytest

from twitter_lite import TwitterClient, load_config_from_env


def read_config(dotenv_path=None):
    """Load credentials without leaving .env values in os.environ."""
    saved = dict(os.environ)
    try:
        return load_config_from_env(dotenv_path=dotenv_path)
    finally:
        os.environ.clear()
        os.environ.update(saved)


@pytest.fixture(scope="module")
def config():
    loaded = read_config()
    if not all([loaded.consumer_key, loaded.consumer_secret,
                loaded.access_token_key, loaded.access_token_secret]):
        pytest.skip("live Twitter credentials not configured")
    return loaded


@pytest.fixture
def new_client(config):
    def make(subdomain="api"):
        return TwitterClient(
            subdomain=subdomain,
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            access_token_key=config.access_token_key,
            access_token_secret=config.access_token_secret,
        )
    return make


@pytest.mark.asyncio
async def test_fails_on_invalid_access_token_secret(config):
    client = TwitterClient(
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
        access_token_key=config.access_token_key,
        access_token_secret="xyz",
    )
    results = await client.get("account/verify_credentials")
    assert results == {"errors": [{"code": 32, "message": "Could not authenticate you."}]}


@pytest.mark.asyncio
async def test_fails_on_invalid_or_expired_token(config):
    client = TwitterClient(
        consumer_key="xyz",
        consumer_secret="xyz",
        access_token_key="xyz",
        access_token_secret="xyz",
    )
    results = await client.get("account/verify_credentials")
    assert results == {"errors": [{"code": 89, "message": "Invalid or expired token."}]}


@pytest.mark.asyncio
async def test_verify_credentials(new_client):
    response = await new_client().get("account/verify_credentials")
    assert response["created_at"] == "Wed Mar 14 21:17:37 +0000 2018"
    assert response["name"] == "Nodejs Testing Account"
    assert response["lang"] == "en"
    assert response["screen_name"] == "nodejs_lite"
    assert response["description"] == "Twitter Lite Testing Account"


@pytest.mark.asyncio
async def test_two_favorited_tweets(new_client):
    response = await new_client().get("favorites/list")
    first, second = response[:2]
    assert first["id_str"].startswith("9737755154537")
    assert second["id_str"].startswith("9728683658983")


@pytest.mark.asyncio
async def test_follow_unspecified_user_fails(new_client):
    response = await new_client().post("friendships/create")
    assert response == {"errors": [{"code": 108, "message": "Cannot find specified user."}]}


@pytest.mark.asyncio
async def test_follow_user(new_client):
    # The API answers with the followed user, even when already following.
    response = await new_client().post("friendships/create", None, {"screen_name": "dandv"})
    assert response["name"] == "Dan Dascalescu"


@pytest.mark.asyncio
async def test_unfollow_user(new_client):
    # Same as above: the unfollowed user comes back.
    response = await new_client().post("friendships/destroy", None, {"user_id": "15008676"})
    assert response["name"] == "Dan Dascalescu"


@pytest.mark.asyncio
async def test_direct_message(new_client):
    text = "".join(random.choices(string.ascii_lowercase + string.digits, k=11))
    response = await new_client().post("direct_messages/events/new", {
        "event": {
            "type": "message_create",
            "message_create": {
                "target": {"recipient_id": "50426068"},
                "message_data": {"text": text},
            },
        }
    })
    event = response["event"]
    assert event["type"] == "message_create"
    assert re.match(r"^\d+$", event["id"])
    assert isinstance(event["created_timestamp"], str)
    assert event["message_create"]["message_data"]["text"] == text


@pytest.mark.asyncio
async def test_lookup_100_users_with_18_character_ids(new_client):
    # The docs recommend POST for users/lookup, but only GET finds the users.
    users = await new_client().get("users/lookup", {
        "user_id": ["928759224599040001"] * 99 + ["711030662728437760"],
    })
    assert len(users) == 2


def test_reading_config_leaves_environment_untouched(tmp_path, monkeypatch):
    monkeypatch.setenv("TWITTER_CONSUMER_KEY", "placeholder")
    monkeypatch.delenv("TWITTER_CONSUMER_KEY")
    env_file = tmp_path / ".env"
    env_file.write_text("TWITTER_CONSUMER_KEY=from-file\n")

    loaded = read_config(str(env_file))

    assert loaded.consumer_key == "from-file"
    assert "TWITTER_CONSUMER_KEY" not in os.environ
