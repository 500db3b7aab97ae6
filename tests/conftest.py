from __future__ import annotations

import json
import re
from typing import Callable
from urllib.parse import parse_qsl

import httpx
import pytest

from tweet_relay.auth.oauth1 import Consumer, OAuth1Signer, Token
from tweet_relay.clients.twitter import TwitterClient
from tweet_relay.core.config import Settings

CREDENTIAL_ENV = {
    "TWITTER_API_KEY": "consumer-key",
    "TWITTER_API_SECRET": "consumer-secret",
    "TWITTER_ACCESS_TOKEN": "token-key",
    "TWITTER_ACCESS_TOKEN_SECRET": "token-secret",
}

FIXED_NONCE = "abcdefghijklmnopqrstuvwxyz012345"
FIXED_TIMESTAMP = 1700000000

# Worked example from Twitter's "Creating a signature" guide
TWITTER_URL = "https://api.twitter.com/1.1/statuses/update.json?include_entities=true"
TWITTER_STATUS = "Hello Ladies + Gentlemen, a signed OAuth request!"
TWITTER_CONSUMER = Consumer("xvz1evFS4wEEPTGEFPHBog", "kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw")
TWITTER_TOKEN = Token(
    "370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb",
    "LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE",
)
TWITTER_NONCE = "kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg"
TWITTER_TIMESTAMP = 1318622958

TWITTER_BASE_STRING = (
    "POST&https%3A%2F%2Fapi.twitter.com%2F1.1%2Fstatuses%2Fupdate.json&"
    "include_entities%3Dtrue%26oauth_consumer_key%3Dxvz1evFS4wEEPTGEFPHBog%26"
    "oauth_nonce%3DkYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg%26"
    "oauth_signature_method%3DHMAC-SHA1%26oauth_timestamp%3D1318622958%26"
    "oauth_token%3D370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb%26"
    "oauth_version%3D1.0%26status%3DHello%2520Ladies%2520%252B%2520Gentlemen"
    "%252C%2520a%2520signed%2520OAuth%2520request%2521"
)
TWITTER_SIGNATURE = "hCtSmYh%2BiHYCEqBWrE7C7hYmtUk%3D"

TWITTER_AUTHORIZATION = (
    'OAuth oauth_nonce="kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg", '
    'oauth_timestamp="1318622958", '
    'oauth_version="1.0", '
    'oauth_signature_method="HMAC-SHA1", '
    'oauth_consumer_key="xvz1evFS4wEEPTGEFPHBog", '
    'oauth_token="370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb", '
    'oauth_signature="hCtSmYh%2BiHYCEqBWrE7C7hYmtUk%3D"'
)


def header_field(header: str, name: str) -> str:
    return re.search(rf'{name}="([^"]*)"', header).group(1)


MEDIA_UPLOAD_OK = {
    "media_id": 710511363345354753,
    "media_id_string": "710511363345354753",
    "size": 11065,
    "expires_after_secs": 86400,
    "image": {"image_type": "image/jpeg", "w": 800, "h": 320},
}

STATUS_UPDATE_OK = {
    "id_str": "1050118621198921728",
    "text": "BioVis Copy https://t.co/AbCdEf123",
    "entities": {
        "hashtags": [],
        "media": [
            {
                "id_str": "710511363345354753",
                "display_url": "pic.twitter.com/AbCdEf123",
                "expanded_url": "https://twitter.com/user/status/1050118621198921728/photo/1",
            }
        ],
    },
}


def form_fields(request: httpx.Request) -> dict[str, str]:
    return dict(parse_qsl(request.content.decode("ascii"), keep_blank_values=True))


class FakeTwitter:
    """Records requests and answers them like the upload/api hosts would."""

    def __init__(
        self,
        upload: tuple[int, object] = (200, MEDIA_UPLOAD_OK),
        update: tuple[int, object] = (200, STATUS_UPDATE_OK),
    ):
        self.upload = upload
        self.update = update
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "upload.twitter.com":
            status_code, body = self.upload
        elif request.url.host == "api.twitter.com":
            status_code, body = self.update
        else:
            return httpx.Response(404, json={"errors": [{"code": 34, "message": "Sorry, that page does not exist."}]})

        if isinstance(body, (dict, list)):
            return httpx.Response(status_code, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})
        return httpx.Response(status_code, text=str(body))


@pytest.fixture
def fake_twitter() -> FakeTwitter:
    return FakeTwitter()


@pytest.fixture
def signer() -> OAuth1Signer:
    return OAuth1Signer(
        consumer=Consumer("consumer-key", "consumer-secret"),
        token=Token("token-key", "token-secret"),
        nonce_factory=lambda: FIXED_NONCE,
        clock=lambda: FIXED_TIMESTAMP,
    )


@pytest.fixture
def make_client(signer) -> Callable[[Callable], TwitterClient]:
    def _make(handler) -> TwitterClient:
        return TwitterClient(signer, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def configured_settings() -> Settings:
    return Settings.from_env(dict(CREDENTIAL_ENV))
