"""
OAuth 1.0a request signing (HMAC-SHA1).

Thin wrapper around oauthlib's RFC 5849 client. A new oauthlib client is
built per request so every signature carries its own nonce and timestamp,
while both sources stay replaceable for deterministic signatures.

Form bodies are encoded here and signed as sent, so the signature always
covers exactly the bytes that go over the wire.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from oauthlib.common import generate_token, urlencode
from oauthlib.oauth1 import SIGNATURE_HMAC, SIGNATURE_TYPE_AUTH_HEADER, Client

from ..core.utils import get_unix_timestamp

logger = logging.getLogger(__name__)


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
NONCE_LENGTH = 32


@dataclass(frozen=True)
class Consumer:
    """Application credentials."""
    key: str
    secret: str


@dataclass(frozen=True)
class Token:
    """User access token credentials."""
    key: str
    secret: str


def generate_nonce() -> str:
    """Random alphanumeric nonce from oauthlib's secure token generator."""
    return generate_token(NONCE_LENGTH)


def encode_form(data: Mapping[str, Optional[str]]) -> str:
    """
    Form-encode body fields, dropping those whose value is None.

    The result is what both the signer and the transport see.
    """
    return urlencode(
        [(name, str(value)) for name, value in data.items() if value is not None]
    )


class OAuth1Signer:
    """
    Signs outbound requests for one consumer/token pair.

    A fresh nonce and timestamp are drawn for every call to sign().
    """

    def __init__(
        self,
        consumer: Consumer,
        token: Token,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], int] = get_unix_timestamp,
    ):
        self.consumer = consumer
        self.token = token
        self.nonce_factory = nonce_factory
        self.clock = clock

    def _client(self) -> Client:
        return Client(
            self.consumer.key,
            client_secret=self.consumer.secret,
            resource_owner_key=self.token.key,
            resource_owner_secret=self.token.secret,
            signature_method=SIGNATURE_HMAC,
            signature_type=SIGNATURE_TYPE_AUTH_HEADER,
            nonce=self.nonce_factory(),
            timestamp=str(self.clock()),
        )

    def sign(self, method: str, url: str, body: Optional[str] = None) -> dict[str, str]:
        """
        Produce the Authorization header for a request.

        Args:
            method: HTTP method
            url: Full request URL, query string included
            body: Form-encoded body as produced by encode_form()

        Returns:
            A single-entry header mapping
        """
        headers = {"Content-Type": FORM_CONTENT_TYPE} if body else {}
        _, signed, _ = self._client().sign(
            url, http_method=method.upper(), body=body or None, headers=headers
        )

        logger.debug(f"Signed {method.upper()} {url.split('?', 1)[0]}")
        return {"Authorization": signed["Authorization"]}
