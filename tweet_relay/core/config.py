"""
Configuration module for the tweet relay.

Manages environment variables for the upstream credentials, the upstream
endpoint layout and the CORS front door. Credentials are provisioned by the
hosting environment and are never given defaults here.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing from the environment."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}"
        )


@dataclass(frozen=True)
class TwitterCredentials:
    """
    Immutable OAuth 1.0a credential set for a single application/user pair.

    Attributes:
        api_key: Consumer (application) key
        api_secret: Consumer (application) secret
        access_token: User access token
        access_token_secret: User access token secret
    """
    api_key: str
    api_secret: str
    access_token: str
    access_token_secret: str


@dataclass(frozen=True)
class UpstreamConfig:
    """
    Configuration for the upstream media/status API.

    Attributes:
        api_base: URL template; ``{subdomain}`` is replaced by "api" or "upload"
        status_text: Text of the status posted alongside every image
        timeout: Timeout for each upstream request (seconds)
    """
    api_base: str = "https://{subdomain}.twitter.com/1.1"
    status_text: str = "BioVis Copy"
    timeout: float = 30.0


@dataclass(frozen=True)
class CorsConfig:
    """
    Configuration for the CORS front door.

    Attributes:
        allow_origin: Value sent in Access-Control-Allow-Origin
        max_age: How long browsers may cache a preflight answer (seconds)
    """
    allow_origin: str = "*"
    max_age: int = 86400


CREDENTIAL_VARIABLES = (
    "TWITTER_API_KEY",
    "TWITTER_API_SECRET",
    "TWITTER_ACCESS_TOKEN",
    "TWITTER_ACCESS_TOKEN_SECRET",
)


class Settings:
    """
    Central settings manager that aggregates all configuration.

    Non-secret values fall back to defaults. Credentials are only resolved
    when a request needs them so the service can start (and report itself
    as degraded) before secrets are provisioned.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ
        env = self._environ

        self.upstream = UpstreamConfig(
            api_base=env.get(
                "TWITTER_API_BASE", "https://{subdomain}.twitter.com/1.1"
            ),
            status_text=env.get("TWEET_STATUS_TEXT", "BioVis Copy"),
            timeout=float(env.get("UPSTREAM_TIMEOUT", "30.0")),
        )

        self.cors = CorsConfig(
            allow_origin=env.get("CORS_ALLOW_ORIGIN", "*"),
            max_age=int(env.get("CORS_MAX_AGE", "86400")),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Settings":
        """Build settings from an explicit mapping instead of os.environ."""
        return cls(environ)

    def credentials(self) -> TwitterCredentials:
        """
        Resolve the upstream credentials.

        Raises:
            ConfigurationError: if any credential is unset or empty
        """
        values = {name: self._environ.get(name, "") for name in CREDENTIAL_VARIABLES}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigurationError(missing)

        return TwitterCredentials(
            api_key=values["TWITTER_API_KEY"],
            api_secret=values["TWITTER_API_SECRET"],
            access_token=values["TWITTER_ACCESS_TOKEN"],
            access_token_secret=values["TWITTER_ACCESS_TOKEN_SECRET"],
        )

    @property
    def credentials_configured(self) -> bool:
        """True when every credential variable is present."""
        return all(self._environ.get(name) for name in CREDENTIAL_VARIABLES)

    @property
    def log_level(self) -> str:
        """Root log level name."""
        return self._environ.get("LOG_LEVEL", "INFO").upper()

    @property
    def server_port(self) -> int:
        """Server port from environment variable."""
        return int(self._environ.get("PORT", "8000"))

    @property
    def api_title(self) -> str:
        """API title for OpenAPI documentation."""
        return "Tweet Relay"

    @property
    def api_version(self) -> str:
        """API version string."""
        return "1.0.0"

    @property
    def api_description(self) -> str:
        """API description for OpenAPI documentation."""
        return (
            "Accepts a base64 image, uploads it to Twitter, posts it in a "
            "status update and returns the public media URL."
        )


# Global settings instance - imported throughout the application
settings = Settings()
