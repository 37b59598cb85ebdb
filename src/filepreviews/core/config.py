"""Configuration classes for the filepreviews library."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any

from filepreviews.core.exceptions import ConfigurationError
from filepreviews.types.common import Credentials, SigningCredentials

DEFAULT_API_URL = "https://api.filepreviews.io/v2"

# Keys accepted by from_dict in addition to the field names
_CAMEL_CASE_KEYS = {
    "apiKey": "api_key",
    "apiSecret": "api_secret",
    "s3AccessKey": "s3_access_key",
    "s3SecretKey": "s3_secret_key",
    "apiUrl": "api_url",
    "userAgent": "user_agent",
    "maxAttempts": "max_attempts",
    "maxDelay": "max_delay",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _default_user_agent() -> str:
    from filepreviews import __version__

    return f"filepreviews-python/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a FilePreviewsClient.

    Attributes:
        api_key: API key, sent as the basic auth username
        api_secret: API secret, sent as the basic auth password
        s3_access_key: Access key of a private results bucket (optional)
        s3_secret_key: Secret key of a private results bucket (optional)
        debug: Enable diagnostic logging
        api_url: Base URL of the API
        timeout: Request timeout in seconds
        user_agent: User agent string for HTTP requests
        max_attempts: Metadata requests made before polling gives up
        max_delay: Longest wait between two metadata requests, in seconds
        initial_delay: Starting wait between metadata requests, in seconds
        delay_step: Growth of the wait per attempt number, in seconds
    """

    api_key: str = ""
    api_secret: str = ""
    s3_access_key: str = ""
    s3_secret_key: str = ""
    debug: bool = False
    api_url: str = DEFAULT_API_URL
    timeout: float = 30
    user_agent: str = ""
    max_attempts: int = 15
    max_delay: float = 60.0
    initial_delay: float = 1.0
    delay_step: float = 1.0

    @property
    def credentials(self) -> Credentials:
        """API credentials."""
        return Credentials(api_key=self.api_key, api_secret=self.api_secret)

    @property
    def signing_credentials(self) -> SigningCredentials | None:
        """Storage signing credentials, or None unless both keys are set."""
        if self.s3_access_key and self.s3_secret_key:
            return SigningCredentials(
                access_key_id=self.s3_access_key,
                secret_key=self.s3_secret_key,
            )
        return None

    @property
    def resolved_user_agent(self) -> str:
        return self.user_agent or _default_user_agent()

    def validate(self) -> None:
        """Check that the configuration can be used to build a client.

        Raises:
            ConfigurationError: If a credential is missing or a limit is invalid
        """
        if not self.api_key:
            raise ConfigurationError("api_key is required")
        if not self.api_secret:
            raise ConfigurationError("api_secret is required")
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.initial_delay < 0 or self.delay_step < 0 or self.max_delay < 0:
            raise ConfigurationError("polling delays must not be negative")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Create a ClientConfig from a dictionary.

        Accepts both field names and their camelCase spellings
        (``apiKey``, ``s3SecretKey``...). Unknown keys are ignored.
        """
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            key = _CAMEL_CASE_KEYS.get(key, key)
            if key in known:
                kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = "FILEPREVIEWS_", **overrides: Any) -> ClientConfig:
        """Create a ClientConfig from environment variables.

        Reads ``{prefix}API_KEY``, ``{prefix}API_SECRET``, ``{prefix}S3_ACCESS_KEY``,
        ``{prefix}S3_SECRET_KEY``, ``{prefix}API_URL`` and ``{prefix}DEBUG``.

        Args:
            prefix: Environment variable prefix
            **overrides: Field values that take precedence over the environment
        """
        kwargs: dict[str, Any] = {
            "api_key": os.environ.get(f"{prefix}API_KEY", ""),
            "api_secret": os.environ.get(f"{prefix}API_SECRET", ""),
            "s3_access_key": os.environ.get(f"{prefix}S3_ACCESS_KEY", ""),
            "s3_secret_key": os.environ.get(f"{prefix}S3_SECRET_KEY", ""),
            "debug": os.environ.get(f"{prefix}DEBUG", "").lower() in _TRUE_VALUES,
        }
        api_url = os.environ.get(f"{prefix}API_URL")
        if api_url:
            kwargs["api_url"] = api_url
        kwargs.update(overrides)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)
