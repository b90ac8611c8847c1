"""Client configuration using pydantic-settings.

Values are resolved once, when a client is built: explicit arguments win over
``PINECONE_*`` environment variables, which win over built-in defaults.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from pinecone_sdk.errors import (
    APIKeyMissingError,
    InvalidConfigurationError,
    InvalidHeadersError,
)

SDK_NAME = "pinecone-async-sdk"
SDK_VERSION = "0.1.0"

DEFAULT_CONTROLLER_HOST = "https://api.pinecone.io"
API_VERSION = "2024-07"
API_VERSION_HEADER = "X-Pinecone-Api-Version"

_SOURCE_TAG_DISALLOWED = re.compile(r"[^a-z0-9_: ]")


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PINECONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = None
    controller_host: str = DEFAULT_CONTROLLER_HOST
    additional_headers: dict[str, str] = {}  # JSON object
    source_tag: str | None = None

    request_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0


def build_source_tag(source_tag: str) -> str:
    """Normalize a source tag for the User-Agent header.

    Lowercases, drops characters outside ``[a-z0-9_: ]``, trims and joins the
    remaining words with underscores.
    """
    cleaned = _SOURCE_TAG_DISALLOWED.sub("", source_tag.lower())
    return "_".join(cleaned.split())


def build_user_agent(source_tag: str | None = None) -> str:
    """Return the User-Agent string sent with every control-plane request."""
    user_agent = f"lang=python; {SDK_NAME}={SDK_VERSION}"
    if source_tag:
        user_agent += f"; source_tag={build_source_tag(source_tag)}"
    return user_agent


def with_api_version(headers: Mapping[str, str]) -> dict[str, str]:
    """Add the API version header unless one is present in any casing."""
    merged = dict(headers)
    if not any(key.lower() == API_VERSION_HEADER.lower() for key in merged):
        merged[API_VERSION_HEADER] = API_VERSION
    return merged


@dataclass(frozen=True)
class ClientConfig:
    """Resolved, immutable configuration for one client instance."""

    api_key: str = field(repr=False)
    controller_host: str = DEFAULT_CONTROLLER_HOST
    additional_headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source_tag: str | None = None
    request_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0

    @property
    def user_agent(self) -> str:
        return build_user_agent(self.source_tag)

    @classmethod
    def resolve(
        cls,
        *,
        api_key: str | None = None,
        control_plane_host: str | None = None,
        additional_headers: Mapping[str, str] | None = None,
        source_tag: str | None = None,
    ) -> "ClientConfig":
        """Resolve configuration from arguments, environment and defaults.

        Args:
            api_key: API key; falls back to ``PINECONE_API_KEY``.
            control_plane_host: Controller URL; falls back to
                ``PINECONE_CONTROLLER_HOST`` then ``https://api.pinecone.io``.
            additional_headers: Extra headers for every request; falls back
                to the JSON object in ``PINECONE_ADDITIONAL_HEADERS``.
            source_tag: Tag appended to the User-Agent.

        Returns:
            The resolved configuration.

        Raises:
            APIKeyMissingError: If no API key is available.
            InvalidHeadersError: If the environment headers are not a JSON
                object of strings.
            InvalidConfigurationError: If any other ``PINECONE_*`` value
                cannot be parsed.
        """
        try:
            settings = Settings()
        except SettingsError as e:
            # Raised when a complex field's env value is not valid JSON
            if "additional_headers" in str(e):
                raise InvalidHeadersError(
                    "Provided headers are not valid. Expects JSON."
                ) from e
            raise InvalidConfigurationError(f"Invalid environment: {e}") from e
        except ValidationError as e:
            if any(error["loc"][:1] == ("additional_headers",) for error in e.errors()):
                raise InvalidHeadersError(
                    "Provided headers are not valid. Expects a JSON object of strings."
                ) from e
            raise InvalidConfigurationError(f"Invalid environment: {e}") from e

        if api_key is None and settings.api_key is not None:
            api_key = settings.api_key.get_secret_value()
        if api_key is None:
            raise APIKeyMissingError(
                "API key is not provided as an argument nor as an environment variable"
            )

        if additional_headers is None:
            additional_headers = settings.additional_headers

        return cls(
            api_key=api_key,
            controller_host=control_plane_host or settings.controller_host,
            additional_headers=MappingProxyType(with_api_version(additional_headers)),
            source_tag=source_tag if source_tag is not None else settings.source_tag,
            request_timeout_seconds=settings.request_timeout_seconds,
            connect_timeout_seconds=settings.connect_timeout_seconds,
        )
