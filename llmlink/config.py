"""Client configuration and backend variant selection."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .errors import ConfigurationError


OPENAI_API_URL_V1 = "https://api.openai.com/v1"
AZURE_API_VERSION = "2023-05-15"
DEFAULT_ASSISTANT_VERSION = "v2"
DEFAULT_TIMEOUT = 120.0

_DEPLOYMENT_STRIP = re.compile(r"[.:]")


class APIType(str, Enum):
    """Backend variant; decides URL shape and auth header."""

    OPEN_AI = "OPEN_AI"
    AZURE = "AZURE"
    AZURE_AD = "AZURE_AD"
    CLOUDFLARE_AZURE = "CLOUDFLARE_AZURE"

    @classmethod
    def parse(cls, value: Optional[object]) -> "APIType":
        """Resolve a variant tag. Empty or unset means the public endpoint."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.OPEN_AI
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if key == member.value:
                    return member
        raise ConfigurationError(f"unrecognized API type: {value!r}", key="api_type")

    @property
    def is_azure(self) -> bool:
        return self in (APIType.AZURE, APIType.AZURE_AD, APIType.CLOUDFLARE_AZURE)


def default_deployment_name(model: str) -> str:
    """Azure deployment names cannot contain '.' or ':'."""
    return _DEPLOYMENT_STRIP.sub("", model)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings a Client derives URLs and headers from."""

    auth_token: str = field(repr=False)
    base_url: str = OPENAI_API_URL_V1
    api_type: APIType = APIType.OPEN_AI
    org_id: str = ""
    api_version: str = ""
    assistant_version: str = DEFAULT_ASSISTANT_VERSION
    deployment_mapper: Callable[[str], str] = field(
        default=default_deployment_name, repr=False, compare=False
    )
    extra_headers: Mapping[str, str] = field(default_factory=dict, compare=False)
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_type", APIType.parse(self.api_type))
        if not self.auth_token:
            raise ConfigurationError("auth token is required", key="auth_token")
        # Gateways reject requests without a version
        if self.api_type.is_azure and not self.api_version:
            object.__setattr__(self, "api_version", AZURE_API_VERSION)
        # Read-only copy: neither the caller's dict nor the config can change later
        object.__setattr__(
            self, "extra_headers", MappingProxyType(dict(self.extra_headers or {}))
        )

    def replace(self, **changes) -> "ClientConfig":
        return dataclasses.replace(self, **changes)


def default_config(auth_token: str) -> ClientConfig:
    return ClientConfig(auth_token=auth_token)


def default_azure_config(
    api_key: str,
    base_url: str,
    api_version: str = AZURE_API_VERSION,
) -> ClientConfig:
    """Azure OpenAI resource authenticated with an api-key header."""
    return ClientConfig(
        auth_token=api_key,
        base_url=base_url,
        api_type=APIType.AZURE,
        api_version=api_version,
    )


def default_cloudflare_azure_config(
    api_key: str,
    base_url: str,
    api_version: str = AZURE_API_VERSION,
) -> ClientConfig:
    """Azure OpenAI behind a Cloudflare AI Gateway.

    base_url is the full gateway path down to the deployment, e.g.
    https://gateway.ai.cloudflare.com/v1/<account>/<gateway>/azure-openai/<resource>/<deployment>
    """
    return ClientConfig(
        auth_token=api_key,
        base_url=base_url,
        api_type=APIType.CLOUDFLARE_AZURE,
        api_version=api_version,
    )


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a configuration from OPENAI_* environment variables."""
    env = os.environ if environ is None else environ

    token = env.get("OPENAI_API_KEY", "")
    if not token:
        raise ConfigurationError("OPENAI_API_KEY is not set", key="OPENAI_API_KEY")

    api_type = APIType.parse(env.get("OPENAI_API_TYPE"))
    base_url = env.get("OPENAI_BASE_URL", "")
    if not base_url:
        if api_type.is_azure:
            raise ConfigurationError(
                f"OPENAI_BASE_URL is required for {api_type.value}", key="OPENAI_BASE_URL"
            )
        base_url = OPENAI_API_URL_V1

    api_version = env.get("OPENAI_API_VERSION", "")

    raw_timeout = env.get("OPENAI_TIMEOUT", "")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"OPENAI_TIMEOUT must be a number of seconds, got {raw_timeout!r}",
                key="OPENAI_TIMEOUT",
            ) from exc

    return ClientConfig(
        auth_token=token,
        base_url=base_url,
        api_type=api_type,
        org_id=env.get("OPENAI_ORG_ID", ""),
        api_version=api_version,
        timeout=timeout,
    )


__all__ = [
    "AZURE_API_VERSION",
    "APIType",
    "ClientConfig",
    "OPENAI_API_URL_V1",
    "config_from_env",
    "default_azure_config",
    "default_cloudflare_azure_config",
    "default_config",
    "default_deployment_name",
]
