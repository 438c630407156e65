"""Authentication strategies keyed by backend variant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..config import APIType, ClientConfig
from ..errors import ConfigurationError


AUTHORIZATION_HEADER = "Authorization"
AZURE_API_KEY_HEADER = "api-key"
ORGANIZATION_HEADER = "OpenAI-Organization"


@dataclass(frozen=True)
class AuthStrategy:
    """Base strategy that turns a token into a single header."""

    token: str
    header_name: str = AUTHORIZATION_HEADER
    prefix: str = ""

    def header(self) -> Tuple[str, str]:
        return self.header_name, f"{self.prefix}{self.token}"

    def headers(self) -> Dict[str, str]:
        name, value = self.header()
        return {name: value}


@dataclass(frozen=True)
class BearerTokenAuth(AuthStrategy):
    """Attach a bearer token to the Authorization header."""

    header_name: str = AUTHORIZATION_HEADER
    prefix: str = "Bearer "


@dataclass(frozen=True)
class ApiKeyHeaderAuth(AuthStrategy):
    """Attach a raw token to the Azure api-key header."""

    header_name: str = AZURE_API_KEY_HEADER
    prefix: str = ""


_STRATEGIES: Dict[APIType, Callable[[str], AuthStrategy]] = {
    APIType.OPEN_AI: BearerTokenAuth,
    # Azure AD tokens go in the same Authorization header as OpenAI keys
    APIType.AZURE_AD: BearerTokenAuth,
    APIType.AZURE: ApiKeyHeaderAuth,
    APIType.CLOUDFLARE_AZURE: ApiKeyHeaderAuth,
}


def resolve_auth_strategy(cfg: ClientConfig) -> AuthStrategy:
    """Return the auth strategy for a configuration's backend variant."""
    try:
        factory = _STRATEGIES[cfg.api_type]
    except KeyError:
        raise ConfigurationError(
            f"no auth strategy for API type {cfg.api_type!r}", key="api_type"
        ) from None
    return factory(cfg.auth_token)


def auth_header(cfg: ClientConfig) -> Tuple[str, str]:
    return resolve_auth_strategy(cfg).header()


def organization_headers(cfg: ClientConfig) -> Dict[str, str]:
    """OpenAI-Organization header, public endpoint only."""
    if cfg.org_id and cfg.api_type is APIType.OPEN_AI:
        return {ORGANIZATION_HEADER: cfg.org_id}
    return {}


__all__ = [
    "AUTHORIZATION_HEADER",
    "AZURE_API_KEY_HEADER",
    "ApiKeyHeaderAuth",
    "AuthStrategy",
    "BearerTokenAuth",
    "ORGANIZATION_HEADER",
    "auth_header",
    "organization_headers",
    "resolve_auth_strategy",
]
