"""Authentication helpers exposed for the client."""

from .strategies import (
    AZURE_API_KEY_HEADER,
    ApiKeyHeaderAuth,
    AuthStrategy,
    BearerTokenAuth,
    auth_header,
    organization_headers,
    resolve_auth_strategy,
)

__all__ = [
    "AZURE_API_KEY_HEADER",
    "ApiKeyHeaderAuth",
    "AuthStrategy",
    "BearerTokenAuth",
    "auth_header",
    "organization_headers",
    "resolve_auth_strategy",
]
