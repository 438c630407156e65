"""Client for OpenAI-style APIs across OpenAI, Azure and Cloudflare gateways."""

from .auth import AZURE_API_KEY_HEADER, auth_header, resolve_auth_strategy
from .client import Client, PreparedRequest, new_client
from .config import (
    AZURE_API_VERSION,
    OPENAI_API_URL_V1,
    APIType,
    ClientConfig,
    config_from_env,
    default_azure_config,
    default_cloudflare_azure_config,
    default_config,
)
from .errors import APIError, ConfigurationError, LLMLinkError, MalformedSuffixError
from .urls import full_url

__all__ = [
    "APIError",
    "APIType",
    "AZURE_API_KEY_HEADER",
    "AZURE_API_VERSION",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "LLMLinkError",
    "MalformedSuffixError",
    "OPENAI_API_URL_V1",
    "PreparedRequest",
    "auth_header",
    "config_from_env",
    "default_azure_config",
    "default_cloudflare_azure_config",
    "default_config",
    "full_url",
    "new_client",
    "resolve_auth_strategy",
]
