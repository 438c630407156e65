"""Request URL composition for each backend variant."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .config import APIType, ClientConfig
from .errors import ConfigurationError, MalformedSuffixError


AZURE_DEPLOYMENTS_PREFIX = "openai/deployments"


def strip_trailing_slash(base_url: str) -> str:
    """Drop exactly one trailing slash."""
    if base_url.endswith("/"):
        return base_url[:-1]
    return base_url


def with_api_version(path: str, api_version: str) -> str:
    """Insert api-version as the first query parameter.

    Any query already on the path is kept byte-for-byte after it.
    """
    path, sep, query = path.partition("?")
    if not sep:
        return f"{path}?api-version={api_version}"
    return f"{path}?api-version={api_version}&{query}"


def _openai_url(cfg: ClientConfig, suffix: str, model: Optional[str]) -> str:
    return strip_trailing_slash(cfg.base_url) + suffix


def _azure_url(cfg: ClientConfig, suffix: str, model: Optional[str]) -> str:
    deployment = cfg.deployment_mapper(model) if model else ""
    if not deployment:
        raise ConfigurationError(
            f"model {model!r} does not name a {cfg.api_type.value} deployment",
            key="model",
        )
    base = strip_trailing_slash(cfg.base_url)
    return with_api_version(f"{base}/{AZURE_DEPLOYMENTS_PREFIX}/{deployment}{suffix}", cfg.api_version)


def _cloudflare_azure_url(cfg: ClientConfig, suffix: str, model: Optional[str]) -> str:
    # The gateway path already names the resource and deployment
    return with_api_version(strip_trailing_slash(cfg.base_url) + suffix, cfg.api_version)


URLBuilder = Callable[[ClientConfig, str, Optional[str]], str]

_URL_BUILDERS: Dict[APIType, URLBuilder] = {
    APIType.OPEN_AI: _openai_url,
    APIType.AZURE: _azure_url,
    APIType.AZURE_AD: _azure_url,
    APIType.CLOUDFLARE_AZURE: _cloudflare_azure_url,
}


def full_url(cfg: ClientConfig, suffix: str, model: Optional[str] = None) -> str:
    """Return the fully qualified URL for an API path such as /chat/completions."""
    if not suffix.startswith("/"):
        raise MalformedSuffixError(suffix)
    try:
        builder = _URL_BUILDERS[cfg.api_type]
    except KeyError:
        raise ConfigurationError(
            f"no URL builder for API type {cfg.api_type!r}", key="api_type"
        ) from None
    return builder(cfg, suffix, model)


__all__ = ["AZURE_DEPLOYMENTS_PREFIX", "full_url", "strip_trailing_slash", "with_api_version"]
