"""Error types and upstream error normalization."""

from __future__ import annotations

import json
from typing import Any, Optional, Tuple


class LLMLinkError(Exception):
    """Base class for every error raised by the client."""


class ConfigurationError(LLMLinkError):
    """Raised when a client configuration cannot be used."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class MalformedSuffixError(LLMLinkError):
    """Raised when a request path suffix does not start with '/'."""

    def __init__(self, suffix: str) -> None:
        super().__init__(f"request suffix must start with '/': {suffix!r}")
        self.suffix = suffix


class APIError(LLMLinkError):
    """Non-2xx response returned by the upstream API."""

    def __init__(
        self,
        status: int,
        message: str,
        error_type: str = "api_error",
        code: Optional[str] = None,
    ) -> None:
        super().__init__(f"[{status}] {error_type}: {message}")
        self.status = status
        self.message = message
        self.error_type = error_type
        self.code = code


EMPTY_BODY_MESSAGE = "empty response body"


def extract_error_details(
    payload: Any, fallback: str = EMPTY_BODY_MESSAGE
) -> Tuple[str, str, Optional[str]]:
    """Return (type, message, code) from an OpenAI or Azure error payload.

    fallback is used as the message when the payload carries none.
    """
    if not payload:
        return "api_error", fallback, None
    if not isinstance(payload, dict):
        return "api_error", str(payload), None

    err = payload.get("error", payload)
    if not isinstance(err, dict):
        return "api_error", str(err), None

    message = err.get("message") or fallback
    error_type = err.get("type") or "api_error"
    code = err.get("code")

    # Gateways sometimes wrap the provider's JSON error inside the message
    if isinstance(message, str) and message.startswith("{"):
        try:
            nested = json.loads(message)
        except json.JSONDecodeError:
            nested = None
        if isinstance(nested, dict) and isinstance(nested.get("error"), dict):
            details = nested["error"]
            message = details.get("message", message)
            error_type = details.get("type", error_type)
            code = details.get("code", code)

    if code is not None:
        code = str(code)
    return error_type, message, code


def api_error_from_payload(
    status: int, payload: Any, reason: Optional[str] = None
) -> APIError:
    error_type, message, code = extract_error_details(payload, fallback=reason or EMPTY_BODY_MESSAGE)
    return APIError(status, message, error_type=error_type, code=code)


__all__ = [
    "APIError",
    "ConfigurationError",
    "LLMLinkError",
    "MalformedSuffixError",
    "api_error_from_payload",
    "extract_error_details",
]
