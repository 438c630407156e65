"""Runtime toggle for upstream request logging."""

from __future__ import annotations

import os
from typing import Final, Optional


REQUEST_LOGGING_ENV: Final[str] = "LLMLINK_DEBUG"
_TRUTHY: Final[frozenset] = frozenset({"1", "true", "yes", "on"})


def flag_enabled(value: Optional[str]) -> bool:
    """Interpret an environment flag such as LLMLINK_DEBUG=yes."""
    return (value or "").strip().lower() in _TRUTHY


_request_logging_enabled: bool = flag_enabled(os.getenv(REQUEST_LOGGING_ENV))


def is_enabled() -> bool:
    """Return True when upstream requests should be logged with masked credentials."""

    return _request_logging_enabled


def set_enabled(value: bool) -> None:
    global _request_logging_enabled
    _request_logging_enabled = bool(value)


def reload_from_env() -> bool:
    """Re-read LLMLINK_DEBUG, e.g. after the process environment changed."""
    set_enabled(flag_enabled(os.getenv(REQUEST_LOGGING_ENV)))
    return _request_logging_enabled


__all__ = ["REQUEST_LOGGING_ENV", "flag_enabled", "is_enabled", "reload_from_env", "set_enabled"]
