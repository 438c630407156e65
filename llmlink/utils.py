"""Small helpers shared by the client modules."""

from __future__ import annotations

from typing import Dict, Optional


_SECRET_HEADER_HINTS = ("authorization", "key")


def mask_secret(value: Optional[str]) -> str:
    if not value:
        return ""
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"


def mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of headers with credential values masked for logging."""
    return {
        key: mask_secret(value) if any(hint in key.lower() for hint in _SECRET_HEADER_HINTS) else value
        for key, value in headers.items()
    }


__all__ = ["mask_headers", "mask_secret"]
