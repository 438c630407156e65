"""Client that derives request URLs and headers from a ClientConfig."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from aiohttp import ClientResponse, ClientSession, ClientTimeout

from . import logging_control
from .auth import auth_header, organization_headers
from .config import ClientConfig
from .errors import api_error_from_payload
from .urls import full_url
from .utils import mask_headers


log = logging.getLogger(__name__)

_ASSISTANT_PATH_PREFIXES = ("/assistants", "/threads", "/vector_stores")


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs to issue one call."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Any] = None


def _is_assistant_path(suffix: str) -> bool:
    path = suffix.partition("?")[0]
    return any(path == prefix or path.startswith(prefix + "/") for prefix in _ASSISTANT_PATH_PREFIXES)


class Client:
    """Thin projection of a ClientConfig; holds no other state."""

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def full_url(self, suffix: str, model: Optional[str] = None) -> str:
        return full_url(self._config, suffix, model)

    def auth_header(self) -> Tuple[str, str]:
        return auth_header(self._config)

    def build_headers(self, suffix: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        name, value = self.auth_header()
        headers[name] = value
        headers.update(organization_headers(self._config))
        if _is_assistant_path(suffix):
            headers["OpenAI-Beta"] = f"assistants={self._config.assistant_version}"
        headers.update(self._config.extra_headers)
        return headers

    def new_request(
        self,
        method: str,
        suffix: str,
        model: Optional[str] = None,
        body: Optional[Any] = None,
    ) -> PreparedRequest:
        return PreparedRequest(
            method=method.upper(),
            url=self.full_url(suffix, model),
            headers=self.build_headers(suffix),
            json=body,
        )

    async def request_json(
        self,
        method: str,
        suffix: str,
        model: Optional[str] = None,
        body: Optional[Any] = None,
        session: Optional[ClientSession] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises APIError for any non-2xx status.
        """
        request = self.new_request(method, suffix, model=model, body=body)
        self._log_upstream(request)

        if session is not None:
            return await self._send(session, request)
        async with self._client_session() as owned:
            return await self._send(owned, request)

    async def _send(self, session: ClientSession, request: PreparedRequest) -> Any:
        async with session.request(
            request.method,
            request.url,
            headers=request.headers,
            json=request.json,
        ) as response:
            payload = await self._read_json(response)
            if not 200 <= response.status < 300:
                log.warning("upstream %s %s returned %s", request.method, request.url, response.status)
                raise api_error_from_payload(response.status, payload, reason=response.reason)
            return payload

    async def _read_json(self, response: ClientResponse) -> Any:
        text = await response.text()
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return {"message": text}

    def _log_upstream(self, request: PreparedRequest) -> None:
        if not logging_control.is_enabled():
            return
        log.info(
            "upstream request: api_type=%s %s %s headers=%s",
            self._config.api_type.value,
            request.method,
            request.url,
            mask_headers(request.headers),
        )

    def _client_session(self) -> ClientSession:
        return ClientSession(timeout=ClientTimeout(total=self._config.timeout))


def new_client(config: ClientConfig) -> Client:
    return Client(config)


__all__ = ["Client", "PreparedRequest", "new_client"]
