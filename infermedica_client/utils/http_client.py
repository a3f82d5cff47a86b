# infermedica_client/utils/http_client.py
from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from ..exceptions import InfermedicaAPIError
from ..models import ClientConfig, RequestDescriptor

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    async def send(self, request: RequestDescriptor) -> Any:
        """Perform the request and return the decoded JSON body."""
        ...


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class HttpxTransport:
    """
    Sends request descriptors with httpx, adding the App-Id / App-Key headers.

    Pass `client` to share an existing AsyncClient; it is then left open on
    `aclose()`. Otherwise one is created here and owned by the transport.
    """

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=config.timeout_s)
        self.headers = {"Accept": "application/json", **config.auth_headers()}

    def url_for(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def send(self, request: RequestDescriptor) -> Any:
        url = self.url_for(request.path)
        logger.debug("%s %s params=%s", request.method, request.path, sorted(request.params))

        try:
            resp = await self._client.request(
                request.method,
                url,
                params=request.params or None,
                json=request.body if request.method == "POST" else None,
                headers=self.headers,
                timeout=self.config.timeout_s,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("%s %s failed with HTTP %s", request.method, request.path, status)
            raise InfermedicaAPIError(
                f"Infermedica API error {status} on {request.method} {request.path}",
                status_code=status,
                body=_error_body(e.response),
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", request.method, request.path, e)
            raise InfermedicaAPIError(
                f"Infermedica HTTP error: {e!r}. Check connectivity to {self.config.base_url}."
            ) from e

        try:
            return resp.json()
        except ValueError as e:
            raise InfermedicaAPIError(
                f"Malformed JSON in response to {request.method} {request.path}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
