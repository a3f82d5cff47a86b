from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from infermedica_client import ClientConfig, InfermedicaApi, RequestDescriptor
from infermedica_client.exceptions import InfermedicaAPIError
from infermedica_client.utils.http_client import HttpxTransport

BASE_URL = "https://api.test.infermedica.com/v2/"


class RecordingTransport:
    """Stands in for the HTTP layer; remembers every descriptor it gets."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.requests: list[RequestDescriptor] = []
        self.response = {"ok": True} if response is None else response
        self.error = error

    async def send(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> RequestDescriptor:
        return self.requests[-1]


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(app_id="test-id", app_key="test-key", base_url=BASE_URL)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def api(transport: RecordingTransport) -> InfermedicaApi:
    return InfermedicaApi("test-id", "test-key", base_url=BASE_URL, transport=transport)


@pytest.fixture
def failing_api() -> InfermedicaApi:
    error = InfermedicaAPIError(
        "Infermedica API error 500", status_code=500, body={"message": "boom"}
    )
    return InfermedicaApi("test-id", "test-key", transport=RecordingTransport(error=error))


@pytest_asyncio.fixture
async def http_transport(config: ClientConfig) -> AsyncIterator[HttpxTransport]:
    """Real httpx client so respx can intercept it."""
    async with httpx.AsyncClient() as client:
        yield HttpxTransport(config, client=client)
