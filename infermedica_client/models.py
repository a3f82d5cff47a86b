# infermedica_client/models.py
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://api.infermedica.com/v2/"

QueryValue = Union[str, int, bool, list[str]]


class ClientConfig(BaseModel):
    """Credentials and endpoint captured once per gateway."""
    model_config = ConfigDict(frozen=True)

    app_id: str
    app_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = Field(default=30, gt=0)

    def auth_headers(self) -> dict[str, str]:
        return {"App-Id": self.app_id, "App-Key": self.app_key}


class Evidence(BaseModel):
    """
    Optional typed form of an evidence item.
    Plain dicts are accepted everywhere and forwarded untouched.
    """
    id: str
    choice_id: Literal["present", "absent", "unknown"]
    source: str | None = None
    initial: bool | None = None


class RequestDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"]
    path: str
    params: dict[str, QueryValue] = Field(default_factory=dict)
    body: Any = None
