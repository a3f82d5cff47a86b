# infermedica_client/exceptions.py
from __future__ import annotations

from typing import Any


class InfermedicaError(Exception):
    """Base class for every error raised by this package."""


class InvalidRequestError(InfermedicaError):
    """Arguments rejected locally; no request was sent."""


class InfermedicaAPIError(InfermedicaError):
    """
    The API (or the network on the way to it) failed the call.
    `status_code` is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code!r})"
