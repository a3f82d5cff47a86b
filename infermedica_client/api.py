# infermedica_client/api.py
"""Async gateway to the Infermedica diagnostic API.

One coroutine per remote operation. Each call builds a request descriptor,
hands it to the transport and returns the decoded JSON as-is.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from .config import Settings, get_settings
from .models import DEFAULT_BASE_URL, ClientConfig, RequestDescriptor
from .utils import request_builder as rb
from .utils.http_client import HttpxTransport, Transport

Extras = Mapping[str, Any]
EvaluatedAt = str | datetime | None


class InfermedicaApi:
    """
    Example:
        async with InfermedicaApi(app_id, app_key) as api:
            result = await api.diagnosis("female", 35, evidence=[{"id": "s_21", "choice_id": "present"}])

    Failures raise `InfermedicaAPIError`; `parse` may also raise
    `InvalidRequestError` before anything is sent.
    """

    def __init__(
        self,
        app_id: str,
        app_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30,
        transport: Transport | None = None,
    ):
        self.config = ClientConfig(app_id=app_id, app_key=app_key, base_url=base_url, timeout_s=timeout_s)
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(self.config)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> InfermedicaApi:
        cfg = (settings or get_settings()).client_config()
        return cls(cfg.app_id, cfg.app_key, base_url=cfg.base_url, timeout_s=cfg.timeout_s, **kwargs)

    async def _send(self, request: RequestDescriptor) -> Any:
        return await self._transport.send(request)

    # ───────────────────────── catalogue lookups ─────────────────────────

    async def list_conditions(self, condition_id: str = "") -> Any:
        return await self._send(rb.collection("conditions", condition_id))

    async def list_lab_tests(self, lab_test_id: str = "") -> Any:
        return await self._send(rb.collection("lab_tests", lab_test_id))

    async def list_risk_factors(self, risk_factor_id: str = "") -> Any:
        return await self._send(rb.collection("risk_factors", risk_factor_id))

    async def list_symptoms(self, symptom_id: str = "") -> Any:
        return await self._send(rb.collection("symptoms", symptom_id))

    async def info(self) -> Any:
        """API and model metadata."""
        return await self._send(rb.info())

    # ───────────────────────── phrase matching ───────────────────────────

    async def lookup(self, phrase: str, sex: str | None = None) -> Any:
        """Single observation best matching `phrase`."""
        return await self._send(rb.lookup(phrase, sex))

    async def search(
        self,
        phrase: str,
        sex: str | None = None,
        max_results: int = rb.DEFAULT_MAX_RESULTS,
        types: Sequence[str] | None = None,
    ) -> Any:
        """
        Observations matching `phrase`. `types` narrows results to
        symptom / risk_factor / lab_test; it is dropped entirely if any
        entry is not one of those.
        """
        return await self._send(rb.search(phrase, sex, max_results, types))

    async def parse(
        self,
        text: str,
        context: Sequence[str] | None = None,
        concept_types: Sequence[str] | None = None,
        include_tokens: bool = False,
        correct_spelling: bool = False,
    ) -> Any:
        """
        Mentions of observations found in free `text` (max 1024 chars).
        `context` lists ids of present symptoms already captured.
        """
        request = rb.parse(text, context, concept_types, include_tokens, correct_spelling)
        return await self._send(request)

    # ───────────────────────── case reasoning ────────────────────────────

    async def diagnosis(
        self,
        sex: str,
        age: int,
        evidence: rb.Evidences | None = None,
        extras: Extras | None = None,
        evaluated_at: EvaluatedAt = None,
    ) -> Any:
        return await self._send(rb.diagnosis(sex, age, evidence, extras, evaluated_at))

    async def explain(
        self,
        sex: str,
        age: int,
        target: str,
        evidence: rb.Evidences | None = None,
        extras: Extras | None = None,
        evaluated_at: EvaluatedAt = None,
    ) -> Any:
        """Which evidence raises or lowers the probability of condition `target`."""
        return await self._send(rb.explain(sex, age, target, evidence, extras, evaluated_at))

    async def suggest(
        self,
        sex: str,
        age: int,
        evidence: rb.Evidences | None = None,
        extras: Extras | None = None,
        evaluated_at: EvaluatedAt = None,
        max_results: int = rb.DEFAULT_MAX_RESULTS,
    ) -> Any:
        return await self._send(rb.suggest(sex, age, evidence, extras, evaluated_at, max_results))

    async def triage(
        self,
        sex: str,
        age: int,
        evidence: rb.Evidences | None = None,
        extras: Extras | None = None,
        evaluated_at: EvaluatedAt = None,
    ) -> Any:
        return await self._send(rb.triage(sex, age, evidence, extras, evaluated_at))

    # ───────────────────────── lifecycle ─────────────────────────────────

    async def aclose(self) -> None:
        # an injected transport belongs to whoever injected it
        if self._owns_transport:
            await self._transport.aclose()  # type: ignore[attr-defined]

    async def __aenter__(self) -> InfermedicaApi:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
