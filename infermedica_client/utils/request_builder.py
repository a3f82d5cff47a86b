# infermedica_client/utils/request_builder.py
"""Turns gateway arguments into request descriptors.

• Pure functions, no I/O.
• Field names match the remote schema verbatim.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Sequence
from urllib.parse import quote

from ..exceptions import InvalidRequestError
from ..models import Evidence, RequestDescriptor

MAX_PARSE_TEXT_LENGTH = 1024
DEFAULT_MAX_RESULTS = 8

# Substring matches, so "not female" passes too. Kept that way on purpose.
SEX_PATTERN = re.compile(r"(male|female)")
SEARCH_TYPE_PATTERN = re.compile(r"(symptom|risk_factor|lab_test)")

COLLECTIONS = ("conditions", "lab_tests", "risk_factors", "symptoms")

Evidences = Iterable[Mapping[str, Any] | Evidence]


def _sex_filter(sex: str | None) -> str | None:
    if sex and SEX_PATTERN.search(sex):
        return sex
    return None


def _type_filter(types: Sequence[str] | None) -> list[str] | None:
    if types and all(SEARCH_TYPE_PATTERN.search(t) for t in types):
        return list(types)
    return None


def _evidence_payload(evidence: Evidences | None) -> list[Any]:
    if not evidence:
        return []
    return [
        item.model_dump(exclude_none=True) if isinstance(item, Evidence) else item
        for item in evidence
    ]


def _case_body(
    sex: str,
    age: int,
    evidence: Evidences | None,
    extras: Mapping[str, Any] | None,
    evaluated_at: str | datetime | None,
    **fields: Any,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "sex": sex,
        "age": age,
        "evidence": _evidence_payload(evidence),
        **fields,
        "extras": dict(extras) if extras else {},
    }
    if evaluated_at:
        if isinstance(evaluated_at, datetime):
            evaluated_at = evaluated_at.isoformat()
        body["evaluated_at"] = evaluated_at
    return body


# ───────────────────────────── GET endpoints ─────────────────────────────

def collection(resource: str, item_id: str | None = "") -> RequestDescriptor:
    """All items of `resource` when `item_id` is empty, otherwise that one item."""
    if resource not in COLLECTIONS:
        raise ValueError(f"Unknown collection {resource!r} (allowed: {sorted(COLLECTIONS)})")
    path = f"/{resource}"
    if item_id:
        path += "/" + quote(str(item_id), safe="")
    return RequestDescriptor(method="GET", path=path)


def info() -> RequestDescriptor:
    return RequestDescriptor(method="GET", path="/info")


def lookup(phrase: str, sex: str | None = None) -> RequestDescriptor:
    params: dict[str, Any] = {"phrase": phrase}
    if _sex_filter(sex):
        params["sex"] = sex
    return RequestDescriptor(method="GET", path="/lookup", params=params)


def search(
    phrase: str,
    sex: str | None = None,
    max_results: int = DEFAULT_MAX_RESULTS,
    types: Sequence[str] | None = None,
) -> RequestDescriptor:
    params: dict[str, Any] = {"phrase": phrase, "max_results": max_results}
    if _sex_filter(sex):
        params["sex"] = sex
    type_filter = _type_filter(types)
    if type_filter:
        params["type"] = type_filter
    return RequestDescriptor(method="GET", path="/search", params=params)


# ───────────────────────────── POST endpoints ────────────────────────────

def diagnosis(sex, age, evidence=None, extras=None, evaluated_at=None) -> RequestDescriptor:
    return RequestDescriptor(
        method="POST",
        path="/diagnosis",
        body=_case_body(sex, age, evidence, extras, evaluated_at),
    )


def explain(sex, age, target, evidence=None, extras=None, evaluated_at=None) -> RequestDescriptor:
    return RequestDescriptor(
        method="POST",
        path="/explain",
        body=_case_body(sex, age, evidence, extras, evaluated_at, target=target),
    )


def triage(sex, age, evidence=None, extras=None, evaluated_at=None) -> RequestDescriptor:
    return RequestDescriptor(
        method="POST",
        path="/triage",
        body=_case_body(sex, age, evidence, extras, evaluated_at),
    )


def suggest(
    sex,
    age,
    evidence=None,
    extras=None,
    evaluated_at=None,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> RequestDescriptor:
    # max_results rides on the URL, not in the body
    return RequestDescriptor(
        method="POST",
        path="/suggest",
        params={"max_results": max_results},
        body=_case_body(sex, age, evidence, extras, evaluated_at),
    )


def parse(
    text: str,
    context: Sequence[str] | None = None,
    concept_types: Sequence[str] | None = None,
    include_tokens: bool = False,
    correct_spelling: bool = False,
) -> RequestDescriptor:
    """Only builder that can refuse its input."""
    if len(text) > MAX_PARSE_TEXT_LENGTH:
        raise InvalidRequestError(
            f"Please provide no more than {MAX_PARSE_TEXT_LENGTH} character text to parse"
        )

    body: dict[str, Any] = {
        "text": text,
        "context": list(context) if context is not None else [""],
        "include_tokens": include_tokens,
        "correct_spelling": correct_spelling,
    }
    if isinstance(concept_types, (list, tuple)) and concept_types:
        body["concept_types"] = list(concept_types)
    return RequestDescriptor(method="POST", path="/parse", body=body)
