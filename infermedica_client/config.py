# infermedica_client/config.py
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .exceptions import InfermedicaError
from .models import DEFAULT_BASE_URL, ClientConfig


class Settings(BaseModel):
    # ── credentials (Infermedica developer portal) ──────────────
    app_id: str | None = Field(default_factory=lambda: os.getenv("INFERMEDICA_APP_ID"))
    app_key: str | None = Field(default_factory=lambda: os.getenv("INFERMEDICA_APP_KEY"))

    # ── endpoint ────────────────────────────────────────────────
    base_url: str = Field(
        default_factory=lambda: os.getenv("INFERMEDICA_BASE_URL", DEFAULT_BASE_URL)
    )
    timeout_s: int = Field(
        default_factory=lambda: int(os.getenv("INFERMEDICA_TIMEOUT_S", "30")), ge=1
    )

    def client_config(self) -> ClientConfig:
        if not self.app_id or not self.app_key:
            raise InfermedicaError(
                "Missing credentials: set INFERMEDICA_APP_ID and INFERMEDICA_APP_KEY "
                "(or app_id / app_key in the YAML file named by INFERMEDICA_CONFIG)."
            )
        return ClientConfig(
            app_id=self.app_id,
            app_key=self.app_key,
            base_url=self.base_url,
            timeout_s=self.timeout_s,
        )


def load_settings(yaml_path: str | Path | None = None) -> Settings:
    """YAML keys win over environment defaults."""
    path = Path(yaml_path) if yaml_path else None
    raw = yaml.safe_load(path.read_text()) if path and path.exists() else None
    return Settings(**(raw or {}))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings(os.getenv("INFERMEDICA_CONFIG"))
