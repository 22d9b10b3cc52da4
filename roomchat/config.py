"""Runtime settings, read from ``ROOMCHAT_*`` environment variables."""
from __future__ import annotations

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from .constants import ADMIN_NAME, TIME_FORMAT, WELCOME_TEXT

ENV_PREFIX = "ROOMCHAT_"

# Browser origins allowed outside production (a local dev server for the client).
DEV_CORS_ORIGINS = ["http://localhost:5500", "http://127.0.0.1:5500"]


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3500
    env: str = "development"
    static_dir: Optional[str] = "public"
    cors_origins: List[str] = Field(default_factory=lambda: list(DEV_CORS_ORIGINS))
    admin_name: str = ADMIN_NAME
    welcome_text: str = WELCOME_TEXT
    time_format: str = TIME_FORMAT
    outbound_queue_size: int = 256
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @property
    def is_production(self) -> bool:
        return self.env.strip().lower() == "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to ``os.environ``).

        Unset or blank variables keep their defaults. In production the CORS
        allow-list is empty unless ``ROOMCHAT_CORS_ORIGINS`` names origins.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field.upper())
            if raw is None or not raw.strip():
                continue
            if field == "cors_origins":
                values[field] = [o.strip() for o in raw.split(",") if o.strip()]
            else:
                values[field] = raw.strip()

        settings = cls.model_validate(values)
        if settings.is_production and "cors_origins" not in values:
            settings.cors_origins = []
        return settings


__all__ = ["Settings", "ENV_PREFIX", "DEV_CORS_ORIGINS"]
