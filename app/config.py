"""Environment configuration for the scan service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    receipt_provider: str = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("http://localhost:5173",))
    sentry_dsn: str = ""
    log_level: str = "INFO"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Reads `.env` first when using the process environment. `API_KEY` is
    accepted as the Gemini credential when `GEMINI_API_KEY` is unset.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    origins = environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")

    return Settings(
        receipt_provider=environ.get("RECEIPT_PROVIDER", "gemini").strip().lower(),
        gemini_api_key=environ.get("GEMINI_API_KEY", "") or environ.get("API_KEY", ""),
        gemini_model=environ.get("GEMINI_MODEL", "gemini-2.5-flash"),
        openai_api_key=environ.get("OPENAI_API_KEY", ""),
        openai_model=environ.get("OPENAI_MODEL", "gpt-4o"),
        cors_origins=tuple(o.strip() for o in origins if o.strip()),
        sentry_dsn=environ.get("SENTRY_DSN", ""),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
