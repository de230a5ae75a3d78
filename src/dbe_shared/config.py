"""
config.py — pydantic-settings Settings class.

All environment variables for DBE reporting are declared here.
The engine, CLI and API import `settings` from this module.

Usage:
    from dbe_shared.config import settings
    print(settings.supabase_url)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_dotenv() -> Path | None:
    """Walk up from CWD to find the nearest .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Supabase (contract store)
    # -------------------------------------------------------------------------
    supabase_url: str = Field(default="http://localhost:54321")
    supabase_anon_key: str = Field(default="")
    contracts_table: str = Field(default="contracts")

    # Upstream fetch retry policy
    fetch_max_attempts: int = Field(default=3, ge=1)
    fetch_base_delay: float = Field(default=1.0, ge=0)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------
    export_dir: str = Field(default="./exports")
    export_separator: str = Field(default=",", min_length=1, max_length=1)
    # "never" reproduces the legacy unquoted output
    export_quote_style: Literal["necessary", "never", "always"] = Field(
        default="necessary"
    )

    # -------------------------------------------------------------------------
    # API (served with: uvicorn dbe_api.app:app)
    # -------------------------------------------------------------------------
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")

    # -------------------------------------------------------------------------
    # Derived / computed
    # -------------------------------------------------------------------------
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @field_validator("supabase_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Module-level singleton — import this everywhere
# ---------------------------------------------------------------------------
settings = Settings()
