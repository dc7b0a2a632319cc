"""
Application configuration.

Settings come from environment variables (or `.env`), e.g.
`STORAGE_BACKEND=memory` or `API_BASE_URL=http://planner.local:3001`.
The same settings object serves the API server and the command line client.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: str = "*"

    # ==========================================================================
    # Storage
    # ==========================================================================

    # "memory" (lost on restart) or "json" (data_dir/content.json)
    storage_backend: Literal["memory", "json"] = "json"
    data_dir: str = "./data"

    # Upper bound on music links; no scheme check is applied
    max_link_length: int = 2048

    # ==========================================================================
    # Documents
    # ==========================================================================

    # Directory with templates/*.yaml; empty means the bundled config/
    config_dir: str = ""
    document_template: str = "service_plan"

    # ==========================================================================
    # Client
    # ==========================================================================

    api_base_url: str = "http://localhost:3001"
    wishlist_path: str = "~/.memorial/local_storage.json"

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
