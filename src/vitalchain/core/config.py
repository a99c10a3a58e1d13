from __future__ import annotations

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    # Comma-separated list of allowed CORS origins
    frontend_origins: str = "*"

    rate_limit_window: int = 60
    rate_limit_reqs: int = 120
    # Only enable behind a proxy that overwrites X-Forwarded-For
    trust_forwarded_for: bool = False

    genesis_label: str = "genesis"

    def origins_list(self) -> List[str]:
        return [o.strip() for o in (self.frontend_origins or "").split(",") if o.strip()]

    def genesis_payload(self) -> dict:
        return {"event": self.genesis_label}


def load_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "load_settings"]
