"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading. Database credentials are injected via environment and
never hard-coded; see .env.example for the full list.

The five DB_* connection values are plain strings with empty defaults so
the process boots without them and /health can report the gap. They are
validated into
a DatabaseConfig (see trashvision.core.database) when a query is about to run.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── MySQL ─────────────────────────────────────────────────────
    db_host: str = ""
    db_port: str = ""  # numeric string, e.g. "3306"
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""

    # TLS to the store. DB_SSL_VERIFY=false accepts a self-signed
    # certificate without validating its chain (managed MySQL services
    # that hand out their own CA). Keep it true everywhere else.
    db_ssl: bool = True
    db_ssl_verify: bool = True
    db_ssl_ca: str = ""  # optional CA bundle path; certifi's bundle otherwise
    db_connect_timeout: float = 10.0

    # ─── CORS ──────────────────────────────────────────────────────
    cors_origins_str: str = "http://localhost:3000,http://localhost:8000"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # ─── Dashboard ─────────────────────────────────────────────────
    dashboard_poll_enabled: bool = True
    dashboard_poll_interval: float = 5.0  # seconds
    dashboard_source_url: str = "http://127.0.0.1:8000/api/logs"
    dashboard_page_size: int = 10

    # Comma-separated trash types tracked on the summary cards.
    tracked_categories_str: str = "PET,CAN,GLASS BOTTLE"

    @property
    def tracked_categories(self) -> tuple[str, ...]:
        return tuple(
            c.strip().upper() for c in self.tracked_categories_str.split(",") if c.strip()
        )

    # ─── Rate limiting ─────────────────────────────────────────────
    logs_rate_limit: str = "120/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton — import this everywhere instead of instantiating Settings()
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
