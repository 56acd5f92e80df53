# clinic_booking/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]  # project root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./clinic.db"
    redis_url: str | None = None

    # Token signing
    auth_secret: str
    token_ttl_seconds: int = 86400

    # Operating-hours template
    clinic_open: str = "09:00"
    clinic_close: str = "17:00"
    slot_duration_minutes: int = 30
    clinic_timezone: str = "UTC"
    strict_slot_grid: bool = False
    max_range_days: int = 366  # widest availability query, in days

    # Per-IP fixed window for /api/*, 0 = disabled
    rate_limit: int = 100
    rate_limit_window_seconds: int = 900

    # Seed admin (created on startup if missing)
    admin_name: str | None = None
    admin_email: str | None = None
    admin_password: str | None = None

    frontend_url: str | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path -> absolute, anchored at the project root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
