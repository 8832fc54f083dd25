from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_ssl: bool = True

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Civil time: "now" is read in this zone once, then handled as timezone-less
    organization_timezone: str = "America/Bogota"

    # Booking window defaults (organizations may override via booking settings)
    minimum_lead_time_hours: int = 24
    default_slot_duration_minutes: int = 30
    max_advance_booking_days: int = 90
    weekend_booking_enabled: bool = True
    # Time-of-day window (HH:MM, inclusive) in which a slot may start
    booking_window_start: str = "08:00"
    booking_window_end: str = "18:00"
    # Upper bound for /availability/range requests
    max_range_days: int = 31

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
