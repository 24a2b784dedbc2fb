"""Configuration system for the payroll service."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


@dataclass(slots=True)
class DatabaseSettings:
    """Connection details for the tenant datastore."""

    driver: str
    host: str
    port: int
    user: str
    password: str
    name: str

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"


@dataclass(slots=True)
class PayrollSettings:
    """Policy knobs and external routing configuration for payroll runs."""

    timezone: str = "America/New_York"
    payout_offset_days: int = 5
    lookback_weeks: int = 12
    default_mileage_rate: float = 0.50
    shift_buffer_minutes: int = 0
    maps_api_key: str = ""
    distance_matrix_url: str = DEFAULT_DISTANCE_MATRIX_URL
    distance_timeout_seconds: float = 10.0
    distance_max_concurrency: int = 4


@dataclass(slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    payroll: PayrollSettings
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        def _get_env(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _positive_int(name: str, default: str) -> int:
            value = int(_get_env(name, default))
            if value <= 0:
                raise ValueError(f"{name} must be a positive integer.")
            return value

        db = DatabaseSettings(
            driver=_get_env("DB_DRIVER", "mysql+pymysql"),
            host=_get_env("DB_HOST", "127.0.0.1"),
            port=int(_get_env("DB_PORT", "3306")),
            user=_get_env("DB_USER", "crm"),
            password=_get_env("DB_PASSWORD", "crm"),
            name=_get_env("DB_NAME", "crm"),
        )
        payroll = PayrollSettings(
            timezone=_get_env("PAYROLL_TIMEZONE", "America/New_York"),
            payout_offset_days=int(_get_env("PAYROLL_PAYOUT_OFFSET_DAYS", "5")),
            lookback_weeks=_positive_int("PAYROLL_LOOKBACK_WEEKS", "12"),
            default_mileage_rate=float(_get_env("PAYROLL_DEFAULT_MILEAGE_RATE", "0.50")),
            shift_buffer_minutes=int(_get_env("PAYROLL_SHIFT_BUFFER_MINUTES", "0")),
            maps_api_key=_get_env("GOOGLE_MAPS_API_KEY", ""),
            distance_matrix_url=_get_env("DISTANCE_MATRIX_URL", DEFAULT_DISTANCE_MATRIX_URL),
            distance_timeout_seconds=float(_get_env("DISTANCE_TIMEOUT_SECONDS", "10")),
            distance_max_concurrency=_positive_int("DISTANCE_MAX_CONCURRENCY", "4"),
        )
        echo_flag = _get_env("SQLALCHEMY_ECHO", "0")
        return cls(
            database=db,
            payroll=payroll,
            sqlalchemy_echo=echo_flag not in {"0", "false", "False"},
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": {
                "driver": settings.database.driver,
                "host": settings.database.host,
                "port": settings.database.port,
                "name": settings.database.name,
                "user": settings.database.user,
            },
            "payroll": {
                "timezone": settings.payroll.timezone,
                "payout_offset_days": settings.payroll.payout_offset_days,
                "lookback_weeks": settings.payroll.lookback_weeks,
                "default_mileage_rate": settings.payroll.default_mileage_rate,
                "shift_buffer_minutes": settings.payroll.shift_buffer_minutes,
                "maps_api_key": "***" if settings.payroll.maps_api_key else "",
                "distance_timeout_seconds": settings.payroll.distance_timeout_seconds,
            },
        },
    )
    return settings
