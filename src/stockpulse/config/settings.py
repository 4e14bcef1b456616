"""Application settings loaded from the environment and an optional .env file."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT_JWT_SECRET = "stockpulse-development-secret-change-me"

ENVIRONMENTS = ("development", "testing", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("structured", "plain")

_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """
    Parse a duration string such as ``7d`` or ``12h`` into seconds.

    A bare number is taken as seconds.
    """
    value = str(value).strip().lower()
    if not value:
        raise ValueError("Duration must not be empty")

    amount, multiplier = value, 1
    if value[-1] in _DURATION_UNITS:
        amount, multiplier = value[:-1], _DURATION_UNITS[value[-1]]

    if not amount.isdigit() or int(amount) <= 0:
        raise ValueError(f"Invalid duration: {value!r}")

    return int(amount) * multiplier


class Settings(BaseSettings):
    """StockPulse configuration; every field maps to an upper-case env var."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"
    debug: bool = False

    # HTTP server
    endpoint_host: str = "0.0.0.0"
    endpoint_port: int = Field(5000, ge=1, le=65535)
    api_prefix: str = "/api"
    api_reload: bool = False
    api_log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    # Accounts and tokens
    jwt_secret: str = DEVELOPMENT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_in: str = "7d"
    bcrypt_rounds: int = Field(12, ge=4, le=31)

    # Per-client request limits
    rate_limit_enabled: bool = True
    rate_limit_requests: int = Field(100, ge=1)
    rate_limit_window_seconds: int = Field(900, ge=1)

    # Market data
    default_currency: str = "INR"
    search_max_results: int = Field(10, ge=1, le=50)
    client_refresh_interval_seconds: int = Field(10, ge=1)

    # User store
    database_url: Optional[str] = None
    data_directory: str = "data"
    database_echo_sql: bool = False
    database_pool_pre_ping: bool = True
    database_pool_recycle: int = 3600

    # Logging
    log_level: str = "INFO"
    log_format: str = "structured"
    log_file_enabled: bool = True
    log_file_path: str = "data/stockpulse.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        v = v.lower()
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {list(ENVIRONMENTS)}")
        return v

    @field_validator("log_level", "api_log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {list(LOG_LEVELS)}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        v = v.lower()
        if v not in LOG_FORMATS:
            raise ValueError(f"Log format must be one of: {list(LOG_FORMATS)}")
        return v

    @field_validator("jwt_expires_in")
    @classmethod
    def validate_jwt_expires_in(cls, v):
        parse_duration(v)
        return v

    @property
    def jwt_expires_in_seconds(self) -> int:
        """Token lifetime in seconds."""
        return parse_duration(self.jwt_expires_in)

    def get_database_url(self) -> str:
        """Configured URL, or a SQLite file inside the data directory."""
        if self.database_url:
            return self.database_url

        db_dir = Path(self.data_directory)
        db_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{db_dir / 'stockpulse.db'}"

    def is_development(self) -> bool:
        return self.environment == "development"

    def is_production(self) -> bool:
        return self.environment == "production"

    def is_testing(self) -> bool:
        return self.environment == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()


def configuration_problems(settings: Settings) -> List[str]:
    """List reasons the settings are unsafe to serve with."""
    problems = []
    if settings.is_production():
        if settings.jwt_secret == DEVELOPMENT_JWT_SECRET:
            problems.append("JWT_SECRET must be set when running in production")
        if settings.debug:
            problems.append("DEBUG must be off when running in production")
    return problems


def validate_required_settings() -> bool:
    """
    Validate that the environment yields usable settings.

    Returns:
        bool: True if the settings load and pass every check
    """
    from .logging import get_logger

    logger = get_logger(__name__)
    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("Configuration validation failed", error=str(e))
        return False

    problems = configuration_problems(settings)
    for problem in problems:
        logger.error("Configuration problem", problem=problem)
    return not problems


def get_required_env_vars() -> list[str]:
    """Environment variables that must be set for a production deployment."""
    return ["JWT_SECRET"]
