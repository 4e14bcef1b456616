"""Startup helpers: logging, storage and configuration checks."""

from ..config.logging import get_logger, setup_logging
from ..config.settings import Settings, get_settings, validate_required_settings


def configure_logging(settings: Settings) -> None:
    """Apply the logging section of the settings."""
    setup_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        file_enabled=settings.log_file_enabled,
        file_path=settings.log_file_path,
        max_file_size=settings.log_max_file_size,
        backup_count=settings.log_backup_count,
    )


def prepare_storage() -> None:
    """Create the user store schema (and its SQLite directory) if missing."""
    from ..ormdb.database import create_tables

    create_tables()


def initialize_application() -> Settings:
    """Configure logging and storage from the environment."""
    settings = get_settings()
    configure_logging(settings)
    prepare_storage()

    get_logger(__name__).info(
        "Application initialized",
        environment=settings.environment,
        data_dir=settings.data_directory,
        rate_limit_enabled=settings.rate_limit_enabled,
    )
    return settings


def validate_environment() -> bool:
    """True when the configuration is safe to serve with."""
    return validate_required_settings()
