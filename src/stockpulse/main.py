"""
StockPulse - Main application entry point.

Serves Indian market quotes, historical charts, symbol search and per-user
watchlists over a JSON API.

Usage:
    stockpulse            Start the API server
    stockpulse -check     Validate configuration and the user store, then exit
"""

import sys

import uvicorn
from dotenv import load_dotenv

from .config.logging import get_logger
from .config.settings import get_required_env_vars
from .ormdb.database import check_database_health
from .utils.config import initialize_application, validate_environment


def main() -> None:
    """Main application entry point."""
    load_dotenv()

    settings = initialize_application()
    logger = get_logger(__name__)

    if not validate_environment():
        print("Configuration is not safe to serve with.")
        print(f"Required variables: {', '.join(get_required_env_vars())}")
        sys.exit(1)

    if "-check" in sys.argv:
        health = check_database_health()
        print(f"Database: {health['status']}")
        sys.exit(0 if health["status"] == "healthy" else 1)

    logger.info(
        "Starting StockPulse API server",
        host=settings.endpoint_host,
        port=settings.endpoint_port,
        api_prefix=settings.api_prefix,
    )

    try:
        uvicorn.run(
            "stockpulse.webapi.app:create_app",
            factory=True,
            host=settings.endpoint_host,
            port=settings.endpoint_port,
            reload=settings.api_reload,
            log_level=settings.api_log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


if __name__ == "__main__":
    main()
