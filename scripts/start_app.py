#!/usr/bin/env python3
"""Start the carpool API with Logfire tracking of startup errors."""

import sys
import logfire
import uvicorn

from carpool.config import Settings
from carpool.util.logging import setup_logging
from carpool.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting carpool API",
            environment=settings.environment,
            port=settings.port,
        )

        # The app module reuses the Logfire configuration made above
        uvicorn.run(
            "carpool.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
