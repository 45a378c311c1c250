#!/usr/bin/env python3
"""Start the admission API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from hadik.config import Settings
from hadik.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire before the app module is imported
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting admission API",
            environment=settings.environment,
            port=settings.port,
        )

        # Client addresses feed the login throttle and IP records, so the
        # proxy's X-Forwarded-For is trusted
        uvicorn.run(
            "hadik.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
            forwarded_allow_ips="*",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
