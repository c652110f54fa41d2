"""Optional Pydantic Logfire instrumentation.

When ``GITHUB_RELEASES_MCP_LOGFIRE_TOKEN`` is set, Logfire is configured with
that token, the httpx client used for GitHub calls is traced, the Starlette app
is instrumented, and standard library logging is forwarded to Logfire.
Without the token every function here is a no-op.
"""

from __future__ import annotations

import logging

from starlette.applications import Starlette

logger = logging.getLogger(__name__)

_logfire_initialized = False


def initialize_logfire() -> bool:
    """Initialize Logfire if a token is configured.

    Returns:
        bool: True if Logfire is active after the call, False otherwise
    """
    global _logfire_initialized

    if _logfire_initialized:
        logger.debug("Logfire already initialized, skipping")
        return True

    try:
        from github_releases_mcp.config import get_settings

        settings = get_settings()

        if not settings.logfire_token:
            logger.info("Logfire token not configured, observability disabled")
            return False

        import logfire

        logfire.configure(token=settings.logfire_token, environment=settings.environment)
        logfire.instrument_httpx()

        # Attach to the root logger so the CLI's basicConfig(level=...) still
        # controls the effective level.
        logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

        _logfire_initialized = True
        logger.info("Logfire initialized successfully")
        return True

    except ImportError:
        logger.warning("Logfire package not installed, observability disabled")
        return False
    except Exception:
        logger.exception("Failed to initialize Logfire")
        return False


def instrument_starlette_app(app: Starlette) -> None:
    """Instrument a Starlette application with Logfire if it was initialized."""
    if not _logfire_initialized:
        logger.debug("Logfire not initialized, skipping Starlette instrumentation")
        return

    try:
        import logfire

        logfire.instrument_starlette(app)
        logger.info("Starlette instrumentation enabled")
    except Exception:
        logger.exception("Failed to instrument Starlette with Logfire")
