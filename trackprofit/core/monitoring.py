"""
Monitoring and Tracing Configuration Module.

This module provides the optional Logfire integration for TrackProfit:
- API endpoint tracing
- LLM call tracing (through the pydantic-ai instrumentation)
- Database operation monitoring
- Structured events for archive runs and narrative generation

Logfire stays disabled unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is set;
every helper degrades to a debug log line when it is not configured.
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "trackprofit-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

_initialized = False


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Logfire monitoring and tracing.

    Args:
        app: FastAPI application instance to instrument (optional).

    Returns:
        True when Logfire was configured, False otherwise.
    """
    global _initialized

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return False

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        for name, instrument in (
            ("Pydantic AI", logfire.instrument_pydantic_ai),
            ("SQLAlchemy", logfire.instrument_sqlalchemy),
            ("HTTPX", logfire.instrument_httpx),
        ):
            try:
                instrument()
                logger.info(f"Logfire: {name} instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument {name}: {e}")

        if app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

        _initialized = True
        logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False


def _emit(message: str, level: str = "info", **attributes) -> None:
    if not _initialized:
        logger.debug(f"{message}: {attributes}")
        return
    try:
        import logfire

        getattr(logfire, level)(message, **attributes)
    except Exception:
        logger.debug(f"Could not send '{message}' to Logfire")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    _emit("API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_archive_run(month_label: str, archived_tables: int, total_tables: int, errors: list[str]) -> None:
    """Log the outcome of a monthly archive run."""
    _emit(
        "Monthly archive completed",
        level="warn" if errors else "info",
        month_label=month_label,
        archived_tables=archived_tables,
        total_tables=total_tables,
        errors=errors,
    )


def log_llm_call(purpose: str, model: str, duration_ms: float, user_id: Optional[str] = None) -> None:
    """
    Log a language model call.

    Args:
        purpose: What the narrative was generated for (insights, anomaly, chat)
        model: The model name
        duration_ms: Call duration in milliseconds
        user_id: The user the narrative belongs to (optional)
    """
    _emit("LLM call completed", purpose=purpose, model=model, duration_ms=duration_ms, user_id=user_id)
