"""
Logging setup for the CLI and the dashboard, with optional Logfire export.

Environment Variables:
    LOG_LEVEL: stdlib logging level (default: INFO)
    LOGFIRE_TOKEN: Logfire write token; without it logs stay local
    LOGFIRE_ENVIRONMENT: Environment tag sent to Logfire (default: development)
"""

import os
import logging
from typing import Optional

import logfire

from .. import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_logfire_configured = False
_logging_configured = False


def setup_logfire(service_name: str = "buyside") -> bool:
    """
    Send traces and log records to Logfire when LOGFIRE_TOKEN is set.

    Pydantic validation of drafts and campaigns is instrumented as well.

    Returns:
        True if Logfire is active, False if it was skipped or failed to start
    """
    global _logfire_configured

    if _logfire_configured:
        return True

    token = os.environ.get("LOGFIRE_TOKEN")
    if not token:
        return False

    try:
        logfire.configure(
            token=token,
            service_name=service_name,
            service_version=__version__,
            environment=os.environ.get("LOGFIRE_ENVIRONMENT", "development"),
            console=False,
        )
        logfire.instrument_pydantic()
    except Exception as e:
        logger.error(f"Logfire unavailable, logging locally only: {e}")
        return False

    _logfire_configured = True
    return True


def setup_logging(level: Optional[str] = None) -> None:
    """Configure stdlib logging once per process."""
    global _logging_configured

    if _logging_configured:
        return

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    handlers = [logging.StreamHandler()]

    logfire_active = setup_logfire()
    if logfire_active:
        handlers.insert(0, logfire.LogfireLoggingHandler())

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    _logging_configured = True
    logger.info(f"Logging at {level_name}" + (" (exporting to Logfire)" if logfire_active else ""))
