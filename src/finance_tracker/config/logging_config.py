"""Logging configuration."""

import logging
import sys
from typing import Optional

from finance_tracker.config.settings import get_settings

APP_LOGGER = "finance_tracker"

# Libraries whose INFO output drowns out ours: SQL echo and per-request
# lines from the rate provider's HTTP client.
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging.

    ``FINANCE_LOG_LEVEL`` (or ``level``) applies to this application's loggers;
    ``FINANCE_LIBRARY_LOG_LEVEL`` to the database and HTTP client libraries.
    """
    settings = get_settings()
    app_level = _level(level or settings.log_level)

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(APP_LOGGER).setLevel(app_level)

    library_level = _level(settings.library_log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
