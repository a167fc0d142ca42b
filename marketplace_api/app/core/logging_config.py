"""
Logging configuration for the Marketplace API.

``build_logging_config`` turns the logging related settings (level,
format, optional log file) into a ``logging.config.dictConfig``
mapping.  ``setup_logging`` applies it to the root logger once and,
on every call, sets the level of uvicorn's per‑request access logger.
Setting ``ACCESS_LOG=false`` keeps that access log quiet.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ACCESS_LOGGER = "uvicorn.access"


def build_logging_config(level: str, fmt: str = DEFAULT_FORMAT, logfile: Optional[str] = None) -> Dict[str, Any]:
    """Return a ``dictConfig`` mapping for the root logger."""
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    }
    if logfile:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(Path(logfile).resolve()),
            "encoding": "utf-8",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": fmt, "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        "root": {"level": level.upper(), "handlers": list(handlers)},
    }


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
    access_log: bool = True,
) -> bool:
    """Configure logging for the application.

    The root logger is left alone if it already has handlers (uvicorn,
    pytest or an earlier ``create_app`` call configured it).  Returns
    ``True`` when the root logger was configured by this call.
    """
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.INFO if access_log else logging.WARNING)
    if logging.getLogger().handlers:
        return False
    if not isinstance(logging.getLevelName(level.upper()), int):
        level = "INFO"
    logging.config.dictConfig(build_logging_config(level, fmt, logfile))
    return True
