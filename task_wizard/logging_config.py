"""Logging setup shared by the CLI and the web app."""

import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger with a single stdout handler."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if (fmt or "").lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
