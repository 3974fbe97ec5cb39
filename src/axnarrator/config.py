"""
Configuration module for the axnarrator system.
This module handles environment variables and process-wide settings that are not part
of the render configuration model.
"""

import logging
import os

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_log_level() -> str:
    """
    Retrieve the log level from the environment.

    Returns:
        The level name from AXNARRATOR_LOG_LEVEL. Defaults to "INFO"; unknown
        names fall back to the default with a warning.
    """
    level = os.environ.get("AXNARRATOR_LOG_LEVEL", "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning(f"Unknown log level {level!r}; using INFO.")
        return "INFO"
    return level


def configure_logging() -> None:
    """Configure logging to stderr so it doesn't interfere with stdout output."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
