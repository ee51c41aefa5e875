"""Logging configuration for mongofix.

Library modules only create loggers with `logging.getLogger(__name__)`.
Handlers are installed by `configure_logging`, which the `mongofix` command
line calls on startup. Under pytest, log capture is left to pytest.
"""

import logging
import os
import sys


def configure_logging(level=None, format_string=None):
    """Configure logging for mongofix.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
    """
    # Get level from environment or use default
    if level is None:
        level = os.environ.get("MONGOFIX_LOG_LEVEL", "INFO")

    # Convert string level to logging constant
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    if format_string is None:
        if numeric_level == logging.DEBUG:
            # More detailed format for debug mode
            format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            format_string = "%(asctime)s %(levelname)s: %(message)s"

    # Configure root logger
    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Replace any existing configuration
    )

    # Reduce verbosity of the MongoDB driver
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    logging.getLogger("mongofix").setLevel(numeric_level)
