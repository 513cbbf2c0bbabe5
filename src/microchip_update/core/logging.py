"""Loguru logging configuration.

Progress and every error report entry go to stderr.  When a ``log_dir`` is
configured each run is also appended to a rotating log file, which keeps a
history of the problems found from one comparison to the next.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "microchip-update.log"

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> Path | None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a file sink is
            added (rotated every 24 hours, retained 7 days).

    Returns:
        The log file path, or None when logging to stderr only.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if not log_dir:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME
    logger.add(
        log_file,
        level=level,
        format=_LOG_FORMAT,
        rotation="24h",
        retention="7 days",
    )
    return log_file
