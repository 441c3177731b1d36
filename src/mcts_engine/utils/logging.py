"""Logging setup for search runs."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None):
    """Route search logs to stdout and, optionally, a file.

    Replaces any handlers already installed on the root logger, so a
    second call reconfigures instead of duplicating output.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional log file path
    """
    if isinstance(level, str):
        level = level.upper()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger(__name__).debug(
        f"Logging configured: level={logging.getLevelName(logging.getLogger().level)}, "
        f"file={log_file}"
    )
