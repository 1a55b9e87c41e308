"""File logging for the pager.

The terminal belongs to the pager while it runs, so log records go to a
file instead of stderr.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(log_file: Path, level: int = logging.DEBUG) -> Optional[logging.Handler]:
    """Send records from the ate package to log_file.

    Returns:
        The installed handler, or None if the file could not be opened,
        in which case records are discarded
    """
    package_logger = logging.getLogger("ate")
    package_logger.setLevel(level)
    package_logger.propagate = False
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    logger.debug("Logging to %s", log_file)
    return handler
