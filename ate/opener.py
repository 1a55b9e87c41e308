"""Open link targets with an external program."""

import logging
import subprocess
from typing import Optional

from .constants import PagerConstants
from .errors import OpenLinkFailed

logger = logging.getLogger(__name__)


def open_uri(uri: str, opener: Optional[str]) -> None:
    """Run ``<opener> <uri>`` and wait for it to finish.

    An opener killed by a signal counts as success.

    Args:
        uri: Link target to open
        opener: Program from ATE_OPENER, e.g. ``xdg-open``

    Raises:
        OpenLinkFailed: No opener is configured, it could not be started,
            or it exited with a non-zero status
    """
    if not opener:
        raise OpenLinkFailed(PagerConstants.MISSING_OPENER_MESSAGE)
    logger.info("Using %s %s", PagerConstants.OPENER_ENV, opener)
    try:
        result = subprocess.run(
            [opener, uri],
            stdin=subprocess.DEVNULL,
            capture_output=True,
        )
    except OSError as e:
        raise OpenLinkFailed(f"Failed to run {opener}: {e}") from e

    stdout = result.stdout.decode('utf-8', errors='replace')
    stderr = result.stderr.decode('utf-8', errors='replace')
    logger.info("%s stdout=%s", PagerConstants.OPENER_ENV, stdout)
    logger.info("%s stderr=%s", PagerConstants.OPENER_ENV, stderr)
    if result.returncode > 0:
        raise OpenLinkFailed(
            f"{PagerConstants.OPENER_ENV} {opener} failed with "
            f"code={result.returncode} stderr={stderr.strip()}"
        )


class LinkOpener:
    """Callable that opens URIs with a fixed opener program."""

    def __init__(self, opener: Optional[str]):
        self.opener = opener

    def __call__(self, uri: str) -> None:
        open_uri(uri, self.opener)
