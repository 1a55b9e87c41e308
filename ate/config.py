"""Settings read once from the environment at startup."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import platformdirs

from .constants import PagerConstants


def default_log_file() -> Path:
    """Log file in the platform's per-user state directory."""
    return Path(platformdirs.user_state_dir("ate")) / "log"


@dataclass
class PagerConfig:
    """Startup settings.

    Attributes:
        opener: Program that opens links, from ATE_OPENER
        open_first: Open the first link on start (ATE_OPEN_FIRST is set)
        goto_last: Select the last link on start (ATE_GOTO_LAST is set)
        log_file: Where the log goes, from ATE_LOG or the state directory
    """
    opener: Optional[str] = None
    open_first: bool = False
    goto_last: bool = False
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PagerConfig":
        env = os.environ if environ is None else environ
        log_file = env.get(PagerConstants.LOG_FILE_ENV)
        return cls(
            opener=env.get(PagerConstants.OPENER_ENV) or None,
            open_first=PagerConstants.OPEN_FIRST_ENV in env,
            goto_last=PagerConstants.GOTO_LAST_ENV in env,
            log_file=Path(log_file) if log_file else default_log_file(),
        )
