from __future__ import annotations
import logging
import os
from typing import Optional


def _flag(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def get_log_level() -> Optional[int]:
    """Level for the `tidyeval` logger from TIDYEVAL_LOG_LEVEL, or None if unset."""
    raw = os.environ.get("TIDYEVAL_LOG_LEVEL")
    if not raw or not raw.strip():
        return None
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else None


def strict_cleanup() -> bool:
    """TIDYEVAL_STRICT_CLEANUP=1 turns a refused overscope cleanup into an error."""
    return _flag("TIDYEVAL_STRICT_CLEANUP")


def configure_logging() -> None:
    level = get_log_level()
    if level is not None:
        logging.getLogger("tidyeval").setLevel(level)
