"""Logging setup for CLI runs."""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s {prefix}%(name)s: %(message)s"

# Connection-pool chatter from requests is only useful when debugging transport.
_NOISY_LOGGERS = ("urllib3",)


def resolve_level(level_name: Optional[str] = None) -> int:
    name = (level_name or os.environ.get("PREDBOARD_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(run_id: Optional[str] = None, level_name: Optional[str] = None) -> None:
    """Route predboard logs to stderr, tagged with the run id when one is given."""
    level = resolve_level(level_name)
    prefix = f"[run_id={run_id}] " if run_id else ""
    logging.basicConfig(level=level, format=LOG_FORMAT.format(prefix=prefix), force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
