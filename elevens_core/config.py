from __future__ import annotations

import logging
import os
import sys
from typing import Optional

DEFAULT_DB = os.path.join('data', 'elevens.db')
DEFAULT_SLOT = 'autosave'


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


def db_path() -> str:
    return os.getenv('ELEVENS_DB', DEFAULT_DB)


def debug_enabled() -> bool:
    return env_flag('ELEVENS_DEBUG')


def log_level() -> str:
    if debug_enabled():
        return 'DEBUG'
    return os.getenv('ELEVENS_LOG_LEVEL', 'INFO')


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR); defaults to the environment.
    """
    name = (level or log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
