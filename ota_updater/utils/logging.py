from __future__ import annotations

import logging
import os
from typing import Optional, Union

_FORMAT = "%(asctime)s %(levelname)-7s %(threadName)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "OTA_UPDATER_LOG_LEVEL"
DEBUG_ENV = "OTA_UPDATER_DEBUG"

# chatty third-party loggers kept at WARNING unless DEBUG is requested
_QUIET_LOGGERS = ("urllib3",)


def _parse_level(value: Union[str, int, None], fallback: int) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def _env_level() -> Optional[int]:
    """Level forced through the environment, if any."""
    explicit = os.getenv(LEVEL_ENV)
    if explicit and explicit.strip():
        return _parse_level(explicit, logging.INFO)
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def _set_root_level(level: int) -> None:
    logging.getLogger().setLevel(level)
    quiet = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet)


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """
    Install the console handler once and set the root level.

    Environment overrides:
      - OTA_UPDATER_LOG_LEVEL: explicit level (name or number)
      - OTA_UPDATER_DEBUG: truthy -> DEBUG
    """
    env_level = _env_level()
    level = env_level if env_level is not None else _parse_level(default_level, logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(format=_FORMAT, datefmt=_DATEFMT)
    _set_root_level(level)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """
    Apply the ``debug_logging`` setting; the environment still wins.
    Returns the effective level.
    """
    env_level = _env_level()
    if env_level is not None:
        level = env_level
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    _set_root_level(level)
    return level


def env_requests_debug() -> bool:
    """Return True if the environment forces DEBUG logging."""
    env_level = _env_level()
    return env_level is not None and env_level <= logging.DEBUG
