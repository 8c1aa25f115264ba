"""
Logging setup for family_tree.

Every logger handed out by ``get_logger`` hangs under the ``family_tree`` base
logger, which owns the console handler and the master log file. Each module
logger adds a file of its own under the configured log directory. Settings
come from the ``logging`` and ``debug`` keys of ``config/family_tree.yml``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from family_tree.config import get_config

# <root>/src/family_tree/logging/logger.py
PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "family_tree"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5


@dataclass(frozen=True)
class _LogSettings:
    level: int
    console_level: int
    log_dir: Path
    master_file: str
    rotate: bool


_settings: Optional[_LogSettings] = None


def _read_settings() -> _LogSettings:
    cfg = get_config()
    debug = bool(cfg.debug)

    level_name = str(cfg.logging.get("level", "INFO")).upper()
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.INFO)

    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    return _LogSettings(
        level=level,
        console_level=logging.DEBUG if debug else logging.WARNING,
        log_dir=log_dir,
        master_file=cfg.logging.get("file", "family_tree.log"),
        rotate=bool(cfg.logging.get("rotate", False)),
    )


def _file_handler(settings: _LogSettings, filename: str) -> logging.Handler:
    path = settings.log_dir / filename
    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=ROTATE_MAX_BYTES, backupCount=ROTATE_BACKUPS, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(settings.level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _setup_base() -> _LogSettings:
    """Attach the console and master file handlers once per process."""
    global _settings
    if _settings is not None:
        return _settings

    settings = _read_settings()
    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(settings.level)
    base.propagate = False
    base.addHandler(_file_handler(settings, settings.master_file))

    console = StreamHandler()
    console.setLevel(settings.console_level)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    _settings = settings
    return settings


def _qualified_name(name: Optional[str]) -> str:
    """Place short names under the base logger so they share its handlers."""
    if not name:
        return BASE_LOGGER_NAME
    if name == BASE_LOGGER_NAME or name.startswith(BASE_LOGGER_NAME + "."):
        return name
    return f"{BASE_LOGGER_NAME}.{name}"


def get_logger(name: Optional[str] = None) -> Logger:
    """
    Return the project logger for ``name`` (usually ``__name__``).

    Module loggers propagate to the base logger and also write to
    ``<log_dir>/<dotted_name_with_underscores>.log``.
    """
    settings = _setup_base()
    logger_name = _qualified_name(name)
    logger = logging.getLogger(logger_name)
    logger.setLevel(settings.level)

    if logger_name != BASE_LOGGER_NAME:
        if not any(getattr(h, "is_module_handler", False) for h in logger.handlers):
            handler = _file_handler(settings, f"{logger_name.replace('.', '_')}.log")
            handler.is_module_handler = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
        logger.propagate = True

    return logger
