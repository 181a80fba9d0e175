# === FILE: site_indexer/logger.py ===
"""Logging for SiteIndexer: the ``SiteIndexer`` logger and its ``SiteIndexer.<part>`` children.

Console output goes to stderr; ``crawl`` prints its stats JSON on stdout.
The CLI reconfigures level, format and the optional log file via :func:`init_logging`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteIndexer"
_LOG_FILE_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _handlers(fmt: str, log_file: str | Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=_LOG_FILE_BYTES,
                backupCount=_LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set level and handlers of the ``SiteIndexer`` logger; children inherit them."""
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    for handler in _handlers(log_format, log_file):
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


def get_logger(suffix: str | None = None) -> logging.Logger:
    """``SiteIndexer`` or ``SiteIndexer.<suffix>`` (fetcher, link_extractor, ...)."""
    return logging.getLogger(_LOGGER_NAME if not suffix else f"{_LOGGER_NAME}.{suffix}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger"]
