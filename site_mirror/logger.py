# site_mirror/logger.py
"""
Логирование SiteMirror.

Все модули пишут в дочерние логгеры ``SiteMirror.<module>``; вывод
настраивает CLI одним вызовом :func:`init_logging` (консоль и, по
желанию, файл с ротацией).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

__all__ = ("DEFAULT_FORMAT", "LOGGER_NAME", "get_logger", "init_logging")

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteMirror"

# rotate the log file at 5 MiB, keep three old ones
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Logger of the project, or its ``SiteMirror.<suffix>`` child."""
    name = f"{LOGGER_NAME}.{suffix}" if suffix else LOGGER_NAME
    return logging.getLogger(name)


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route the project logger to stdout and, with *log_file*, to a rotating file.

    Handlers left by an earlier call are closed first, so calling it again
    reconfigures instead of duplicating output.
    """
    root = get_logger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # records stop here, the root logger never sees them
    root.propagate = False
    return root
