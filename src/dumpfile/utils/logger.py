from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
ROOT_NAME = "dumpfile"


def setup_logging(level: str = "WARNING", quiet: bool = False, stream: Optional[TextIO] = None) -> None:
    # Only the package logger is configured; stdout carries the dump itself.
    pkg = logging.getLogger(ROOT_NAME)
    pkg.handlers.clear()
    pkg.propagate = False

    lvl = getattr(logging, level.upper(), logging.WARNING)
    pkg.setLevel(lvl)

    ch = logging.StreamHandler(stream if stream is not None else sys.stderr)
    ch.setLevel(lvl)
    fmt = "%(message)s" if quiet else "[%(levelname)s] %(name)s: %(message)s"
    ch.setFormatter(logging.Formatter(fmt))
    pkg.addHandler(ch)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
