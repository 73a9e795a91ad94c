"""
Logging configuration, applied once by the process entry point.

Every module logs through ``logging.getLogger(__name__)``. The console
format gets more detailed as the level goes down.
"""

from __future__ import annotations

import logging
import sys

_FMT_MINIMAL = '%(message)s'
_FMT_VERBOSE = '%(asctime)s [%(name)s] %(message)s'
_FMT_DEBUG = '%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s'
_DATEFMT_CONSOLE = '%H:%M:%S'
_DATEFMT_FILE = '%Y-%m-%d %H:%M:%S'

# Flask's request logger is chatty below WARNING
_NOISY_LOGGERS = ('werkzeug',)


def setup_logging(level: str = 'WARNING', log_file: str | None = None) -> None:
    numeric_level = parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_CONSOLE
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_CONSOLE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(numeric_level)

    if log_file:
        fh = logging.FileHandler(log_file, encoding='utf-8')
        fh.setLevel(numeric_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    if numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value, WARNING when unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
