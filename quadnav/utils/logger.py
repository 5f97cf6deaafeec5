"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[str] = None,
                  log_format: Optional[str] = None):
    """
    Configure the root logger for a quadnav process

    Replaces any existing handlers with one on stdout and, if `log_file` is
    given, one appending to that file (parent directories are created).
    The thread name is part of the default format so the two navigator
    threads can be told apart.

    Args:
        level: Logging level for the root logger and its handlers
        log_file: Optional path to log file
        log_format: Optional custom format string
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))

    formatter = logging.Formatter(log_format or DEFAULT_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)

    # Flask logs every status poll
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Translate a config level name ("DEBUG", "info") to a logging level"""
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else default
