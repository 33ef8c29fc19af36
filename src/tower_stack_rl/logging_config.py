"""
Logging setup for the play and agent drivers.

The engine modules only create module loggers under `tower_stack_rl`;
drivers call `setup_logging` once with the level name from the command line.
"""
import logging
import sys
from typing import List, Optional, Union

PACKAGE_LOGGER = "tower_stack_rl"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"


def parse_level(level: Union[int, str]) -> int:
    """Accept `logging.DEBUG`, `"debug"`, `"INFO"`, ... and return the numeric level."""
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return getattr(logging, name)


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    return handlers


def setup_logging(level: Union[int, str] = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger and return it.

    Args:
        level: Numeric level or one of LEVEL_NAMES (case-insensitive).
        log_file: Optional path; session logs are appended to it.

    Calling it again replaces the previous handlers, so a driver restarted in
    the same process does not print every record twice.
    """
    numeric = parse_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric)
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    for handler in _handlers(log_file):
        handler.setLevel(numeric)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging at {logging.getLevelName(numeric)}")
    return logger
