"""
Structured logging for the sequence statistics package.

Wraps a standard library logger with run timers and a registry of
structured issues, so collectors can log and record problems in one call.

Usage:
    from seqstats_pkg.logger import setup_logging, get_logger

    setup_logging(console_level='DEBUG', log_file=Path("logs/seqstats.log"))
    logger = get_logger()

    logger.start_timer("statistics")
    logger.info("Reading records...")
    elapsed = logger.stop_timer("statistics")
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

__all__ = [
    'StatisticsLogger',
    'LoggedIssue',
    'setup_logging',
    'get_logger',
]

LOGGER_NAME = "seqstats_pkg"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
CONSOLE_FORMAT_VERBOSE = "%(asctime)s %(name)s %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass
class LoggedIssue:
    """A problem found while computing statistics."""
    level: str
    category: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class StatisticsLogger:
    """Package logger with timers and an issue registry."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._timers: Dict[str, float] = {}
        self.issues: List[LoggedIssue] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str, *args, **kwargs) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._logger.error(message, *args, **kwargs)

    def start_timer(self, name: str) -> None:
        """Start (or restart) a named timer."""
        self._timers[name] = time.perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return elapsed seconds."""
        started = self._timers.pop(name, None)
        if started is None:
            raise KeyError(f"Timer '{name}' was never started")
        return time.perf_counter() - started

    def add_issue(
        self,
        level: str,
        category: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> LoggedIssue:
        """
        Record a structured issue and log it at the matching level.

        Args:
            level: 'DEBUG', 'INFO', 'WARNING' or 'ERROR'
            category: Area of the package the issue belongs to (input, record, config)
            message: Human readable description
            details: Extra key/value context

        Returns:
            The recorded issue
        """
        issue = LoggedIssue(
            level=level.upper(),
            category=category,
            message=message,
            details=dict(details or {})
        )
        self.issues.append(issue)

        log_level = logging.getLevelName(issue.level)
        if not isinstance(log_level, int):
            log_level = logging.ERROR
        self._logger.log(log_level, f"[{category}] {message}")
        for key, value in issue.details.items():
            self._logger.debug(f"  {key}: {value}")

        return issue

    def clear_issues(self) -> None:
        self.issues.clear()


_LOGGER: Optional[StatisticsLogger] = None


def setup_logging(
    console_level: Union[str, int] = 'INFO',
    log_file: Optional[Path] = None
) -> StatisticsLogger:
    """
    Configure package logging.

    Args:
        console_level: Level for the stderr handler (name or number)
        log_file: Optional file that receives everything at DEBUG level

    Returns:
        The shared StatisticsLogger
    """
    if isinstance(console_level, str):
        level = logging.getLevelName(console_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {console_level}")
    else:
        level = console_level

    base_logger = logging.getLogger(LOGGER_NAME)
    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False

    for handler in list(base_logger.handlers):
        base_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    if level <= logging.DEBUG:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT_VERBOSE, datefmt="%H:%M:%S"))
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    base_logger.addHandler(console)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        base_logger.addHandler(file_handler)

    logger = get_logger()
    logger.info("Logging initialised successfully")
    return logger


def get_logger() -> StatisticsLogger:
    """Return the shared package logger, creating it on first use."""
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = StatisticsLogger()
    return _LOGGER
