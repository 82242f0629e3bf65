"""
Logging utility module for htmlquery.

The library only emits records through module loggers under the
``htmlquery`` namespace; handlers are installed by :func:`setup_logging`,
which the command line tool calls.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

ROOT_LOGGER = "htmlquery"


class LogFormatter(logging.Formatter):
    """Log formatter that colors the level name on terminals."""

    RESET = '\033[0m'

    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output; ignored on Windows
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def formatMessage(self, record: logging.LogRecord) -> str:
        if not self.colored or record.levelname not in self.LEVEL_COLORS:
            return super().formatMessage(record)
        # color only the level field, not occurrences of the word in the message
        original = record.levelname
        record.levelname = f"{self.LEVEL_COLORS[original]}{original}{self.RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = original


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for htmlquery.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name below the ``htmlquery`` logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = ROOT_LOGGER
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    # Already configured
    if logger.handlers:
        return logger

    console = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
    logger.setLevel(console)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console)
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=sys.stderr.isatty(),
                                              fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
        logger.setLevel(min(console, file))

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file)
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def get_default_log_file() -> str:
    """
    Get the default log file path, ~/.htmlquery/logs/htmlquery_YYYY-MM-DD.log.

    Returns:
        str: Default log file path
    """
    log_dir = os.path.join(os.path.expanduser("~"), ".htmlquery", "logs")
    os.makedirs(log_dir, exist_ok=True)

    date_str = datetime.now().strftime("%Y-%m-%d")
    return os.path.join(log_dir, f"htmlquery_{date_str}.log")


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception with its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Times named operations and logs their duration."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name used as message prefix
        """
        self.logger = logger
        self.component = component
        self.durations: Dict[str, float] = {}

    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """
        Time the enclosed block.

        Args:
            name: Operation name
            level: Log level for the duration record
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            self.log(name, time.perf_counter() - start, level)

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        """
        Record and log a duration.

        Args:
            name: Operation name
            duration: Duration in seconds
            level: Log level
        """
        self.durations[name] = duration
        self.logger.log(LOG_LEVELS.get(level.upper(), logging.DEBUG),
                        f"{self.component} {name} took {duration:.4f} seconds")
