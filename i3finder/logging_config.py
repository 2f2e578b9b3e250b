"""Logging configuration for i3finder.

i3finder normally runs from an i3 key binding, where stderr goes nowhere, so
besides the console handler (WARNING, INFO with --verbose, DEBUG with
--debug) a log file can be attached with --log-file. Records logged for a
FinderError carry its code and context, which the formatters append.
"""

import logging
import sys
import time
from functools import wraps
from pathlib import Path
from typing import Callable, Optional, Sequence

DEFAULT_FORMAT = "i3finder: %(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class FinderFormatter(logging.Formatter):
    """Appends `[CODE] {context}` to records logged for a FinderError."""

    def format(self, record):
        message = super().format(record)
        code = getattr(record, "error_code", None)
        if code is None:
            return message
        context = getattr(record, "error_context", None)
        if context:
            return f"{message} [{code}] {context}"
        return f"{message} [{code}]"


class ColoredFormatter(FinderFormatter):
    """FinderFormatter with the level name colored for terminals."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers format the same record
            record.levelname = levelname


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the 'i3finder' logger.

    Args:
        verbose: Console at INFO level
        debug: Console at DEBUG level
        log_file: Also append records to this file, at INFO level or at
            DEBUG with --debug

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger('i3finder')

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    if debug:
        level, log_format = logging.DEBUG, DEBUG_FORMAT
    elif verbose:
        level, log_format = logging.INFO, VERBOSE_FORMAT
    else:
        level, log_format = logging.WARNING, DEFAULT_FORMAT

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    if sys.stderr.isatty():
        console.setFormatter(ColoredFormatter(log_format))
    else:
        console.setFormatter(FinderFormatter(log_format))
    logger.addHandler(console)

    logger.setLevel(level)
    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(min(level, logging.INFO))
        file_handler.setFormatter(FinderFormatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(file_handler)
        logger.setLevel(min(level, logging.INFO))

    return logger


def get_logger(name: str = 'i3finder') -> logging.Logger:
    return logging.getLogger(name)


def log_finder_error(error, logger: logging.Logger) -> None:
    """Log a FinderError at INFO with its code and context attached.

    The user-facing message is printed separately by the CLI; this record is
    for --verbose output and the log file.
    """
    logger.info(
        f"Aborted: {error.message}",
        extra={"error_code": error.code.name, "error_context": error.context},
    )


def log_process_result(command: Sequence[str], returncode: int, output: str, logger: logging.Logger) -> None:
    """Log a finished child process at DEBUG.

    Args:
        command: Command argv
        returncode: Child exit status
        output: Decoded stdout, shortened to its first 200 characters
        logger: Logger instance
    """
    logger.debug(f"{command[0]} exited {returncode}")
    if output:
        logger.debug(f"  stdout: {output[:200]}")


def log_async_performance(func: Callable) -> Callable:
    """Decorator logging how long an async call took, at DEBUG."""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger = get_logger()
        start = time.perf_counter()

        try:
            result = await func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__name__} completed in {elapsed_ms:.2f}ms")
            return result
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{func.__name__} failed after {elapsed_ms:.2f}ms: {e}")
            raise

    return wrapper
