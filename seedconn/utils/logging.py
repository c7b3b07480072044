"""Console and file logging for seedconn runs."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional
from colorama import Fore, Style, init


init(autoreset=True)

LOGGER_NAME = 'seedconn'

CONSOLE_FORMAT = '%(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

LEVEL_STYLES = {
    logging.DEBUG: Fore.BLUE,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name on the console."""

    def format(self, record):
        style = LEVEL_STYLES.get(record.levelno)
        if style is None:
            return super().format(record)

        # Work on a copy: the file handler formats the same record
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{style}{record.levelname}{Style.RESET_ALL}"
        return super().format(colored)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the seedconn logger.

    Messages go to stdout with colored levels and, when ``log_file`` is
    given, to that file without color codes. Handlers from an earlier call
    are replaced, so repeated runs in one process do not duplicate lines.

    Args:
        verbose: Log DEBUG messages (chunking, array sizes) as well
        log_file: Optional path of a plain-text log file

    Returns:
        The 'seedconn' logger
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(ColoredFormatter(CONSOLE_FORMAT))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.propagate = False

    return logger


@contextmanager
def timer(logger: Optional[logging.Logger], message: str):
    """Log how long the enclosed block took.

    Nothing is logged when ``logger`` is None, so library calls made
    without a logger stay silent.

    Example:
        >>> with timer(logger, "Correlating 2 seed(s) with 5000 voxel(s)"):
        ...     correlate(reference, target)
        INFO - Correlating 2 seed(s) with 5000 voxel(s): 0.84s
    """
    start = time.perf_counter()
    if logger:
        logger.debug(f"{message}...")

    yield

    if logger:
        logger.info(f"{message}: {time.perf_counter() - start:.2f}s")


def log_section(logger: logging.Logger, title: str) -> None:
    """Log ``title`` between two rules."""
    rule = "=" * 60
    logger.info(rule)
    logger.info(title)
    logger.info(rule)
