# logger_utils.py -  logging setup and timing helpers

import logging
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "emoji_picker"
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger once per process.
    Console output goes to stderr through Rich (warnings only unless verbose),
    and everything at DEBUG goes to `log_file` when one is configured.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)
    # idempotent: drop handlers from an earlier call
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    console = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console)

    if log_file:
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("cannot open log file %s: %s", log_file, e)
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
            logger.addHandler(fh)

    return logger


class Log:
    @staticmethod
    def time_block(label, logger: Optional[logging.Logger] = None):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("index load"):
                load_index(path)
        The duration is logged at DEBUG when the block exits.
        """
        return _Timer(label, logger or logging.getLogger(PACKAGE_LOGGER))


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label, logger: logging.Logger):
        self.label = label
        self.logger = logger
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        self.logger.debug("%s done in %.3f ms", self.label, self.elapsed * 1000)
