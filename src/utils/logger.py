import logging
import os

from rich.logging import RichHandler

DEBUG_ENV_VARS = ("FOODORDER_DEBUG", "DEBUG")


class CenteredFormatter(logging.Formatter):
    """Pads logger names to the widest name seen so far so messages line up."""

    longest_name_length = 14

    def format(self, record):
        CenteredFormatter.longest_name_length = max(
            CenteredFormatter.longest_name_length, len(record.name)
        )
        record.name = record.name.center(CenteredFormatter.longest_name_length)
        return super().format(record)


def _log_level() -> int:
    if any(os.getenv(var) for var in DEBUG_ENV_VARS):
        return logging.DEBUG
    return logging.INFO


def get_logger(name=None) -> logging.Logger:
    """
    Return a logger writing through a RichHandler.

    Handlers are attached once per name, so calling this at import time in
    every module is cheap.
    """
    logger = logging.getLogger(name or "foodorder")
    level = _log_level()
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(CenteredFormatter("[%(name)s]  %(message)s"))
        handler.setLevel(level)
        logger.addHandler(handler)

        logger.propagate = False
        logger.debug(f"Logger for '{logger.name}' initialized with RichHandler.")

    return logger
