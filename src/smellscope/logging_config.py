"""
Logging for smellscope.

Engine, loader and detector logs go to stderr through rich, so a JSON or CSV
report on stdout can be piped without noise. Module loggers hang off the
``smellscope`` logger, which is the only one ``setup_logging`` touches; a host
application embedding the library keeps its own root configuration.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT = "smellscope"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    # quiet wins: --fail-on pipelines want errors only
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach the console (and optional file) handlers to the smellscope logger.

    Calling it again replaces the handlers of the previous call, so one
    process can run several analyses with different verbosity.

    Args:
        verbose: Log detector timings and skips at DEBUG
        quiet: Only log errors
        log_file: Append plain-text records here as well

    Returns:
        The ``smellscope`` logger
    """
    logger = logging.getLogger(_ROOT)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(
        RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=True)
    )
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(_level(verbose, quiet))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under ``smellscope``; ``get_logger(__name__)`` in package modules."""
    if name is None:
        return logging.getLogger(_ROOT)
    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
