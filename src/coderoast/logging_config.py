"""
Logging configuration for coderoast.

Levels come from ``AnalysisConfig.verbosity`` so ``--verbose``,
``CODEROAST_VERBOSITY`` and the ``verbosity`` key of a config file all land
in the same place. Records go to stderr through rich, keeping stdout clean
for ``--json`` output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Verbosity

ROOT_LOGGER = "coderoast"

VERBOSITY_LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# HTTP client chatter from the patch generator; shown only in verbose runs
_NOISY_LOGGERS = ("openai", "httpx", "httpcore")


def setup_logging(verbosity: Verbosity = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the coderoast logger tree.

    Safe to call more than once: handlers installed by an earlier call are
    replaced, not stacked.

    Args:
        verbosity: "quiet", "normal" or "verbose"
        log_file: Optional file path to append plain-text records to

    Returns:
        The root coderoast logger
    """
    level = VERBOSITY_LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the coderoast namespace.

    Args:
        name: Module name (e.g., 'coderoast.signals' or 'signals').
              If None, returns the root coderoast logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
