"""
Logging setup for the linked-data graph toolkit.

Everything logs below the ``ldgraph_toolkit`` logger; modules use
``logging.getLogger(__name__)`` and only the CLI calls ``setup_logging``.
"""

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ldgraph_toolkit"

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _plain_formatter() -> logging.Formatter:
    return logging.Formatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    level: str | int = "INFO", log_file: Path | None = None, use_rich: bool = True
) -> logging.Logger:
    """Configure the toolkit logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR) or numeric level
        log_file: Optional file that receives plain-text records as well
        use_rich: Render console records with Rich instead of plain text

    Returns:
        The ``ldgraph_toolkit`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler: logging.Handler
    if use_rich:
        console_handler = RichHandler(
            console=Console(stderr=True), show_time=True, show_path=False, markup=False
        )
        console_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(_plain_formatter())
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_plain_formatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
