"""
Logging Configuration Module.

This module provides centralized logging configuration for the
purchase order extraction system. Console output is coloured with
colorama; file output (optional) rotates by size.

Usage:
    from po_extraction.utils.logger import setup_logger, get_logger

    # Initialize logging (call once at startup)
    setup_logger()

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Parsing purchase order...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import colorama
from colorama import Fore, Style

# Root of the application's logger hierarchy
LOGGER_NAMESPACE = "po_extraction"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps each console record in a level colour.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Red (bold)
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }
    RESET = Style.RESET_ALL

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, '')
        message = super().format(record)
        return f"{color}{message}{self.RESET}"


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Configure the application logger.

    Should be called once at startup (the CLI does this). Library
    callers that never call it get Python's default logging behaviour
    for the ``po_extraction`` namespace.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Custom log format string.
        date_format: Custom date format string.
        log_file: Path to log file. If None, file logging is disabled.
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of backup files to keep.
        colorize: Whether to colorize console output.

    Returns:
        Configured application logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/po.log")
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    if colorize:
        colorama.init()
        console_handler.setFormatter(ColoredFormatter(log_format, datefmt=date_format))
    else:
        console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    app_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        app_logger.addHandler(file_handler)

    app_logger.propagate = False

    app_logger.debug("Logging initialized")
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name for the logger, typically __name__.

    Returns:
        Logger inside the application namespace.

    Example:
        >>> get_logger("po_extraction.extraction.segmenter").name
        'po_extraction.extraction.segmenter'
        >>> get_logger("main").name
        'po_extraction.main'
    """
    if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """
    Initialize logging using settings from configuration file.

    Returns:
        Configured application logger.
    """
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10485760),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
