"""Logging configuration for netswitch.

Console output with colored level names, plus an optional log file.
Uses % formatting (PEP 391) for security.
"""

import copy
import logging
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marker attribute on handlers installed by setup_logging()
_HANDLER_TAG = "_netswitch_handler"


class ColoredFormatter(logging.Formatter):
    """Add ANSI colors to log levels.

    Formats a copy of the record so other handlers (e.g. the log file)
    never see the escape codes.
    """

    COLORS = {
        "DEBUG": "\033[96m",  # Cyan
        "INFO": "\033[92m",  # Green
        "WARNING": "\033[93m",  # Yellow
        "ERROR": "\033[91m",  # Red
        "CRITICAL": "\033[95m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors.

        Args:
            record: Log record to format

        Returns:
            Formatted log message with color codes.
        """
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        colored = copy.copy(record)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    use_colors: bool | None = None,
) -> None:
    """Configure logging.

    Safe to call more than once: handlers from a previous call are
    replaced, not duplicated.

    Args:
        verbose: Enable DEBUG level (default: WARNING+ only)
        log_file: Optional file output path (skipped if it cannot be opened)
        use_colors: Force colors on/off (default: only when stderr is a TTY)
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if use_colors is None:
        use_colors = sys.stderr.isatty()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(_tagged(console_handler))

    # File handler
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root_logger.warning("Cannot open log file %s: %s", log_file, e)
            return
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(_tagged(file_handler))


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance for the module.
    """
    return logging.getLogger(name)
