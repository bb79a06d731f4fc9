"""Logging configuration for the playlist sync application."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

ENCODING_FALLBACK_LINE = b"error: unable to convert message to UTF-8\n"


class LocationFormatter(logging.Formatter):
    """Base formatter that adds a combined location field."""

    def format(self, record: Any) -> str:
        """Format log record with combined location field."""
        # Add combined location field
        record.location = f"{record.filename}:{record.lineno}"
        return super().format(record)


class ColoredFormatter(LocationFormatter):
    """Colored log formatter for console output."""

    # Color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: Any) -> str:
        """Format log record with colors."""
        log_color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset_color = self.COLORS["RESET"]

        original_levelname = record.levelname
        record.levelname = f"{log_color}{original_levelname:<8}{reset_color}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class Utf8LineHandler(logging.StreamHandler):
    """Writes each record as one UTF-8 encoded line.

    Messages that cannot be encoded, such as filenames holding surrogate
    escapes, are replaced by a fixed error line.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)

    def emit(self, record: logging.LogRecord) -> None:
        """Encode and write a record."""
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return

        try:
            data = (msg + "\n").encode("utf-8")
        except UnicodeEncodeError:
            data = ENCODING_FALLBACK_LINE

        try:
            stream = self.stream
            buffer = getattr(stream, "buffer", None)
            if buffer is not None:
                stream.flush()
                buffer.write(data)
                buffer.flush()
            else:
                # Text-only streams (e.g. io.StringIO under test)
                stream.write(data.decode("utf-8"))
                self.flush()
        except Exception:
            self.handleError(record)


class MaxLevelFilter(logging.Filter):
    """Pass only records below a given level."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Set up application logging.

    Informational records go to stdout and warnings or errors to stderr.
    Above DEBUG the console shows the bare message, one line per record.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        console_output: Whether to output logs to console
        max_file_size: Maximum size of log file before rotation
        backup_count: Number of backup log files to keep
    """
    # Convert string level to logging constant
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    if console_output:
        if numeric_level <= logging.DEBUG:
            console_formatter: logging.Formatter = ColoredFormatter(
                fmt="%(asctime)s - %(location)-30s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        else:
            console_formatter = logging.Formatter("%(message)s")

        stdout_handler = Utf8LineHandler(sys.stdout)
        stdout_handler.setLevel(numeric_level)
        stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(console_formatter)
        root_logger.addHandler(stdout_handler)

        stderr_handler = Utf8LineHandler(sys.stderr)
        stderr_handler.setLevel(max(numeric_level, logging.WARNING))
        stderr_handler.setFormatter(console_formatter)
        root_logger.addHandler(stderr_handler)

    # Set up file logging if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding="utf-8",
            errors="backslashreplace",
        )
        file_handler.setLevel(numeric_level)

        file_formatter = LocationFormatter(
            fmt="%(asctime)s - %(location)-30s - %(levelname)-8s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized - Level: %s", log_level)
    if log_file:
        logger.debug("Log file: %s", log_file)


def configure_third_party_loggers() -> None:
    """Configure third-party library loggers to reduce noise."""
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
