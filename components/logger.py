"""
Centralized logging configuration for the Premiere clip extractor.
"""
import io
import logging
import os
import sys
from typing import Optional, TextIO

# Create the main application logger
logger = logging.getLogger('premiere_clips')

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the application logger with console and optional file output.

    Args:
        level: Logging level for console output
        log_file: Optional path to a log file that receives every DEBUG message
    """
    # Clear any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # The file handler takes everything, so open the logger up when one is set
    logger.setLevel(logging.DEBUG if log_file else level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

def get_logger() -> logging.Logger:
    """Get the configured application logger."""
    return logger

class LogCapture:
    """Context manager to capture log output to a string buffer."""

    def __init__(self, target_logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        """
        Initialize log capture.

        Args:
            target_logger: Logger to capture (defaults to application logger)
            level: Minimum log level to capture
        """
        self.logger = target_logger or logger
        self.level = level
        self.string_io = None
        self.string_handler = None
        self.previous_level = None

    def __enter__(self) -> TextIO:
        """Start capturing logs to a string buffer."""
        self.string_io = io.StringIO()
        self.string_handler = logging.StreamHandler(self.string_io)
        self.string_handler.setLevel(self.level)
        self.string_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        # Lower the logger level for the duration of the capture if needed
        self.previous_level = self.logger.level
        if self.level < self.previous_level:
            self.logger.setLevel(self.level)

        self.logger.addHandler(self.string_handler)
        return self.string_io

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop capturing and restore logger state."""
        if self.string_handler:
            self.logger.removeHandler(self.string_handler)

        if self.previous_level is not None and self.logger.level != self.previous_level:
            self.logger.setLevel(self.previous_level)

# Initialize with default settings
setup_logging()
