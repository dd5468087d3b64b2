"""Logging configuration for the deskfs backend."""

import logging
import logging.handlers
import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from .config import LoggingConfig


class ColoredFormatter(logging.Formatter):
    """Formatter that adds ANSI colors to the level name on console output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Color a copy so file handlers sharing the record see the plain name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


class LoggingManager:
    """Manages logging configuration and setup."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize logging manager.

        Args:
            config: Logging configuration. Defaults are used if None.
        """
        self.config = config or LoggingConfig()
        self.handlers: Dict[str, logging.Handler] = {}
        self._setup_root_logger()

    def _setup_root_logger(self):
        """Set up the root logger with configured handlers."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        try:
            log_level = getattr(logging, self.config.level.upper())
            root_logger.setLevel(log_level)
        except AttributeError:
            root_logger.setLevel(logging.INFO)
            root_logger.warning(f"Invalid log level '{self.config.level}', using INFO")

        if self.config.console_enabled:
            console_handler = self._create_console_handler()
            root_logger.addHandler(console_handler)
            self.handlers['console'] = console_handler

        if self.config.file_enabled and self.config.file_path:
            file_handler = self._create_file_handler()
            if file_handler:
                root_logger.addHandler(file_handler)
                self.handlers['file'] = file_handler

    def _create_console_handler(self) -> logging.Handler:
        """Create console handler on stderr, leaving stdout to command output."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(self.config.format))
        return handler

    def _create_file_handler(self) -> Optional[logging.Handler]:
        """Create and configure rotating file handler."""
        try:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)

            max_bytes = self.config.file_max_size_mb * 1024 * 1024
            handler = logging.handlers.RotatingFileHandler(
                self.config.file_path,
                maxBytes=max_bytes,
                backupCount=self.config.file_backup_count
            )
            handler.setFormatter(logging.Formatter(self.config.format))
            return handler

        except OSError as e:
            # Keep logging to the console when the log file can't be opened
            logging.getLogger(__name__).error(f"Failed to create file handler: {e}")
            return None

    def set_level(self, level: str):
        """
        Set the logging level for all loggers.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        try:
            log_level = getattr(logging, level.upper())
        except AttributeError:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")
            return

        logging.getLogger().setLevel(log_level)
        self.config.level = level.upper()

    def log_system_info(self, data_dir: Optional[Path] = None):
        """Log system information for debugging."""
        logger = logging.getLogger(__name__)
        logger.debug("=== System Information ===")
        logger.debug(f"Platform: {platform.platform()}")
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Working directory: {Path.cwd()}")
        if data_dir is not None:
            logger.debug(f"Data directory: {data_dir}")
        if self.config.file_enabled:
            logger.debug(f"Log file: {self.config.file_path}")


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Set up logging for the process.

    Args:
        config: Optional logging configuration

    Returns:
        LoggingManager instance
    """
    return LoggingManager(config)
