"""
Centralized logging configuration for the TF-IDF Plagiarism Checker.

Provides JSON-structured or plain-text logs on the console and in
rotating log files, plus a mixin that times named operations.
"""

import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json


# Extra attributes copied from a LogRecord into the JSON entry when present
EXTRA_FIELDS = (
    'operation',
    'document_count',
    'vocabulary_size',
    'flag_count',
    'threshold',
    'file_path',
    'directory',
    'duration',
)


class StructuredFormatter(logging.Formatter):
    """Formatter emitting one JSON object per log record."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Document names may be non-ASCII
        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


# Rotation limits for app.log and errors.log
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


class ProductionLogger:
    """Root logger configuration with console and rotating file handlers."""

    def __init__(self,
                 log_level: str = "INFO",
                 log_dir: str = "logs",
                 enable_console: bool = True,
                 enable_file: bool = True,
                 structured_logging: bool = True):
        """
        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for app.log and errors.log
            enable_console: Whether to log to stderr
            enable_file: Whether to log to files
            structured_logging: Whether to emit JSON lines
        """
        self.log_level = getattr(logging, log_level.upper())
        self.log_dir = Path(log_dir)
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.structured_logging = structured_logging

        if self.enable_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _formatter(self) -> logging.Formatter:
        if self.structured_logging:
            return StructuredFormatter()
        return logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
        )

    def _file_handler(self, filename: str, level: int) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        handler.setLevel(level)
        return handler

    def _setup_logging(self):
        """Replace the root logger's handlers with the configured ones."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        root_logger.setLevel(self.log_level)

        handlers = []
        # stderr keeps the interactive shell's stdout readable
        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(self.log_level)
            handlers.append(console_handler)
        if self.enable_file:
            handlers.append(self._file_handler("app.log", self.log_level))
            handlers.append(self._file_handler("errors.log", logging.WARNING))

        formatter = self._formatter()
        for handler in handlers:
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)


class LoggerMixin:
    """Gives a class a ``logger`` named after it and timed operation logging."""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        return self._logger

    def log_operation(self, operation: str, **context) -> "OperationLogger":
        """
        Time ``operation`` in a ``with`` block.

        ``context`` (document_count, directory, ...) is attached to every
        record; the block may add more through ``op.extra``.
        """
        return OperationLogger(self.logger, operation, context)


class OperationLogger:
    """Context manager logging the start, end and duration of an operation."""

    def __init__(self, logger: logging.Logger, operation: str, context: dict):
        self.logger = logger
        self.operation = operation
        self.extra = {'operation': operation, **context}
        self._started = None

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.debug(f"Starting operation: {self.operation}", extra=self.extra)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.extra['duration'] = time.perf_counter() - self._started

        if exc_type is None:
            self.logger.info(f"Completed operation: {self.operation}", extra=self.extra)
        else:
            self.logger.error(f"Failed operation: {self.operation}",
                              extra=self.extra, exc_info=(exc_type, exc_val, exc_tb))
        return False


_production_logger: Optional[ProductionLogger] = None


def setup_logging(log_level: str = "INFO",
                  log_dir: str = "logs",
                  structured_logging: bool = True,
                  enable_console: bool = True,
                  enable_file: bool = True) -> ProductionLogger:
    """Configure the root logger for the whole process and remember it."""
    global _production_logger
    _production_logger = ProductionLogger(
        log_level=log_level,
        log_dir=log_dir,
        enable_console=enable_console,
        enable_file=enable_file,
        structured_logging=structured_logging,
    )
    return _production_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring console-only logging on first use."""
    if _production_logger is None:
        setup_logging(enable_file=False)
    return logging.getLogger(name)
