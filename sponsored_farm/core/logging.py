# sponsored_farm/core/logging.py
"""
Centralized logging for the sponsored farm ledger.

Every logger lives under the ``sponsored_farm`` root so one call to
``FarmLogger.configure`` sets handlers for the whole package. Context passed
as keyword arguments is attached to the record and rendered by
``FarmFormatter`` after the message.
"""

import logging
import sys
from logging import DEBUG, INFO, WARNING, ERROR
from pathlib import Path
from datetime import datetime

from ..types.config import LoggingConfig


ROOT_LOGGER_NAME = 'sponsored_farm'

CONTEXT_ATTRS = ['operation', 'caller', 'farm_id', 'token_id', 'amount', 'block_number',
                 'signer', 'table', 'error', 'error_type']


class FarmFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        message = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        context = [f"{attr}={getattr(record, attr)}" for attr in CONTEXT_ATTRS if hasattr(record, attr)]
        if context:
            message = f"{message} | {' '.join(context)}"

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class FarmLogger:
    """Process-wide handler setup for the ``sponsored_farm`` logger tree"""

    _configured = False

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        if cls._configured:
            return

        level = getattr(logging, config.level.upper())
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if config.structured_format:
            formatter = FarmFormatter()
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if config.log_dir:
            log_dir = Path(config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            # files always carry the context
            file_handler = logging.FileHandler(log_dir / 'sponsored_farm.log')
            file_handler.setFormatter(FarmFormatter())
            root_logger.addHandler(file_handler)

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root_logger.handlers):
            handler.close()
            root_logger.removeHandler(handler)
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'
        return logging.getLogger(name)


# === Utility Functions ===

def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__

    if module.startswith(f'{ROOT_LOGGER_NAME}.'):
        module = module[len(ROOT_LOGGER_NAME) + 1:]

    logger_name = f"{module}.{class_name}"
    return FarmLogger.get_logger(logger_name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)


# === LoggingMixin for Classes ===

class LoggingMixin:
    """
    Mixin to add consistent logging behavior to any class.

    Creates a class-specific logger on first use and supports structured
    context logging through keyword arguments.
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.ERROR, message, **context)


__all__ = [
    'FarmLogger', 'FarmFormatter', 'LoggingMixin', 'get_class_logger', 'log_with_context',
    'DEBUG', 'INFO', 'WARNING', 'ERROR',
]
