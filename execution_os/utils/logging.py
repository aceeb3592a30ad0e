import logging
import logging.handlers
import structlog
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union


STORE_LOGGER_NAME = "execution_os.storage"


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    logs_dir: Union[str, Path] = "logs",
) -> None:
    """Set up logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        logs_dir: Directory for the rotating log files
    """
    logs_dir = Path(logs_dir)
    if log_to_file:
        logs_dir.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)

        # Collection writes, quota rejections and corrupt payloads
        storage_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "storage.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=10,
        )
        storage_handler.setLevel(logging.DEBUG)
        storage_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        storage_logger = logging.getLogger(STORE_LOGGER_NAME)
        storage_logger.addHandler(storage_handler)
        storage_logger.propagate = True

        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s - %(exc_info)s"
            )
        )
        root_logger.addHandler(error_handler)


def get_store_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger for storage events.

    Args:
        name: Logger name (defaults to the storage logger)
    """
    return structlog.get_logger(name or STORE_LOGGER_NAME)


def log_store_error(
    error: Exception,
    context: Dict[str, Any],
    logger: Optional[structlog.BoundLogger] = None,
) -> None:
    """Log a failed storage operation with its context."""
    if logger is None:
        logger = get_store_logger()

    logger.error(
        "Storage operation failed",
        error_type=type(error).__name__,
        error_message=str(error),
        **context,
    )


class StoreOperationLogContext:
    """Context manager that logs start, success or failure of a store write."""

    def __init__(self, operation: str, logger: Optional[structlog.BoundLogger] = None, **context):
        self.operation = operation
        self.context = context
        self.logger = logger or get_store_logger()
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.operation} - START", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.start_time

        if exc_type is not None:
            log_store_error(
                exc_val,
                {
                    "operation": self.operation,
                    "duration_seconds": elapsed,
                    **self.context,
                },
                self.logger,
            )
        else:
            self.logger.info(
                f"{self.operation} - OK",
                duration_seconds=elapsed,
                **self.context,
            )
        return False
