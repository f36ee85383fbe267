"""
Logging configuration for funcpipe using loguru with Rich integration.
"""

import io
import time
import functools
from typing import Optional, Dict, Any, Callable, TypeVar
from pathlib import Path
from loguru import logger
from rich.logging import RichHandler
from rich.console import Console

from funcpipe.config.types import LogConfig

# Global console instance for Rich integration
console = Console(stderr=True)

_is_configured = False

def configure_logging(config: LogConfig) -> None:
    """
    Configure logging with loguru and Rich integration.

    Args:
        config: Logging configuration
    """
    global _is_configured

    if _is_configured:
        return

    # Remove default handler
    logger.remove()
    logger.enable("funcpipe")

    # Configure console logging with Rich
    logger.add(
        RichHandler(
            console=console,
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        ),
        level=config["level"],
        format=config["format"],
        enqueue=True,  # Thread-safe logging
    )

    # Add file logging if specified
    if config.get("file"):
        file_path = Path(config["file"])
        file_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(file_path),
            level=config["level"],
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}",
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            enqueue=True,
        )

    _is_configured = True

def get_logger(name: str) -> Any:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)

def log_pipeline_event(
    event_type: str,
    pipeline_name: str,
    details: Optional[Dict[str, Any]] = None,
    level: str = "DEBUG"
) -> None:
    """
    Log pipeline events in a structured format.

    Args:
        event_type: Type of event (start, complete, failed, fault)
        pipeline_name: Name of the pipeline
        details: Additional event details
        level: Log level
    """
    details = details or {}

    logger.bind(
        event_type=event_type,
        pipeline=pipeline_name,
        details=details
    ).log(level, f"Pipeline {pipeline_name} {event_type}: {details}")

def log_step_event(
    event_type: str,
    pipeline_name: str,
    position: int,
    step_name: str,
    level: str = "DEBUG"
) -> None:
    """Log a single step event, binding its position for structured sinks"""
    logger.bind(
        event_type=event_type,
        pipeline=pipeline_name,
        position=position,
        step=step_name
    ).log(level, f"Pipeline {pipeline_name} step {position} ({step_name}) {event_type}")

# Context managers for logging

class LogContext:
    """Context manager for adding context to logs"""

    def __init__(self, **context: Any):
        self.context = context
        self.logger = logger.bind(**context)

    def __enter__(self):
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.logger.error(f"Exception in context: {exc_val}")
        return False

def pipeline_context(pipeline_name: str) -> LogContext:
    """Create a logging context for a pipeline"""
    return LogContext(pipeline=pipeline_name)

# Performance logging utilities

F = TypeVar('F', bound=Callable[..., Any])

def log_performance(func: F) -> F:
    """
    Decorator to log function performance.

    Args:
        func: Function to decorate

    Returns:
        Decorated function
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        func_logger = get_logger(func.__module__)

        try:
            result = func(*args, **kwargs)
            duration = time.perf_counter() - start_time

            func_logger.debug(
                f"Function {func.__name__} completed in {duration:.4f}s"
            )
            return result
        except Exception as e:
            duration = time.perf_counter() - start_time

            func_logger.error(
                f"Function {func.__name__} failed after {duration:.4f}s: {e}"
            )
            raise

    return wrapper

# Testing utilities

class LogCapture:
    """Collect formatted log lines for the duration of a with-block"""

    def __init__(self, level: str = "DEBUG"):
        self.level = level
        self.stream = io.StringIO()
        self.lines: list[str] = []
        self._handler_id: Optional[int] = None

    def __enter__(self) -> list[str]:
        logger.enable("funcpipe")
        self._handler_id = logger.add(
            self.stream,
            level=self.level,
            format="{level} | {message}",
            enqueue=False,
        )
        return self.lines

    def __exit__(self, exc_type, exc_val, exc_tb):
        logger.remove(self._handler_id)
        if not _is_configured:
            logger.disable("funcpipe")
        self.lines.extend(
            line for line in self.stream.getvalue().split('\n') if line
        )
        return False

def capture_logs(level: str = "DEBUG") -> LogCapture:
    """
    Context manager to capture logs for testing.

    Returns:
        LogCapture whose ``__enter__`` yields the list of captured lines
    """
    return LogCapture(level)
