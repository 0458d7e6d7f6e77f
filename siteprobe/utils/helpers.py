"""
Utility helper functions for the probe.
Contains reusable utility functions that don't fit into specific categories.
"""

import logging
import functools
import sys
from time import sleep
from typing import Callable, Any, Type, Tuple, Optional


def str_to_bool(value: str) -> bool:
    """
    Convert string representation to boolean.

    Args:
        value: String value to convert

    Returns:
        Boolean value
    """
    return str(value).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def split_csv(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated setting, dropping blanks."""
    if raw is None:
        return ()
    return tuple(token.strip() for token in raw.split(",") if token.strip())


def truncate(text: str, limit: Optional[int] = 100, marker: str = "...") -> str:
    """Cut ``text`` to ``limit`` characters and append ``marker`` when it was longer."""
    if text is None:
        return ""
    text = str(text)
    if limit is None or len(text) <= limit:
        return text
    return text[:limit] + marker


def retry_on_exception(
    max_retries: int = 3,
    delay: float = 1.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,)
) -> Callable:
    """
    Decorator to retry function calls on specific exceptions.

    Args:
        max_retries: Maximum number of retry attempts
        delay: Delay between retries in seconds
        exceptions: Tuple of exception types to catch and retry on

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt < max_retries:
                        logging.warning(
                            f"Attempt {attempt + 1} failed for {func.__name__}: {e}. "
                            f"Retrying in {delay} seconds..."
                        )
                        sleep(delay)
                    else:
                        logging.error(
                            f"All {max_retries + 1} attempts failed for {func.__name__}: {e}"
                        )
                        raise

        return wrapper
    return decorator


def setup_logging(
    level: int = logging.INFO,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Setup logging configuration for the application.

    Args:
        level: Logging level (default: INFO)
        format_str: Custom format string (optional)
        log_file: Also write the log to this file when given
    """
    if format_str is None:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=format_str,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )

    # Suppress overly verbose selenium logs
    logging.getLogger("selenium").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
