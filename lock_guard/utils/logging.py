"""Logging utilities for LockGuard."""

import logging
from pathlib import Path
from typing import Any, Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


LOGGER_NAMESPACE = "lock_guard"

THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
    "critical": "red bold",
    "debug": "dim",
})


class LockGuardLogger:
    """Named logger writing through a rich handler on stderr."""
    
    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
        if level is not None:
            self.logger.setLevel(level)
    
    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)
    
    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)
    
    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)
    
    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Configure the LockGuard logger hierarchy.
    
    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable debug logging
    """
    if verbose:
        level = logging.DEBUG
    
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level)
    
    # Remove existing handlers to avoid duplicates
    root.handlers.clear()
    
    handler = RichHandler(
        console=Console(stderr=True, theme=THEME),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root.addHandler(file_handler)
    
    root.propagate = False


def get_logger(name: str) -> LockGuardLogger:
    """Get a LockGuard logger instance.
    
    Args:
        name: Logger name, nested under the ``lock_guard`` namespace
        
    Returns:
        Logger wrapper
    """
    return LockGuardLogger(name)
