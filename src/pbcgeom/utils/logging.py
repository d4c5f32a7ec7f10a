# src/pbcgeom/utils/logging.py


"""Centralized logging configuration for pbcgeom.

Provides consistent logging across the CLI and loaders. The numerical
kernels in pbcgeom.geometry never log.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "pbcgeom",
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Configure and return a logger instance.
    
    Args:
        name: Logger name.
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file path to write logs.
        verbose: If True, show more details (module, line number).
        
    Returns:
        Configured logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    
    # Remove existing handlers
    logger.handlers.clear()
    
    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S"
        )
    
    # Log to stderr so stdout stays clean for measured values
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)
    
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


# Global logger instance (lazy initialized)
_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logger()
    return _logger


def set_log_level(level: str) -> None:
    """Change log level globally."""
    logger = get_logger()
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
