"""Logging configuration and utilities."""

import logging
import sys
from typing import Optional

from utils.exceptions import ConfigurationError


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers that report every sent, received or discarded message at DEBUG
TRAFFIC_LOGGERS = (
    'messenger.messenger',
    'messenger.sender',
    'messenger.suppressor',
)


def parse_level(level: str) -> int:
    """
    Convert a level name to its numeric value.
    
    Raises:
        ConfigurationError: If the level name is unknown
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f'Invalid log level: {level}')
    return numeric_level


def setup_logging(level: str = "INFO", traffic: Optional[bool] = None) -> None:
    """
    Configure logging for the entire application.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               Default: INFO
        traffic: Force per-message traffic logging on or off regardless
                 of ``level``; None leaves the traffic loggers alone
    
    Raises:
        ConfigurationError: If the level name is unknown
    """
    logging.basicConfig(
        level=parse_level(level),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    if traffic is not None:
        set_traffic_logging(traffic)


def set_traffic_logging(enabled: bool) -> None:
    """
    Turn per-message logging on or off.
    
    When enabled, every sent, received and discarded duplicate message is
    logged even if the application runs at INFO. When disabled, the traffic
    loggers inherit the application level again.
    
    Args:
        enabled: Whether to log message traffic
    """
    level = logging.DEBUG if enabled else logging.NOTSET
    for name in TRAFFIC_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.
    
    Args:
        name: Name of the module (typically __name__)
        
    Returns:
        Logger instance configured for the module
    """
    return logging.getLogger(name)
