"""Utility modules for logging and exception handling."""

from utils.logging import setup_logging, set_traffic_logging, get_logger
from utils.exceptions import (
    MessengerError,
    DecodeError,
    EncodeError,
    MalformedAddressError,
    TransportUnavailableError,
    ConfigurationError,
)

__all__ = [
    'setup_logging',
    'set_traffic_logging',
    'get_logger',
    'MessengerError',
    'DecodeError',
    'EncodeError',
    'MalformedAddressError',
    'TransportUnavailableError',
    'ConfigurationError',
]
