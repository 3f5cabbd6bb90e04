"""Configuration module for managing messenger settings."""

from config.settings import (
    MessengerConfig,
    Config,
)

__all__ = [
    'MessengerConfig',
    'Config',
]
