"""Configuration management for the messaging layer."""

from dataclasses import dataclass
from typing import Optional
import os
from pathlib import Path

from dotenv import load_dotenv

from protocol.constants import (
    ADDRESS_DELIMITER,
    DEFAULT_ADDRESS_ROOT,
    DEFAULT_BIND_ADDRESS,
    DEFAULT_BROADCAST_ADDRESS,
    DEFAULT_DUPLICATE_WINDOW,
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_PORT,
    DEFAULT_REDUNDANT_SEND_COUNT,
    DEFAULT_TICK_INTERVAL,
    NUMERIC_EQUALITY_POLICIES,
    NUMERIC_EQUALITY_STRICT,
)
from utils.exceptions import ConfigurationError


# Load .env file from project root
# This is called at module import time to ensure env vars are available
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path, override=False)


_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass
class MessengerConfig:
    """Configuration for a Messenger instance and its UDP transport."""

    broadcast_address: str = DEFAULT_BROADCAST_ADDRESS
    port: int = DEFAULT_PORT
    bind_address: str = DEFAULT_BIND_ADDRESS
    broadcast_enabled: bool = True
    address_root: str = DEFAULT_ADDRESS_ROOT
    use_address_root: bool = False
    duplicate_window_seconds: float = DEFAULT_DUPLICATE_WINDOW
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    redundant_send_count: int = DEFAULT_REDUNDANT_SEND_COUNT
    numeric_equality: str = NUMERIC_EQUALITY_STRICT
    tick_interval: float = DEFAULT_TICK_INTERVAL
    log_traffic: bool = False

    @property
    def endpoint(self) -> tuple:
        """Destination (host, port) for outbound datagrams."""
        return (self.broadcast_address, self.port)

    @property
    def namespace(self) -> Optional[str]:
        """Address root applied to sent and received commands, if enabled."""
        return self.address_root if self.use_address_root else None

    def validate(self) -> None:
        """Validate messenger configuration parameters."""
        if not self.broadcast_address:
            raise ConfigurationError("Broadcast address is required")
        if not isinstance(self.port, int) or self.port < 1 or self.port > 65535:
            raise ConfigurationError("Port must be between 1 and 65535")
        if not self.address_root.startswith(ADDRESS_DELIMITER):
            raise ConfigurationError(
                f"Address root must start with '{ADDRESS_DELIMITER}' (e.g., /oscmessenger)"
            )
        if self.duplicate_window_seconds <= 0:
            raise ConfigurationError("Duplicate window must be positive")
        if self.history_capacity < 1:
            raise ConfigurationError("History capacity must be at least 1")
        if self.redundant_send_count < 1:
            raise ConfigurationError("Redundant send count must be at least 1")
        if self.numeric_equality not in NUMERIC_EQUALITY_POLICIES:
            raise ConfigurationError(
                f"Numeric equality must be one of {', '.join(NUMERIC_EQUALITY_POLICIES)}, "
                f"got: {self.numeric_equality}"
            )
        if self.tick_interval <= 0:
            raise ConfigurationError("Tick interval must be positive")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a valid integer, got: {value}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a valid number, got: {value}")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean (true/false), got: {value}")


class Config:
    """Main configuration loader and manager."""

    def __init__(self):
        """Initialize configuration manager."""
        self.messenger: Optional[MessengerConfig] = None

    def load_messenger_config(self) -> MessengerConfig:
        """
        Load messenger configuration from environment variables.

        Environment variables:
            MESSENGER_BROADCAST_ADDRESS: Destination address (default: 255.255.255.255)
            MESSENGER_PORT: UDP port for sending and receiving (default: 9000)
            MESSENGER_BIND_ADDRESS: Local bind address (default: 0.0.0.0)
            MESSENGER_BROADCAST_ENABLED: Set SO_BROADCAST on the socket (default: true)
            MESSENGER_ADDRESS_ROOT: Namespace prefix (default: /oscmessenger)
            MESSENGER_USE_ADDRESS_ROOT: Apply the namespace prefix (default: false)
            MESSENGER_DUPLICATE_WINDOW: Duplicate window in seconds (default: 0.3)
            MESSENGER_HISTORY_CAPACITY: Recent message history size (default: 30)
            MESSENGER_REDUNDANT_SEND_COUNT: Copies sent per command (default: 5)
            MESSENGER_NUMERIC_EQUALITY: strict or value (default: strict)
            MESSENGER_TICK_INTERVAL: Listener tick interval in seconds (default: 1/60)
            MESSENGER_LOG_TRAFFIC: Log every sent and received message (default: false)

        Returns:
            Validated MessengerConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config = MessengerConfig(
            broadcast_address=os.getenv('MESSENGER_BROADCAST_ADDRESS', DEFAULT_BROADCAST_ADDRESS),
            port=_env_int('MESSENGER_PORT', DEFAULT_PORT),
            bind_address=os.getenv('MESSENGER_BIND_ADDRESS', DEFAULT_BIND_ADDRESS),
            broadcast_enabled=_env_bool('MESSENGER_BROADCAST_ENABLED', True),
            address_root=os.getenv('MESSENGER_ADDRESS_ROOT', DEFAULT_ADDRESS_ROOT),
            use_address_root=_env_bool('MESSENGER_USE_ADDRESS_ROOT', False),
            duplicate_window_seconds=_env_float('MESSENGER_DUPLICATE_WINDOW', DEFAULT_DUPLICATE_WINDOW),
            history_capacity=_env_int('MESSENGER_HISTORY_CAPACITY', DEFAULT_HISTORY_CAPACITY),
            redundant_send_count=_env_int(
                'MESSENGER_REDUNDANT_SEND_COUNT', DEFAULT_REDUNDANT_SEND_COUNT
            ),
            numeric_equality=os.getenv('MESSENGER_NUMERIC_EQUALITY', NUMERIC_EQUALITY_STRICT).lower(),
            tick_interval=_env_float('MESSENGER_TICK_INTERVAL', DEFAULT_TICK_INTERVAL),
            log_traffic=_env_bool('MESSENGER_LOG_TRAFFIC', False),
        )
        config.validate()
        self.messenger = config
        return config
