"""Time-windowed duplicate suppression for redundant transmissions."""

from collections import deque
from typing import Deque, Tuple

from protocol.arguments import args_equal
from protocol.constants import (
    DEFAULT_DUPLICATE_WINDOW,
    DEFAULT_HISTORY_CAPACITY,
    NUMERIC_EQUALITY_POLICIES,
    NUMERIC_EQUALITY_STRICT,
    NUMERIC_EQUALITY_VALUE,
)
from protocol.messages import Message, TimestampedMessage
from utils.exceptions import ConfigurationError
from utils.logging import get_logger

logger = get_logger(__name__)


class DuplicateSuppressor:
    """
    Drops repeated copies of a message seen within a short time window.
    
    Senders transmit every command several times in a row, so one logical
    command shows up as a burst of identical datagrams. The suppressor keeps
    a bounded history of accepted messages and rejects any message that is
    content-equal to a history entry younger than the window. The same
    command repeated after the window has elapsed is accepted again.
    
    Not thread-safe: only the processing tick may call it.
    """
    
    def __init__(
        self,
        window: float = DEFAULT_DUPLICATE_WINDOW,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
        numeric_equality: str = NUMERIC_EQUALITY_STRICT,
    ):
        """
        Initialize suppressor.
        
        Args:
            window: Seconds during which a content-equal message is a duplicate
            capacity: Maximum number of accepted messages remembered
            numeric_equality: "strict" compares args by type and value,
                "value" treats ints and floats with equal values as equal
        
        Raises:
            ConfigurationError: If a parameter is out of range
        """
        if window <= 0:
            raise ConfigurationError("Duplicate window must be positive")
        if capacity < 1:
            raise ConfigurationError("History capacity must be at least 1")
        if numeric_equality not in NUMERIC_EQUALITY_POLICIES:
            raise ConfigurationError(f"Unknown numeric equality policy: {numeric_equality}")
        
        self._window = window
        self._coerce_numeric = numeric_equality == NUMERIC_EQUALITY_VALUE
        # deque evicts the oldest entry when a new one would exceed maxlen
        self._history: Deque[TimestampedMessage] = deque(maxlen=capacity)
    
    @property
    def window(self) -> float:
        return self._window
    
    @property
    def capacity(self) -> int:
        return self._history.maxlen
    
    @property
    def history(self) -> Tuple[TimestampedMessage, ...]:
        """Accepted messages, oldest first."""
        return tuple(self._history)
    
    def __len__(self) -> int:
        return len(self._history)
    
    def should_accept(self, message: Message, now: float) -> bool:
        """
        Decide whether a message is new, recording it if so.
        
        Args:
            message: Drained message, in drain order
            now: Monotonic time in seconds
        
        Returns:
            False if a content-equal message was accepted less than
            ``window`` seconds ago, True otherwise
        """
        for entry in self._history:
            if now - entry.received_at < self._window and self.is_content_equal(entry.message, message):
                logger.debug(f"Discarded duplicate message: {message.address}")
                return False
        
        self._history.append(TimestampedMessage(message=message, received_at=now))
        return True
    
    def is_content_equal(self, left: Message, right: Message) -> bool:
        """Compare address, argument count and each argument by position."""
        if left.address != right.address:
            return False
        if len(left.args) != len(right.args):
            return False
        return all(
            args_equal(a, b, coerce_numeric=self._coerce_numeric)
            for a, b in zip(left.args, right.args)
        )
    
    def reset(self) -> None:
        """Forget every recorded message."""
        self._history.clear()
