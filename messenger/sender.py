"""Redundant fire-and-forget command sender."""

from typing import Any, Optional, Tuple

from protocol.constants import ADDRESS_DELIMITER, DEFAULT_REDUNDANT_SEND_COUNT
from protocol.encoding import encode_message
from protocol.messages import Message
from transport.base import Transport
from utils.exceptions import ConfigurationError, MalformedAddressError
from utils.logging import get_logger

logger = get_logger(__name__)


class RedundantSender:
    """
    Sends each command as a burst of identical datagrams.
    
    There is no acknowledgment or retry: every command is encoded once and
    handed to the transport ``redundancy`` times back-to-back, which makes it
    likely that at least one copy survives a lossy network. Receivers collapse
    the burst with a DuplicateSuppressor. Delivery is still not guaranteed.
    """
    
    def __init__(
        self,
        transport: Transport,
        endpoint: Tuple[str, int],
        redundancy: int = DEFAULT_REDUNDANT_SEND_COUNT,
        address_root: Optional[str] = None,
    ):
        """
        Initialize sender.
        
        Args:
            transport: Transport used for every copy
            endpoint: Destination (host, port), usually a broadcast address
            redundancy: Copies sent per command
            address_root: Namespace prefix prepended to every command
        
        Raises:
            ConfigurationError: If redundancy is less than 1
        """
        if redundancy < 1:
            raise ConfigurationError("Redundant send count must be at least 1")
        
        self._transport = transport
        self._endpoint = endpoint
        self._redundancy = redundancy
        self._address_root = address_root.rstrip(ADDRESS_DELIMITER) if address_root else ''
    
    @property
    def redundancy(self) -> int:
        return self._redundancy
    
    @property
    def endpoint(self) -> Tuple[str, int]:
        return self._endpoint
    
    def build_message(self, command: str, *args: Any) -> Message:
        """
        Build the message sent for a command.
        
        ``int`` and ``float`` args keep their type; other values are sent as
        ``str(value)`` (see ``protocol.arguments.to_arg``).
        
        Raises:
            MalformedAddressError: If the command is empty
        """
        address = self._address_root + ADDRESS_DELIMITER + command.strip(ADDRESS_DELIMITER)
        if not command.strip(ADDRESS_DELIMITER):
            raise MalformedAddressError(address)
        return Message.build(address, args)
    
    def send(self, command: str, *args: Any) -> None:
        """
        Encode a command and send it ``redundancy`` times.
        
        Args:
            command: Command name, e.g. "move"
            *args: Command arguments
        
        Raises:
            MalformedAddressError: If the command is empty
            EncodeError: If an argument cannot be encoded (ints beyond 64 bits)
            TransportUnavailableError: If the transport is not started
        """
        message = self.build_message(command, *args)
        payload = encode_message(message)
        
        for _ in range(self._redundancy):
            self._transport.send(self._endpoint, payload)
        
        logger.debug(
            f"Sent {message.describe()} x{self._redundancy} "
            f"to {self._endpoint[0]}:{self._endpoint[1]}"
        )
