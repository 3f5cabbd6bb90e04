"""Routes accepted messages to registered command handlers."""

from typing import Callable, List, Optional, Tuple

from protocol.arguments import Primitive
from protocol.constants import ADDRESS_DELIMITER
from protocol.messages import Command, Message
from utils.exceptions import MalformedAddressError
from utils.logging import get_logger

logger = get_logger(__name__)

CommandHandler = Callable[[str, Tuple[Primitive, ...]], None]


class Dispatcher:
    """
    Turns message addresses into command tokens and calls handlers.
    
    Handlers run synchronously on the caller's thread, in registration
    order. An exception raised by one handler is logged and does not stop
    the remaining handlers or later messages.
    """
    
    def __init__(self, address_root: Optional[str] = None):
        """
        Initialize dispatcher.
        
        Args:
            address_root: Namespace prefix (e.g. "/oscmessenger"). When set,
                only addresses under the root are routed and the root is
                stripped before the command token is taken.
        """
        self._address_root = address_root.rstrip(ADDRESS_DELIMITER) if address_root else None
        self._handlers: List[CommandHandler] = []
    
    @property
    def handlers(self) -> Tuple[CommandHandler, ...]:
        return tuple(self._handlers)
    
    def add_handler(self, handler: CommandHandler) -> None:
        """Register a handler. Registering the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)
    
    def remove_handler(self, handler: CommandHandler) -> None:
        """Unregister a handler if present."""
        if handler in self._handlers:
            self._handlers.remove(handler)
    
    def parse_command(self, address: str) -> Optional[str]:
        """
        Extract the command token from an address.
        
        The token is the first non-empty segment after the leading
        delimiter, so "/move" and "/move/x" both route to "move".
        
        Args:
            address: Wire address
        
        Returns:
            Command token, or None if a root is configured and the address
            lies outside it
        
        Raises:
            MalformedAddressError: If the address has no command segment
        """
        if not address.startswith(ADDRESS_DELIMITER):
            raise MalformedAddressError(address)
        
        path = address
        if self._address_root:
            if path != self._address_root and not path.startswith(self._address_root + ADDRESS_DELIMITER):
                return None
            path = path[len(self._address_root):]
        
        for segment in path.split(ADDRESS_DELIMITER)[1:]:
            if segment:
                return segment
        raise MalformedAddressError(address)
    
    def dispatch(self, message: Message) -> bool:
        """
        Deliver a message to every registered handler.
        
        Args:
            message: Accepted message
        
        Returns:
            True if the message was routed, False if it lies outside the
            configured address root
        
        Raises:
            MalformedAddressError: If the address has no command segment
        """
        name = self.parse_command(message.address)
        if name is None:
            logger.debug(f"Ignoring message outside {self._address_root}: {message.address}")
            return False
        
        command = Command(name=name, args=message.values())
        for handler in list(self._handlers):
            try:
                handler(command.name, command.args)
            except Exception:
                logger.error(f"Handler {handler!r} failed for command {command.name}", exc_info=True)
        return True
